"""Order workflow exceptions."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Structured reason reported to API callers."""

    ORDER_NOT_FOUND = "order_not_found"
    SLOT_NOT_FOUND = "slot_not_found"
    ALREADY_CONFIRMED = "already_confirmed"
    SLOT_FULL = "slot_full"
    USER_NOT_FOUND = "user_not_found"
    INVALID_JSON = "invalid_json"


class OrderWorkflowError(Exception):
    """Base exception for rejected order operations."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class OrderNotFound(OrderWorkflowError):
    """The order does not exist."""

    kind = ErrorKind.ORDER_NOT_FOUND

    def __init__(self, order_id: int) -> None:
        super().__init__(f"Order {order_id} does not exist")
        self.order_id = order_id


class UserNotFound(OrderWorkflowError):
    """The user does not exist."""

    kind = ErrorKind.USER_NOT_FOUND

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} does not exist")
        self.user_id = user_id


class SlotNotFound(OrderWorkflowError):
    """The pickup slot does not exist."""

    kind = ErrorKind.SLOT_NOT_FOUND

    def __init__(self, slot_id: int) -> None:
        super().__init__(f"Slot {slot_id} does not exist")
        self.slot_id = slot_id


class AlreadyConfirmed(OrderWorkflowError):
    """The order was already confirmed into a slot."""

    kind = ErrorKind.ALREADY_CONFIRMED

    def __init__(self, order_id: int) -> None:
        super().__init__(f"Order {order_id} was already confirmed")
        self.order_id = order_id


class SlotFull(OrderWorkflowError):
    """The pickup slot has no capacity left."""

    kind = ErrorKind.SLOT_FULL

    def __init__(self, slot_id: int, limit_slot: int) -> None:
        super().__init__(
            f"Slot {slot_id} is full ({limit_slot} orders) - choose another slot"
        )
        self.slot_id = slot_id
        self.limit_slot = limit_slot
