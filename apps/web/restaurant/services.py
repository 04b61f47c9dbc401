"""
Order workflow services - order lifecycle and pickup slot confirmation.

Handles:
1. Order CRUD with existence checks
2. Kitchen and per-customer order listings
3. Marking orders as made
4. One-shot confirmation of an order into a pickup slot

Every operation returns model instances or raises an OrderWorkflowError.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.web.restaurant.exceptions import (
    AlreadyConfirmed,
    OrderNotFound,
    SlotFull,
    SlotNotFound,
    UserNotFound,
)
from apps.web.restaurant.managers import OrderQuerySet
from apps.web.restaurant.models import Order, Slot

if TYPE_CHECKING:
    from apps.web.core.models import User

logger = logging.getLogger(__name__)


# =============================================================================
# Lookups
# =============================================================================


def get_user(user_id: int) -> "User":
    """Get a user by id or raise UserNotFound."""
    User = get_user_model()
    try:
        return User.objects.get(pk=user_id)
    except User.DoesNotExist as exc:
        raise UserNotFound(user_id) from exc


def get_slot(slot_id: int) -> Slot:
    """Get a pickup slot by id or raise SlotNotFound."""
    try:
        return Slot.objects.get(pk=slot_id)
    except Slot.DoesNotExist as exc:
        raise SlotNotFound(slot_id) from exc


def get_order(order_id: int) -> Order:
    """Get an order by id or raise OrderNotFound."""
    try:
        return Order.objects.with_slot().get(pk=order_id)
    except Order.DoesNotExist as exc:
        raise OrderNotFound(order_id) from exc


def confirmation_time() -> datetime:
    """Current wall-clock time in the restaurant's civil time zone."""
    return timezone.now().astimezone(ZoneInfo(settings.ORDER_TIME_ZONE))


# =============================================================================
# Listings
# =============================================================================


def list_orders() -> OrderQuerySet[Order]:
    """All orders in insertion order."""
    return Order.objects.with_slot().order_by("pk")


def list_kitchen_orders() -> OrderQuerySet[Order]:
    """Confirmed orders for the kitchen, made or not."""
    # TODO: include each order's menus and dishes once the kitchen screen needs them
    return Order.objects.for_kitchen().order_by("pk")


def list_user_orders(user_id: int) -> OrderQuerySet[Order]:
    """
    Orders owned by a user, most recently created first.

    Raises:
        UserNotFound: If the user does not exist, whether or not any
            orders reference the id.
    """
    user = get_user(user_id)
    return Order.objects.for_user(user.pk)


# =============================================================================
# Order lifecycle
# =============================================================================


def create_order() -> Order:
    """Create an empty standalone order (no user, no slot, not made)."""
    order = Order.objects.create()
    logger.info("Created order %s", order.pk)
    return order


def create_order_for_user(user_id: int) -> Order:
    """
    Create an empty order owned by a user.

    Raises:
        UserNotFound: If the user does not exist
    """
    user = get_user(user_id)
    order = Order.objects.create(user=user)
    logger.info("Created order %s for user %s", order.pk, user.pk)
    return order


def update_order(order_id: int, maked: bool, user_id: int | None = None) -> Order:
    """
    Overwrite the writable fields of an existing order.

    The whole writable record is replaced: an omitted user clears the owner.
    Slot and confirmation timestamp are left alone; only confirm_order
    assigns them.

    Raises:
        OrderNotFound: If the order does not exist
        UserNotFound: If user_id is given and does not exist
    """
    order = get_order(order_id)
    user = get_user(user_id) if user_id is not None else None

    order.maked = maked
    order.user = user
    order.save(update_fields=["maked", "user", "updated_at"])

    logger.info("Updated order %s (maked=%s, user=%s)", order.pk, maked, user_id)
    return order


def delete_order(order_id: int) -> None:
    """
    Delete an order.

    Raises:
        OrderNotFound: If the order does not exist
    """
    deleted, _ = Order.objects.filter(pk=order_id).delete()
    if not deleted:
        raise OrderNotFound(order_id)
    logger.info("Deleted order %s", order_id)


def mark_order_as_made(order_id: int) -> Order:
    """
    Flag an order as prepared by the kitchen.

    Idempotent: marking an order that is already made leaves it made.

    Raises:
        OrderNotFound: If the order does not exist
    """
    order = get_order(order_id)
    order.maked = True
    order.save(update_fields=["maked", "updated_at"])
    logger.info("Marked order %s as made", order.pk)
    return order


# =============================================================================
# Slot confirmation
# =============================================================================


def claim_slot_seat(slot_id: int) -> bool:
    """
    Atomically take one seat in a slot if capacity remains.

    Issues a single conditional UPDATE, so concurrent claims can never push
    occupancy past the limit.

    Returns:
        True if the seat was taken, False if the slot was full
    """
    claimed = Slot.objects.filter(pk=slot_id, actual__lt=F("limit_slot")).update(
        actual=F("actual") + 1
    )
    return claimed == 1


def confirm_order(order_id: int, slot_id: int) -> Order:
    """
    Confirm an order into a pickup slot.

    Checks run in a fixed order and the first failure wins:
    order exists, order not yet confirmed, slot exists, slot has room.
    On success the order gets the slot and a confirmation timestamp, and the
    slot's occupancy grows by exactly one.

    Raises:
        OrderNotFound: If the order does not exist
        AlreadyConfirmed: If the order was confirmed before
        SlotNotFound: If the slot does not exist
        SlotFull: If the slot has no capacity left
    """
    with transaction.atomic():
        # Row lock serializes confirmations of the same order
        try:
            order = Order.objects.select_for_update().get(pk=order_id)
        except Order.DoesNotExist as exc:
            raise OrderNotFound(order_id) from exc

        if order.is_confirmed:
            logger.warning(
                "Rejected confirmation of order %s: already confirmed", order.pk
            )
            raise AlreadyConfirmed(order.pk)

        slot = get_slot(slot_id)

        if slot.is_full or not claim_slot_seat(slot.pk):
            logger.warning(
                "Rejected confirmation of order %s: slot %s is full", order.pk, slot.pk
            )
            raise SlotFull(slot.pk, slot.limit_slot)

        slot.refresh_from_db(fields=["actual"])

        order.slot = slot
        order.actual_date = confirmation_time()
        order.save(update_fields=["slot", "actual_date", "updated_at"])

    logger.info(
        "Confirmed order %s into slot %s (%s/%s)",
        order.pk,
        slot.pk,
        slot.actual,
        slot.limit_slot,
    )
    return order
