"""
Restaurant models - Dishes, menus, pickup slots, and orders.

Relations are plain foreign keys; lookups go through managers and services.
"""

from dataclasses import dataclass
from datetime import datetime

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from apps.web.core.models import TimeStampedModel

from .managers import OrderQuerySet


class Course(models.TextChoices):
    """Position of a dish within a set menu."""

    APPETIZER = "appetizer", "Appetizer"
    FIRST = "first", "First course"
    SECOND = "second", "Second course"
    DESSERT = "dessert", "Dessert"


class Slot(TimeStampedModel):
    """
    A pickup time window with bounded capacity.

    `actual` counts the orders confirmed into this slot. It only moves
    through confirmation and never exceeds `limit_slot`.
    """

    start_time = models.TimeField(help_text="Start of the pickup window")
    limit_slot = models.PositiveIntegerField(
        help_text="Maximum number of orders that can be confirmed into this slot",
    )
    actual = models.PositiveIntegerField(
        default=0,
        help_text="Orders currently confirmed into this slot",
    )

    class Meta:
        db_table = "slots"
        ordering = ["start_time", "pk"]
        constraints = [
            models.CheckConstraint(
                condition=Q(actual__gte=0) & Q(actual__lte=F("limit_slot")),
                name="slot_occupancy_within_limit",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.start_time:%H:%M} ({self.actual}/{self.limit_slot})"

    @property
    def is_full(self) -> bool:
        """Check if no more orders fit in this slot."""
        return self.actual >= self.limit_slot

    @property
    def available(self) -> int:
        return max(self.limit_slot - self.actual, 0)


@dataclass(frozen=True)
class Unconfirmed:
    """Order has not been bound to a pickup slot yet."""


@dataclass(frozen=True)
class Confirmed:
    """Order is bound to a pickup slot; set once, never undone."""

    slot_id: int
    confirmed_at: datetime


ConfirmationState = Unconfirmed | Confirmed


class Order(TimeStampedModel):
    """
    Customer order.

    Created empty, confirmed once into a slot, then marked made by the kitchen.
    """

    maked = models.BooleanField(
        default=False,
        help_text="Set by the chef once the order is prepared",
    )
    actual_date = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the order was confirmed into its slot",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="orders",
    )
    slot = models.ForeignKey(
        Slot,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
        help_text="Pickup slot, assigned at confirmation",
    )

    objects = OrderQuerySet.as_manager()

    class Meta:
        db_table = "orders"
        ordering = ["pk"]
        indexes = [
            models.Index(fields=["user", "created_at"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(slot__isnull=True, actual_date__isnull=True)
                    | Q(slot__isnull=False, actual_date__isnull=False)
                ),
                name="order_slot_set_with_confirmation_date",
            ),
        ]

    def __str__(self) -> str:
        return f"Order {self.pk}"

    @property
    def confirmation(self) -> ConfirmationState:
        """Tagged confirmation state derived from slot and timestamp."""
        if self.slot_id is None or self.actual_date is None:
            return Unconfirmed()
        return Confirmed(slot_id=self.slot_id, confirmed_at=self.actual_date)

    @property
    def is_confirmed(self) -> bool:
        return isinstance(self.confirmation, Confirmed)


class Dish(TimeStampedModel):
    """A single dish that can be served as one course of a menu."""

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    category = models.CharField(max_length=20, choices=Course.choices)
    visible = models.BooleanField(default=True)
    menu = models.ForeignKey(
        "Menu",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="dishes",
    )

    class Meta:
        db_table = "dishes"
        ordering = ["category", "name"]
        verbose_name_plural = "dishes"

    def __str__(self) -> str:
        return self.name


class Menu(TimeStampedModel):
    """
    A set menu: one dish for each of the four courses at a fixed price.
    """

    price = models.DecimalField(max_digits=10, decimal_places=2)
    appetizer = models.ForeignKey(
        Dish,
        on_delete=models.PROTECT,
        related_name="menus_as_appetizer",
    )
    first = models.ForeignKey(
        Dish,
        on_delete=models.PROTECT,
        related_name="menus_as_first",
    )
    second = models.ForeignKey(
        Dish,
        on_delete=models.PROTECT,
        related_name="menus_as_second",
    )
    dessert = models.ForeignKey(
        Dish,
        on_delete=models.PROTECT,
        related_name="menus_as_dessert",
    )
    visible = models.BooleanField(default=True)
    orders = models.ManyToManyField(
        Order,
        through="MenuOrderLine",
        related_name="menus",
        blank=True,
    )

    class Meta:
        db_table = "menus"
        ordering = ["pk"]

    def __str__(self) -> str:
        return f"Menu {self.pk} ({self.price})"

    @property
    def courses(self) -> tuple[Dish, Dish, Dish, Dish]:
        """The four dishes in serving order."""
        return (self.appetizer, self.first, self.second, self.dessert)


class MenuOrderLine(TimeStampedModel):
    """Line item linking an order to one of its menus."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="lines",
    )
    menu = models.ForeignKey(
        Menu,
        on_delete=models.PROTECT,
        related_name="order_lines",
    )
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        db_table = "list_orders"
        ordering = ["pk"]

    def __str__(self) -> str:
        return f"{self.quantity}x Menu {self.menu_id}"
