"""
Custom querysets for restaurant models.

OrderQuerySet holds the filtered listings used by the kitchen and by customers.
"""

from typing import TYPE_CHECKING, TypeVar

from django.db import models

if TYPE_CHECKING:
    from .models import Order

_T = TypeVar("_T", bound="Order")


class OrderQuerySet(models.QuerySet[_T]):
    """
    Queryset with the order listings exposed over the API.

    Usage in services:
        orders = Order.objects.for_kitchen()
        orders = Order.objects.for_user(user_id)
    """

    def with_slot(self) -> "OrderQuerySet[_T]":
        return self.select_related("slot")

    def for_kitchen(self) -> "OrderQuerySet[_T]":
        """
        Orders visible to the kitchen.

        Only confirmed orders (slot assigned) are shown, made or not.
        """
        return self.with_slot().filter(slot__isnull=False)

    def for_user(self, user_id: int) -> "OrderQuerySet[_T]":
        """
        Orders owned by a user, most recently created first.

        Args:
            user_id: Primary key of the owning user

        Returns:
            QuerySet ordered by descending creation time (id breaks ties)
        """
        return (
            self.with_slot()
            .filter(user_id=user_id)
            .order_by("-created_at", "-pk")
        )
