"""Tests for restaurant models."""

from datetime import UTC, datetime
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models.deletion import ProtectedError

import pytest

from apps.web.restaurant.models import (
    Confirmed,
    Course,
    Order,
    Unconfirmed,
)

from .factories import (
    ConfirmedOrderFactory,
    DishFactory,
    MenuFactory,
    MenuOrderLineFactory,
    OrderFactory,
    SlotFactory,
    UserFactory,
)


@pytest.mark.django_db
class TestSlot:
    """Tests for Slot model."""

    def test_create_slot(self) -> None:
        """Test creating a pickup slot."""
        slot = SlotFactory(limit_slot=5)

        assert slot.pk is not None
        assert slot.actual == 0
        assert slot.is_full is False
        assert slot.available == 5

    def test_is_full_at_limit(self) -> None:
        """Test a slot at its limit is full."""
        slot = SlotFactory(limit_slot=2, actual=2)

        assert slot.is_full is True
        assert slot.available == 0

    def test_occupancy_cannot_exceed_limit(self) -> None:
        """Test the database rejects occupancy above the limit."""
        with pytest.raises(IntegrityError), transaction.atomic():
            SlotFactory(limit_slot=2, actual=3)

    def test_slot_str(self) -> None:
        """Test slot string representation."""
        slot = SlotFactory(limit_slot=4, actual=1)
        slot.start_time = slot.start_time.replace(hour=13, minute=30)

        assert str(slot) == "13:30 (1/4)"


@pytest.mark.django_db
class TestOrder:
    """Tests for Order model."""

    def test_create_order(self) -> None:
        """Test a new order starts empty."""
        order = OrderFactory()

        assert order.pk is not None
        assert order.maked is False
        assert order.slot is None
        assert order.actual_date is None
        assert order.user is not None

    def test_standalone_order_has_no_user(self) -> None:
        """Test an order can exist without a user."""
        order = OrderFactory(user=None)

        assert order.user is None

    def test_unconfirmed_state(self) -> None:
        """Test an order without slot reports the unconfirmed state."""
        order = OrderFactory()

        assert order.confirmation == Unconfirmed()
        assert order.is_confirmed is False

    def test_confirmed_state(self) -> None:
        """Test a confirmed order reports its slot and timestamp."""
        order = ConfirmedOrderFactory()

        assert order.confirmation == Confirmed(
            slot_id=order.slot_id, confirmed_at=order.actual_date
        )
        assert order.is_confirmed is True

    def test_slot_requires_confirmation_date(self) -> None:
        """Test the database rejects a slot without a confirmation date."""
        slot = SlotFactory()

        with pytest.raises(IntegrityError), transaction.atomic():
            OrderFactory(slot=slot, actual_date=None)

    def test_confirmation_date_requires_slot(self) -> None:
        """Test the database rejects a confirmation date without a slot."""
        with pytest.raises(IntegrityError), transaction.atomic():
            OrderFactory(actual_date=datetime(2024, 5, 1, 12, 0, tzinfo=UTC))

    def test_orders_listed_in_insertion_order(self) -> None:
        """Test default ordering is by id."""
        first = OrderFactory()
        second = OrderFactory()

        assert list(Order.objects.all()) == [first, second]

    def test_slot_with_orders_is_protected(self) -> None:
        """Test a slot cannot be deleted while orders are confirmed into it."""
        order = ConfirmedOrderFactory()

        with pytest.raises(ProtectedError):
            order.slot.delete()

    def test_deleting_user_deletes_orders(self) -> None:
        """Test a user's orders go away with the user."""
        user = UserFactory()
        OrderFactory(user=user)

        user.delete()

        assert Order.objects.count() == 0


@pytest.mark.django_db
class TestOrderQuerySet:
    """Tests for order listings."""

    def test_for_kitchen_only_confirmed(self) -> None:
        """Test kitchen listing keeps only orders with a slot."""
        confirmed = ConfirmedOrderFactory()
        made = ConfirmedOrderFactory(maked=True)
        OrderFactory()

        assert set(Order.objects.for_kitchen()) == {confirmed, made}

    def test_for_user_newest_first(self) -> None:
        """Test user listing is ordered by descending creation."""
        user = UserFactory()
        older = OrderFactory(user=user)
        newer = OrderFactory(user=user)
        OrderFactory()  # another user's order

        assert list(Order.objects.for_user(user.pk)) == [newer, older]


@pytest.mark.django_db
class TestDish:
    """Tests for Dish model."""

    def test_create_dish(self) -> None:
        """Test creating a dish."""
        dish = DishFactory(name="Gazpacho", price=Decimal("5.50"))

        assert dish.pk is not None
        assert str(dish) == "Gazpacho"
        assert dish.category == Course.APPETIZER
        assert dish.visible is True


@pytest.mark.django_db
class TestMenu:
    """Tests for Menu model."""

    def test_create_menu(self) -> None:
        """Test a menu has one dish per course."""
        menu = MenuFactory()

        assert menu.pk is not None
        assert [dish.category for dish in menu.courses] == [
            Course.APPETIZER,
            Course.FIRST,
            Course.SECOND,
            Course.DESSERT,
        ]

    def test_dish_in_menu_is_protected(self) -> None:
        """Test a dish cannot be deleted while a menu serves it."""
        menu = MenuFactory()

        with pytest.raises(ProtectedError):
            menu.dessert.delete()

    def test_menu_dishes(self) -> None:
        """Test dishes can be attached to a menu."""
        menu = MenuFactory()
        dish = DishFactory(menu=menu)

        assert list(menu.dishes.all()) == [dish]


@pytest.mark.django_db
class TestMenuOrderLine:
    """Tests for MenuOrderLine model."""

    def test_order_to_menus(self) -> None:
        """Test an order lists its menus through line items."""
        order = OrderFactory()
        line = MenuOrderLineFactory(order=order, quantity=2)

        assert str(line) == f"2x Menu {line.menu_id}"
        assert list(order.menus.all()) == [line.menu]
        assert list(line.menu.orders.all()) == [order]

    def test_deleting_order_deletes_lines(self) -> None:
        """Test line items go away with their order."""
        line = MenuOrderLineFactory()

        line.order.delete()

        assert line.menu.order_lines.count() == 0
