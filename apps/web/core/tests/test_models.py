"""Tests for core models."""

import pytest

from apps.web.core.models import User


@pytest.mark.django_db
class TestUser:
    """Tests for the custom User model."""

    def test_default_role_is_customer(self, user: User) -> None:
        """New users are customers unless told otherwise."""
        assert user.role == User.Role.CUSTOMER

    def test_user_str(self) -> None:
        """Test user string representation includes the role."""
        chef = User.objects.create_user(username="chef", role=User.Role.CHEF)

        assert str(chef) == "chef (chef)"
