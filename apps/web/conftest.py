"""
Pytest configuration for Django app tests.
"""

from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.test import Client as DjangoClient

import pytest

if TYPE_CHECKING:
    from apps.web.core.models import User


@pytest.fixture
def api_client() -> DjangoClient:
    """Django test client for API requests."""
    return DjangoClient()


@pytest.fixture
def user() -> "User":
    """Create a test customer."""
    User = get_user_model()
    return User.objects.create_user(
        username="testuser",
        email="testuser@example.com",
        password="testpass123",
    )
