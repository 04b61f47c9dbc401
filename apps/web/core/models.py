"""
Core models - users and shared model bases.

Concrete domain models inherit from TimeStampedModel.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Custom user model with a restaurant role.

    Customers own orders, chefs work the kitchen queue.
    """

    class Role(models.TextChoices):
        CUSTOMER = "customer", "Customer"
        CHEF = "chef", "Chef"
        ADMIN = "admin", "Admin"

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CUSTOMER,
    )

    class Meta:
        ordering = ["username"]

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class TimeStampedModel(models.Model):
    """
    Abstract base for all domain models.

    Provides created/updated timestamps.
    """

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
