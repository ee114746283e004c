"""
Core models - users and shared abstract bases.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Custom user model with a catalog role.

    The role decides which capabilities the user holds (see core.security).
    Superusers hold every capability regardless of role.
    """

    class Role(models.TextChoices):
        MANAGER = "manager", "Manager"
        CONSULTANT = "consultant", "Consultant"
        NONE = "none", "No catalog access"

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.NONE,
    )

    class Meta:
        ordering = ["username"]

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class TimestampedModel(models.Model):
    """
    Abstract base for catalog entities.

    Provides created/updated timestamps.
    """

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
