"""Django app configuration for kitchen module."""

from django.apps import AppConfig


class KitchenConfig(AppConfig):
    """Kitchen app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.kitchen"
    label = "kitchen"
    verbose_name = "Kitchen"
