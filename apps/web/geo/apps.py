"""Django app configuration for geo module."""

from django.apps import AppConfig


class GeoConfig(AppConfig):
    """Geo app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.geo"
    label = "geo"
    verbose_name = "Geography"
