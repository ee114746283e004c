"""Django app configuration for the restaurant catalog."""

from django.apps import AppConfig


class RestaurantConfig(AppConfig):
    """Restaurants, their products and product photos."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.restaurant"
    label = "restaurant"
    verbose_name = "Restaurants"
