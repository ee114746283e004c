"""Admin registration for kitchen models."""

from django.contrib import admin

from apps.web.kitchen.models import Kitchen


@admin.register(Kitchen)
class KitchenAdmin(admin.ModelAdmin):
    """Admin for kitchens."""

    list_display = ["name"]
    search_fields = ["name"]
