"""Admin registration for geo models."""

from django.contrib import admin

from apps.web.geo.models import City, State


class CityInline(admin.TabularInline):
    """Inline for cities within a state."""

    model = City
    extra = 0
    fields = ["name"]


@admin.register(State)
class StateAdmin(admin.ModelAdmin):
    """Admin for states."""

    list_display = ["name", "abbreviation"]
    search_fields = ["name", "abbreviation"]
    inlines = [CityInline]


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    """Admin for cities."""

    list_display = ["name", "state"]
    list_filter = ["state"]
    search_fields = ["name"]
