"""Admin registration for restaurant models."""

from collections.abc import Callable

from django.contrib import admin, messages
from django.db.models import QuerySet
from django.http import HttpRequest

from apps.web.core.exceptions import BusinessRuleViolation
from apps.web.restaurant import services
from apps.web.restaurant.models import Product, ProductPhoto, Restaurant


class ProductInline(admin.TabularInline):
    """Inline for products within a restaurant."""

    model = Product
    extra = 0
    fields = ["name", "price", "active"]


class ProductPhotoInline(admin.StackedInline):
    """Inline for a product's photo metadata."""

    model = ProductPhoto
    extra = 0
    readonly_fields = ["file_name", "content_type", "size", "storage_path"]
    fields = ["file_name", "description", "content_type", "size", "storage_path"]


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    """
    Admin for restaurants.

    Lifecycle flags are read-only here; use the actions so transitions go
    through the lifecycle service.
    """

    list_display = [
        "name",
        "code",
        "kitchen",
        "address_city",
        "shipping_fee",
        "is_active",
        "is_open",
    ]
    list_filter = ["is_active", "is_open", "kitchen"]
    search_fields = ["name", "code"]
    inlines = [ProductInline]
    readonly_fields = ["code", "is_active", "is_open", "created_at", "updated_at"]
    actions = ["activate_selected", "inactivate_selected"]

    fieldsets = [
        (None, {"fields": ["code", "name", "kitchen", "shipping_fee"]}),
        ("Lifecycle", {"fields": ["is_active", "is_open"]}),
        (
            "Address",
            {
                "fields": [
                    "address_zip_code",
                    "address_street",
                    "address_number",
                    "address_complement",
                    "address_district",
                    "address_city",
                ]
            },
        ),
        ("Timestamps", {"fields": ["created_at", "updated_at"]}),
    ]

    @admin.action(description="Activate selected restaurants")
    def activate_selected(
        self, request: HttpRequest, queryset: QuerySet[Restaurant]
    ) -> None:
        self._run_batch(request, queryset, services.activate_multiples, "activated")

    @admin.action(description="Inactivate selected restaurants")
    def inactivate_selected(
        self, request: HttpRequest, queryset: QuerySet[Restaurant]
    ) -> None:
        self._run_batch(request, queryset, services.inactivate_multiples, "inactivated")

    def _run_batch(
        self,
        request: HttpRequest,
        queryset: QuerySet[Restaurant],
        action: Callable[[list[str]], None],
        label: str,
    ) -> None:
        codes = list(queryset.values_list("code", flat=True))
        try:
            action(codes)
        except BusinessRuleViolation as e:
            self.message_user(request, e.message, level=messages.ERROR)
            return
        self.message_user(request, f"{len(codes)} restaurant(s) {label}.")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin for products."""

    list_display = ["name", "restaurant", "price", "active"]
    list_filter = ["active", "restaurant"]
    search_fields = ["name", "description", "restaurant__name"]
    inlines = [ProductPhotoInline]
    readonly_fields = ["created_at", "updated_at"]
