"""
Restaurant models - restaurants, their products and product photos.

Restaurants are addressed externally by ``code``; the numeric primary key
never leaves the service layer.
"""

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from apps.web.core.exceptions import InvalidState
from apps.web.core.models import TimestampedModel


def _new_code() -> str:
    return str(uuid.uuid4())


class Restaurant(TimestampedModel):
    """
    A restaurant listed in the catalog.

    Invariant: a restaurant can only be open while it is active. The state
    helpers below are the only place the two flags change.
    """

    code = models.CharField(
        max_length=36,
        unique=True,
        default=_new_code,
        editable=False,
        help_text="External identifier used by the API",
    )
    name = models.CharField(max_length=80)
    shipping_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    is_active = models.BooleanField(default=False)
    is_open = models.BooleanField(default=False)

    kitchen = models.ForeignKey(
        "kitchen.Kitchen",
        on_delete=models.PROTECT,
        related_name="restaurants",
    )

    # Delivery address (embedded)
    address_zip_code = models.CharField(max_length=9, blank=True)
    address_street = models.CharField(max_length=100, blank=True)
    address_number = models.CharField(max_length=20, blank=True)
    address_complement = models.CharField(max_length=60, blank=True)
    address_district = models.CharField(max_length=60, blank=True)
    address_city = models.ForeignKey(
        "geo.City",
        on_delete=models.PROTECT,
        related_name="restaurants",
    )

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(
                fields=["kitchen", "name"], name="restaurant_kitchen_name_idx"
            ),
            models.Index(
                fields=["is_active", "is_open"], name="restaurant_active_open_idx"
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(is_open=False) | models.Q(is_active=True),
                name="restaurant_open_requires_active",
            ),
            models.CheckConstraint(
                condition=models.Q(shipping_fee__gte=0),
                name="restaurant_shipping_fee_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def has_free_delivery(self) -> bool:
        """Check if delivery costs nothing."""
        return self.shipping_fee == 0

    def activate(self) -> None:
        self.is_active = True

    def inactivate(self) -> None:
        """Inactivate, closing the restaurant if it was open."""
        self.is_active = False
        self.is_open = False

    def open(self) -> None:
        """
        Open for orders.

        Raises:
            InvalidState: If the restaurant is not active
        """
        if not self.is_active:
            raise InvalidState(
                f"Restaurant '{self.code}' must be active before it can be opened"
            )
        self.is_open = True

    def close(self) -> None:
        self.is_open = False


class Product(TimestampedModel):
    """A product sold by a restaurant."""

    restaurant = models.ForeignKey(
        Restaurant,
        on_delete=models.PROTECT,
        related_name="products",
    )
    name = models.CharField(max_length=80)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(
                fields=["restaurant", "active"], name="product_restaurant_active_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.restaurant.name} > {self.name}"


class ProductPhoto(TimestampedModel):
    """
    Photo metadata for a product.

    At most one photo per product; the bytes live in the default storage
    under ``storage_path``.
    """

    product = models.OneToOneField(
        Product,
        on_delete=models.CASCADE,
        related_name="photo",
    )
    file_name = models.CharField(max_length=150)
    description = models.CharField(max_length=150, blank=True)
    content_type = models.CharField(max_length=80)
    size = models.PositiveIntegerField(help_text="Size in bytes")
    storage_path = models.CharField(max_length=255)

    def __str__(self) -> str:
        return self.file_name
