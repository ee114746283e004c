"""
Pydantic schemas for restaurant API requests and responses.

These schemas define the public API contract. Restaurant responses expose
the restaurant ``code`` only, never the numeric primary key.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from apps.web.restaurant.models import Product, ProductPhoto, Restaurant

# =============================================================================
# Requests
# =============================================================================


class IdReference(BaseModel):
    """Reference to another entity by id, e.g. ``{"id": 3}``."""

    id: int = Field(..., ge=1)


class AddressInput(BaseModel):
    """Delivery address. Replaced as a whole, never patched."""

    zip_code: str = Field(..., min_length=1, max_length=9)
    street: str = Field(..., min_length=1, max_length=100)
    number: str = Field(..., min_length=1, max_length=20)
    complement: str = Field(default="", max_length=60)
    district: str = Field(..., min_length=1, max_length=60)
    city: IdReference


class RestaurantInput(BaseModel):
    """Request body for POST /restaurants and PUT /restaurants/{code}."""

    name: str = Field(..., min_length=1, max_length=80)
    shipping_fee: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    kitchen: IdReference
    address: AddressInput


class ProductInput(BaseModel):
    """Request body for creating or updating a product."""

    name: str = Field(..., min_length=1, max_length=80)
    description: str = Field(default="", max_length=2000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    active: bool = True


# =============================================================================
# Responses
# =============================================================================


class KitchenRefSchema(BaseModel):
    """Kitchen nested in a restaurant."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CitySchema(BaseModel):
    """City nested in an address."""

    id: int
    name: str
    state: str


class AddressSchema(BaseModel):
    """A restaurant's delivery address."""

    zip_code: str
    street: str
    number: str
    complement: str
    district: str
    city: CitySchema


class RestaurantSummarySchema(BaseModel):
    """Restaurant as listed in paged results."""

    code: str
    name: str
    kitchen_name: str
    shipping_fee: Decimal
    is_active: bool
    is_open: bool


class RestaurantSchema(BaseModel):
    """Restaurant with kitchen and address."""

    code: str
    name: str
    shipping_fee: Decimal
    is_active: bool
    is_open: bool
    kitchen: KitchenRefSchema
    address: AddressSchema


class ProductSchema(BaseModel):
    """A product."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: Decimal
    active: bool


class ProductPhotoSchema(BaseModel):
    """Stored photo metadata for a product."""

    model_config = ConfigDict(from_attributes=True)

    file_name: str
    description: str
    content_type: str
    size: int


# =============================================================================
# Model -> wire helpers
# =============================================================================


def _address(restaurant: "Restaurant") -> AddressSchema:
    city = restaurant.address_city
    return AddressSchema(
        zip_code=restaurant.address_zip_code,
        street=restaurant.address_street,
        number=restaurant.address_number,
        complement=restaurant.address_complement,
        district=restaurant.address_district,
        city=CitySchema(id=city.pk, name=city.name, state=city.state.abbreviation),
    )


def to_restaurant_summary(restaurant: "Restaurant") -> dict[str, Any]:
    """Serialize a Restaurant for list responses."""
    return RestaurantSummarySchema(
        code=restaurant.code,
        name=restaurant.name,
        kitchen_name=restaurant.kitchen.name,
        shipping_fee=restaurant.shipping_fee,
        is_active=restaurant.is_active,
        is_open=restaurant.is_open,
    ).model_dump(mode="json")


def to_restaurant_detail(restaurant: "Restaurant") -> dict[str, Any]:
    """Serialize a Restaurant with nested kitchen and address."""
    return RestaurantSchema(
        code=restaurant.code,
        name=restaurant.name,
        shipping_fee=restaurant.shipping_fee,
        is_active=restaurant.is_active,
        is_open=restaurant.is_open,
        kitchen=KitchenRefSchema.model_validate(restaurant.kitchen),
        address=_address(restaurant),
    ).model_dump(mode="json")


def to_product(product: "Product") -> dict[str, Any]:
    """Serialize a Product."""
    return ProductSchema.model_validate(product).model_dump(mode="json")


def to_photo(photo: "ProductPhoto") -> dict[str, Any]:
    """Serialize ProductPhoto metadata."""
    return ProductPhotoSchema.model_validate(photo).model_dump(mode="json")
