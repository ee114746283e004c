"""
Restaurant lifecycle service - queries and state transitions for restaurants.

Handles:
1. Lookups by code, name fragment, kitchen and free delivery
2. Create/update with kitchen and city reference checks
3. Activation, opening and closing (single and batch)
4. Address replacement and deletion

Every mutation runs in one transaction. Missing kitchen or city references
found during a mutation are re-raised as BusinessRuleViolation so callers
never see which internal lookup failed.
"""

import logging
from collections.abc import Callable, Iterable
from functools import wraps
from typing import Any

from django.db import transaction
from django.db.models import ProtectedError, QuerySet

from apps.web.core.exceptions import (
    BusinessRuleViolation,
    DomainError,
    EntityInUse,
    NotFound,
    ReferenceNotFound,
)
from apps.web.core.pagination import Page, PageRequest, paginate
from apps.web.geo.models import City
from apps.web.kitchen.models import Kitchen
from apps.web.restaurant.lookups import resolve_city, resolve_kitchen
from apps.web.restaurant.models import Restaurant
from apps.web.restaurant.serializers import AddressInput, RestaurantInput

logger = logging.getLogger(__name__)

_FLAG_FIELDS = ["is_active", "is_open", "updated_at"]
_ADDRESS_FIELDS = [
    "address_zip_code",
    "address_street",
    "address_number",
    "address_complement",
    "address_district",
    "address_city",
]


class RestaurantNotFound(NotFound):
    """No restaurant with the given code."""

    def __init__(self, code: str) -> None:
        super().__init__(f"There is no restaurant with code '{code}'")
        self.code = code


class KitchenReferenceNotFound(ReferenceNotFound):
    """The kitchen referenced by a restaurant write does not exist."""

    def __init__(self, kitchen_id: int) -> None:
        super().__init__(f"There is no kitchen with id {kitchen_id}")
        self.kitchen_id = kitchen_id


class CityReferenceNotFound(ReferenceNotFound):
    """The city referenced by a restaurant address does not exist."""

    def __init__(self, city_id: int) -> None:
        super().__init__(f"There is no city with id {city_id}")
        self.city_id = city_id


def business_boundary(
    *translated: type[DomainError],
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Re-raise the given domain errors as BusinessRuleViolation.

    Apply outside ``transaction.atomic`` so the rollback happens first.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except translated as exc:
                raise BusinessRuleViolation(exc.message) from exc

        return wrapper

    return decorator


# =============================================================================
# Queries
# =============================================================================


def _restaurants() -> QuerySet[Restaurant]:
    return Restaurant.objects.select_related("kitchen", "address_city__state")


def find_by_code(code: str) -> Restaurant:
    """
    Get a restaurant by code.

    Raises:
        RestaurantNotFound: If no restaurant has that code
    """
    try:
        return _restaurants().get(code=code)
    except Restaurant.DoesNotExist as exc:
        raise RestaurantNotFound(code) from exc


def find_all(page_request: PageRequest) -> Page[Restaurant]:
    """List all restaurants ordered by name."""
    return paginate(_restaurants().order_by("name", "pk"), page_request)


def find_by_like_name(fragment: str, page_request: PageRequest) -> Page[Restaurant]:
    """Case-insensitive substring search on name. Empty fragment matches all."""
    queryset = _restaurants().filter(name__icontains=fragment).order_by("name", "pk")
    return paginate(queryset, page_request)


def restaurants_with_free_delivery(page_request: PageRequest) -> Page[Restaurant]:
    """List restaurants whose shipping fee is zero."""
    queryset = _restaurants().filter(shipping_fee=0).order_by("name", "pk")
    return paginate(queryset, page_request)


def restaurants_by_kitchen(
    kitchen_id: int, page_request: PageRequest
) -> Page[Restaurant]:
    """List the restaurants of a kitchen."""
    queryset = _restaurants().filter(kitchen_id=kitchen_id).order_by("name", "pk")
    return paginate(queryset, page_request)


# =============================================================================
# Reference resolution
# =============================================================================


def _require_kitchen(kitchen_id: int) -> Kitchen:
    kitchen = resolve_kitchen(kitchen_id)
    if kitchen is None:
        raise KitchenReferenceNotFound(kitchen_id)
    return kitchen


def _require_city(city_id: int) -> City:
    city = resolve_city(city_id)
    if city is None:
        raise CityReferenceNotFound(city_id)
    return city


def _lock(code: str) -> Restaurant:
    """Fetch a restaurant for update inside the current transaction."""
    try:
        return Restaurant.objects.select_for_update().get(code=code)
    except Restaurant.DoesNotExist as exc:
        raise RestaurantNotFound(code) from exc


def _apply_address(restaurant: Restaurant, address: AddressInput, city: City) -> None:
    restaurant.address_zip_code = address.zip_code
    restaurant.address_street = address.street
    restaurant.address_number = address.number
    restaurant.address_complement = address.complement
    restaurant.address_district = address.district
    restaurant.address_city = city


# =============================================================================
# Mutations
# =============================================================================


@business_boundary(ReferenceNotFound)
@transaction.atomic
def create(data: RestaurantInput) -> Restaurant:
    """
    Create an inactive, closed restaurant.

    Raises:
        BusinessRuleViolation: If the kitchen or city does not exist
    """
    kitchen = _require_kitchen(data.kitchen.id)
    city = _require_city(data.address.city.id)

    restaurant = Restaurant(
        name=data.name,
        shipping_fee=data.shipping_fee,
        kitchen=kitchen,
        is_active=False,
        is_open=False,
    )
    _apply_address(restaurant, data.address, city)
    restaurant.save()

    logger.info("Created restaurant %s (%s)", restaurant.code, restaurant.name)
    return restaurant


@business_boundary(ReferenceNotFound)
@transaction.atomic
def update(code: str, data: RestaurantInput) -> Restaurant:
    """
    Overwrite name, shipping fee, kitchen and address of a restaurant.

    Code and lifecycle flags are kept.

    Raises:
        RestaurantNotFound: If no restaurant has that code
        BusinessRuleViolation: If the kitchen or city does not exist
    """
    restaurant = _lock(code)
    kitchen = _require_kitchen(data.kitchen.id)
    city = _require_city(data.address.city.id)

    restaurant.name = data.name
    restaurant.shipping_fee = data.shipping_fee
    restaurant.kitchen = kitchen
    _apply_address(restaurant, data.address, city)
    restaurant.save(
        update_fields=[
            "name",
            "shipping_fee",
            "kitchen",
            *_ADDRESS_FIELDS,
            "updated_at",
        ]
    )

    logger.info("Updated restaurant %s", code)
    return restaurant


def _transition(code: str, action: Callable[[Restaurant], None], label: str) -> None:
    with transaction.atomic():
        restaurant = _lock(code)
        action(restaurant)
        restaurant.save(update_fields=_FLAG_FIELDS)
    logger.info("Restaurant %s %s", code, label)


def activate(code: str) -> None:
    """Mark a restaurant active. Idempotent."""
    _transition(code, Restaurant.activate, "activated")


def inactivate(code: str) -> None:
    """Mark a restaurant inactive, closing it as well. Idempotent."""
    _transition(code, Restaurant.inactivate, "inactivated")


def open_restaurant(code: str) -> None:
    """
    Open a restaurant.

    Raises:
        RestaurantNotFound: If no restaurant has that code
        InvalidState: If the restaurant is not active
    """
    _transition(code, Restaurant.open, "opened")


def close_restaurant(code: str) -> None:
    """Close a restaurant."""
    _transition(code, Restaurant.close, "closed")


def _transition_many(
    codes: Iterable[str], action: Callable[[Restaurant], None], operation: str
) -> None:
    unique_codes = list(dict.fromkeys(codes))
    if not unique_codes:
        return

    with transaction.atomic():
        restaurants = list(
            Restaurant.objects.select_for_update()
            .filter(code__in=unique_codes)
            .order_by("pk")
        )
        if len(restaurants) != len(unique_codes):
            raise NotFound(
                f"Batch {operation} rejected: one or more restaurants were not found"
            )

        for restaurant in restaurants:
            action(restaurant)
            restaurant.save(update_fields=_FLAG_FIELDS)

    logger.info("Batch %s applied to %d restaurants", operation, len(unique_codes))


@business_boundary(NotFound)
def activate_multiples(codes: Iterable[str]) -> None:
    """
    Activate every listed restaurant, or none of them.

    Raises:
        BusinessRuleViolation: If any code does not resolve
    """
    _transition_many(codes, Restaurant.activate, "activation")


@business_boundary(NotFound)
def inactivate_multiples(codes: Iterable[str]) -> None:
    """
    Inactivate every listed restaurant, or none of them.

    Raises:
        BusinessRuleViolation: If any code does not resolve
    """
    _transition_many(codes, Restaurant.inactivate, "inactivation")


@business_boundary(ReferenceNotFound)
@transaction.atomic
def update_address(code: str, address: AddressInput) -> Restaurant:
    """
    Replace a restaurant's address.

    Raises:
        RestaurantNotFound: If no restaurant has that code
        BusinessRuleViolation: If the city does not exist
    """
    restaurant = _lock(code)
    city = _require_city(address.city.id)
    _apply_address(restaurant, address, city)
    restaurant.save(update_fields=[*_ADDRESS_FIELDS, "updated_at"])

    logger.info("Updated address of restaurant %s", code)
    return restaurant


def delete_by_code(code: str) -> None:
    """
    Delete a restaurant.

    Raises:
        RestaurantNotFound: If no restaurant has that code
        EntityInUse: If products still belong to the restaurant
    """
    try:
        with transaction.atomic():
            _lock(code).delete()
    except ProtectedError as exc:
        raise EntityInUse(
            f"Restaurant '{code}' cannot be removed, it still has products"
        ) from exc

    logger.info("Deleted restaurant %s", code)
