"""
Lookup resolver - read-through resolution of kitchen and city references.

Returns ``None`` when the referenced row does not exist; callers decide how
to report it. No caching, no retries.
"""

from apps.web.geo.models import City
from apps.web.kitchen.models import Kitchen


def resolve_kitchen(kitchen_id: int) -> Kitchen | None:
    """Get the kitchen with this id, if any."""
    return Kitchen.objects.filter(pk=kitchen_id).first()


def resolve_city(city_id: int) -> City | None:
    """Get the city with this id, if any."""
    return City.objects.select_related("state").filter(pk=city_id).first()
