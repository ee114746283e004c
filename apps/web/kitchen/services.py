"""
Kitchen services - CRUD over kitchens.
"""

import logging

from django.db import transaction
from django.db.models import ProtectedError

from apps.web.core.exceptions import EntityInUse, NotFound
from apps.web.core.pagination import Page, PageRequest, paginate
from apps.web.kitchen.models import Kitchen
from apps.web.kitchen.serializers import KitchenInput

logger = logging.getLogger(__name__)


class KitchenNotFound(NotFound):
    """No kitchen with the given id."""

    def __init__(self, kitchen_id: int) -> None:
        super().__init__(f"There is no kitchen with id {kitchen_id}")
        self.kitchen_id = kitchen_id


def find_by_id(kitchen_id: int) -> Kitchen:
    """
    Get a kitchen by id.

    Raises:
        KitchenNotFound: If no kitchen has that id
    """
    try:
        return Kitchen.objects.get(pk=kitchen_id)
    except Kitchen.DoesNotExist as exc:
        raise KitchenNotFound(kitchen_id) from exc


def find_all(page_request: PageRequest) -> Page[Kitchen]:
    """List kitchens ordered by name."""
    return paginate(Kitchen.objects.order_by("name", "pk"), page_request)


def create(data: KitchenInput) -> Kitchen:
    """Create a kitchen."""
    kitchen = Kitchen.objects.create(name=data.name)
    logger.info("Created kitchen %s", kitchen.pk)
    return kitchen


@transaction.atomic
def update(kitchen_id: int, data: KitchenInput) -> Kitchen:
    """Rename a kitchen."""
    kitchen = find_by_id(kitchen_id)
    kitchen.name = data.name
    kitchen.save(update_fields=["name"])
    return kitchen


def delete_by_id(kitchen_id: int) -> None:
    """
    Delete a kitchen.

    Raises:
        KitchenNotFound: If no kitchen has that id
        EntityInUse: If restaurants still belong to the kitchen
    """
    kitchen = find_by_id(kitchen_id)
    try:
        with transaction.atomic():
            kitchen.delete()
    except ProtectedError as exc:
        raise EntityInUse(
            f"Kitchen {kitchen_id} cannot be removed, it is in use by restaurants"
        ) from exc
    logger.info("Deleted kitchen %s", kitchen_id)
