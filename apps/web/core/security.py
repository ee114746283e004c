"""
Authorization gate - capability policy for catalog operations.

Every gated operation is listed once in OPERATION_POLICY with the single
capability it requires. Views are tagged with ``@check_security(operation)``
(see core.decorators), which calls ``authorize`` before the view body runs.
"""

import logging
from enum import Enum
from typing import Any

from django.core.exceptions import PermissionDenied

from apps.web.core.exceptions import NotAuthenticated
from apps.web.core.models import User

logger = logging.getLogger(__name__)


class Capability(str, Enum):
    """Named permissions required to invoke a class of operations."""

    CONSULT = "consult"
    MANAGE = "manage"


ROLE_CAPABILITIES: dict[str, frozenset[Capability]] = {
    User.Role.MANAGER.value: frozenset({Capability.CONSULT, Capability.MANAGE}),
    User.Role.CONSULTANT.value: frozenset({Capability.CONSULT}),
    User.Role.NONE.value: frozenset(),
}

OPERATION_POLICY: dict[str, Capability] = {
    # Restaurant reads
    "restaurant.find_by_code": Capability.CONSULT,
    "restaurant.find_by_like_name": Capability.CONSULT,
    "restaurant.find_all": Capability.CONSULT,
    "restaurant.free_delivery": Capability.CONSULT,
    "restaurant.by_kitchen": Capability.CONSULT,
    # Restaurant writes
    "restaurant.create": Capability.MANAGE,
    "restaurant.update": Capability.MANAGE,
    "restaurant.activate": Capability.MANAGE,
    "restaurant.inactivate": Capability.MANAGE,
    "restaurant.activate_multiples": Capability.MANAGE,
    "restaurant.inactivate_multiples": Capability.MANAGE,
    "restaurant.open": Capability.MANAGE,
    "restaurant.close": Capability.MANAGE,
    "restaurant.update_address": Capability.MANAGE,
    "restaurant.delete": Capability.MANAGE,
    # Products
    "product.find_all": Capability.CONSULT,
    "product.find": Capability.CONSULT,
    "product.create": Capability.MANAGE,
    "product.update": Capability.MANAGE,
    "product.photo.find": Capability.CONSULT,
    "product.photo.save": Capability.MANAGE,
    "product.photo.delete": Capability.MANAGE,
}


def capabilities_for(user: Any) -> frozenset[Capability]:
    """Return the capabilities held by an authenticated user."""
    if user.is_superuser:
        return frozenset(Capability)
    role = str(getattr(user, "role", User.Role.NONE.value))
    return ROLE_CAPABILITIES.get(role, frozenset())


def required_capability(operation: str) -> Capability:
    """
    Look up the capability an operation requires.

    Raises:
        KeyError: If the operation is not listed in OPERATION_POLICY
    """
    try:
        return OPERATION_POLICY[operation]
    except KeyError:
        msg = f"Operation '{operation}' has no entry in OPERATION_POLICY"
        raise KeyError(msg) from None


def authorize(user: Any, operation: str) -> None:
    """
    Check that ``user`` may run ``operation``.

    Raises:
        NotAuthenticated: If the user is anonymous or inactive
        PermissionDenied: If the user lacks the required capability
    """
    capability = required_capability(operation)

    if user is None or not user.is_authenticated or not user.is_active:
        raise NotAuthenticated("Authentication credentials were not provided")

    if capability not in capabilities_for(user):
        logger.warning(
            "Denied %s to user %s (requires %s)",
            operation,
            user.pk,
            capability.value,
        )
        raise PermissionDenied(f"Missing capability '{capability.value}'")
