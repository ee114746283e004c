"""Domain exceptions shared by the catalog apps.

Services raise these; ApiErrorMiddleware maps them to HTTP responses.
"""

from typing import Any


class DomainError(Exception):
    """Base exception for catalog domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFound(DomainError):
    """The requested entity does not exist."""


class ReferenceNotFound(DomainError):
    """An entity referenced by a write (kitchen, city) does not exist."""


class BusinessRuleViolation(DomainError):
    """The request is well-formed but breaks a domain rule."""


class InvalidState(BusinessRuleViolation):
    """The requested transition breaks a lifecycle invariant."""


class EntityInUse(DomainError):
    """The entity cannot be removed while other entities reference it."""


class NotAuthenticated(Exception):
    """The caller is not authenticated."""


class RequestValidationError(Exception):
    """The request body or parameters failed structural validation."""

    def __init__(self, details: list[dict[str, Any]]) -> None:
        self.details = details
        super().__init__("; ".join(f"{d['field']}: {d['message']}" for d in details))
