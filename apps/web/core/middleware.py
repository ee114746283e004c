"""
API error middleware - maps domain exceptions to JSON responses.
"""

import logging
from collections.abc import Callable

from django.core.exceptions import PermissionDenied
from django.http import HttpRequest, HttpResponse, JsonResponse

from apps.web.core.exceptions import (
    BusinessRuleViolation,
    EntityInUse,
    NotAuthenticated,
    NotFound,
    ReferenceNotFound,
    RequestValidationError,
)

logger = logging.getLogger(__name__)


class ApiErrorMiddleware:
    """
    Middleware that turns exceptions raised by views into JSON errors.

    Mapping:
    - NotAuthenticated -> 401
    - PermissionDenied -> 403
    - NotFound -> 404
    - RequestValidationError -> 400 (validation_error)
    - BusinessRuleViolation / InvalidState -> 400 (business_rule_violation)
    - EntityInUse -> 409

    Anything else falls through to Django's default handling.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        return self.get_response(request)

    def process_exception(
        self, request: HttpRequest, exception: Exception
    ) -> HttpResponse | None:
        if isinstance(exception, NotAuthenticated):
            response = JsonResponse(
                {"error": "unauthorized", "message": str(exception)}, status=401
            )
            response["WWW-Authenticate"] = 'Session realm="catalog"'
            return response

        if isinstance(exception, PermissionDenied):
            return JsonResponse(
                {"error": "forbidden", "message": str(exception)}, status=403
            )

        if isinstance(exception, NotFound):
            logger.debug("Not found on %s: %s", request.path, exception.message)
            return JsonResponse(
                {"error": "not_found", "message": exception.message}, status=404
            )

        if isinstance(exception, RequestValidationError):
            return JsonResponse(
                {"error": "validation_error", "details": exception.details},
                status=400,
            )

        if isinstance(exception, BusinessRuleViolation):
            logger.warning(
                "Business rule violation on %s %s: %s",
                request.method,
                request.path,
                exception.message,
            )
            return JsonResponse(
                {"error": "business_rule_violation", "message": exception.message},
                status=400,
            )

        if isinstance(exception, EntityInUse):
            return JsonResponse(
                {"error": "entity_in_use", "message": exception.message}, status=409
            )

        if isinstance(exception, ReferenceNotFound):
            # Services translate these at their boundary; reaching here is a bug.
            logger.error(
                "Untranslated reference failure on %s: %s",
                request.path,
                exception.message,
            )
            return JsonResponse(
                {"error": "business_rule_violation", "message": exception.message},
                status=400,
            )

        return None
