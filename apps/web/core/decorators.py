"""
Decorators for request handling and authorization.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any

from django.http import HttpRequest

from apps.web.core.security import authorize, required_capability


def check_security(
    operation: str,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator that runs the authorization gate before a view.

    The operation must be listed in OPERATION_POLICY; an unknown operation
    fails when the view module is imported, not at request time.

    Usage:
        @check_security("restaurant.activate")
        def activate(request, code):
            ...
    """
    capability = required_capability(operation)

    def decorator(view_func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view_func)
        def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
            authorize(request.user, operation)
            return view_func(request, *args, **kwargs)

        wrapper.operation = operation  # type: ignore[attr-defined]
        wrapper.capability = capability  # type: ignore[attr-defined]
        return wrapper

    return decorator
