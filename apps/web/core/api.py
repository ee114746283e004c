"""
Request parsing and response helpers for JSON views.
"""

import json
from typing import Any, TypeVar

from django.http import HttpRequest, HttpResponse, JsonResponse

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from apps.web.core.exceptions import RequestValidationError

_M = TypeVar("_M", bound=BaseModel)


def _details(exc: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "field": ".".join(str(loc) for loc in err["loc"]) or "body",
            "message": err["msg"],
        }
        for err in exc.errors()
    ]


def _load_json(request: HttpRequest) -> Any:
    try:
        return json.loads(request.body or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise RequestValidationError(
            [{"field": "body", "message": "Invalid JSON in request body"}]
        ) from exc


def parse_body(schema: type[_M], request: HttpRequest) -> _M:
    """
    Parse and validate a JSON request body against a pydantic schema.

    Raises:
        RequestValidationError: If the body is not JSON or fails validation
    """
    body = _load_json(request)
    try:
        return schema.model_validate(body)
    except PydanticValidationError as exc:
        raise RequestValidationError(_details(exc)) from exc


def parse_body_as(type_: Any, request: HttpRequest) -> Any:
    """Parse a JSON body into an arbitrary type (e.g. ``list[str]``)."""
    body = _load_json(request)
    try:
        return TypeAdapter(type_).validate_python(body)
    except PydanticValidationError as exc:
        raise RequestValidationError(_details(exc)) from exc


def json_response(data: BaseModel | dict[str, Any], status: int = 200) -> JsonResponse:
    """Serialize a schema (or plain dict) into a JsonResponse."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    return JsonResponse(data, status=status)


def no_content() -> HttpResponse:
    """Empty 204 response."""
    return HttpResponse(status=204)
