"""
Paging helpers shared by list endpoints.

Pages are 1-based. Out-of-range pages return no items instead of failing.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator
from django.db.models import QuerySet
from django.http import HttpRequest

from apps.web.core.exceptions import RequestValidationError

_T = TypeVar("_T")
_R = TypeVar("_R")


@dataclass(frozen=True)
class PageRequest:
    """Requested page number and size."""

    page: int = 1
    size: int = 10

    @classmethod
    def from_request(cls, request: HttpRequest) -> "PageRequest":
        """
        Read ``page`` and ``size`` from the query string.

        Raises:
            RequestValidationError: If either value is not a positive integer
        """
        errors = []
        values = {}
        defaults = {"page": 1, "size": settings.PAGE_SIZE}
        for name, default in defaults.items():
            raw = request.GET.get(name)
            if raw is None or raw == "":
                values[name] = default
                continue
            try:
                value = int(raw)
            except ValueError:
                value = 0
            if value < 1:
                errors.append({"field": name, "message": "Must be a positive integer"})
            values[name] = value

        if errors:
            raise RequestValidationError(errors)

        return cls(
            page=values["page"],
            size=min(values["size"], settings.MAX_PAGE_SIZE),
        )


@dataclass(frozen=True)
class Page(Generic[_T]):
    """One page of results plus totals."""

    items: list[_T]
    page: int
    size: int
    total_elements: int
    total_pages: int

    def map(self, func: Callable[[_T], _R]) -> "Page[_R]":
        """Return a page with ``func`` applied to every item."""
        return Page(
            items=[func(item) for item in self.items],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
            total_pages=self.total_pages,
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire shape for paged responses; items must already be JSON-ready."""
        return {
            "content": self.items,
            "page": self.page,
            "size": self.size,
            "total_elements": self.total_elements,
            "total_pages": self.total_pages,
        }


def paginate(queryset: QuerySet[Any], page_request: PageRequest) -> Page[Any]:
    """Slice an ordered queryset into a Page."""
    paginator = Paginator(queryset, page_request.size)
    try:
        items = list(paginator.page(page_request.page).object_list)
    except EmptyPage:
        items = []

    return Page(
        items=items,
        page=page_request.page,
        size=page_request.size,
        total_elements=paginator.count,
        total_pages=paginator.num_pages if paginator.count else 0,
    )
