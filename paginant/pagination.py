"""
Pagination result types for Paginant.

This module provides the data structures returned by a pagination resolver
and the helpers assembling them from raw find/count results.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, fields
from typing import Any, Generic, TypeVar

from .projection import PAGE_INFO_FIELDS

T = TypeVar("T")

_WIRE_NAMES = {
    "current_page": "currentPage",
    "per_page": "perPage",
    "item_count": "itemCount",
    "page_count": "pageCount",
    "has_previous_page": "hasPreviousPage",
    "has_next_page": "hasNextPage",
}


@dataclass(frozen=True)
class PageInfo:
    """
    Position of a page within the whole result set.
    Fields that were not requested (or cannot be known) are None.

    Attributes:
        current_page: 1-based page number
        per_page: Page size
        item_count: Total number of matching records
        page_count: ceil(item_count / per_page)
        has_previous_page: True when current_page > 1
        has_next_page: True when more records exist after this page
    """

    current_page: int | None = None
    per_page: int | None = None
    item_count: int | None = None
    page_count: int | None = None
    has_previous_page: bool | None = None
    has_next_page: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        """Returns the known fields keyed by their camelCase names."""
        return {
            _WIRE_NAMES[f.name]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class PaginationResult(Generic[T]):
    """
    Combined result of a pagination call.
    Only the requested parts are populated, the others stay None.

    Attributes:
        items: Records of the current page (probe record already trimmed)
        count: Total number of records matching the filter
        page_info: Page metadata
        edges: Records wrapped as {"node": record}, when edges were requested
    """

    items: list[T] | None = None
    count: int | None = None
    page_info: PageInfo | None = None
    edges: list[dict[str, T]] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Returns the requested fields keyed by their wire names."""
        out: dict[str, Any] = {}
        if self.items is not None:
            out["items"] = list(self.items)
        if self.edges is not None:
            out["edges"] = list(self.edges)
        if self.count is not None:
            out["count"] = self.count
        if self.page_info is not None:
            out["pageInfo"] = self.page_info.to_dict()
        return out


def trim_probe(records: Iterable[T] | None, limit: int | None) -> tuple[list[T], bool]:
    """
    Removes the probe record from a find result.

    Returns:
        (items, probe_has_more): probe_has_more is True when the result held
        `limit` records, i.e. at least one record exists after this page.
    """
    items = list(records or [])
    if limit is not None and len(items) >= limit:
        return items[: limit - 1], True
    return items, False


def page_count_for(item_count: int, per_page: int) -> int:
    """ceil(item_count / per_page), 0 for an empty result set."""
    if item_count <= 0:
        return 0
    return math.ceil(item_count / per_page)


def build_page_info(
    current_page: int,
    per_page: int,
    item_count: int | None = None,
    probe_has_more: bool = False,
    requested: Sequence[str] | frozenset[str] = PAGE_INFO_FIELDS,
) -> PageInfo:
    """
    Builds a PageInfo keeping only the requested fields.

    hasNextPage comes from the page count when the total is known, otherwise
    from the over-fetch probe.
    """
    page_count = page_count_for(item_count, per_page) if item_count is not None else None
    if page_count is not None:
        has_next_page = current_page < page_count
    else:
        has_next_page = probe_has_more

    values: dict[str, Any] = {
        "currentPage": current_page,
        "perPage": per_page,
        "itemCount": item_count,
        "pageCount": page_count,
        "hasPreviousPage": current_page > 1,
        "hasNextPage": has_next_page,
    }

    return PageInfo(
        **{
            attr: values[wire] if wire in requested else None
            for attr, wire in _WIRE_NAMES.items()
        }
    )
