"""
Query planning for pagination calls.

Translates page-based arguments (page/perPage) or the cursor-style `first`
override into the parameters of the find and count operations.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ._logging import logger, redact_filter
from .config import PaginationConfig
from .exceptions import InvalidArgumentError
from .projection import Needs

# Arguments consumed by the planner, never forwarded as-is to the find operation.
# skip/limit are computed internally and cannot be supplied by callers.
PAGE_ARGS = frozenset({"page", "perPage"})
INTERNAL_ARGS = frozenset({"skip", "limit"})


class PaginationArgs(BaseModel):
    """
    Arguments of a single pagination call.

    Unknown arguments (e.g. `after`, `search`) are kept as extra fields and
    forwarded to the find operation.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    page: int | None = Field(default=None, ge=1, strict=True)
    per_page: int | None = Field(default=None, ge=1, alias="perPage", strict=True)
    filter: Any = None
    sort: Any = None
    first: int | None = Field(default=None, ge=1, strict=True)

    @property
    def cursor_mode(self) -> bool:
        """True when `first` overrides page-based skip/limit computation."""
        return self.first is not None


@dataclass(frozen=True)
class QueryPlan:
    """
    Parameters computed for one pagination call.

    Attributes:
        find_params: Arguments for the find operation
        count_params: Arguments for the count operation (filter only)
        current_page: 1-based page number
        per_page: Page size (the value of `first` in cursor mode)
        limit: Number of records requested from find (None in cursor mode)
        cursor_mode: True when `first` was supplied
    """

    find_params: dict[str, Any]
    count_params: dict[str, Any]
    current_page: int
    per_page: int
    limit: int | None
    cursor_mode: bool


def parse_args(args: "PaginationArgs | Mapping[str, Any] | None") -> PaginationArgs:
    """
    Validates raw call arguments.

    Raises:
        InvalidArgumentError: If page, perPage or first is not a positive integer
    """
    if isinstance(args, PaginationArgs):
        return args
    try:
        return PaginationArgs.model_validate(dict(args or {}))
    except PydanticValidationError as e:
        raise InvalidArgumentError(f"Invalid pagination arguments: {e}", original_error=e) from e


def plan(
    args: "PaginationArgs | Mapping[str, Any] | None", needs: Needs, config: PaginationConfig
) -> QueryPlan:
    """
    Computes find/count parameters for a call.

    Page mode fetches one record more than the page size. That probe record
    tells whether a next page exists without calling count, and is trimmed
    before the items are returned.
    """
    pargs = parse_args(args)

    # model_dump copies nested containers, the caller's objects are never handed on
    forwarded = {
        k: v
        for k, v in pargs.model_dump(by_alias=True, exclude_unset=True).items()
        if k not in PAGE_ARGS and k not in INTERNAL_ARGS
    }
    if forwarded.get("filter") is None:
        # an explicit filter=None means "no filter" for both operations
        forwarded.pop("filter", None)
    filter_value = pargs.model_dump(include={"filter"}).get("filter")
    count_params = {"filter": filter_value if filter_value is not None else {}}

    if pargs.cursor_mode:
        # `first` is forwarded unchanged, the find operation owns cursor semantics
        query_plan = QueryPlan(
            find_params=forwarded,
            count_params=count_params,
            current_page=1,
            per_page=pargs.first,  # type: ignore[arg-type]
            limit=None,
            cursor_mode=True,
        )
    else:
        per_page = pargs.per_page or config.default_per_page
        current_page = pargs.page or 1
        skip = (current_page - 1) * per_page
        limit = per_page + 1

        find_params = dict(forwarded)
        if skip > 0:
            find_params["skip"] = skip
        find_params["limit"] = limit

        query_plan = QueryPlan(
            find_params=find_params,
            count_params=count_params,
            current_page=current_page,
            per_page=per_page,
            limit=limit,
            cursor_mode=False,
        )

    logger.debug(
        "Planned pagination query",
        extra={
            "operation": config.name,
            "page": query_plan.current_page,
            "per_page": query_plan.per_page,
            "cursor_mode": query_plan.cursor_mode,
            "needs_items": needs.needs_items,
            "needs_count": needs.needs_count,
            "filter_hash": redact_filter(filter_value),
        },
    )

    return query_plan
