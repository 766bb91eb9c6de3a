"""
The pagination resolver.

Combines a find operation and a count operation of an OperationRegistry into
a single `pagination` operation, calling only what the requested shape needs.
"""

import asyncio
import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ._logging import logger
from .config import PaginationConfig
from .exceptions import (
    ConfigurationError,
    PaginantError,
    UpstreamOperationError,
    handle_operation_errors,
)
from .pagination import PaginationResult, build_page_info, trim_probe
from .planner import INTERNAL_ARGS, QueryPlan, parse_args, plan
from .projection import (
    COUNT_FIELD,
    EDGES_FIELD,
    ITEMS_FIELD,
    PAGE_INFO_FIELD,
    Needs,
    Subtree,
    analyze,
    count_projection,
    find_projection,
    parse_shape,
    requested_page_info_fields,
)
from .registry import Operation, OperationRegistry, ResolveParams

FIND = "find"
COUNT = "count"


@dataclass(frozen=True)
class _Call:
    """Everything computed for one call before any operation is invoked."""

    shape: Subtree
    needs: Needs
    plan: QueryPlan
    find_params: ResolveParams
    count_params: ResolveParams
    page_info_requested: bool


class PaginationResolver:
    """
    Read-only `pagination` operation built on top of a find and a count operation.

    The registry and both operation names are checked when the resolver is
    created, so a misconfiguration fails at startup rather than on first use.

    Usage:
        resolver = PaginationResolver(
            users,
            PaginationConfig(find_operation_name="findMany", count_operation_name="count"),
        )
        result = resolver.resolve(
            {"args": {"page": 2, "perPage": 10}, "projection": {"items": {"name": True}}}
        )
    """

    kind = "query"
    result_fields = (ITEMS_FIELD, COUNT_FIELD, PAGE_INFO_FIELD)

    def __init__(self, registry: OperationRegistry, config: PaginationConfig | None = None) -> None:
        config = config or PaginationConfig()

        if not isinstance(registry, OperationRegistry):
            raise ConfigurationError(
                f"First argument for pagination resolver should implement OperationRegistry, "
                f"got {type(registry).__name__}",
                option="registry",
            )
        if not config.count_operation_name:
            raise ConfigurationError(
                "Pagination resolver should have option `config.count_operation_name`",
                option="count_operation_name",
            )
        if not config.find_operation_name:
            raise ConfigurationError(
                "Pagination resolver should have option `config.find_operation_name`",
                option="find_operation_name",
            )
        if config.default_per_page < 1:
            raise ConfigurationError(
                f"Option `config.default_per_page` should be a positive integer, "
                f"got {config.default_per_page}",
                option="default_per_page",
            )

        type_name = getattr(registry, "type_name", None)
        for option, op_name in (
            ("count_operation_name", config.count_operation_name),
            ("find_operation_name", config.find_operation_name),
        ):
            if not registry.has_operation(op_name):
                raise ConfigurationError(
                    f"Registry {type_name or type(registry).__name__} does not have "
                    f"operation with name '{op_name}'",
                    option=option,
                )

        self.registry = registry
        self.config = config
        self.name = config.name
        self.type_name = f"{type_name}Pagination" if type_name else "Pagination"
        self.find_operation: Operation = registry.get_operation(config.find_operation_name)
        self.count_operation: Operation = registry.get_operation(config.count_operation_name)
        self.args = self._build_args()

        logger.debug(
            "Pagination resolver configured",
            extra={
                "operation": self.name,
                "find_operation": config.find_operation_name,
                "count_operation": config.count_operation_name,
                "default_per_page": config.default_per_page,
            },
        )

    def _build_args(self) -> dict[str, Any]:
        """page/perPage plus the find operation's declared arguments, minus skip/limit."""
        args: dict[str, Any] = {}
        find_args = getattr(self.find_operation, "args", None) or {}
        for arg_name, arg_type in find_args.items():
            if arg_name not in INTERNAL_ARGS:
                args[arg_name] = arg_type
        args["page"] = int
        args["perPage"] = int
        return args

    def get_arg(self, name: str) -> Any:
        """Returns the declared type of an argument. Raises KeyError if undeclared."""
        return self.args[name]

    # --- PREPARATION ---

    def _prepare(self, params: "ResolveParams | Mapping[str, Any] | None") -> _Call:
        rp = ResolveParams.coerce(params)
        shape = parse_shape(rp.projection)
        needs = analyze(shape)
        page_info_requested = shape.requests(PAGE_INFO_FIELD)

        pargs = parse_args(rp.args)
        if pargs.cursor_mode and not self.config.cursor_page_info:
            # cursor mode forgoes page metadata, count is only needed for `count` itself
            page_info_requested = False
            needs = Needs(needs_items=needs.needs_items, needs_count=shape.requests(COUNT_FIELD))

        query_plan = plan(pargs, needs, self.config)

        return _Call(
            shape=shape,
            needs=needs,
            plan=query_plan,
            find_params=ResolveParams(
                args=query_plan.find_params,
                projection=find_projection(shape),
                raw_query=rp.raw_query,
                context=rp.context,
            ),
            count_params=ResolveParams(
                args=query_plan.count_params,
                projection=count_projection(shape),
                raw_query=rp.raw_query,
                context=rp.context,
            ),
            page_info_requested=page_info_requested,
        )

    def _log_start(self, call: _Call) -> None:
        logger.info(
            "Resolving pagination",
            extra={
                "operation": self.name,
                "page": call.plan.current_page,
                "per_page": call.plan.per_page,
                "cursor_mode": call.plan.cursor_mode,
                "needs_items": call.needs.needs_items,
                "needs_count": call.needs.needs_count,
            },
        )
        if not call.needs.needs_items:
            logger.debug(
                "Skipping find operation",
                extra={"operation": self.name, "find_operation": self.config.find_operation_name},
            )
        if not call.needs.needs_count:
            logger.debug(
                "Skipping count operation",
                extra={
                    "operation": self.name,
                    "count_operation": self.config.count_operation_name,
                },
            )

    def _operation_for(self, role: str) -> tuple[Operation, str]:
        if role == FIND:
            return self.find_operation, self.config.find_operation_name
        return self.count_operation, self.config.count_operation_name

    def _log_failure(self, error: UpstreamOperationError) -> None:
        logger.warning(
            "Pagination sub-operation failed",
            extra={
                "operation": self.name,
                "role": error.role,
                "failed_operation": error.operation_name,
            },
        )

    # --- EXECUTION STRATEGIES ---

    def _call(self, role: str, params: ResolveParams) -> Any:
        operation, op_name = self._operation_for(role)
        try:
            with handle_operation_errors(role, op_name):
                result = operation.resolve(params)
        except UpstreamOperationError as e:
            self._log_failure(e)
            raise

        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise PaginantError(
                f"{role} operation '{op_name}' returned an awaitable, use resolve_async()"
            )
        return result

    async def _call_async(self, role: str, params: ResolveParams) -> Any:
        operation, op_name = self._operation_for(role)
        try:
            with handle_operation_errors(role, op_name):
                result = operation.resolve(params)
                if inspect.isawaitable(result):
                    result = await result
        except UpstreamOperationError as e:
            self._log_failure(e)
            raise
        return result

    def resolve(
        self, params: "ResolveParams | Mapping[str, Any] | None" = None
    ) -> PaginationResult:
        """
        Resolves a pagination call, invoking find and count one after the other.

        Args:
            params: ResolveParams, or a mapping with `args`, `projection`,
                    `rawQuery` and `context` keys

        Raises:
            InvalidArgumentError: If page, perPage or first is not a positive integer
            UpstreamOperationError: If the find or count operation fails
            PaginantError: If an operation returns an awaitable
        """
        call = self._prepare(params)
        self._log_start(call)

        records = self._call(FIND, call.find_params) if call.needs.needs_items else None
        count = self._call(COUNT, call.count_params) if call.needs.needs_count else None

        return self._assemble(call, records, count)

    async def resolve_async(
        self, params: "ResolveParams | Mapping[str, Any] | None" = None
    ) -> PaginationResult:
        """
        Resolves a pagination call, running find and count concurrently.

        Operations may return plain values or awaitables. If one of them fails,
        or the caller cancels, the other one is cancelled and nothing is assembled.
        """
        call = self._prepare(params)
        self._log_start(call)

        tasks: dict[str, asyncio.Future[Any]] = {}
        if call.needs.needs_items:
            tasks[FIND] = asyncio.ensure_future(self._call_async(FIND, call.find_params))
        if call.needs.needs_count:
            tasks[COUNT] = asyncio.ensure_future(self._call_async(COUNT, call.count_params))

        try:
            results = await asyncio.gather(*tasks.values())
        except BaseException:
            for task in tasks.values():
                task.cancel()
            raise

        resolved = dict(zip(tasks.keys(), results))
        return self._assemble(call, resolved.get(FIND), resolved.get(COUNT))

    # --- ASSEMBLY ---

    def _assemble(self, call: _Call, records: Any, count: Any) -> PaginationResult:
        item_count = int(count) if count is not None else None

        items: list[Any] | None = None
        probe_has_more = False
        if call.needs.needs_items:
            items, probe_has_more = trim_probe(records, call.plan.limit)

        page_info = None
        if call.page_info_requested:
            page_info = build_page_info(
                current_page=call.plan.current_page,
                per_page=call.plan.per_page,
                item_count=item_count,
                probe_has_more=probe_has_more,
                requested=requested_page_info_fields(call.shape),
            )

        edges = None
        if call.shape.requests(EDGES_FIELD) and items is not None:
            edges = [{"node": item} for item in items]

        result: PaginationResult[Any] = PaginationResult(
            items=items if call.shape.requests(ITEMS_FIELD) else None,
            count=item_count if call.shape.requests(COUNT_FIELD) else None,
            page_info=page_info,
            edges=edges,
        )

        logger.info(
            "Pagination resolved",
            extra={
                "operation": self.name,
                "page": call.plan.current_page,
                "returned": len(items) if items is not None else 0,
                "item_count": item_count,
                "has_more": probe_has_more,
            },
        )
        return result


def configure(
    registry: OperationRegistry, config: PaginationConfig | None = None
) -> PaginationResolver:
    """
    Builds a PaginationResolver, failing with ConfigurationError on any invalid option.

    Usage:
        resolver = configure(users, PaginationConfig("findMany", "count", default_per_page=5))
    """
    return PaginationResolver(registry, config)


def compose_with_pagination(
    registry: OperationRegistry, config: PaginationConfig | None = None
) -> PaginationResolver:
    """
    Builds a PaginationResolver and registers it in the registry under config.name.

    Usage:
        compose_with_pagination(users, PaginationConfig("findMany", "count"))
        users.get_operation("pagination").resolve({...})
    """
    resolver = configure(registry, config)
    registry.set_operation(resolver.name, resolver)
    return resolver
