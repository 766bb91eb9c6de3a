"""
Operation registry capabilities.

The pagination resolver only depends on the OperationRegistry and Operation
protocols defined here. Registry and Resolver are small concrete
implementations, handy for applications without a schema layer of their own
and for tests.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class ResolveParams:
    """
    Parameters handed to an operation's resolve().

    Attributes:
        args: Arguments of the call (filter, sort, skip, limit, ...)
        projection: Requested fields relevant to the operation
        raw_query: Opaque value forwarded unchanged to every operation
        context: Opaque caller context forwarded unchanged to every operation
    """

    args: Mapping[str, Any] = field(default_factory=dict)
    projection: Mapping[str, Any] = field(default_factory=dict)
    raw_query: Any = None
    context: Any = None

    @classmethod
    def coerce(cls, params: "ResolveParams | Mapping[str, Any] | None") -> "ResolveParams":
        """Accepts a ResolveParams or a mapping with args/projection/rawQuery/context keys."""
        if params is None:
            return cls()
        if isinstance(params, ResolveParams):
            return params
        return cls(
            args=params.get("args") or {},
            projection=params.get("projection") or {},
            raw_query=params.get("rawQuery", params.get("raw_query")),
            context=params.get("context"),
        )


@runtime_checkable
class Operation(Protocol):
    """Anything that can be resolved with ResolveParams."""

    def resolve(self, params: ResolveParams) -> Any: ...


@runtime_checkable
class OperationRegistry(Protocol):
    """Lookup table of named operations."""

    def has_operation(self, name: str) -> bool: ...

    def get_operation(self, name: str) -> Operation: ...

    def set_operation(self, name: str, operation: Operation) -> None: ...


ResolveFn = Callable[[ResolveParams], Any]


class Resolver:
    """
    Concrete Operation wrapping a plain resolve function.

    Usage:
        find_many = Resolver("findMany", lambda params: db.find(**params.args),
                             args={"filter": dict, "sort": dict, "skip": int, "limit": int})
    """

    def __init__(
        self,
        name: str,
        resolve_fn: ResolveFn,
        args: Mapping[str, Any] | None = None,
        kind: str = "query",
    ) -> None:
        self.name = name
        self.kind = kind
        self.args: dict[str, Any] = dict(args or {})
        self._resolve_fn = resolve_fn

    def resolve(self, params: ResolveParams) -> Any:
        return self._resolve_fn(params)

    def get_arg(self, name: str) -> Any:
        """Returns the declared type of an argument. Raises KeyError if undeclared."""
        return self.args[name]

    def wrap_resolve(self, middleware: Callable[[ResolveFn], ResolveFn]) -> "Resolver":
        """
        Returns a new Resolver whose resolve function is middleware(next_resolve).
        The original resolver is left untouched.

        Usage:
            logged = find_many.wrap_resolve(lambda next_: lambda p: next_(p))
        """
        return Resolver(self.name, middleware(self._resolve_fn), args=self.args, kind=self.kind)

    def __repr__(self) -> str:
        return f"Resolver(name={self.name!r}, kind={self.kind!r})"


class Registry:
    """Dict-backed OperationRegistry, optionally named after the record type it serves."""

    def __init__(
        self, type_name: str | None = None, operations: Mapping[str, Operation] | None = None
    ) -> None:
        self.type_name = type_name
        self._operations: dict[str, Operation] = dict(operations or {})

    def has_operation(self, name: str) -> bool:
        return name in self._operations

    def get_operation(self, name: str) -> Operation:
        """
        Get an operation by name.

        Raises:
            KeyError: If no operation is registered under that name
        """
        if name not in self._operations:
            raise KeyError(f"Registry has no operation '{name}'")
        return self._operations[name]

    def set_operation(self, name: str, operation: Operation) -> None:
        self._operations[name] = operation
