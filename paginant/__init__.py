from .config import PaginationConfig
from .exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    PaginantError,
    UpstreamOperationError,
)
from .pagination import PageInfo, PaginationResult
from .planner import PaginationArgs, QueryPlan, plan
from .projection import Leaf, Needs, Subtree, analyze, parse_shape
from .registry import Operation, OperationRegistry, Registry, ResolveParams, Resolver
from .resolver import PaginationResolver, compose_with_pagination, configure

__all__ = [
    "PaginationResolver",
    "PaginationConfig",
    "configure",
    "compose_with_pagination",
    # Results
    "PaginationResult",
    "PageInfo",
    # Planning
    "PaginationArgs",
    "QueryPlan",
    "plan",
    # Requested shape
    "Leaf",
    "Subtree",
    "Needs",
    "analyze",
    "parse_shape",
    # Registry capabilities
    "OperationRegistry",  # Protocol consumed by the resolver
    "Operation",
    "Registry",  # Dict-backed implementation
    "Resolver",
    "ResolveParams",
    # Exceptions
    "PaginantError",
    "ConfigurationError",
    "InvalidArgumentError",
    "UpstreamOperationError",
]
