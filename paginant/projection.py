"""
Requested output shape analysis.

A requested shape is the tree of fields a caller wants in the pagination
result, e.g.:

    {"items": {"name": True, "age": True}, "pageInfo": {"pageCount": True}}

It is parsed into a recursive structure of Leaf and Subtree nodes and walked
by pure functions deciding which underlying operations a call needs, and
which part of the shape each operation gets to see.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

ITEMS_FIELD = "items"
EDGES_FIELD = "edges"
NODE_FIELD = "node"
COUNT_FIELD = "count"
PAGE_INFO_FIELD = "pageInfo"

PAGE_INFO_FIELDS = (
    "currentPage",
    "perPage",
    "itemCount",
    "pageCount",
    "hasPreviousPage",
    "hasNextPage",
)

# pageInfo fields that cannot be computed without the total count
COUNT_DERIVED_PAGE_INFO_FIELDS = frozenset(
    {"itemCount", "pageCount", "hasPreviousPage", "hasNextPage"}
)

METADATA_FIELDS = frozenset({COUNT_FIELD, PAGE_INFO_FIELD})


@dataclass(frozen=True)
class Leaf:
    """A requested field without sub-selection. Keeps the raw selection value."""

    value: Any = True


@dataclass(frozen=True)
class Subtree:
    """A requested field with named children."""

    children: Mapping[str, "ShapeNode"] = field(default_factory=dict)

    def get(self, name: str) -> "ShapeNode | None":
        return self.children.get(name)

    def requests(self, name: str) -> bool:
        return name in self.children

    def to_projection(self) -> dict[str, Any]:
        """Converts the subtree back into a plain nested mapping."""
        return {name: _node_to_projection(node) for name, node in self.children.items()}


ShapeNode = Union[Leaf, Subtree]


@dataclass(frozen=True)
class Needs:
    """Which underlying operations a requested shape depends on."""

    needs_items: bool
    needs_count: bool


def _node_to_projection(node: ShapeNode) -> Any:
    if isinstance(node, Subtree):
        return node.to_projection()
    return node.value


def parse_shape(shape: "Mapping[str, Any] | Subtree | None") -> Subtree:
    """
    Builds a Subtree from a plain nested mapping.
    Falsy leaf values (False, 0, None) mean "not requested" and are dropped.
    Already parsed subtrees are returned as-is.
    """
    if shape is None:
        return Subtree()
    if isinstance(shape, Subtree):
        return shape

    children: dict[str, ShapeNode] = {}
    for name, value in shape.items():
        if isinstance(value, Mapping):
            children[name] = parse_shape(value)
        elif value:
            children[name] = Leaf(value)
    return Subtree(children)


def requested_page_info_fields(shape: "Mapping[str, Any] | Subtree | None") -> frozenset[str]:
    """Returns the known pageInfo fields the shape asks for."""
    page_info = parse_shape(shape).get(PAGE_INFO_FIELD)
    if page_info is None:
        return frozenset()
    if isinstance(page_info, Leaf):
        # pageInfo requested as a whole
        return frozenset(PAGE_INFO_FIELDS)
    return frozenset(name for name in PAGE_INFO_FIELDS if page_info.requests(name))


def analyze(shape: "Mapping[str, Any] | Subtree | None") -> Needs:
    """
    Classifies a requested shape into the operations it needs.

    The count operation is needed for `count` and for the pageInfo fields
    derived from the total. The find operation is needed for `items`,
    `edges` and any top-level field that is not pagination metadata.
    """
    root = parse_shape(shape)

    needs_count = root.requests(COUNT_FIELD) or bool(
        requested_page_info_fields(root) & COUNT_DERIVED_PAGE_INFO_FIELDS
    )
    needs_items = any(name not in METADATA_FIELDS for name in root.children)

    return Needs(needs_items=needs_items, needs_count=needs_count)


def find_projection(shape: "Mapping[str, Any] | Subtree | None") -> dict[str, Any]:
    """
    Projection handed to the find operation.

    Fields requested under `items` (or `edges.node`) are lifted to the top
    level, next to every top-level pass-through field. Raw selection values
    are preserved, e.g. {"score": {"$meta": "textScore"}}.
    """
    root = parse_shape(shape)
    projection: dict[str, Any] = {}

    for name, node in root.children.items():
        if name in METADATA_FIELDS:
            continue
        if name == ITEMS_FIELD:
            if isinstance(node, Subtree):
                projection.update(node.to_projection())
        elif name == EDGES_FIELD:
            edge_node = node.get(NODE_FIELD) if isinstance(node, Subtree) else None
            if isinstance(edge_node, Subtree):
                projection.update(edge_node.to_projection())
        else:
            projection[name] = _node_to_projection(node)

    return projection


def count_projection(shape: "Mapping[str, Any] | Subtree | None") -> dict[str, Any]:
    """Projection handed to the count operation: the count/pageInfo subset only."""
    root = parse_shape(shape)
    return {
        name: _node_to_projection(node)
        for name, node in root.children.items()
        if name in METADATA_FIELDS
    }
