"""
In-memory user dataset and the find/count operations backed by it.

15 users with ids 1..15; odd ids are "m" (8 users), even ids are "f".
"""

from collections.abc import Mapping
from typing import Any

from paginant import ResolveParams

USERS: list[dict[str, Any]] = [
    {"id": i, "name": f"user{i:02d}", "age": 10 + i, "gender": "m" if i % 2 else "f"}
    for i in range(1, 16)
]


def _matches(record: Mapping[str, Any], filter_value: Mapping[str, Any] | None) -> bool:
    return all(record.get(k) == v for k, v in (filter_value or {}).items())


def find_users(params: ResolveParams) -> list[dict[str, Any]]:
    """Filters, sorts and slices USERS the way a database find would."""
    args = params.args
    records = [dict(u) for u in USERS if _matches(u, args.get("filter"))]

    # stable sorts applied from the least significant key, missing fields last
    for field_name, direction in reversed(list((args.get("sort") or {}).items())):
        records.sort(
            key=lambda r, f=field_name: (r.get(f) is None, r.get(f)), reverse=direction < 0
        )

    skip = args.get("skip", 0)
    limit = args.get("limit", args.get("first"))
    records = records[skip:]
    if limit is not None:
        records = records[:limit]
    return records


def count_users(params: ResolveParams) -> int:
    return sum(1 for u in USERS if _matches(u, params.args.get("filter")))
