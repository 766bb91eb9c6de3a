"""
Paginating an in-memory user list.

The find and count operations stand in for a real query layer. Requesting
only `items` never calls count; requesting only `count` never calls find.
"""

import logging

from paginant import PaginationConfig, Registry, Resolver, compose_with_pagination

logging.basicConfig(level=logging.INFO)

USERS = [{"id": i, "name": f"user{i:02d}", "gender": "m" if i % 2 else "f"} for i in range(1, 16)]


def matches(user, filter_value):
    return all(user.get(k) == v for k, v in (filter_value or {}).items())


def find_many(params):
    args = params.args
    found = [u for u in USERS if matches(u, args.get("filter"))]
    skip = args.get("skip", 0)
    return found[skip : skip + args.get("limit", args.get("first", len(found)))]


def count(params):
    return sum(1 for u in USERS if matches(u, params.args.get("filter")))


users = Registry(type_name="User")
users.set_operation("findMany", Resolver("findMany", find_many, args={"filter": dict}))
users.set_operation("count", Resolver("count", count, args={"filter": dict}))

compose_with_pagination(
    users,
    PaginationConfig(
        find_operation_name="findMany", count_operation_name="count", default_per_page=5
    ),
)
pagination = users.get_operation("pagination")

# Items and page position only: find is called with limit=6, count is skipped
page = pagination.resolve(
    {
        "args": {"page": 2},
        "projection": {"items": {"name": True}, "pageInfo": {"currentPage": True}},
    }
)
print(page.to_dict())

# Full metadata for the male users
page = pagination.resolve(
    {
        "args": {"filter": {"gender": "m"}},
        "projection": {"items": True, "count": True, "pageInfo": True},
    }
)
print(page.to_dict())
