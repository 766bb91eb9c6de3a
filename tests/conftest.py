"""
Shared pytest fixtures and configuration for Paginant tests.

This module provides an in-memory user dataset, find/count operations backed
by it (with call-recording mocks around their resolve functions) and a
registry exposing them.
"""

from unittest.mock import MagicMock

import pytest

from paginant import PaginationConfig, Registry, Resolver
from tests.helpers.users import count_users, find_users


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with in-memory operations")


@pytest.fixture
def find_spy():
    """Recording mock around find_users."""
    return MagicMock(side_effect=find_users)


@pytest.fixture
def count_spy():
    """Recording mock around count_users."""
    return MagicMock(side_effect=count_users)


@pytest.fixture
def user_registry(find_spy, count_spy) -> Registry:
    """
    Registry named "User" exposing findMany and count.
    Both operations resolve through the spies so tests can inspect calls.
    """
    registry = Registry(type_name="User")
    registry.set_operation(
        "findMany",
        Resolver(
            "findMany",
            find_spy,
            args={"filter": dict, "sort": dict, "skip": int, "limit": int},
        ),
    )
    registry.set_operation("count", Resolver("count", count_spy, args={"filter": dict}))
    return registry


@pytest.fixture
def user_config() -> PaginationConfig:
    return PaginationConfig(
        find_operation_name="findMany", count_operation_name="count", default_per_page=5
    )
