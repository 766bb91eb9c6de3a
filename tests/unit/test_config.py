"""
Unit tests for the PaginationConfig dataclass.
"""

import dataclasses

import pytest

from paginant.config import DEFAULT_PER_PAGE, PaginationConfig


@pytest.mark.unit
class TestPaginationConfig:
    """Test PaginationConfig dataclass."""

    def test_config_creation(self) -> None:
        """Test basic PaginationConfig creation."""
        config = PaginationConfig(
            find_operation_name="findMany", count_operation_name="count", default_per_page=5
        )

        assert config.find_operation_name == "findMany"
        assert config.count_operation_name == "count"
        assert config.default_per_page == 5

    def test_config_defaults(self) -> None:
        """Test PaginationConfig default values."""
        config = PaginationConfig("findMany", "count")

        assert config.default_per_page == DEFAULT_PER_PAGE == 20
        assert config.name == "pagination"
        assert config.cursor_page_info is False

    def test_config_is_frozen(self) -> None:
        """Test that the configuration cannot be changed after creation."""
        config = PaginationConfig("findMany", "count")

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.default_per_page = 10  # type: ignore[misc]

    def test_config_equality(self) -> None:
        """Test PaginationConfig equality comparison."""
        config1 = PaginationConfig("findMany", "count", default_per_page=5)
        config2 = PaginationConfig("findMany", "count", default_per_page=5)
        config3 = PaginationConfig("findMany", "count", default_per_page=10)

        assert config1 == config2
        assert config1 != config3
