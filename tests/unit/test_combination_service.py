"""
Unit tests for AvailableCombinationResult and CombinationService.

Run: pytest tests/unit/test_combination_service.py -v
"""

import pytest

from services.combination_service import AvailableCombinationResult, CombinationService
from exceptions import DatabaseError

from tests.factories import ProductFactory


class TestAvailableCombinationResult:
    """Tests for the combination membership queries."""

    def test_has_combination_ignores_order(self):
        """{red, s} and {s, red} should be the same variant."""
        # Arrange
        result = AvailableCombinationResult()
        result.add_combination(["red", "s"])

        # Act & Assert
        assert result.has_combination(["s", "red"])
        assert result.has_combination({"red", "s"})

    def test_has_combination_requires_exact_set(self):
        """Subsets and supersets are not variants."""
        # Arrange
        result = AvailableCombinationResult()
        result.add_combination(["red", "s", "cotton"])

        # Act & Assert
        assert not result.has_combination(["red", "s"])
        assert not result.has_combination(["red", "s", "cotton", "xl"])

    def test_has_option_id(self):
        """Should know every option of every variant."""
        # Arrange
        result = AvailableCombinationResult()
        result.add_combination(["red", "s"])
        result.add_combination(["blue", "m"])

        # Act & Assert
        assert result.has_option_id("m")
        assert result.has_option_id("red")
        assert not result.has_option_id("green")

    def test_is_available(self):
        """Should track availability per combination."""
        # Arrange
        result = AvailableCombinationResult()
        result.add_combination(["red", "s"], available=False)
        result.add_combination(["red", "m"])

        # Act & Assert
        assert not result.is_available(["red", "s"])
        assert result.is_available(["m", "red"])
        assert not result.is_available(["blue", "s"])

    def test_duplicate_combination_available_if_any_is(self):
        """Two variants with the same options count once."""
        # Arrange
        result = AvailableCombinationResult()
        result.add_combination(["red", "s"], available=False)
        result.add_combination(["s", "red"], available=True)

        # Act & Assert
        assert len(result) == 1
        assert result.is_available(["red", "s"])

    def test_empty_combination_is_ignored(self):
        """Variants without options form no combination."""
        # Arrange
        result = AvailableCombinationResult()
        result.add_combination([])

        # Act & Assert
        assert len(result) == 0
        assert result.get_combinations() == []


class TestCombinationServiceLoad:
    """Tests for CombinationService.load()"""

    @pytest.fixture
    def parent(self) -> dict:
        return ProductFactory.create_parent(id="parent-1")

    def test_collects_variant_option_ids(self, mock_db, mock_supabase, parent, context):
        """Should register one combination per active variant."""
        # Arrange
        mock_supabase.set_table_data("product", [
            parent,
            ProductFactory.create_variant("parent-1", ["red", "s"]),
            ProductFactory.create_variant("parent-1", ["blue", "s"]),
            ProductFactory.create_variant("other-parent", ["green", "xl"]),
        ])
        service = CombinationService()

        # Act
        result = service.load("parent-1", context)

        # Assert
        assert len(result) == 2
        assert result.has_combination(["s", "red"])
        assert result.has_combination(["blue", "s"])
        assert not result.has_option_id("green")

    def test_skips_inactive_variants(self, mock_db, mock_supabase, parent, context):
        """Inactive variants should not form combinations."""
        # Arrange
        mock_supabase.set_table_data("product", [
            parent,
            ProductFactory.create_variant("parent-1", ["red", "s"]),
            ProductFactory.create_variant("parent-1", ["blue", "s"], active=False),
        ])
        service = CombinationService()

        # Act
        result = service.load("parent-1", context)

        # Assert
        assert result.has_combination(["red", "s"])
        assert not result.has_option_id("blue")

    def test_variant_inherits_parent_active_flag(self, mock_db, mock_supabase, context):
        """A NULL active flag should fall back to the parent's."""
        # Arrange
        mock_supabase.set_table_data("product", [
            ProductFactory.create_parent(id="parent-1", active=False),
            ProductFactory.create_variant("parent-1", ["red", "s"], active=None),
            ProductFactory.create_variant("parent-1", ["blue", "s"], active=True),
        ])
        service = CombinationService()

        # Act
        result = service.load("parent-1", context)

        # Assert
        assert not result.has_combination(["red", "s"])
        assert result.has_combination(["blue", "s"])

    def test_skips_variants_without_options(self, mock_db, mock_supabase, parent, context):
        """Variants without option ids should be ignored."""
        # Arrange
        mock_supabase.set_table_data("product", [
            parent,
            ProductFactory.create_variant("parent-1", None),
            ProductFactory.create_variant("parent-1", ["red", "s"]),
        ])
        service = CombinationService()

        # Act
        result = service.load("parent-1", context)

        # Assert
        assert len(result) == 1

    def test_missing_available_counts_as_available(self, mock_db, mock_supabase, parent, context):
        """Rows without an available flag should be purchasable."""
        # Arrange
        mock_supabase.set_table_data("product", [
            parent,
            ProductFactory.create_variant("parent-1", ["red", "s"], available=None),
            ProductFactory.create_variant("parent-1", ["red", "m"], available=False),
        ])
        service = CombinationService()

        # Act
        result = service.load("parent-1", context)

        # Assert
        assert result.is_available(["red", "s"])
        assert not result.is_available(["red", "m"])
        assert result.has_combination(["red", "m"])

    def test_no_variants_returns_empty_result(self, mock_db, mock_supabase, parent, context):
        """Should return an empty result, not raise."""
        # Arrange
        mock_supabase.set_table_data("product", [parent])
        service = CombinationService()

        # Act
        result = service.load("parent-1", context)

        # Assert
        assert len(result) == 0

    def test_query_failure_raises_database_error(self, mock_db, mock_supabase, context):
        """Should wrap query failures in DatabaseError."""
        # Arrange
        mock_supabase.set_table_error("product", RuntimeError("connection reset"))
        service = CombinationService()

        # Act & Assert
        with pytest.raises(DatabaseError) as exc_info:
            service.load("parent-1", context)

        assert "connection reset" in exc_info.value.message
