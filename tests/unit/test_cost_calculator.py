"""
Unit tests for cost/calculator.py

Tests the per-item cost formulas and the batch calculator.
"""

import logging

import pytest

from cerrex.cost import (
    CategoryQuantity,
    CostBreakdown,
    InventoryItem,
    ItemCostCalculator,
    MissingUnitFactorPolicy,
    ProjectRates,
    calculate_item_cost,
)
from cerrex.errors import InvalidItemError, NotFoundError


class TestWorkedExample:
    """The reference item: 100 h, F1=10%, 10 x INV1, rate 50, contingency 10%."""

    def test_breakdown(self, example_item, example_factors):
        result = calculate_item_cost(example_item, example_factors, 50.0, True)
        assert result.workforce == pytest.approx(110.0)
        assert result.labour == pytest.approx(5500.0)
        assert result.investment == pytest.approx(150.0)
        assert result.expenses == pytest.approx(80.0)
        assert result.contingency == pytest.approx(573.0)
        assert result.total == pytest.approx(6303.0)

    def test_idempotent(self, example_item, example_factors):
        """Identical inputs give identical output."""
        first = calculate_item_cost(example_item, example_factors, 50.0, True)
        second = calculate_item_cost(example_item, example_factors, 50.0, True)
        assert first == second

    def test_total_is_sum_of_parts(self, example_item, example_factors):
        result = calculate_item_cost(example_item, example_factors, 50.0, True)
        assert result.total == result.labour + result.investment + result.expenses + result.contingency


class TestContingency:
    """Test the contingency switch and rate."""

    def test_disabled_forces_zero(self, example_factors):
        item = InventoryItem(
            item_id="x",
            isdc_code="0101",
            basic_workforce=100.0,
            contingency_rate=75.0,
            categories=(CategoryQuantity("INV1", 10.0),),
        )
        result = calculate_item_cost(item, example_factors, 50.0, False)
        assert result.contingency == 0.0
        assert result.total == pytest.approx(result.subtotal)

    def test_default_rate_is_ten_percent(self, example_factors):
        item = InventoryItem(item_id="x", isdc_code="0101", basic_workforce=10.0)
        result = calculate_item_cost(item, example_factors, 10.0, True)
        assert result.contingency == pytest.approx(10.0)


class TestMissingUnitFactor:
    """Test MissingUnitFactorPolicy handling."""

    @pytest.fixture
    def item(self):
        return InventoryItem(
            item_id="m",
            isdc_code="0101",
            basic_workforce=10.0,
            categories=(CategoryQuantity("INV1", 2.0), CategoryQuantity("GONE", 5.0)),
        )

    def test_zero_policy_contributes_nothing(self, item, example_factors, caplog):
        with caplog.at_level(logging.WARNING):
            result = calculate_item_cost(item, example_factors, 1.0, False)
        assert result.investment == pytest.approx(30.0)
        assert result.expenses == pytest.approx(16.0)
        assert "GONE" in caplog.text

    def test_raise_policy_propagates(self, item, example_factors):
        with pytest.raises(NotFoundError) as exc_info:
            calculate_item_cost(
                item, example_factors, 1.0, False,
                missing_policy=MissingUnitFactorPolicy.RAISE,
            )
        assert exc_info.value.source == "m"


class TestValidation:
    """Test rejected items."""

    def test_negative_quantity(self, example_factors):
        item = InventoryItem(
            item_id="neg",
            isdc_code="0101",
            categories=(CategoryQuantity("INV1", -1.0),),
        )
        with pytest.raises(InvalidItemError, match="Invalid quantity -1.0") as exc_info:
            calculate_item_cost(item, example_factors, 50.0, True)
        assert exc_info.value.source == "neg"

    @pytest.mark.parametrize("quantity", [float("nan"), float("inf")])
    def test_non_finite_quantity(self, example_factors, quantity):
        item = InventoryItem(
            item_id="nan",
            isdc_code="0101",
            categories=(CategoryQuantity("INV1", quantity),),
        )
        with pytest.raises(InvalidItemError, match="Invalid quantity"):
            calculate_item_cost(item, example_factors, 50.0, True)

    def test_too_many_flags(self, example_factors):
        item = InventoryItem(item_id="f", isdc_code="0101", wdf_flags=(1,) * 8)
        with pytest.raises(InvalidItemError):
            calculate_item_cost(item, example_factors, 50.0, True)

    def test_short_flag_list_is_padded(self):
        item = InventoryItem(item_id="p", isdc_code="0101", wdf_flags=(10,))
        assert len(item.wdf_flags) == 7


class TestProjectOptions:
    """Test the project-level switches."""

    def test_wdf_disabled(self, example_item, example_factors):
        result = calculate_item_cost(example_item, example_factors, 50.0, False, wdf_enabled=False)
        assert result.workforce == pytest.approx(100.0)

    def test_wdf_multiplier_applies_with_flags(self, example_item, example_factors):
        result = calculate_item_cost(example_item, example_factors, 1.0, False, wdf_multiplier=2.0)
        assert result.workforce == pytest.approx(220.0)
        assert result.investment == pytest.approx(300.0)
        assert result.expenses == pytest.approx(160.0)

    def test_wdf_multiplier_skips_lump_sums(self, example_factors):
        item = InventoryItem(
            item_id="lump",
            isdc_code="0101",
            wdf_flags=(10, 0, 0, 0, 0, 0, 0),
            additional_investment=40.0,
            additional_expenses=5.0,
            categories=(CategoryQuantity("INV1", 1.0),),
        )
        result = calculate_item_cost(item, example_factors, 1.0, False, wdf_multiplier=2.0)
        assert result.investment == pytest.approx(15.0 * 2 + 40.0)
        assert result.expenses == pytest.approx(8.0 * 2 + 5.0)

    def test_wdf_multiplier_ignored_without_flags(self, example_factors):
        item = InventoryItem(item_id="n", isdc_code="0101", basic_workforce=100.0, categories=(CategoryQuantity("INV1", 10.0),))
        result = calculate_item_cost(item, example_factors, 1.0, False, wdf_multiplier=2.0)
        assert result.workforce == pytest.approx(100.0)
        assert result.investment == pytest.approx(150.0)

    def test_expenses_percentage(self, example_item, example_factors):
        result = calculate_item_cost(example_item, example_factors, 50.0, False, expenses_percentage=10.0)
        assert result.expenses == pytest.approx(80.0 + 550.0)

    def test_currency_in_thousands(self, example_item, example_factors):
        result = calculate_item_cost(example_item, example_factors, 50.0, True, currency_in_thousands=True)
        assert result.workforce == pytest.approx(110.0)
        assert result.labour == pytest.approx(5.5)
        assert result.total == pytest.approx(6.303)

    def test_additional_lump_sums(self, example_factors):
        item = InventoryItem(
            item_id="l",
            isdc_code="0101",
            additional_investment=100.0,
            additional_expenses=20.0,
        )
        result = calculate_item_cost(item, example_factors, 50.0, False)
        assert result.investment == 100.0
        assert result.expenses == 20.0


class TestItemCostCalculator:
    """Test the bound batch calculator."""

    def test_contractor_rate(self, example_factors):
        rates = ProjectRates(reference_labour_rate=50.0, contractor_labour_rate=80.0)
        calc = ItemCostCalculator(example_factors, rates)
        item = InventoryItem(item_id="c", isdc_code="0101", basic_workforce=10.0, is_contractor=True)
        assert calc.calculate(item).labour == pytest.approx(800.0)

    def test_contractor_without_rate_uses_reference(self, example_factors, rates):
        calc = ItemCostCalculator(example_factors, rates)
        item = InventoryItem(item_id="c", isdc_code="0101", basic_workforce=10.0, is_contractor=True)
        assert calc.calculate(item).labour == pytest.approx(500.0)

    def test_calculate_many_collects_failures(self, example_factors, rates, example_item):
        bad = InventoryItem(
            item_id="bad",
            isdc_code="0101",
            categories=(CategoryQuantity("INV1", -5.0),),
        )
        calc = ItemCostCalculator(example_factors, rates)
        costs, errors = calc.calculate_many([example_item, bad])

        assert set(costs) == {"item-1"}
        assert len(errors) == 1
        error, skipped = errors[0]
        assert isinstance(error, InvalidItemError)
        assert skipped is True

    def test_duplicate_item_ids_skipped(self, example_factors, rates, example_item):
        calc = ItemCostCalculator(example_factors, rates)
        costs, errors = calc.calculate_many([example_item, example_item])
        assert len(costs) == 1
        assert errors[0][1] is True

    def test_missing_factor_reported_as_warning(self, example_factors, rates):
        item = InventoryItem(
            item_id="w",
            isdc_code="0101",
            categories=(CategoryQuantity("GONE", 1.0),),
        )
        costs, errors = ItemCostCalculator(example_factors, rates).calculate_many([item])
        assert "w" in costs
        error, skipped = errors[0]
        assert isinstance(error, NotFoundError)
        assert skipped is False


class TestCostBreakdown:
    """Test CostBreakdown arithmetic."""

    def test_sum_of_breakdowns(self):
        a = CostBreakdown.from_components(1, 2, 3, 4, 5)
        b = CostBreakdown.from_components(10, 20, 30, 40, 50)
        total = sum([a, b])
        assert total == CostBreakdown(11, 22, 33, 44, 55, 154)

    def test_to_dict_rounds(self):
        data = CostBreakdown.from_components(1.234, 1.005, 0, 0, 0).to_dict()
        assert data["workforce"] == 1.23
        assert set(data) == {"workforce", "labour", "investment", "expenses", "contingency", "total"}
