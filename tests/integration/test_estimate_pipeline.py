"""
Integration tests for the estimate pipeline.

Items -> item costs -> ISDC roll-up -> cashflow and scenarios, run through
CostEstimator and through the snapshot loader.
"""

import pytest

from cerrex.bootstrap import CashflowConfig, SensitivityConfig
from cerrex.cashflow import npv
from cerrex.cost import (
    CategoryQuantity,
    InventoryItem,
    MissingUnitFactorPolicy,
    ProjectRates,
    calculate_item_cost,
)
from cerrex.estimator import CostEstimator, estimate_project
from cerrex.ingest import parse_snapshot, to_project
from cerrex.sensitivity import ScenarioFamily


@pytest.fixture
def items():
    return [
        InventoryItem(
            item_id="reactor-internals",
            isdc_code="04.0501",
            basic_workforce=100.0,
            wdf_flags=(10, 0, 0, 0, 0, 0, 0),
            categories=(CategoryQuantity("INV1", 10.0),),
        ),
        InventoryItem(
            item_id="planning",
            isdc_code="0101",
            basic_workforce=40.0,
            categories=(CategoryQuantity("INV2", 2.0),),
        ),
        InventoryItem(
            item_id="characterisation",
            isdc_code="0102",
            basic_workforce=8.0,
            is_contractor=True,
        ),
        InventoryItem(
            item_id="shutdown",
            isdc_code="0201",
            basic_workforce=20.0,
            contingency_rate=15.0,
        ),
    ]


@pytest.fixture
def estimator(default_table):
    return CostEstimator(
        default_table,
        ProjectRates(reference_labour_rate=50.0, contractor_labour_rate=80.0),
    )


class TestEstimatePipeline:
    """Test CostEstimator end to end."""

    def test_grand_total_matches_item_sum(self, estimator, items):
        estimate = estimator.estimate(items)
        item_sum = sum(estimate.item_costs.values())
        assert estimate.grand_total.total == pytest.approx(item_sum.total)
        assert len(estimate.item_costs) == 4

    def test_levels(self, estimator, items):
        aggregation = estimator.estimate(items).aggregation
        assert list(aggregation.by_l1) == ["01", "02", "04"]
        assert list(aggregation.by_l2) == ["0101", "0102", "0201", "0405"]
        assert aggregation.by_l1["01"].item_count == 2

    def test_item_costs_match_calculator(self, estimator, items, default_table):
        estimate = estimator.estimate(items)
        expected = calculate_item_cost(items[2], default_table, 80.0, True)
        assert estimate.item_costs["characterisation"] == expected

    def test_cashflow_and_scenarios(self, estimator, items):
        cashflow = CashflowConfig(start_year=2030, duration_years=8, discount_rate=3.0)
        estimate = estimator.estimate(items, cashflow=cashflow, sensitivity=SensitivityConfig())
        total = estimate.grand_total.total

        assert len(estimate.cashflow.years) == 8
        assert estimate.cashflow.total_nominal == pytest.approx(total)
        assert estimate.cashflow.npv == pytest.approx(npv(total, 8, 3.0))

        scenarios = estimate.scenarios
        assert scenarios.discount_rate == 3.0
        assert len(scenarios.by_family(ScenarioFamily.UNIT_FACTOR)) == 5
        base = [s for s in scenarios.scenarios if s.unit_factor_multiplier == 1.0 and s.deferral_years == 0]
        assert all(s.total_cost == pytest.approx(total) for s in base)

    def test_bad_items_are_skipped_and_reported(self, estimator, items):
        items.append(InventoryItem(
            item_id="broken",
            isdc_code="0101",
            categories=(CategoryQuantity("INV1", -2.0),),
        ))
        items.append(InventoryItem(item_id="orphan", isdc_code="ZZ", basic_workforce=1.0))
        estimate = estimator.estimate(items)

        assert "broken" not in estimate.item_costs
        assert estimate.skipped_count == 1
        assert estimate.report.summary == "1 item(s) skipped due to invalid data"
        assert estimate.aggregation.unassigned.item_count == 1
        assert estimate.report.total_errors == 2

    def test_duplicate_item_id_priced_once(self, default_table):
        item = InventoryItem(item_id="dup", isdc_code="0101", basic_workforce=100.0, contingency_rate=0.0)
        estimator = CostEstimator(default_table, ProjectRates(50.0))
        single = estimator.estimate([item])
        doubled = estimator.estimate([item, item])

        assert single.grand_total.total == pytest.approx(5000.0)
        assert doubled.grand_total.total == pytest.approx(5000.0)
        assert doubled.aggregation.by_l1["01"].item_count == 1
        assert doubled.skipped_count == 1
        assert doubled.report.summary == "1 item(s) skipped due to invalid data"

    def test_inactive_items_excluded(self, estimator, items):
        total = estimator.estimate(items).grand_total.total
        items.append(InventoryItem(item_id="off", isdc_code="0101", basic_workforce=999.0, is_activated=False))
        estimate = estimator.estimate(items)
        assert estimate.grand_total.total == pytest.approx(total)
        assert "off" not in estimate.item_costs

    def test_raise_policy_skips_item(self, default_table, items):
        items.append(InventoryItem(
            item_id="exotic",
            isdc_code="0101",
            categories=(CategoryQuantity("NOT-A-CATEGORY", 1.0),),
        ))
        estimate = estimate_project(
            items, default_table, ProjectRates(50.0),
            missing_policy=MissingUnitFactorPolicy.RAISE,
        )
        assert "exotic" not in estimate.item_costs
        assert estimate.skipped_count == 1

    def test_empty_project(self, estimator):
        estimate = estimator.estimate([], cashflow=CashflowConfig(), sensitivity=SensitivityConfig())
        assert estimate.grand_total.total == 0.0
        assert all(y.nominal == 0.0 for y in estimate.cashflow.years)
        assert all(s.percent_change_vs_base == 0.0 for s in estimate.scenarios.scenarios)
        assert estimate.report.summary == "No significant issues"

    def test_to_dict(self, estimator, items):
        data = estimator.estimate(items, cashflow=CashflowConfig()).to_dict()
        assert data["sensitivity"] is None
        assert len(data["cashflow"]["years"]) == 10
        assert data["aggregation"]["l0"]["total"] == pytest.approx(
            sum(v["total"] for v in data["items"].values()), abs=0.05,
        )


class TestSnapshotPipeline:
    """Test snapshot -> estimate."""

    def test_worked_example_through_snapshot(self, snapshot_data):
        project = to_project(parse_snapshot(snapshot_data))
        estimate = CostEstimator(project.unit_factors, project.rates).estimate(
            project.items, cashflow=project.cashflow, sensitivity=project.sensitivity,
        )
        item_a = estimate.item_costs["A"]
        assert item_a.total == pytest.approx(6303.0)
        assert estimate.aggregation.by_l3["040501"].total == pytest.approx(6303.0)
        assert estimate.cashflow.start_year == 2030
        assert len(estimate.scenarios.scenarios) == 5
