"""
cerrex/estimator.py - Project cost estimation pipeline.

Prices every activated item, rolls the breakdowns up the ISDC tree, and
optionally projects the grand total over time and through the sensitivity
scenarios. Bad items and bad scenarios are reported, never fatal.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
import logging

from .bootstrap.config import CashflowConfig, SensitivityConfig
from .cashflow import CashflowProjection, build_projection
from .cost import (
    CostBreakdown,
    InventoryItem,
    ItemCostCalculator,
    MissingUnitFactorPolicy,
    ProjectRates,
)
from .cost.unit_factors import UnitFactorSource
from .errors import ErrorAggregator, ErrorReport
from .isdc import AggregationResult, ISDCHierarchy, aggregate
from .sensitivity import ScenarioBatch, run_scenario_batch
from .utils import determinize_dict

logger = logging.getLogger(__name__)


@dataclass
class ProjectEstimate:
    """Everything one estimate run produced."""
    rates: ProjectRates
    item_costs: Dict[str, CostBreakdown] = field(default_factory=dict)
    aggregation: AggregationResult = field(default_factory=AggregationResult)
    cashflow: Optional[CashflowProjection] = None
    scenarios: Optional[ScenarioBatch] = None
    report: ErrorReport = field(default_factory=ErrorReport)

    @property
    def grand_total(self) -> CostBreakdown:
        return self.aggregation.grand_total

    @property
    def skipped_count(self) -> int:
        return self.report.skipped_items

    def to_dict(self) -> Dict[str, Any]:
        return determinize_dict({
            "rates": self.rates.to_dict(),
            "items": {item_id: c.to_dict() for item_id, c in self.item_costs.items()},
            "aggregation": self.aggregation.to_dict(),
            "cashflow": self.cashflow.to_dict() if self.cashflow else None,
            "sensitivity": self.scenarios.to_dict() if self.scenarios else None,
            "report": self.report.to_dict(),
        })


class CostEstimator:
    """
    Estimation pipeline bound to one project's reference data.

    Usage:
        estimator = CostEstimator(default_unit_factor_table(), ProjectRates(50.0))
        estimate = estimator.estimate(items, cashflow=CashflowConfig())
        estimate.grand_total.total
    """

    def __init__(
        self,
        unit_factors: UnitFactorSource,
        rates: ProjectRates,
        hierarchy: Optional[ISDCHierarchy] = None,
        missing_policy: MissingUnitFactorPolicy = MissingUnitFactorPolicy.ZERO,
    ):
        self.calculator = ItemCostCalculator(unit_factors, rates, missing_policy)
        self.rates = rates
        self.hierarchy = hierarchy
        self.missing_policy = missing_policy

    def estimate(
        self,
        items: Iterable[InventoryItem],
        cashflow: Optional[CashflowConfig] = None,
        sensitivity: Optional[SensitivityConfig] = None,
    ) -> ProjectEstimate:
        """
        Run the full pipeline.

        Args:
            items: Inventory items (inactive ones are ignored)
            cashflow: Projection parameters; no projection when None
            sensitivity: Scenario parameters; no scenarios when None.
                Scenarios discount at the cashflow rate when one is given.

        Returns:
            ProjectEstimate

        Raises:
            InvalidDurationError, InvalidRateError: Bad cashflow parameters
        """
        items = list(items)
        active = [item for item in items if item.is_activated]
        errors = ErrorAggregator()

        costs, item_errors = self.calculator.calculate_many(active)
        for error, skipped in item_errors:
            errors.add(error, skipped=skipped)

        aggregation = aggregate(active, costs, self.hierarchy)
        errors.add_all(aggregation.errors)

        estimate = ProjectEstimate(
            rates=self.rates,
            item_costs=costs,
            aggregation=aggregation,
        )
        total = aggregation.grand_total.total

        if cashflow is not None:
            estimate.cashflow = build_projection(
                total,
                cashflow.start_year,
                cashflow.duration_years,
                cashflow.inflation_rate,
                cashflow.discount_rate,
            )

        if sensitivity is not None:
            discount_rate = (cashflow or CashflowConfig()).discount_rate
            estimate.scenarios = run_scenario_batch(
                total,
                discount_rate,
                sensitivity.uf_multipliers,
                sensitivity.deferral_years,
            )
            errors.add_all(estimate.scenarios.errors)

        estimate.report = errors.generate_report()

        logger.info(
            f"Estimate complete: {len(costs)}/{len(active)} items priced, "
            f"total={total:,.2f}; {estimate.report.summary}"
        )
        return estimate


def estimate_project(
    items: Iterable[InventoryItem],
    unit_factors: UnitFactorSource,
    rates: ProjectRates,
    cashflow: Optional[CashflowConfig] = None,
    sensitivity: Optional[SensitivityConfig] = None,
    missing_policy: MissingUnitFactorPolicy = MissingUnitFactorPolicy.ZERO,
) -> ProjectEstimate:
    """One-shot wrapper around CostEstimator."""
    estimator = CostEstimator(unit_factors, rates, missing_policy=missing_policy)
    return estimator.estimate(items, cashflow=cashflow, sensitivity=sensitivity)
