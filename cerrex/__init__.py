"""
cerrex - ISDC decommissioning cost estimation engine.

Item costing from unit factors and work difficulty, ISDC roll-up, cashflow
projection and sensitivity scenarios.
"""

from .cost import (
    InventoryItem,
    CategoryQuantity,
    UnitFactor,
    UnitFactorTable,
    ProjectRates,
    CostBreakdown,
    MissingUnitFactorPolicy,
    calculate_item_cost,
    total_workforce,
    lookup,
)
from .isdc import aggregate, AggregationResult
from .cashflow import project, npv
from .sensitivity import run_scenarios, best_scenario
from .estimator import CostEstimator, ProjectEstimate

__version__ = "0.1.0"

__all__ = [
    "InventoryItem",
    "CategoryQuantity",
    "UnitFactor",
    "UnitFactorTable",
    "ProjectRates",
    "CostBreakdown",
    "MissingUnitFactorPolicy",
    "calculate_item_cost",
    "total_workforce",
    "lookup",
    "aggregate",
    "AggregationResult",
    "project",
    "npv",
    "run_scenarios",
    "best_scenario",
    "CostEstimator",
    "ProjectEstimate",
]
