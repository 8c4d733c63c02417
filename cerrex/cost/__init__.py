"""
cost/ - Item Cost Estimation.

Unit factor lookup, work difficulty adjustment and the per-item cost
calculator that reproduces the legacy CERREX spreadsheet formulas.
"""

from .enums import (
    MissingUnitFactorPolicy,
    WDFFlag,
    CostComponent,
)

from .schema import (
    WDF_FLAG_COUNT,
    DEFAULT_CONTINGENCY_RATE,
    UnitFactor,
    CategoryQuantity,
    InventoryItem,
    ProjectRates,
    CostBreakdown,
)

from .unit_factors import (
    UnitFactorTable,
    lookup,
)

from .categories import (
    DD_CATEGORIES,
    default_unit_factors,
    default_unit_factor_table,
)

from .wdf import (
    total_workforce,
    effective_flags,
)

from .calculator import (
    calculate_item_cost,
    ItemCostCalculator,
)


__all__ = [
    # Enums
    "MissingUnitFactorPolicy",
    "WDFFlag",
    "CostComponent",
    # Schema
    "WDF_FLAG_COUNT",
    "DEFAULT_CONTINGENCY_RATE",
    "UnitFactor",
    "CategoryQuantity",
    "InventoryItem",
    "ProjectRates",
    "CostBreakdown",
    # Lookup
    "UnitFactorTable",
    "lookup",
    "DD_CATEGORIES",
    "default_unit_factors",
    "default_unit_factor_table",
    # Calculation
    "total_workforce",
    "effective_flags",
    "calculate_item_cost",
    "ItemCostCalculator",
]
