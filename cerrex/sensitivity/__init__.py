"""
sensitivity/ - Sensitivity Analysis.

Unit factor and deferral scenarios, one-at-a-time parameter variation and
the probabilistic contingency simulation.
"""

from .engine import (
    UF_SCENARIO_NPV_HORIZON_YEARS,
    STORAGE_COST_GROWTH_PER_YEAR,
    DEFAULT_UF_MULTIPLIERS,
    DEFAULT_DEFERRAL_YEARS,
    ScenarioFamily,
    SensitivityScenario,
    ScenarioBatch,
    unit_factor_scenario,
    deferral_scenario,
    run_scenarios,
    run_scenario_batch,
    best_scenario,
    vary_parameter,
)

from .monte_carlo import (
    MonteCarloResult,
    monte_carlo_contingency,
)

__all__ = [
    "UF_SCENARIO_NPV_HORIZON_YEARS",
    "STORAGE_COST_GROWTH_PER_YEAR",
    "DEFAULT_UF_MULTIPLIERS",
    "DEFAULT_DEFERRAL_YEARS",
    "ScenarioFamily",
    "SensitivityScenario",
    "ScenarioBatch",
    "unit_factor_scenario",
    "deferral_scenario",
    "run_scenarios",
    "run_scenario_batch",
    "best_scenario",
    "vary_parameter",
    "MonteCarloResult",
    "monte_carlo_contingency",
]
