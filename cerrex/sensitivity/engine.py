"""
sensitivity/engine.py - Scenario sensitivity analysis.

Two scenario families run side by side and are never combined:

    unit factor   adjusted = base * multiplier
                  npv      = adjusted / (1 + r/100) ** UF_SCENARIO_NPV_HORIZON_YEARS
    deferral      adjusted = base * (1 + years * STORAGE_COST_GROWTH_PER_YEAR)
                  npv      = adjusted / (1 + r/100) ** years

The unit factor family discounts over a fixed horizon while deferral uses
the actual deferral period. Both are kept as-is behind named constants.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence
import logging

from ..cashflow.projector import validate_rate
from ..errors import EngineError, InvalidScenarioError
from ..utils import safe_divide

logger = logging.getLogger(__name__)

UF_SCENARIO_NPV_HORIZON_YEARS = 5
STORAGE_COST_GROWTH_PER_YEAR = 0.01

DEFAULT_UF_MULTIPLIERS = (0.5, 0.75, 1.0, 1.25, 1.5)
DEFAULT_DEFERRAL_YEARS = (0, 5, 10, 30, 50)


class ScenarioFamily(Enum):
    """Scenario families."""
    UNIT_FACTOR = "unit_factor"
    DEFERRAL = "deferral"


@dataclass(frozen=True)
class SensitivityScenario:
    """One evaluated scenario."""
    name: str
    family: ScenarioFamily
    unit_factor_multiplier: float
    deferral_years: float
    total_cost: float
    npv: float
    percent_change_vs_base: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "family": self.family.value,
            "unit_factor_multiplier": self.unit_factor_multiplier,
            "deferral_years": self.deferral_years,
            "total_cost": round(self.total_cost, 2),
            "npv": round(self.npv, 2),
            "percent_change_vs_base": round(self.percent_change_vs_base, 4),
        }


@dataclass
class ScenarioBatch:
    """Scenarios of one run with the parameters that were rejected."""
    base_cost: float = 0.0
    discount_rate: float = 0.0
    scenarios: List[SensitivityScenario] = field(default_factory=list)
    errors: List[EngineError] = field(default_factory=list)

    @property
    def best(self) -> Optional[SensitivityScenario]:
        return best_scenario(self.scenarios)

    def by_family(self, family: ScenarioFamily) -> List[SensitivityScenario]:
        return [s for s in self.scenarios if s.family is family]

    def to_dict(self) -> Dict[str, Any]:
        best = self.best
        return {
            "base_cost": round(self.base_cost, 2),
            "discount_rate": self.discount_rate,
            "scenarios": [s.to_dict() for s in self.scenarios],
            "best": best.name if best else None,
            "errors": [e.to_dict() for e in self.errors],
        }


def _percent_change(adjusted: float, base: float) -> float:
    return safe_divide(adjusted - base, base) * 100.0


def _format_number(value: float) -> str:
    return f"{value:g}"


def unit_factor_scenario(
    base_cost: float,
    discount_rate_pct: float,
    multiplier: float,
) -> SensitivityScenario:
    """
    Scale the base cost by a unit factor multiplier.

    Raises:
        InvalidScenarioError: For a negative multiplier
    """
    name = f"UF x{_format_number(multiplier)}"
    if multiplier < 0:
        raise InvalidScenarioError(
            f"Unit factor multiplier must not be negative, got {multiplier}",
            source=name,
            multiplier=multiplier,
        )

    adjusted = base_cost * multiplier
    discount = (1 + discount_rate_pct / 100.0) ** UF_SCENARIO_NPV_HORIZON_YEARS
    return SensitivityScenario(
        name=name,
        family=ScenarioFamily.UNIT_FACTOR,
        unit_factor_multiplier=multiplier,
        deferral_years=0,
        total_cost=adjusted,
        npv=adjusted / discount,
        percent_change_vs_base=_percent_change(adjusted, base_cost),
    )


def deferral_scenario(
    base_cost: float,
    discount_rate_pct: float,
    deferral_years: float,
) -> SensitivityScenario:
    """
    Defer the project, paying storage growth and gaining discounting.

    Raises:
        InvalidScenarioError: For negative deferral years
    """
    if deferral_years < 0:
        raise InvalidScenarioError(
            f"Deferral years must not be negative, got {deferral_years}",
            source=f"Deferral {_format_number(deferral_years)} years",
            deferral_years=deferral_years,
        )
    name = f"Deferral +{_format_number(deferral_years)} years"

    storage_cost_factor = 1 + deferral_years * STORAGE_COST_GROWTH_PER_YEAR
    adjusted = base_cost * storage_cost_factor
    discount = (1 + discount_rate_pct / 100.0) ** deferral_years
    return SensitivityScenario(
        name=name,
        family=ScenarioFamily.DEFERRAL,
        unit_factor_multiplier=1.0,
        deferral_years=deferral_years,
        total_cost=adjusted,
        npv=adjusted / discount,
        percent_change_vs_base=_percent_change(adjusted, base_cost),
    )


def run_scenario_batch(
    base_cost: float,
    discount_rate_pct: float,
    uf_multipliers: Iterable[float] = DEFAULT_UF_MULTIPLIERS,
    deferral_years_list: Iterable[float] = DEFAULT_DEFERRAL_YEARS,
) -> ScenarioBatch:
    """
    Evaluate both scenario families.

    A rejected parameter is recorded in ``errors`` and the remaining
    scenarios are still evaluated.

    Raises:
        InvalidRateError: For a discount rate at or below -100%
    """
    discount = validate_rate("discount_rate", discount_rate_pct)
    batch = ScenarioBatch(base_cost=base_cost, discount_rate=discount)

    for multiplier in uf_multipliers:
        try:
            batch.scenarios.append(unit_factor_scenario(base_cost, discount, multiplier))
        except InvalidScenarioError as exc:
            logger.warning(f"Scenario rejected: {exc}")
            batch.errors.append(exc)

    for years in deferral_years_list:
        try:
            batch.scenarios.append(deferral_scenario(base_cost, discount, years))
        except InvalidScenarioError as exc:
            logger.warning(f"Scenario rejected: {exc}")
            batch.errors.append(exc)

    best = batch.best
    logger.debug(
        f"Sensitivity: {len(batch.scenarios)} scenarios, {len(batch.errors)} rejected, "
        f"best={best.name if best else None}"
    )
    return batch


def run_scenarios(
    base_cost: float,
    discount_rate_pct: float,
    uf_multipliers: Iterable[float] = DEFAULT_UF_MULTIPLIERS,
    deferral_years_list: Iterable[float] = DEFAULT_DEFERRAL_YEARS,
) -> List[SensitivityScenario]:
    """Unit factor scenarios followed by deferral scenarios."""
    return run_scenario_batch(
        base_cost, discount_rate_pct, uf_multipliers, deferral_years_list,
    ).scenarios


def best_scenario(scenarios: Sequence[SensitivityScenario]) -> Optional[SensitivityScenario]:
    """Lowest NPV across both families; the first one wins a tie."""
    if not scenarios:
        return None
    return min(scenarios, key=lambda s: s.npv)


def vary_parameter(
    base_value: float,
    factors: Iterable[float],
    fn: Callable[[float], float],
) -> List[Dict[str, float]]:
    """
    One-at-a-time sensitivity of ``fn`` to a scaled input.

    Returns:
        Rows of {factor, value, result, delta}, delta relative to fn(base_value)
    """
    base_result = fn(base_value)
    rows = []
    for factor in factors:
        value = base_value * factor
        result = fn(value)
        rows.append({
            "factor": factor,
            "value": value,
            "result": result,
            "delta": result - base_result,
        })
    return rows
