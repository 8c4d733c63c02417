"""
cashflow/projector.py - Annual cashflow projection and NPV.

The project total is spread evenly over the duration. Each year carries
its nominal share, the share escalated by inflation, the share discounted
to the start year, and the cumulative nominal spend:

    nominal    = total / duration
    inflated   = nominal * (1 + inflation/100) ** i
    discounted = nominal / (1 + discount/100) ** i
    cumulative = sum of nominal up to and including year i

NPV is the sum of the discounted column, computed by npv() on its own.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List
import logging
import math

from ..errors import InvalidDurationError, InvalidRateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CashflowYear:
    """One projected year."""
    year: int
    nominal: float
    inflated: float
    discounted: float
    cumulative: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "nominal": round(self.nominal, 2),
            "inflated": round(self.inflated, 2),
            "discounted": round(self.discounted, 2),
            "cumulative": round(self.cumulative, 2),
        }


@dataclass
class CashflowProjection:
    """Year table plus its summary figures."""
    years: List[CashflowYear] = field(default_factory=list)
    npv: float = 0.0
    inflation_rate: float = 0.0
    discount_rate: float = 0.0

    @property
    def total_nominal(self) -> float:
        return sum(y.nominal for y in self.years)

    @property
    def total_inflated(self) -> float:
        return sum(y.inflated for y in self.years)

    @property
    def start_year(self) -> int:
        return self.years[0].year if self.years else 0

    @property
    def end_year(self) -> int:
        return self.years[-1].year if self.years else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_year": self.start_year,
            "end_year": self.end_year,
            "inflation_rate": self.inflation_rate,
            "discount_rate": self.discount_rate,
            "npv": round(self.npv, 2),
            "total_nominal": round(self.total_nominal, 2),
            "total_inflated": round(self.total_inflated, 2),
            "years": [y.to_dict() for y in self.years],
        }


def validate_duration(duration_years: Any) -> int:
    """
    Raises:
        InvalidDurationError: Unless duration is a positive integer
    """
    if isinstance(duration_years, bool) or not isinstance(duration_years, int):
        if isinstance(duration_years, float) and duration_years.is_integer():
            duration_years = int(duration_years)
        else:
            raise InvalidDurationError(duration_years)
    if duration_years <= 0:
        raise InvalidDurationError(duration_years)
    return duration_years


def validate_rate(name: str, value: Any) -> float:
    """
    Raises:
        InvalidRateError: For a non-numeric, non-finite or <= -100% rate
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidRateError(name, value)
    if not math.isfinite(value) or value <= -100.0:
        raise InvalidRateError(name, value)
    return float(value)


def project(
    total_cost: float,
    start_year: int,
    duration_years: int,
    inflation_rate_pct: float,
    discount_rate_pct: float,
) -> List[CashflowYear]:
    """
    Spread a total cost evenly over the project years.

    Args:
        total_cost: Undiscounted project total
        start_year: Calendar year of index 0
        duration_years: Number of years, positive integer
        inflation_rate_pct: Annual escalation in percent
        discount_rate_pct: Annual discount rate in percent

    Returns:
        One CashflowYear per year, in order

    Raises:
        InvalidDurationError: Non-positive or fractional duration
        InvalidRateError: Rate at or below -100%
    """
    duration = validate_duration(duration_years)
    inflation = validate_rate("inflation_rate", inflation_rate_pct)
    discount = validate_rate("discount_rate", discount_rate_pct)

    annual_nominal = total_cost / duration
    years: List[CashflowYear] = []
    cumulative = 0.0

    for i in range(duration):
        inflation_factor = (1 + inflation / 100.0) ** i
        discount_factor = (1 + discount / 100.0) ** i
        cumulative += annual_nominal
        years.append(CashflowYear(
            year=start_year + i,
            nominal=annual_nominal,
            inflated=annual_nominal * inflation_factor,
            discounted=annual_nominal / discount_factor,
            cumulative=cumulative,
        ))

    return years


def npv(total_cost: float, duration_years: int, discount_rate_pct: float) -> float:
    """Net present value of the even annual spend."""
    duration = validate_duration(duration_years)
    discount = validate_rate("discount_rate", discount_rate_pct)

    annual_nominal = total_cost / duration
    return sum(annual_nominal / (1 + discount / 100.0) ** i for i in range(duration))


def build_projection(
    total_cost: float,
    start_year: int,
    duration_years: int,
    inflation_rate_pct: float,
    discount_rate_pct: float,
) -> CashflowProjection:
    """project() plus npv() packaged for reports."""
    years = project(total_cost, start_year, duration_years, inflation_rate_pct, discount_rate_pct)
    projection = CashflowProjection(
        years=years,
        npv=npv(total_cost, duration_years, discount_rate_pct),
        inflation_rate=float(inflation_rate_pct),
        discount_rate=float(discount_rate_pct),
    )
    logger.debug(
        f"Cashflow {projection.start_year}-{projection.end_year}: "
        f"nominal={projection.total_nominal:,.2f} npv={projection.npv:,.2f}"
    )
    return projection
