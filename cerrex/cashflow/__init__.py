"""
cashflow/ - Cashflow Projection.
"""

from .projector import (
    CashflowYear,
    CashflowProjection,
    project,
    npv,
    build_projection,
    validate_duration,
    validate_rate,
)

__all__ = [
    "CashflowYear",
    "CashflowProjection",
    "project",
    "npv",
    "build_projection",
    "validate_duration",
    "validate_rate",
]
