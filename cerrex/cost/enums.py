"""
cost/enums.py - Cost estimation enumerations.
"""

from enum import Enum


class MissingUnitFactorPolicy(Enum):
    """What a category without a unit factor contributes to an item."""
    ZERO = "zero"      # Log a warning, contribute nothing
    RAISE = "raise"    # Propagate NotFoundError, the item is skipped

    @classmethod
    def parse(cls, value) -> "MissingUnitFactorPolicy":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class WDFFlag(Enum):
    """Work difficulty factors F1-F7, in flag-array order."""
    F1_SCAFFOLDING = 0
    F2_CONFINED_SPACE = 1
    F3_RESPIRATORY = 2
    F4_PROTECTIVE_CLOTHING = 3
    F5_SHIELDING = 4
    F6_REMOTE_HANDLING = 5
    F7_USER_DEFINED = 6


class CostComponent(Enum):
    """Summable fields of a cost breakdown."""
    WORKFORCE = "workforce"
    LABOUR = "labour"
    INVESTMENT = "investment"
    EXPENSES = "expenses"
    CONTINGENCY = "contingency"
    TOTAL = "total"
