"""
cost/wdf.py - Work difficulty adjustment.

Effective workforce from seven percentage flags:

    effective = basic * (100 + sum(flags)) / 100

The formula has no on/off branch; callers zero the flags when WDF is
disabled for the project (see effective_flags).
"""

from __future__ import annotations
from typing import Dict, Sequence, Tuple

from .enums import WDFFlag
from .schema import WDF_FLAG_COUNT
from ..errors import InvalidItemError


WDF_FLAG_LABELS: Dict[WDFFlag, str] = {
    WDFFlag.F1_SCAFFOLDING: "Scaffolding",
    WDFFlag.F2_CONFINED_SPACE: "Confined space",
    WDFFlag.F3_RESPIRATORY: "Respiratory protection",
    WDFFlag.F4_PROTECTIVE_CLOTHING: "Protective clothing",
    WDFFlag.F5_SHIELDING: "Shielding",
    WDFFlag.F6_REMOTE_HANDLING: "Remote handling",
    WDFFlag.F7_USER_DEFINED: "User defined",
}

NO_DIFFICULTY: Tuple[float, ...] = (0.0,) * WDF_FLAG_COUNT


def total_workforce(basic_workforce: float, wdf_flags: Sequence[float]) -> float:
    """
    Apply the work difficulty flags to a base workforce.

    Args:
        basic_workforce: Base man-hours
        wdf_flags: Exactly seven percentage additions (negative reduces)

    Returns:
        Effective man-hours; not clamped to non-negative

    Raises:
        InvalidItemError: If the flag count is not seven
    """
    if len(wdf_flags) != WDF_FLAG_COUNT:
        raise InvalidItemError(
            f"Expected {WDF_FLAG_COUNT} work difficulty flags, got {len(wdf_flags)}",
            flags=list(wdf_flags),
        )
    return basic_workforce * (100.0 + sum(wdf_flags)) / 100.0


def effective_flags(wdf_flags: Sequence[float], enabled: bool) -> Tuple[float, ...]:
    """Flags to feed total_workforce given the project WDF toggle."""
    if not enabled:
        return NO_DIFFICULTY
    return tuple(wdf_flags)


def difficulty_percent(wdf_flags: Sequence[float]) -> float:
    """Combined percentage addition of all flags."""
    return float(sum(wdf_flags))


def describe_flags(wdf_flags: Sequence[float]) -> Dict[str, float]:
    """Non-zero flags keyed by label, for reports."""
    return {
        WDF_FLAG_LABELS[flag]: wdf_flags[flag.value]
        for flag in WDFFlag
        if flag.value < len(wdf_flags) and wdf_flags[flag.value]
    }
