"""
cerrex/utils.py - Shared numeric and serialization helpers
"""

from __future__ import annotations
import json
from typing import Any, Dict


def determinize_dict(data: Dict[str, Any], precision: int = 6) -> Dict[str, Any]:
    """
    Make a dictionary deterministic for hashing and caching.

    Operations:
    - Sorts all keys recursively
    - Rounds floats to consistent precision
    - Ensures consistent JSON serialization

    Args:
        data: Dictionary to determinize
        precision: Float rounding precision (default: 6)

    Returns:
        Deterministic dictionary with sorted keys and rounded floats
    """
    def _process(obj: Any) -> Any:
        if isinstance(obj, float):
            return round(obj, precision)
        elif isinstance(obj, dict):
            return {str(k): _process(v) for k, v in sorted(obj.items(), key=lambda kv: str(kv[0]))}
        elif isinstance(obj, (list, tuple)):
            return [_process(item) for item in obj]
        elif isinstance(obj, (int, str, bool, type(None))):
            return obj
        else:
            return str(obj)

    processed = _process(data)
    return json.loads(json.dumps(processed, sort_keys=True))


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safe division that returns default if denominator is zero.

    Args:
        numerator: Numerator
        denominator: Denominator
        default: Default value for division by zero

    Returns:
        Result of division or default
    """
    if abs(denominator) < 1e-10:
        return default
    return numerator / denominator


def percent_of(part: float, whole: float) -> float:
    """Share of ``whole`` as a percentage, 0.0 for a zero whole."""
    return safe_divide(part, whole) * 100.0
