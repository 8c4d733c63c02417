"""
sensitivity/monte_carlo.py - Probabilistic contingency.

Samples a contingency percentage uniformly between two bounds and reports
the spread of the resulting project totals. Percentiles are read off the
sorted sample by index (floor(n * p)).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import random

from ..errors import InvalidScenarioError

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 1000


@dataclass
class MonteCarloResult:
    """Distribution of simulated totals."""
    mean: float = 0.0
    median: float = 0.0
    p10: float = 0.0
    p50: float = 0.0
    p90: float = 0.0
    iterations: int = 0
    distribution: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": round(self.mean, 2),
            "median": round(self.median, 2),
            "p10": round(self.p10, 2),
            "p50": round(self.p50, 2),
            "p90": round(self.p90, 2),
            "iterations": self.iterations,
        }


def _percentile(ordered: List[float], fraction: float) -> float:
    return ordered[int(len(ordered) * fraction)]


def monte_carlo_contingency(
    base_cost: float,
    min_pct: float,
    max_pct: float,
    iterations: int = DEFAULT_ITERATIONS,
    seed: Optional[int] = None,
) -> MonteCarloResult:
    """
    Simulate totals with a random contingency in [min_pct, max_pct].

    Args:
        base_cost: Cost before contingency
        min_pct: Lower contingency bound in percent
        max_pct: Upper contingency bound in percent
        iterations: Number of samples
        seed: Seed for a reproducible run

    Raises:
        InvalidScenarioError: For iterations < 1 or min_pct > max_pct
    """
    if iterations < 1:
        raise InvalidScenarioError(
            f"Iterations must be at least 1, got {iterations}",
            source="monte_carlo",
            iterations=iterations,
        )
    if min_pct > max_pct:
        raise InvalidScenarioError(
            f"Contingency range is inverted: {min_pct} > {max_pct}",
            source="monte_carlo",
            min_pct=min_pct,
            max_pct=max_pct,
        )

    rng = random.Random(seed)
    results = sorted(
        base_cost * (1 + rng.uniform(min_pct, max_pct) / 100.0)
        for _ in range(iterations)
    )

    result = MonteCarloResult(
        mean=sum(results) / len(results),
        median=results[len(results) // 2],
        p10=_percentile(results, 0.1),
        p50=_percentile(results, 0.5),
        p90=_percentile(results, 0.9),
        iterations=iterations,
        distribution=results,
    )
    logger.debug(f"Monte Carlo contingency ({iterations} runs): p10={result.p10:,.2f} p90={result.p90:,.2f}")
    return result
