"""
errors/aggregator.py - Collect and report recoverable errors

A bad item never aborts an aggregation and a bad scenario never aborts a
batch; their errors are collected here and summarised for the caller.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .taxonomy import EngineError, ErrorCategory, ErrorSeverity, InvalidItemError


@dataclass
class ErrorReport:
    """Aggregated error report."""

    total_errors: int = 0
    skipped_items: int = 0
    by_severity: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)

    summary: str = ""

    all_errors: List[EngineError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return self.total_errors > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_errors": self.total_errors,
            "skipped_items": self.skipped_items,
            "by_severity": self.by_severity,
            "by_category": self.by_category,
            "summary": self.summary,
            "errors": [e.to_dict() for e in self.all_errors],
        }


class ErrorAggregator:
    """
    Aggregates errors from multiple sources.
    """

    def __init__(self):
        self._errors: List[EngineError] = []
        self._by_source: Dict[str, List[EngineError]] = {}
        self._skipped: set = set()

    def add(self, error: EngineError, skipped: bool = False) -> None:
        """Add an error. ``skipped`` marks the source item as excluded."""
        self._errors.append(error)
        self._by_source.setdefault(error.source, []).append(error)
        if skipped:
            self._skipped.add(error.source)

    def add_all(self, errors: Iterable[EngineError]) -> None:
        for error in errors:
            self.add(error)

    def get_by_severity(self, severity: ErrorSeverity) -> List[EngineError]:
        return [e for e in self._errors if e.severity == severity]

    def get_by_category(self, category: ErrorCategory) -> List[EngineError]:
        return [e for e in self._errors if e.category == category]

    def get_by_source(self, source: str) -> List[EngineError]:
        return self._by_source.get(source, [])

    @property
    def skipped_count(self) -> int:
        return len(self._skipped)

    def has_errors(self) -> bool:
        """Check if any errors (not just warnings)."""
        return any(
            e.severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL)
            for e in self._errors
        )

    def generate_report(self) -> ErrorReport:
        """Generate aggregated report."""
        report = ErrorReport(
            total_errors=len(self._errors),
            skipped_items=self.skipped_count,
        )

        for severity in ErrorSeverity:
            count = sum(1 for e in self._errors if e.severity == severity)
            if count > 0:
                report.by_severity[severity.value] = count

        for category in ErrorCategory:
            count = sum(1 for e in self._errors if e.category == category)
            if count > 0:
                report.by_category[category.value] = count

        if report.skipped_items:
            report.summary = f"{report.skipped_items} item(s) skipped due to invalid data"
        elif report.by_severity.get("error", 0) > 0:
            report.summary = f"{report.by_severity['error']} error(s) found"
        elif report.by_severity.get("warning", 0) > 0:
            report.summary = f"{report.by_severity['warning']} warning(s) found"
        else:
            report.summary = "No significant issues"

        report.all_errors = self._errors.copy()
        return report

    def clear(self) -> None:
        self._errors.clear()
        self._by_source.clear()
        self._skipped.clear()


def skipped_item_error(item_id: str, reason: str) -> InvalidItemError:
    """Factory for an item excluded from aggregation."""
    return InvalidItemError(reason, source=item_id)
