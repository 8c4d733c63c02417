"""
Unit tests for errors/taxonomy.py and errors/aggregator.py
"""

import pytest

from cerrex.errors import (
    ConfigurationError,
    EngineError,
    ErrorAggregator,
    ErrorCategory,
    ErrorSeverity,
    InvalidDurationError,
    InvalidItemError,
    InvalidRateError,
    NotFoundError,
    skipped_item_error,
)


class TestTaxonomy:
    """Test error classes."""

    def test_not_found_is_recoverable_warning(self):
        error = NotFoundError("INV9", source="item-3")
        assert error.code == "CERREX_101"
        assert error.severity == ErrorSeverity.WARNING
        assert error.category == ErrorCategory.LOOKUP
        assert error.recoverable is True
        assert str(error) == "[CERREX_101] No unit factor for category 'INV9' (source: item-3)"

    def test_builtin_bases(self):
        assert isinstance(NotFoundError("x"), LookupError)
        assert isinstance(InvalidItemError("x"), ValueError)
        assert isinstance(InvalidDurationError(0), ValueError)

    def test_rate_error_details(self):
        error = InvalidRateError("discount_rate", -120.0)
        assert error.details == {"rate": "discount_rate", "value": -120.0}
        assert error.recoverable is False

    def test_to_dict(self):
        data = ConfigurationError("bad", source="cashflow.duration_years").to_dict()
        assert data["code"] == "CERREX_501"
        assert data["severity"] == "critical"
        assert data["source"] == "cashflow.duration_years"

    def test_default_message_from_docstring(self):
        assert EngineError().message


class TestErrorAggregator:
    """Test ErrorAggregator and ErrorReport."""

    def test_empty_report(self):
        report = ErrorAggregator().generate_report()
        assert report.total_errors == 0
        assert report.has_errors is False
        assert report.summary == "No significant issues"

    def test_skipped_summary(self):
        aggregator = ErrorAggregator()
        aggregator.add(skipped_item_error("a", "negative quantity"), skipped=True)
        aggregator.add(skipped_item_error("b", "bad flags"), skipped=True)
        aggregator.add(NotFoundError("INV9", source="c"))
        report = aggregator.generate_report()
        assert report.skipped_items == 2
        assert report.summary == "2 item(s) skipped due to invalid data"
        assert report.by_severity == {"warning": 1, "error": 2}

    def test_same_item_counted_once(self):
        aggregator = ErrorAggregator()
        aggregator.add(InvalidItemError("one", source="a"), skipped=True)
        aggregator.add(InvalidItemError("two", source="a"), skipped=True)
        assert aggregator.skipped_count == 1

    def test_warning_summary(self):
        aggregator = ErrorAggregator()
        aggregator.add(NotFoundError("INV9", source="c"))
        assert aggregator.has_errors() is False
        assert aggregator.generate_report().summary == "1 warning(s) found"

    def test_queries(self):
        aggregator = ErrorAggregator()
        aggregator.add_all([NotFoundError("X", source="a"), InvalidItemError("bad", source="b")])
        assert len(aggregator.get_by_source("a")) == 1
        assert len(aggregator.get_by_category(ErrorCategory.VALIDATION)) == 1
        assert len(aggregator.get_by_severity(ErrorSeverity.ERROR)) == 1
        aggregator.clear()
        assert aggregator.generate_report().total_errors == 0
