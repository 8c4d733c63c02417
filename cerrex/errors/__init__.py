"""
errors/ - Error Taxonomy & Reporting

Typed engine exceptions and the aggregator that turns recoverable ones
into a report.
"""

from .taxonomy import (
    ErrorSeverity,
    ErrorCategory,
    EngineError,
    NotFoundError,
    UnknownISDCCodeError,
    InvalidItemError,
    DuplicateUnitFactorError,
    InvalidDurationError,
    InvalidRateError,
    InvalidScenarioError,
    ConfigurationError,
    SnapshotError,
)

from .aggregator import (
    ErrorReport,
    ErrorAggregator,
    skipped_item_error,
)

__all__ = [
    # Taxonomy
    "ErrorSeverity",
    "ErrorCategory",
    "EngineError",
    "NotFoundError",
    "UnknownISDCCodeError",
    "InvalidItemError",
    "DuplicateUnitFactorError",
    "InvalidDurationError",
    "InvalidRateError",
    "InvalidScenarioError",
    "ConfigurationError",
    "SnapshotError",
    # Aggregator
    "ErrorReport",
    "ErrorAggregator",
    "skipped_item_error",
]
