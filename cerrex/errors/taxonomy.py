"""
errors/taxonomy.py - Engine error classification

Structured exception types for the cost engine. Every engine failure is a
synchronous validation error; the class attributes say how far it may
propagate (recoverable errors are collected, fatal ones abort a single call).
"""

from __future__ import annotations
from typing import Any, Dict, Optional
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories."""
    LOOKUP = "lookup"              # Reference data not found (1xx)
    VALIDATION = "validation"      # Bad record content (2xx)
    PROJECTION = "projection"      # Bad time-series parameters (3xx)
    SCENARIO = "scenario"          # Bad sensitivity parameters (4xx)
    CONFIGURATION = "configuration"  # Config and ingest (5xx)


class EngineError(Exception):
    """
    Base class for cost engine errors.

    Provides structured error information with:
    - Error code for programmatic handling
    - Human-readable message
    - Source (item id, scenario name, config key) for traceability
    - Detailed context for debugging
    """

    code: str = "CERREX_000"
    category: ErrorCategory = ErrorCategory.VALIDATION
    severity: ErrorSeverity = ErrorSeverity.ERROR
    recoverable: bool = False

    def __init__(
        self,
        message: str = "",
        *,
        source: str = "",
        details: Optional[Dict[str, Any]] = None,
        **kwargs,
    ):
        self.message = message or self.__class__.__doc__ or "Cost engine error"
        self.source = source
        self.details = details or {}
        self.details.update(kwargs)

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for reports."""
        return {
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "recoverable": self.recoverable,
            "message": self.message,
            "source": self.source,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.source:
            return f"[{self.code}] {self.message} (source: {self.source})"
        return f"[{self.code}] {self.message}"


# =============================================================================
# SPECIFIC ERROR TYPES
# =============================================================================

class NotFoundError(EngineError, LookupError):
    """Unit factor code not present in the table."""

    code = "CERREX_101"
    category = ErrorCategory.LOOKUP
    severity = ErrorSeverity.WARNING
    recoverable = True

    def __init__(self, category_code: str, **kwargs):
        self.category_code = category_code
        super().__init__(
            message=f"No unit factor for category '{category_code}'",
            category_code=category_code,
            **kwargs,
        )


class UnknownISDCCodeError(EngineError, LookupError):
    """Item code cannot be placed in the ISDC tree."""

    code = "CERREX_102"
    category = ErrorCategory.LOOKUP
    severity = ErrorSeverity.WARNING
    recoverable = True

    def __init__(self, isdc_code: str, **kwargs):
        self.isdc_code = isdc_code
        super().__init__(
            message=f"ISDC code '{isdc_code}' is not in the ISDC structure; filed as UNASSIGNED",
            isdc_code=isdc_code,
            **kwargs,
        )


class InvalidItemError(EngineError, ValueError):
    """Inventory item carries data the calculator cannot use."""

    code = "CERREX_201"
    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.ERROR
    recoverable = True


class DuplicateUnitFactorError(EngineError, ValueError):
    """Two unit factors share one category code."""

    code = "CERREX_202"
    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.ERROR

    def __init__(self, category_code: str, **kwargs):
        self.category_code = category_code
        super().__init__(
            message=f"Duplicate unit factor code '{category_code}'",
            category_code=category_code,
            **kwargs,
        )


class InvalidDurationError(EngineError, ValueError):
    """Project duration must be a positive whole number of years."""

    code = "CERREX_301"
    category = ErrorCategory.PROJECTION
    severity = ErrorSeverity.ERROR

    def __init__(self, duration_years: Any, **kwargs):
        self.duration_years = duration_years
        super().__init__(
            message=f"Duration must be a positive integer number of years, got {duration_years!r}",
            duration_years=duration_years,
            **kwargs,
        )


class InvalidRateError(EngineError, ValueError):
    """Percentage rate outside the supported range."""

    code = "CERREX_302"
    category = ErrorCategory.PROJECTION
    severity = ErrorSeverity.ERROR

    def __init__(self, name: str, value: Any, **kwargs):
        self.name = name
        self.value = value
        super().__init__(
            message=f"{name} must be a number greater than -100%, got {value!r}",
            rate=name,
            value=value,
            **kwargs,
        )


class InvalidScenarioError(EngineError, ValueError):
    """Sensitivity scenario parameter is out of range."""

    code = "CERREX_401"
    category = ErrorCategory.SCENARIO
    severity = ErrorSeverity.ERROR
    recoverable = True


class ConfigurationError(EngineError, ValueError):
    """Configuration value cannot be used."""

    code = "CERREX_501"
    category = ErrorCategory.CONFIGURATION
    severity = ErrorSeverity.CRITICAL


class SnapshotError(EngineError, ValueError):
    """Project snapshot document failed validation."""

    code = "CERREX_502"
    category = ErrorCategory.CONFIGURATION
    severity = ErrorSeverity.ERROR
