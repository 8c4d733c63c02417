"""
bootstrap/ - Configuration and logging setup for the CLI.
"""

from .config import (
    EstimateConfig,
    CashflowConfig,
    SensitivityConfig,
    LoggingConfig,
    CerrexConfig,
    load_config,
    get_config,
    reset_config,
)

from .logging_setup import (
    JSONFormatter,
    setup_logging,
)

__all__ = [
    "EstimateConfig",
    "CashflowConfig",
    "SensitivityConfig",
    "LoggingConfig",
    "CerrexConfig",
    "load_config",
    "get_config",
    "reset_config",
    "JSONFormatter",
    "setup_logging",
]
