"""
bootstrap/config.py - Application configuration

Provides configuration loading from files, environment variables, and defaults.
The engine itself never reads configuration; the CLI resolves it here and
passes plain values down.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, List, Optional
from pathlib import Path
import os
import json
import logging

from ..cost.enums import MissingUnitFactorPolicy
from ..errors import ConfigurationError

logger = logging.getLogger("bootstrap.config")

ENV_PREFIX = "CERREX_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env(name: str, default: str, convert: Callable[[str], Any] = str) -> Any:
    raw = os.getenv(f"{ENV_PREFIX}{name}", default)
    try:
        return convert(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Invalid value for {ENV_PREFIX}{name}: {raw!r}",
            source=f"{ENV_PREFIX}{name}",
        ) from exc


def _bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _float_list(raw: str) -> List[float]:
    return [float(part) for part in raw.split(",") if part.strip()]


def _require_number(value: Any, source: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{source} must be a number, got {value!r}", source=source)


def _require_number_list(values: Any, source: str) -> None:
    if not isinstance(values, (list, tuple)):
        raise ConfigurationError(f"{source} must be a list of numbers, got {values!r}", source=source)
    for value in values:
        _require_number(value, source)


@dataclass
class EstimateConfig:
    """Item costing defaults."""

    default_contingency_rate: float = 10.0
    missing_unit_factor_policy: str = MissingUnitFactorPolicy.ZERO.value

    @classmethod
    def from_env(cls) -> "EstimateConfig":
        return cls(
            default_contingency_rate=_env("CONTINGENCY_RATE", "10.0", float),
            missing_unit_factor_policy=_env("MISSING_UF_POLICY", "zero"),
        )

    @property
    def missing_policy(self) -> MissingUnitFactorPolicy:
        return MissingUnitFactorPolicy.parse(self.missing_unit_factor_policy)

    def validate(self) -> None:
        _require_number(self.default_contingency_rate, "estimate.default_contingency_rate")
        if self.default_contingency_rate < 0:
            raise ConfigurationError(
                f"default_contingency_rate must be >= 0, got {self.default_contingency_rate}",
                source="estimate.default_contingency_rate",
            )
        try:
            self.missing_policy
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(str(exc), source="estimate.missing_unit_factor_policy") from exc


@dataclass
class CashflowConfig:
    """Cashflow projection parameters."""

    start_year: int = 2026
    inflation_rate: float = 2.0
    discount_rate: float = 4.0
    duration_years: int = 10

    @classmethod
    def from_env(cls) -> "CashflowConfig":
        return cls(
            start_year=_env("START_YEAR", "2026", int),
            inflation_rate=_env("INFLATION_RATE", "2.0", float),
            discount_rate=_env("DISCOUNT_RATE", "4.0", float),
            duration_years=_env("DURATION_YEARS", "10", int),
        )

    def validate(self) -> None:
        _require_number(self.start_year, "cashflow.start_year")
        if isinstance(self.duration_years, bool) or not isinstance(self.duration_years, int) \
                or self.duration_years <= 0:
            raise ConfigurationError(
                f"duration_years must be a positive integer, got {self.duration_years!r}",
                source="cashflow.duration_years",
            )
        for name in ("inflation_rate", "discount_rate"):
            value = getattr(self, name)
            _require_number(value, f"cashflow.{name}")
            if value <= -100.0:
                raise ConfigurationError(
                    f"{name} must be greater than -100%, got {value}",
                    source=f"cashflow.{name}",
                )


@dataclass
class SensitivityConfig:
    """Scenario parameter sets."""

    uf_multipliers: List[float] = field(default_factory=lambda: [0.5, 0.75, 1.0, 1.25, 1.5])
    deferral_years: List[float] = field(default_factory=lambda: [0, 5, 10, 30, 50])

    @classmethod
    def from_env(cls) -> "SensitivityConfig":
        return cls(
            uf_multipliers=_env("UF_MULTIPLIERS", "0.5,0.75,1.0,1.25,1.5", _float_list),
            deferral_years=_env("DEFERRAL_YEARS", "0,5,10,30,50", _float_list),
        )

    def validate(self) -> None:
        _require_number_list(self.uf_multipliers, "sensitivity.uf_multipliers")
        _require_number_list(self.deferral_years, "sensitivity.deferral_years")
        if any(m < 0 for m in self.uf_multipliers):
            raise ConfigurationError(
                f"uf_multipliers must not be negative: {self.uf_multipliers}",
                source="sensitivity.uf_multipliers",
            )
        if any(y < 0 for y in self.deferral_years):
            raise ConfigurationError(
                f"deferral_years must not be negative: {self.deferral_years}",
                source="sensitivity.deferral_years",
            )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=_env("LOG_LEVEL", "INFO"),
            format=_env("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv(f"{ENV_PREFIX}LOG_FILE"),
            json_logs=_env("JSON_LOGS", "false", _bool),
        )

    def validate(self) -> None:
        if str(self.level).upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level '{self.level}'", source="logging.level")


@dataclass
class CerrexConfig:
    """Root configuration for the cerrex CLI."""

    environment: str = "development"
    version: str = "0.1.0"

    estimate: EstimateConfig = field(default_factory=EstimateConfig)
    cashflow: CashflowConfig = field(default_factory=CashflowConfig)
    sensitivity: SensitivityConfig = field(default_factory=SensitivityConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "CerrexConfig":
        """Create configuration from environment variables."""
        config = cls(
            environment=os.getenv(f"{ENV_PREFIX}ENVIRONMENT", "development"),
            estimate=EstimateConfig.from_env(),
            cashflow=CashflowConfig.from_env(),
            sensitivity=SensitivityConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )
        config.validate()
        return config

    @classmethod
    def from_file(cls, filepath: str) -> "CerrexConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Config file is not valid JSON: {exc}", source=str(path)) from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must hold a JSON object", source=str(path))
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "CerrexConfig":
        """Create config from dictionary, file values over environment."""
        config = cls.from_env()

        if "environment" in data:
            config.environment = data["environment"]

        for section in ("estimate", "cashflow", "sensitivity", "logging"):
            if section not in data:
                continue
            if not isinstance(data[section], dict):
                raise ConfigurationError(
                    f"Config section '{section}' must be an object, got {data[section]!r}",
                    source=section,
                )
            target = getattr(config, section)
            known = {f.name for f in fields(target)}
            for key, value in data[section].items():
                if key in known:
                    setattr(target, key, value)
                else:
                    logger.warning(f"Ignoring unknown config key {section}.{key}")

        config.validate()
        return config

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: On the first unusable value
        """
        self.estimate.validate()
        self.cashflow.validate()
        self.sensitivity.validate()
        self.logging.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "environment": self.environment,
            "version": self.version,
            "estimate": {
                "default_contingency_rate": self.estimate.default_contingency_rate,
                "missing_unit_factor_policy": self.estimate.missing_unit_factor_policy,
            },
            "cashflow": {
                "start_year": self.cashflow.start_year,
                "inflation_rate": self.cashflow.inflation_rate,
                "discount_rate": self.cashflow.discount_rate,
                "duration_years": self.cashflow.duration_years,
            },
            "sensitivity": {
                "uf_multipliers": list(self.sensitivity.uf_multipliers),
                "deferral_years": list(self.sensitivity.deferral_years),
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


# Global config instance
_config: Optional[CerrexConfig] = None


def load_config(filepath: str = None) -> CerrexConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        CerrexConfig instance
    """
    global _config

    if filepath:
        _config = CerrexConfig.from_file(filepath)
    else:
        default_paths = [
            "./cerrex.json",
            "./config/cerrex.json",
            os.path.expanduser("~/.cerrex/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = CerrexConfig.from_file(path)
                return _config

        _config = CerrexConfig.from_env()

    logger.info(f"Configuration loaded: environment={_config.environment}")
    return _config


def get_config() -> CerrexConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration."""
    global _config
    _config = None
