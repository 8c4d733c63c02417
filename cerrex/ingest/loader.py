"""
ingest/loader.py - Read a project snapshot into engine inputs.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json
import logging

from pydantic import ValidationError

from .schemas import ProjectSnapshot
from ..bootstrap.config import CashflowConfig, CerrexConfig, SensitivityConfig
from ..cost import (
    InventoryItem,
    ProjectRates,
    UnitFactorTable,
    default_unit_factor_table,
)
from ..errors import ConfigurationError, SnapshotError

logger = logging.getLogger(__name__)


@dataclass
class LoadedProject:
    """Engine-ready inputs resolved from a snapshot and the configuration."""
    name: str
    rates: ProjectRates
    unit_factors: UnitFactorTable
    items: List[InventoryItem]
    cashflow: CashflowConfig
    sensitivity: SensitivityConfig


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg')}")
    return "; ".join(parts)


def parse_snapshot(data: Any, source: str = "<snapshot>") -> ProjectSnapshot:
    """
    Validate a decoded snapshot document.

    Raises:
        SnapshotError: If the document does not match the snapshot models
    """
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object", source=source)
    try:
        return ProjectSnapshot.model_validate(data)
    except ValidationError as exc:
        raise SnapshotError(
            f"Invalid snapshot: {_format_validation_error(exc)}",
            source=source,
            error_count=exc.error_count(),
        ) from exc


def load_snapshot(path: Union[str, Path]) -> ProjectSnapshot:
    """
    Read and validate a snapshot file.

    Raises:
        SnapshotError: Missing file, bad JSON or invalid content
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        raise SnapshotError(f"Snapshot file not found: {path}", source=str(path)) from None
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Snapshot is not valid JSON: {exc}", source=str(path)) from exc

    snapshot = parse_snapshot(data, source=str(path))
    logger.debug(f"Loaded snapshot {path}: {len(snapshot.items)} items")
    return snapshot


def _merged(base, overrides: Dict[str, Any], section: str):
    merged = replace(base, **overrides)
    try:
        merged.validate()
    except ConfigurationError as exc:
        raise SnapshotError(exc.message, source=f"{section}") from exc
    return merged


def to_project(snapshot: ProjectSnapshot, config: Optional[CerrexConfig] = None) -> LoadedProject:
    """
    Convert a validated snapshot to engine inputs.

    Unit factors default to the seed D&D categories. Snapshot cashflow and
    sensitivity sections override the configured values key by key.

    Raises:
        SnapshotError: If a snapshot override is out of range
    """
    config = config or CerrexConfig()

    if snapshot.unit_factors is None:
        table = default_unit_factor_table()
    else:
        table = UnitFactorTable.from_records(uf.to_domain() for uf in snapshot.unit_factors)

    contingency = config.estimate.default_contingency_rate
    items = [item.to_domain(contingency) for item in snapshot.items]

    cashflow = config.cashflow
    if snapshot.cashflow is not None:
        cashflow = _merged(cashflow, snapshot.cashflow.overrides(), "cashflow")

    sensitivity = config.sensitivity
    if snapshot.sensitivity is not None:
        sensitivity = _merged(sensitivity, snapshot.sensitivity.overrides(), "sensitivity")

    return LoadedProject(
        name=snapshot.name,
        rates=snapshot.rates.to_domain(),
        unit_factors=table,
        items=items,
        cashflow=cashflow,
        sensitivity=sensitivity,
    )
