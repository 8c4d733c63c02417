"""
ingest/ - Project snapshot ingest.
"""

from .schemas import (
    RatesModel,
    UnitFactorModel,
    CategoryQuantityModel,
    ItemModel,
    CashflowModel,
    SensitivityModel,
    ProjectSnapshot,
)

from .loader import (
    LoadedProject,
    parse_snapshot,
    load_snapshot,
    to_project,
)

__all__ = [
    "RatesModel",
    "UnitFactorModel",
    "CategoryQuantityModel",
    "ItemModel",
    "CashflowModel",
    "SensitivityModel",
    "ProjectSnapshot",
    "LoadedProject",
    "parse_snapshot",
    "load_snapshot",
    "to_project",
]
