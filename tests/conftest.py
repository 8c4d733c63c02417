"""
cerrex test configuration and fixtures.
"""

import json
import logging
import os

import pytest

from cerrex.bootstrap.config import reset_config
from cerrex.cost import (
    CategoryQuantity,
    InventoryItem,
    ProjectRates,
    UnitFactor,
    UnitFactorTable,
    default_unit_factor_table,
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Strip CERREX_* variables, forget any loaded configuration and
    remove logging handlers installed by the CLI."""
    for key in list(os.environ):
        if key.startswith("CERREX_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    root = logging.getLogger()
    level = root.level
    yield
    reset_config()
    for handler in list(root.handlers):
        if getattr(handler, "_cerrex_handler", False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def example_factors():
    """Single INV1 factor used by the worked example."""
    return [UnitFactor(code="INV1", investment_uf=15.0, expenses_uf=8.0)]


@pytest.fixture
def example_table(example_factors):
    return UnitFactorTable.from_records(example_factors)


@pytest.fixture
def example_item():
    """100 h, F1 scaffolding 10%, 10 units of INV1, contingency 10%."""
    return InventoryItem(
        item_id="item-1",
        isdc_code="040501",
        basic_workforce=100.0,
        wdf_flags=(10, 0, 0, 0, 0, 0, 0),
        contingency_rate=10.0,
        categories=(CategoryQuantity("INV1", 10.0),),
    )


@pytest.fixture
def rates():
    return ProjectRates(reference_labour_rate=50.0)


@pytest.fixture
def default_table():
    return default_unit_factor_table()


@pytest.fixture
def make_item():
    """Factory for items with sensible defaults."""
    counter = {"n": 0}

    def _make(isdc_code="0101", basic_workforce=10.0, **kwargs):
        counter["n"] += 1
        kwargs.setdefault("item_id", f"item-{counter['n']}")
        return InventoryItem(
            isdc_code=isdc_code,
            basic_workforce=basic_workforce,
            **kwargs,
        )

    return _make


@pytest.fixture
def snapshot_data():
    """Small but complete project snapshot document."""
    return {
        "name": "Research reactor",
        "rates": {
            "reference_labour_rate": 50.0,
            "contractor_labour_rate": 80.0,
        },
        "unit_factors": [
            {"code": "INV1", "investment_uf": 15.0, "expenses_uf": 8.0, "unit": "m2"},
            {"code": "INV2", "manpower_uf": 19.0, "investment_uf": 15.0, "expenses_uf": 8.0},
        ],
        "items": [
            {
                "item_id": "A",
                "isdc_code": "04.0501",
                "basic_workforce": 100.0,
                "wdf_flags": [10, 0, 0, 0, 0, 0, 0],
                "categories": [{"category_code": "INV1", "quantity": 10}],
            },
            {
                "item_id": "B",
                "isdc_code": "0101",
                "basic_workforce": 40.0,
                "is_contractor": True,
                "categories": [{"category_code": "INV2", "quantity": 2}],
            },
            {
                "item_id": "C",
                "isdc_code": "0201",
                "basic_workforce": 5.0,
                "is_activated": False,
            },
        ],
        "cashflow": {"start_year": 2030, "duration_years": 5},
        "sensitivity": {"uf_multipliers": [0.5, 1.0, 1.5], "deferral_years": [0, 10]},
    }


@pytest.fixture
def snapshot_file(tmp_path, snapshot_data):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data))
    return path
