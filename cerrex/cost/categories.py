"""
cost/categories.py - Default D&D category unit factors.

The 52 dismantling and decontamination categories (INV1-INV52) with the
factors a new project is seeded with. Projects edit their own copies; the
engine only ever reads the table it is handed.

Columns: code, name, unit, manpower UF (man-h/unit), investment UF,
expenses UF (currency/unit).
"""

from __future__ import annotations
from typing import List, Tuple

from .schema import UnitFactor
from .unit_factors import UnitFactorTable


DD_CATEGORIES: Tuple[Tuple[str, str, str, float, float, float], ...] = (
    ("INV1", "Work in controlled area", "m2", 1, 0, 5),
    ("INV2", "Technological equipment", "t", 19, 15, 8),
    ("INV3", "Thick wall equipment", "t", 12, 15, 8),
    ("INV4", "Thin wall equipment", "t", 40, 15, 8),
    ("INV5", "Components (<50 kg)", "t", 1000, 200, 40),
    ("INV6", "Components (50-200 kg)", "t", 250, 100, 100),
    ("INV7", "Components (>200 kg)", "t", 50, 50, 50),
    ("INV8", "Concrete in controlled area", "t", 12, 20, 20),
    ("INV9", "Graphite elements, thermal columns", "t", 80, 15, 8),
    ("INV10", "Specific materials", "t", 200, 30, 8),
    ("INV11", "Materials in controlled area", "t", 30, 20, 20),
    ("INV12", "Materials out of controlled area", "t", 5, 5, 5),
    ("INV13", "Reserved", "t", 0, 0, 0),
    ("INV14", "Solid waste & materials", "t", 5, 5, 10),
    ("INV15", "Liquid waste & sludge", "t", 5, 5, 10),
    ("INV16", "Decontamination of surfaces (light)", "m2", 0.5, 5, 5),
    ("INV17", "Decontamination of surfaces (deep)", "m2", 1, 10, 5),
    ("INV18", "Survey of buildings", "m2", 0.5, 5, 5),
    ("INV19", "Survey of the site", "m2", 0.5, 5, 5),
    ("INV20", "Reserved", "t", 0, 0, 0),
    ("INV21", "Valves, pumps", "t", 27, 15, 8),
    ("INV22", "Heat exchangers", "t", 19, 15, 8),
    ("INV23", "Linings", "t", 25, 15, 8),
    ("INV24", "Thin wall equipment (aux)", "t", 40, 15, 8),
    ("INV25", "Equipment (general)", "t", 25, 15, 8),
    ("INV26", "Cable trays", "t", 25, 15, 8),
    ("INV27", "Electrical boards, cabinets", "t", 10, 15, 8),
    ("INV28", "Structural elements", "t", 50, 15, 10),
    ("INV29", "Insulation", "t", 100, 30, 8),
    ("INV30", "Hazardous materials", "t", 150, 50, 20),
    ("INV31", "Lead shielding", "t", 20, 10, 5),
    ("INV32", "Shielding bricks & plates", "t", 15, 10, 5),
    ("INV33", "Concrete shielding", "t", 8, 15, 10),
    ("INV34", "Glove boxes", "t", 200, 50, 20),
    ("INV35", "Miscellaneous items", "t", 30, 15, 10),
    ("INV36", "Reserved", "t", 0, 0, 0),
    ("INV37", "Equipment out of controlled area", "t", 5, 5, 5),
    ("INV38", "Metal construction", "t", 8, 10, 5),
    ("INV39", "Reinforced concrete", "t", 5, 15, 10),
    ("INV40", "Plain concrete", "t", 3, 10, 8),
    ("INV41", "Building out of controlled area", "t", 2, 5, 5),
    ("INV42", "Site remediation", "m2", 0.2, 2, 2),
    ("INV43", "Reserved", "t", 0, 0, 0),
    ("INV44", "User defined 1", "t", 10, 10, 10),
    ("INV45", "User defined 2", "t", 10, 10, 10),
    ("INV46", "User defined 3", "t", 10, 10, 10),
    ("INV47", "User defined 4", "t", 10, 10, 10),
    ("INV48", "User defined 5", "t", 10, 10, 10),
    ("INV49", "User defined 6", "t", 10, 10, 10),
    ("INV50", "User defined area 1", "m2", 0.5, 5, 5),
    ("INV51", "User defined area 2", "m2", 0.5, 5, 5),
    ("INV52", "Direct user inputs", "t", 10, 10, 10),
)

RESERVED_CATEGORY_NAME = "Reserved"


def default_unit_factors(include_reserved: bool = True) -> List[UnitFactor]:
    """Unit factor records for the default D&D categories."""
    return [
        UnitFactor(
            code=code,
            name=name,
            unit=unit,
            manpower_uf=float(manpower),
            investment_uf=float(investment),
            expenses_uf=float(expenses),
        )
        for code, name, unit, manpower, investment, expenses in DD_CATEGORIES
        if include_reserved or name != RESERVED_CATEGORY_NAME
    ]


def default_unit_factor_table() -> UnitFactorTable:
    """Seed table for a new project."""
    return UnitFactorTable.from_records(default_unit_factors())


def categories_by_unit(unit: str) -> List[UnitFactor]:
    """Active (non-zero manpower) categories measured in ``unit``."""
    return [
        uf for uf in default_unit_factors(include_reserved=False)
        if uf.unit == unit and uf.manpower_uf > 0
    ]
