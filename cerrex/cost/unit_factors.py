"""
cost/unit_factors.py - Unit factor lookup.

Exact, case-sensitive match on the category code. A missing code raises
NotFoundError; whether that zeroes the contribution or skips the item is
decided by MissingUnitFactorPolicy in the calculator.
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, Optional, Union
import logging

from .schema import UnitFactor
from ..errors import NotFoundError, DuplicateUnitFactorError

logger = logging.getLogger(__name__)


class UnitFactorTable:
    """
    Immutable code -> UnitFactor index for one project.

    Usage:
        table = UnitFactorTable.from_records(factors)
        uf = table.lookup("INV2")
    """

    def __init__(self, factors: Optional[Dict[str, UnitFactor]] = None):
        self._factors: Dict[str, UnitFactor] = dict(factors or {})

    @classmethod
    def from_records(cls, records: Iterable[UnitFactor]) -> "UnitFactorTable":
        """
        Build a table from unit factor records.

        Raises:
            DuplicateUnitFactorError: If two records share a code
        """
        factors: Dict[str, UnitFactor] = {}
        for record in records:
            if record.code in factors:
                raise DuplicateUnitFactorError(record.code)
            factors[record.code] = record
        return cls(factors)

    def lookup(self, code: str) -> UnitFactor:
        try:
            return self._factors[code]
        except KeyError:
            raise NotFoundError(code) from None

    def get(self, code: str, default: Optional[UnitFactor] = None) -> Optional[UnitFactor]:
        return self._factors.get(code, default)

    def scaled(self, multiplier: float) -> "UnitFactorTable":
        """New table with every factor multiplied."""
        return UnitFactorTable({c: uf.scaled(multiplier) for c, uf in self._factors.items()})

    @property
    def codes(self):
        return sorted(self._factors)

    def __contains__(self, code: object) -> bool:
        return code in self._factors

    def __len__(self) -> int:
        return len(self._factors)

    def __iter__(self) -> Iterator[UnitFactor]:
        return iter(self._factors.values())

    def to_dict(self) -> Dict[str, Dict]:
        return {code: self._factors[code].to_dict() for code in self.codes}


UnitFactorSource = Union[UnitFactorTable, Iterable[UnitFactor]]


def as_table(source: UnitFactorSource) -> UnitFactorTable:
    """Accept either a table or a plain iterable of records."""
    if isinstance(source, UnitFactorTable):
        return source
    return UnitFactorTable.from_records(source)


def lookup(code: str, table: UnitFactorSource) -> UnitFactor:
    """
    Resolve a category code to its unit factor.

    Args:
        code: Category code, matched exactly
        table: UnitFactorTable or iterable of UnitFactor records

    Raises:
        NotFoundError: If no entry matches
    """
    if isinstance(table, UnitFactorTable):
        return table.lookup(code)

    for record in table:
        if record.code == code:
            return record
    raise NotFoundError(code)
