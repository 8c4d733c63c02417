"""
cost/schema.py - Cost data structures.

Records supplied by the surrounding application (unit factors, inventory
items, category quantities, project rates) and the computed CostBreakdown
value. Inputs are frozen; a breakdown is always re-derivable from them.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from .enums import CostComponent

WDF_FLAG_COUNT = 7
DEFAULT_CONTINGENCY_RATE = 10.0


@dataclass(frozen=True)
class UnitFactor:
    """Per-unit multipliers for one D&D or waste category."""
    code: str
    manpower_uf: float = 0.0
    investment_uf: float = 0.0
    expenses_uf: float = 0.0
    unit: str = "t"
    name: str = ""

    def scaled(self, multiplier: float) -> "UnitFactor":
        """Copy with all three factors multiplied."""
        return replace(
            self,
            manpower_uf=self.manpower_uf * multiplier,
            investment_uf=self.investment_uf * multiplier,
            expenses_uf=self.expenses_uf * multiplier,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "unit": self.unit,
            "manpower_uf": self.manpower_uf,
            "investment_uf": self.investment_uf,
            "expenses_uf": self.expenses_uf,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UnitFactor":
        return cls(
            code=data["code"],
            manpower_uf=float(data.get("manpower_uf", 0.0)),
            investment_uf=float(data.get("investment_uf", 0.0)),
            expenses_uf=float(data.get("expenses_uf", 0.0)),
            unit=data.get("unit", "t"),
            name=data.get("name", ""),
        )


@dataclass(frozen=True)
class CategoryQuantity:
    """Quantity of one unit-factor category attributable to an item."""
    category_code: str
    quantity: float
    inventory_item_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category_code": self.category_code,
            "quantity": self.quantity,
            "inventory_item_id": self.inventory_item_id,
        }


def normalize_wdf_flags(flags: Optional[Iterable[float]]) -> Tuple[float, ...]:
    """
    Pad a flag sequence with zeros to WDF_FLAG_COUNT entries.

    Longer sequences are returned unchanged so the workforce formula can
    reject them.
    """
    values = tuple(float(f or 0.0) for f in (flags or ()))
    if len(values) < WDF_FLAG_COUNT:
        values = values + (0.0,) * (WDF_FLAG_COUNT - len(values))
    return values


@dataclass(frozen=True)
class InventoryItem:
    """
    Cost-bearing inventory or activity record.

    Attributes:
        item_id: Stable identifier used to key computed breakdowns
        isdc_code: ISDC Level 3 code the item rolls up under
        basic_workforce: Base man-hours before difficulty adjustment
        wdf_flags: Seven percentage additions F1-F7
        contingency_rate: Contingency percentage (default 10)
        is_contractor: Use the contractor labour rate and expense share
        is_activated: Only activated items are aggregated
        categories: Category quantities consumed by the item
        additional_investment: Direct lump-sum investment
        additional_expenses: Direct lump-sum expenses
    """
    item_id: str
    isdc_code: str
    basic_workforce: float = 0.0
    wdf_flags: Tuple[float, ...] = (0.0,) * WDF_FLAG_COUNT
    contingency_rate: float = DEFAULT_CONTINGENCY_RATE
    is_contractor: bool = False
    is_activated: bool = True
    categories: Tuple[CategoryQuantity, ...] = field(default_factory=tuple)
    name: str = ""
    additional_investment: float = 0.0
    additional_expenses: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "wdf_flags", normalize_wdf_flags(self.wdf_flags))
        object.__setattr__(self, "categories", tuple(self.categories))

    @property
    def total_quantity(self) -> float:
        return sum(c.quantity for c in self.categories)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "isdc_code": self.isdc_code,
            "basic_workforce": self.basic_workforce,
            "wdf_flags": list(self.wdf_flags),
            "contingency_rate": self.contingency_rate,
            "is_contractor": self.is_contractor,
            "is_activated": self.is_activated,
            "categories": [c.to_dict() for c in self.categories],
            "additional_investment": self.additional_investment,
            "additional_expenses": self.additional_expenses,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventoryItem":
        item_id = str(data["item_id"])
        categories = tuple(
            CategoryQuantity(
                category_code=c["category_code"],
                quantity=float(c.get("quantity", 0.0)),
                inventory_item_id=item_id,
            )
            for c in data.get("categories", [])
        )
        rate = data.get("contingency_rate")
        return cls(
            item_id=item_id,
            isdc_code=data.get("isdc_code", "") or "",
            basic_workforce=float(data.get("basic_workforce", 0.0)),
            wdf_flags=tuple(data.get("wdf_flags", ())),
            contingency_rate=DEFAULT_CONTINGENCY_RATE if rate is None else float(rate),
            is_contractor=bool(data.get("is_contractor", False)),
            is_activated=bool(data.get("is_activated", True)),
            categories=categories,
            name=data.get("name", ""),
            additional_investment=float(data.get("additional_investment", 0.0)),
            additional_expenses=float(data.get("additional_expenses", 0.0)),
        )


@dataclass(frozen=True)
class ProjectRates:
    """
    Project-level scalars every calculation receives explicitly.

    Rates are per man-hour in the reference currency; percentages are
    expressed as 0-100.
    """
    reference_labour_rate: float
    contractor_labour_rate: Optional[float] = None
    contingency_enabled: bool = True
    wdf_enabled: bool = True
    wdf_global_multiplier: float = 1.0
    expenses_percentage_owner: float = 0.0
    expenses_percentage_contractor: float = 0.0
    currency_in_thousands: bool = False

    def labour_rate_for(self, is_contractor: bool) -> float:
        if is_contractor and self.contractor_labour_rate is not None:
            return self.contractor_labour_rate
        return self.reference_labour_rate

    def expenses_percentage_for(self, is_contractor: bool) -> float:
        if is_contractor:
            return self.expenses_percentage_contractor
        return self.expenses_percentage_owner

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reference_labour_rate": self.reference_labour_rate,
            "contractor_labour_rate": self.contractor_labour_rate,
            "contingency_enabled": self.contingency_enabled,
            "wdf_enabled": self.wdf_enabled,
            "wdf_global_multiplier": self.wdf_global_multiplier,
            "expenses_percentage_owner": self.expenses_percentage_owner,
            "expenses_percentage_contractor": self.expenses_percentage_contractor,
            "currency_in_thousands": self.currency_in_thousands,
        }


@dataclass(frozen=True)
class CostBreakdown:
    """Computed cost components for one item or one aggregation bucket."""
    workforce: float = 0.0
    labour: float = 0.0
    investment: float = 0.0
    expenses: float = 0.0
    contingency: float = 0.0
    total: float = 0.0

    @classmethod
    def zero(cls) -> "CostBreakdown":
        return cls()

    @classmethod
    def from_components(
        cls,
        workforce: float,
        labour: float,
        investment: float,
        expenses: float,
        contingency: float,
    ) -> "CostBreakdown":
        """Build a breakdown, deriving the total from the four cost parts."""
        return cls(
            workforce=workforce,
            labour=labour,
            investment=investment,
            expenses=expenses,
            contingency=contingency,
            total=labour + investment + expenses + contingency,
        )

    @property
    def subtotal(self) -> float:
        """Labour + investment + expenses (the contingency base)."""
        return self.labour + self.investment + self.expenses

    def __add__(self, other: "CostBreakdown") -> "CostBreakdown":
        if not isinstance(other, CostBreakdown):
            return NotImplemented
        return CostBreakdown(
            workforce=self.workforce + other.workforce,
            labour=self.labour + other.labour,
            investment=self.investment + other.investment,
            expenses=self.expenses + other.expenses,
            contingency=self.contingency + other.contingency,
            total=self.total + other.total,
        )

    def __radd__(self, other):
        # Lets sum() start from its int 0
        if other == 0:
            return self
        return self.__add__(other)

    def scaled(self, factor: float) -> "CostBreakdown":
        return CostBreakdown(
            workforce=self.workforce * factor,
            labour=self.labour * factor,
            investment=self.investment * factor,
            expenses=self.expenses * factor,
            contingency=self.contingency * factor,
            total=self.total * factor,
        )

    def get(self, component: CostComponent) -> float:
        return getattr(self, component.value)

    def to_dict(self, precision: int = 2) -> Dict[str, Any]:
        return {c.value: round(self.get(c), precision) for c in CostComponent}
