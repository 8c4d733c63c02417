"""
ingest/schemas.py - Project snapshot document models.

Pydantic models for the JSON snapshot the CLI reads. They check shape and
types only; value rules the engine owns (negative quantities, WDF flag
count) are left to the engine so a bad item is skipped rather than
rejecting the whole document.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ..cost.schema import (
    DEFAULT_CONTINGENCY_RATE,
    CategoryQuantity,
    InventoryItem,
    ProjectRates,
    UnitFactor,
)


class RatesModel(BaseModel):
    """Project-level scalars."""
    reference_labour_rate: float
    contractor_labour_rate: Optional[float] = None
    contingency_enabled: bool = True
    wdf_enabled: bool = True
    wdf_global_multiplier: float = 1.0
    expenses_percentage_owner: float = 0.0
    expenses_percentage_contractor: float = 0.0
    currency_in_thousands: bool = False

    @field_validator('reference_labour_rate', 'contractor_labour_rate')
    @classmethod
    def validate_rate(cls, v):
        if v is not None and v < 0:
            raise ValueError('labour rate cannot be negative')
        return v

    @field_validator('expenses_percentage_owner', 'expenses_percentage_contractor')
    @classmethod
    def validate_percentage(cls, v):
        if not 0.0 <= v <= 100.0:
            raise ValueError('expense percentage must be between 0 and 100')
        return v

    def to_domain(self) -> ProjectRates:
        return ProjectRates(**self.model_dump())


class UnitFactorModel(BaseModel):
    """One unit factor record."""
    code: str = Field(min_length=1)
    manpower_uf: float = 0.0
    investment_uf: float = 0.0
    expenses_uf: float = 0.0
    unit: str = "t"
    name: str = ""

    def to_domain(self) -> UnitFactor:
        return UnitFactor(**self.model_dump())


class CategoryQuantityModel(BaseModel):
    """Category quantity consumed by an item."""
    category_code: str = Field(min_length=1)
    quantity: float = 0.0


class ItemModel(BaseModel):
    """Inventory or activity item."""
    item_id: Union[str, int]
    isdc_code: Optional[str] = ""
    name: str = ""
    basic_workforce: float = 0.0
    wdf_flags: List[float] = Field(default_factory=list)
    contingency_rate: Optional[float] = None
    is_contractor: bool = False
    is_activated: bool = True
    categories: List[CategoryQuantityModel] = Field(default_factory=list)
    additional_investment: float = 0.0
    additional_expenses: float = 0.0

    @field_validator('item_id')
    @classmethod
    def validate_item_id(cls, v):
        v = str(v).strip()
        if not v:
            raise ValueError('item_id cannot be empty')
        return v

    def to_domain(self, default_contingency_rate: float = DEFAULT_CONTINGENCY_RATE) -> InventoryItem:
        item_id = str(self.item_id)
        rate = self.contingency_rate
        return InventoryItem(
            item_id=item_id,
            isdc_code=self.isdc_code or "",
            name=self.name,
            basic_workforce=self.basic_workforce,
            wdf_flags=tuple(self.wdf_flags),
            contingency_rate=default_contingency_rate if rate is None else rate,
            is_contractor=self.is_contractor,
            is_activated=self.is_activated,
            categories=tuple(
                CategoryQuantity(c.category_code, c.quantity, inventory_item_id=item_id)
                for c in self.categories
            ),
            additional_investment=self.additional_investment,
            additional_expenses=self.additional_expenses,
        )


class CashflowModel(BaseModel):
    """Per-project overrides of the cashflow configuration."""
    start_year: Optional[int] = None
    inflation_rate: Optional[float] = None
    discount_rate: Optional[float] = None
    duration_years: Optional[int] = None

    def overrides(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SensitivityModel(BaseModel):
    """Per-project overrides of the scenario parameter sets."""
    uf_multipliers: Optional[List[float]] = None
    deferral_years: Optional[List[float]] = None

    def overrides(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ProjectSnapshot(BaseModel):
    """Complete input for one estimate run."""
    name: str = ""
    rates: RatesModel
    unit_factors: Optional[List[UnitFactorModel]] = None
    items: List[ItemModel] = Field(default_factory=list)
    cashflow: Optional[CashflowModel] = None
    sensitivity: Optional[SensitivityModel] = None

    @field_validator('unit_factors')
    @classmethod
    def validate_unit_factors(cls, v):
        if v is None:
            return v
        seen = set()
        for uf in v:
            if uf.code in seen:
                raise ValueError(f"duplicate unit factor code '{uf.code}'")
            seen.add(uf.code)
        return v
