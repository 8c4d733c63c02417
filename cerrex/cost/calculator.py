"""
cost/calculator.py - Item cost calculator.

Reproduces the legacy spreadsheet's per-item formulas:

    workforce   = basic * (100 + sum(WDF)) / 100 * m
    labour      = workforce * labour rate
    investment  = sum(q * investment UF) * m + additional investment
    expenses    = sum(q * expenses UF) * m + additional expenses
                  + labour * expense percentage / 100
    contingency = (labour + investment + expenses) * rate / 100, if enabled
    total       = labour + investment + expenses + contingency

where m is the global WDF multiplier when WDF is enabled and any flag is set,
otherwise 1.

Everything here is a pure function of its arguments, so items can be
computed independently and folded afterwards.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Tuple
import logging
import math

from .enums import MissingUnitFactorPolicy
from .schema import CostBreakdown, InventoryItem, ProjectRates
from .unit_factors import UnitFactorSource, as_table
from .wdf import effective_flags, total_workforce
from ..errors import EngineError, InvalidItemError, NotFoundError

logger = logging.getLogger(__name__)

THOUSANDS_DIVISOR = 1000.0


def validate_item(item: InventoryItem) -> None:
    """
    Reject items the formulas cannot price.

    Raises:
        InvalidItemError: On a negative or non-finite category quantity
    """
    for pair in item.categories:
        if not math.isfinite(pair.quantity) or pair.quantity < 0:
            raise InvalidItemError(
                f"Invalid quantity {pair.quantity} for category '{pair.category_code}'",
                source=item.item_id,
                category_code=pair.category_code,
                quantity=pair.quantity,
            )


def calculate_item_cost(
    item: InventoryItem,
    unit_factors: UnitFactorSource,
    labour_rate: float,
    contingency_enabled: bool,
    *,
    missing_policy: MissingUnitFactorPolicy = MissingUnitFactorPolicy.ZERO,
    expenses_percentage: float = 0.0,
    wdf_enabled: bool = True,
    wdf_multiplier: float = 1.0,
    currency_in_thousands: bool = False,
) -> CostBreakdown:
    """
    Compute labour, investment, expenses and contingency for one item.

    Args:
        item: Inventory or activity record
        unit_factors: Project unit factor table (or iterable of records)
        labour_rate: Hourly rate to apply (reference or contractor)
        contingency_enabled: Project contingency switch
        missing_policy: Treatment of categories without a unit factor
        expenses_percentage: Labour-related expenses share (0-100)
        wdf_enabled: Project WDF switch; flags count as zero when off
        wdf_multiplier: Global WDF multiplier on workforce and unit factor
            terms, applied when any flag is set
        currency_in_thousands: Report money in thousands

    Returns:
        CostBreakdown for the item

    Raises:
        InvalidItemError: Negative or non-finite quantity, wrong WDF flag count
        NotFoundError: Missing unit factor under the RAISE policy
    """
    validate_item(item)
    table = as_table(unit_factors)

    flags = effective_flags(item.wdf_flags, wdf_enabled)
    multiplier = wdf_multiplier if wdf_enabled and any(flags) else 1.0
    workforce = total_workforce(item.basic_workforce, flags) * multiplier

    labour = workforce * labour_rate

    investment = 0.0
    expenses = 0.0
    for pair in item.categories:
        try:
            uf = table.lookup(pair.category_code)
        except NotFoundError as exc:
            if missing_policy is MissingUnitFactorPolicy.RAISE:
                exc.source = item.item_id
                raise
            logger.warning(
                f"Item {item.item_id}: no unit factor for '{pair.category_code}', "
                f"contributing zero"
            )
            continue
        investment += pair.quantity * uf.investment_uf * multiplier
        expenses += pair.quantity * uf.expenses_uf * multiplier

    investment += item.additional_investment
    expenses += item.additional_expenses + labour * expenses_percentage / 100.0

    if currency_in_thousands:
        labour /= THOUSANDS_DIVISOR
        investment /= THOUSANDS_DIVISOR
        expenses /= THOUSANDS_DIVISOR

    if contingency_enabled:
        contingency = (labour + investment + expenses) * (item.contingency_rate / 100.0)
    else:
        contingency = 0.0

    return CostBreakdown.from_components(
        workforce=workforce,
        labour=labour,
        investment=investment,
        expenses=expenses,
        contingency=contingency,
    )


class ItemCostCalculator:
    """
    Item calculator bound to one project's unit factors and rates.

    Usage:
        calculator = ItemCostCalculator(table, rates)
        costs, errors = calculator.calculate_many(items)
    """

    def __init__(
        self,
        unit_factors: UnitFactorSource,
        rates: ProjectRates,
        missing_policy: MissingUnitFactorPolicy = MissingUnitFactorPolicy.ZERO,
    ):
        self.unit_factors = as_table(unit_factors)
        self.rates = rates
        self.missing_policy = missing_policy

    def calculate(self, item: InventoryItem) -> CostBreakdown:
        """Price one item with the contractor or reference rate as flagged."""
        return calculate_item_cost(
            item,
            self.unit_factors,
            self.rates.labour_rate_for(item.is_contractor),
            self.rates.contingency_enabled,
            missing_policy=self.missing_policy,
            expenses_percentage=self.rates.expenses_percentage_for(item.is_contractor),
            wdf_enabled=self.rates.wdf_enabled,
            wdf_multiplier=self.rates.wdf_global_multiplier,
            currency_in_thousands=self.rates.currency_in_thousands,
        )

    def calculate_many(
        self,
        items: Iterable[InventoryItem],
    ) -> Tuple[Dict[str, CostBreakdown], List[Tuple[EngineError, bool]]]:
        """
        Price every item, collecting failures instead of aborting.

        Returns:
            (costs keyed by item id, [(error, item_skipped)])
        """
        costs: Dict[str, CostBreakdown] = {}
        errors: List[Tuple[EngineError, bool]] = []

        for item in items:
            if item.item_id in costs:
                errors.append((InvalidItemError(
                    f"Duplicate item id '{item.item_id}'", source=item.item_id,
                ), True))
                continue

            try:
                costs[item.item_id] = self.calculate(item)
            except (InvalidItemError, NotFoundError) as exc:
                exc.source = exc.source or item.item_id
                logger.debug(f"Item {item.item_id} skipped: {exc}")
                errors.append((exc, True))
                continue

            if self.missing_policy is MissingUnitFactorPolicy.ZERO:
                for pair in item.categories:
                    if pair.category_code not in self.unit_factors:
                        errors.append((NotFoundError(pair.category_code, source=item.item_id), False))

        return costs, errors
