"""
isdc/aggregator.py - ISDC cost roll-up.

Sums item breakdowns into L3 buckets, then L2, L1 and the L0 grand total.
Every level is a plain componentwise sum; nothing is weighted.

Items whose code cannot be placed in the tree land in the UNASSIGNED
bucket: counted in the grand total, left out of the level listings and
their percentages. Items with no computed breakdown are skipped and
counted.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set
import logging

from .codes import UNASSIGNED_CODE, canonical_code
from .hierarchy import ISDCHierarchy, ISDCNode, default_hierarchy
from ..cost.schema import CostBreakdown, InventoryItem
from ..errors import EngineError, UnknownISDCCodeError
from ..utils import determinize_dict, percent_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BucketTotal:
    """Summed costs of the items under one ISDC code."""
    code: str
    name: str
    level: int
    costs: CostBreakdown = field(default_factory=CostBreakdown.zero)
    item_count: int = 0

    @property
    def total(self) -> float:
        return self.costs.total

    def add(self, costs: CostBreakdown, items: int = 1) -> "BucketTotal":
        return replace(self, costs=self.costs + costs, item_count=self.item_count + items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "level": self.level,
            "item_count": self.item_count,
            **self.costs.to_dict(),
        }


def _bucket_for(node: ISDCNode) -> BucketTotal:
    return BucketTotal(code=node.code, name=node.name, level=node.level)


def _unassigned_bucket() -> BucketTotal:
    return BucketTotal(code=UNASSIGNED_CODE, name="Unassigned", level=0)


def _add_to(buckets: Dict[str, BucketTotal], node: ISDCNode, costs: CostBreakdown) -> None:
    current = buckets.get(node.code) or _bucket_for(node)
    buckets[node.code] = current.add(costs)


def _sorted(buckets: Mapping[str, BucketTotal]) -> Dict[str, BucketTotal]:
    return {code: buckets[code] for code in sorted(buckets)}


@dataclass
class AggregationResult:
    """
    Hierarchical totals for one set of items.

    Bucket dicts are ordered by code. The grand total covers every priced,
    activated item, UNASSIGNED included.
    """
    by_l3: Dict[str, BucketTotal] = field(default_factory=dict)
    by_l2: Dict[str, BucketTotal] = field(default_factory=dict)
    by_l1: Dict[str, BucketTotal] = field(default_factory=dict)
    unassigned: BucketTotal = field(default_factory=_unassigned_bucket)
    grand_total: CostBreakdown = field(default_factory=CostBreakdown.zero)
    item_count: int = 0
    skipped_count: int = 0
    errors: List[EngineError] = field(default_factory=list)

    def percentage(self, bucket: BucketTotal) -> float:
        """Bucket share of the grand total in percent (0.0 for a zero total)."""
        return percent_of(bucket.total, self.grand_total.total)

    def percentages(self, level: int) -> Dict[str, float]:
        buckets = {1: self.by_l1, 2: self.by_l2, 3: self.by_l3}[level]
        return {code: self.percentage(b) for code, b in buckets.items()}

    def merge(self, other: "AggregationResult") -> "AggregationResult":
        """Componentwise sum of two results over disjoint item sets."""
        def _merge_level(a: Dict[str, BucketTotal], b: Dict[str, BucketTotal]) -> Dict[str, BucketTotal]:
            merged = dict(a)
            for code, bucket in b.items():
                if code in merged:
                    merged[code] = merged[code].add(bucket.costs, bucket.item_count)
                else:
                    merged[code] = bucket
            return _sorted(merged)

        return AggregationResult(
            by_l3=_merge_level(self.by_l3, other.by_l3),
            by_l2=_merge_level(self.by_l2, other.by_l2),
            by_l1=_merge_level(self.by_l1, other.by_l1),
            unassigned=self.unassigned.add(other.unassigned.costs, other.unassigned.item_count),
            grand_total=self.grand_total + other.grand_total,
            item_count=self.item_count + other.item_count,
            skipped_count=self.skipped_count + other.skipped_count,
            errors=self.errors + other.errors,
        )

    def to_dict(self) -> Dict[str, Any]:
        def _level(buckets: Dict[str, BucketTotal]) -> List[Dict[str, Any]]:
            return [
                {**b.to_dict(), "percent": round(self.percentage(b), 4)}
                for b in buckets.values()
            ]

        result = {
            "l0": self.grand_total.to_dict(),
            "l1": _level(self.by_l1),
            "l2": _level(self.by_l2),
            "l3": _level(self.by_l3),
            "unassigned": self.unassigned.to_dict(),
            "statistics": {
                "item_count": self.item_count,
                "skipped_count": self.skipped_count,
            },
        }
        return determinize_dict(result)


def aggregate(
    items: Iterable[InventoryItem],
    costs_by_item: Mapping[str, CostBreakdown],
    hierarchy: Optional[ISDCHierarchy] = None,
) -> AggregationResult:
    """
    Roll item breakdowns up the ISDC tree.

    Args:
        items: Inventory items; inactive ones are ignored
        costs_by_item: Breakdown per item id (missing ids and repeats
            of an id already aggregated are skipped)
        hierarchy: ISDC tree, the seed tree by default

    Returns:
        AggregationResult with L3/L2/L1 buckets and the L0 grand total
    """
    hierarchy = hierarchy or default_hierarchy()

    by_l3: Dict[str, BucketTotal] = {}
    by_l2: Dict[str, BucketTotal] = {}
    by_l1: Dict[str, BucketTotal] = {}
    unassigned = _unassigned_bucket()
    grand_total = CostBreakdown.zero()
    item_count = 0
    skipped = 0
    errors: List[EngineError] = []
    seen: Set[str] = set()

    for item in items:
        if not item.is_activated:
            continue

        costs = costs_by_item.get(item.item_id)
        if costs is None or item.item_id in seen:
            skipped += 1
            continue
        seen.add(item.item_id)

        item_count += 1
        grand_total = grand_total + costs

        lineage = hierarchy.lineage(item.isdc_code)
        if lineage is None:
            unassigned = unassigned.add(costs)
            logger.warning(f"Item {item.item_id}: ISDC code '{item.isdc_code}' filed as UNASSIGNED")
            errors.append(UnknownISDCCodeError(
                canonical_code(item.isdc_code) or str(item.isdc_code),
                source=item.item_id,
            ))
            continue

        _add_to(by_l3, lineage.l3, costs)
        _add_to(by_l2, lineage.l2, costs)
        _add_to(by_l1, lineage.l1, costs)

    result = AggregationResult(
        by_l3=_sorted(by_l3),
        by_l2=_sorted(by_l2),
        by_l1=_sorted(by_l1),
        unassigned=unassigned,
        grand_total=grand_total,
        item_count=item_count,
        skipped_count=skipped,
        errors=errors,
    )

    logger.info(
        f"ISDC aggregation: {item_count} items, total={grand_total.total:,.2f} "
        f"({len(by_l1)} L1 / {len(by_l2)} L2 / {len(by_l3)} L3 buckets, "
        f"{unassigned.item_count} unassigned, {skipped} skipped)"
    )
    return result
