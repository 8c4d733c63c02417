"""
isdc/ - ISDC Structure & Aggregation.

The International Structure for Decommissioning Costing as an explicit
L1/L2/L3 tree, and the roll-up of item breakdowns through it.
"""

from .codes import (
    UNASSIGNED_CODE,
    ISDC_L1,
    ISDC_L2,
    ISDC_L3,
    canonical_code,
    is_well_formed,
    level_of,
    parent_of,
)

from .hierarchy import (
    ISDCNode,
    Lineage,
    ISDCHierarchy,
    default_hierarchy,
)

from .aggregator import (
    BucketTotal,
    AggregationResult,
    aggregate,
)


__all__ = [
    # Codes
    "UNASSIGNED_CODE",
    "ISDC_L1",
    "ISDC_L2",
    "ISDC_L3",
    "canonical_code",
    "is_well_formed",
    "level_of",
    "parent_of",
    # Hierarchy
    "ISDCNode",
    "Lineage",
    "ISDCHierarchy",
    "default_hierarchy",
    # Aggregation
    "BucketTotal",
    "AggregationResult",
    "aggregate",
]
