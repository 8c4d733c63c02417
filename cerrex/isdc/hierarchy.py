"""
isdc/hierarchy.py - ISDC activity tree.

Explicit L1 -> L2 -> L3 tree built once from the canonical code table.
Aggregation resolves an item's lineage by walking parent links instead of
re-slicing strings, so a code whose L1 prefix is unknown is rejected rather
than silently misfiled.
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
import logging

import networkx as nx

from .codes import (
    ISDC_L1,
    ISDC_L2,
    ISDC_L3,
    canonical_code,
    is_well_formed,
    level_of,
    parent_of,
    L1_CODE_LENGTH,
    L2_CODE_LENGTH,
)
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ISDCNode:
    """One activity in the ISDC tree."""
    code: str
    level: int
    parent_code: Optional[str] = None
    name: str = ""
    contingency_default: Optional[float] = None

    @property
    def is_derived(self) -> bool:
        """True for nodes synthesised from a code missing in the table."""
        return self.name.startswith(DERIVED_NAME_PREFIX)

    def to_dict(self) -> Dict[str, object]:
        return {
            "code": self.code,
            "level": self.level,
            "parent_code": self.parent_code,
            "name": self.name,
        }


DERIVED_NAME_PREFIX = "ISDC "


@dataclass(frozen=True)
class Lineage:
    """Resolved L1/L2/L3 ancestry of an item code."""
    l1: ISDCNode
    l2: ISDCNode
    l3: ISDCNode


def _derived_node(code: str) -> ISDCNode:
    return ISDCNode(
        code=code,
        level=level_of(code),
        parent_code=parent_of(code),
        name=f"{DERIVED_NAME_PREFIX}{code}",
    )


class ISDCHierarchy:
    """
    Directed tree of ISDC nodes (edge parent -> child).

    Usage:
        hierarchy = ISDCHierarchy.from_table(ISDC_L1, ISDC_L2, ISDC_L3)
        lineage = hierarchy.lineage("04.0501")
        lineage.l1.code  # "04"

    The hierarchy is read-only once built and safe to share between
    aggregation calls.
    """

    def __init__(self):
        self._graph = nx.DiGraph()

    @classmethod
    def from_nodes(cls, nodes: Iterable[ISDCNode]) -> "ISDCHierarchy":
        """
        Build from nodes in any order.

        Raises:
            ConfigurationError: On a malformed code or a dangling parent
        """
        hierarchy = cls()
        pending = sorted(nodes, key=lambda n: (n.level, n.code))
        for node in pending:
            hierarchy._add(node)
        return hierarchy

    @classmethod
    def from_table(
        cls,
        l1: Mapping[str, Tuple[str, float]],
        l2: Optional[Mapping[str, Tuple[str, float]]] = None,
        l3: Optional[Mapping[str, Tuple[str, float]]] = None,
    ) -> "ISDCHierarchy":
        """Build from code -> (name, default contingency) tables."""
        nodes: List[ISDCNode] = []
        for table in (l1, l2 or {}, l3 or {}):
            for raw_code, (name, contingency) in table.items():
                code = canonical_code(raw_code)
                nodes.append(ISDCNode(
                    code=code,
                    level=level_of(code),
                    parent_code=parent_of(code),
                    name=name,
                    contingency_default=float(contingency),
                ))
        return cls.from_nodes(nodes)

    def _add(self, node: ISDCNode) -> None:
        if not node.code.isdigit() or len(node.code) % 2:
            raise ConfigurationError(f"Malformed ISDC code '{node.code}'", source=node.code)
        if node.code in self._graph:
            raise ConfigurationError(f"Duplicate ISDC code '{node.code}'", source=node.code)

        self._graph.add_node(node.code, node=node)
        if node.parent_code is not None:
            if node.parent_code not in self._graph:
                raise ConfigurationError(
                    f"ISDC code '{node.code}' has unknown parent '{node.parent_code}'",
                    source=node.code,
                )
            self._graph.add_edge(node.parent_code, node.code)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and canonical_code(code) in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def node(self, code: str) -> Optional[ISDCNode]:
        code = canonical_code(code)
        if code not in self._graph:
            return None
        return self._graph.nodes[code]["node"]

    def parent(self, code: str) -> Optional[ISDCNode]:
        code = canonical_code(code)
        if code not in self._graph:
            return None
        for parent_code in self._graph.predecessors(code):
            return self._graph.nodes[parent_code]["node"]
        return None

    def children(self, code: str) -> List[ISDCNode]:
        code = canonical_code(code)
        if code not in self._graph:
            return []
        return [self._graph.nodes[c]["node"] for c in sorted(self._graph.successors(code))]

    def roots(self) -> List[ISDCNode]:
        """All L1 principal activities, sorted by code."""
        return [
            self._graph.nodes[c]["node"]
            for c in sorted(self._graph.nodes)
            if self._graph.in_degree(c) == 0
        ]

    def lineage(self, code: Optional[str]) -> Optional[Lineage]:
        """
        Resolve an item's ISDC code to its L1/L2/L3 nodes.

        The L3 node is the item's own code (an item filed directly under an
        L2 code has that node as both L2 and L3). Codes absent from the
        table but well formed under a known L1 get derived nodes.

        Returns:
            Lineage, or None for a malformed code or unknown L1 prefix
        """
        code = canonical_code(code)
        if not is_well_formed(code):
            return None

        if code in self._graph:
            chain = [self._graph.nodes[code]["node"]]
            while True:
                parent = self.parent(chain[-1].code)
                if parent is None:
                    break
                chain.append(parent)
            chain.reverse()  # L1 first
            l1 = chain[0]
            l2 = chain[1] if len(chain) > 1 else chain[0]
            return Lineage(l1=l1, l2=l2, l3=chain[-1])

        l1 = self.node(code[:L1_CODE_LENGTH])
        if l1 is None:
            return None
        l2 = self.node(code[:L2_CODE_LENGTH]) or _derived_node(code[:L2_CODE_LENGTH])
        l3 = l2 if len(code) == L2_CODE_LENGTH else _derived_node(code)
        return Lineage(l1=l1, l2=l2, l3=l3)

    def to_dict(self) -> Dict[str, object]:
        return {
            "node_count": len(self),
            "roots": [n.code for n in self.roots()],
        }


@lru_cache(maxsize=1)
def default_hierarchy() -> ISDCHierarchy:
    """Seed ISDC tree (11 principal activities with their groups)."""
    hierarchy = ISDCHierarchy.from_table(ISDC_L1, ISDC_L2, ISDC_L3)
    logger.debug(f"Default ISDC hierarchy built: {len(hierarchy)} nodes")
    return hierarchy
