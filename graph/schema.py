from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

Coord = Tuple[int, int]


@dataclass
class Cell:
    x: int
    y: int
    blocked: bool = False
    weight: int = 1


@dataclass
class NodeDef:
    id: int
    label: str = ""
    color: Optional[int] = None

    @property
    def display_name(self) -> str:
        return self.label or str(self.id)


@dataclass
class EdgeDef:
    source: int
    target: int
    weight: int = 1

    def joins(self, a: int, b: int, directed: bool) -> bool:
        if self.source == a and self.target == b:
            return True
        return not directed and self.source == b and self.target == a


@dataclass
class ValidationReport:
    ok: bool
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    isolated_nodes: List[int] = field(default_factory=list)
    unreachable_end: bool = False


@dataclass
class ColoringReport:
    colors: Dict[int, int]
    conflicts: List[int]
    all_colored: bool
    colors_used: int

    @property
    def complete(self) -> bool:
        return self.all_colored and not self.conflicts


@dataclass
class SpanningTreeReport:
    valid: bool
    edge_count: int
    required_edges: int
    reachable_nodes: int
    user_cost: int
    mst_cost: Optional[int] = None
    reasons: List[str] = field(default_factory=list)

    @property
    def efficiency(self) -> Optional[float]:
        """mst_cost / user_cost for a valid selection, 1.0 meaning optimal."""
        if not self.valid or self.mst_cost is None:
            return None
        if self.user_cost == 0:
            # single-node graph: the empty selection is the tree
            return 1.0
        return self.mst_cost / self.user_cost
