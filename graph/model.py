from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from .schema import EdgeDef, NodeDef


@dataclass
class GraphModel:
    """Node/edge graph used by the coloring, network and cycle games.

    Edges are kept in insertion order; an edge's index in ``edges`` is its
    identity in snapshots and edit operations.
    """

    nodes: Dict[int, NodeDef] = field(default_factory=dict)
    edges: List[EdgeDef] = field(default_factory=list)
    directed: bool = False

    @classmethod
    def from_labels(cls, labels: Iterable[str], directed: bool = False) -> "GraphModel":
        g = cls(directed=directed)
        for label in labels:
            g.add_node(label)
        return g

    def node_ids(self) -> List[int]:
        return sorted(self.nodes)

    def add_node(self, label: str = "") -> int:
        node_id = max(self.nodes) + 1 if self.nodes else 0
        self.nodes[node_id] = NodeDef(id=node_id, label=label)
        return node_id

    def id_for(self, label: str) -> int:
        for node in self.nodes.values():
            if node.label == label:
                return node.id
        raise KeyError(f"No node labelled {label!r}")

    def find_edge(self, source: int, target: int, directed: Optional[bool] = None) -> Optional[int]:
        directed = self.directed if directed is None else directed
        for idx, edge in enumerate(self.edges):
            if edge.joins(source, target, directed):
                return idx
        return None

    def add_edge(self, source: int, target: int, weight: int = 1) -> int:
        self.edges.append(EdgeDef(source=source, target=target, weight=weight))
        return len(self.edges) - 1

    def remove_edge(self, idx: int) -> EdgeDef:
        return self.edges.pop(idx)

    def neighbors(self, node_id: int) -> List[int]:
        """Undirected neighbours of ``node_id`` in ascending id order."""
        out: Set[int] = set()
        for edge in self.edges:
            if edge.source == node_id:
                out.add(edge.target)
            elif edge.target == node_id:
                out.add(edge.source)
        return sorted(out)

    def degree(self, node_id: int) -> int:
        return len(self.neighbors(node_id))

    def max_degree(self) -> int:
        return max((self.degree(n) for n in self.nodes), default=0)

    def colors(self) -> Dict[int, int]:
        return {n.id: n.color for n in self.nodes.values() if n.color is not None}

    def label(self, node_id: int) -> str:
        node = self.nodes.get(node_id)
        return node.display_name if node else str(node_id)

    def copy(self) -> "GraphModel":
        return copy.deepcopy(self)
