from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from graph.builder import build_nx_graph
from graph.model import GraphModel

from ..models import AlgorithmKind, DfsMark, Outcome, StepSnapshot
from .base import BaseAlgorithm, RunContext


class CycleDetector(BaseAlgorithm):
    """Tri-color DFS that stops at the first cycle.

    Directed: an edge into an in-progress node closes a cycle. Undirected:
    any edge into a visited node closes one unless it is the very edge
    used to arrive, so two parallel edges between A and B count.
    """

    kind = AlgorithmKind.CYCLE_DETECTION
    model_type = GraphModel

    def steps(self, model: GraphModel, ctx: RunContext) -> Iterator[StepSnapshot]:
        directed = model.directed if ctx.options.directed is None else ctx.options.directed
        g = build_nx_graph(model, directed=directed)

        marks: Dict[int, DfsMark] = {n: DfsMark.UNVISITED for n in model.node_ids()}
        parent: Dict[int, Optional[int]] = {}
        incoming: Dict[int, Optional[int]] = {}

        for root in model.node_ids():
            if marks[root] != DfsMark.UNVISITED:
                continue
            marks[root] = DfsMark.IN_PROGRESS
            parent[root] = None
            incoming[root] = None
            yield self._step(ctx, marks, root, None)
            stack = [(root, iter(self._incident(g, root)))]

            while stack:
                node, edges = stack[-1]
                descended = False
                for nb, idx in edges:
                    if not directed and idx == incoming[node]:
                        continue
                    mark = marks[nb]
                    closes = mark == DfsMark.IN_PROGRESS if directed else mark != DfsMark.UNVISITED
                    if closes:
                        cycle = self._cycle_edges(parent, incoming, node, nb) + [idx]
                        names = " -> ".join(model.label(n) for n in self._cycle_nodes(parent, node, nb))
                        yield self._step(
                            ctx, marks, node, idx,
                            closing_edge=idx,
                            cycle_edges=tuple(cycle),
                            outcome=Outcome.CYCLE,
                            message=f"Cycle found: {names} -> {model.label(nb)}",
                        )
                        return
                    if mark == DfsMark.UNVISITED:
                        marks[nb] = DfsMark.IN_PROGRESS
                        parent[nb] = node
                        incoming[nb] = idx
                        yield self._step(ctx, marks, nb, idx)
                        stack.append((nb, iter(self._incident(g, nb))))
                        descended = True
                        break
                if not descended:
                    stack.pop()
                    marks[node] = DfsMark.DONE
                    yield self._step(ctx, marks, node, incoming[node])

        mode = "directed" if directed else "undirected"
        yield self._step(
            ctx, marks, None, None,
            outcome=Outcome.NO_CYCLE,
            message=f"No cycle in the {mode} graph",
        )

    def _step(self, ctx: RunContext, marks: Dict[int, DfsMark], node: Optional[int],
              edge: Optional[int], **fields) -> StepSnapshot:
        return self.snapshot(
            ctx,
            current=node,
            current_edge=edge,
            visited=frozenset(n for n, m in marks.items() if m != DfsMark.UNVISITED),
            marks=dict(marks),
            **fields,
        )

    @staticmethod
    def _incident(g, node: int) -> List[Tuple[int, int]]:
        """Outgoing (neighbor, edge index) pairs in edge-index order"""
        return sorted(((v, k) for _, v, k in g.edges(node, keys=True)), key=lambda t: t[1])

    @staticmethod
    def _cycle_edges(parent: Dict[int, Optional[int]], incoming: Dict[int, Optional[int]],
                     node: int, ancestor: int) -> List[int]:
        edges: List[int] = []
        cur: Optional[int] = node
        while cur is not None and cur != ancestor:
            edges.append(incoming[cur])
            cur = parent[cur]
        edges.reverse()
        return edges

    @staticmethod
    def _cycle_nodes(parent: Dict[int, Optional[int]], node: int, ancestor: int) -> List[int]:
        nodes: List[int] = []
        cur: Optional[int] = node
        while cur is not None:
            nodes.append(cur)
            if cur == ancestor:
                break
            cur = parent[cur]
        nodes.reverse()
        return nodes
