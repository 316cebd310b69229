from __future__ import annotations

from typing import Iterator, List

from graph.model import GraphModel

from ..models import AlgorithmKind, Outcome, StepSnapshot
from ..unionfind import UnionFind
from .base import BaseAlgorithm, RunContext


class KruskalMST(BaseAlgorithm):
    """Kruskal over every edge, one step per edge.

    Edges are taken as undirected and sorted by weight; equal weights keep
    their list order. A disconnected graph ends as a spanning forest.
    """

    kind = AlgorithmKind.KRUSKAL
    model_type = GraphModel

    def steps(self, model: GraphModel, ctx: RunContext) -> Iterator[StepSnapshot]:
        order = sorted(range(len(model.edges)), key=lambda i: model.edges[i].weight)
        uf = UnionFind(model.node_ids())
        required = len(model.nodes) - 1
        selected: List[int] = []
        rejected: List[int] = []
        total = 0

        if not order:
            yield self._finish(ctx, model, selected, rejected, total, required, None)
            return

        for n, idx in enumerate(order):
            edge = model.edges[idx]
            if uf.union(edge.source, edge.target):
                selected.append(idx)
                total += edge.weight
            else:
                rejected.append(idx)

            if n == len(order) - 1:
                yield self._finish(ctx, model, selected, rejected, total, required, idx)
                return
            yield self.snapshot(
                ctx,
                current_edge=idx,
                selected_edges=tuple(selected),
                rejected_edges=tuple(rejected),
                total_weight=total,
            )

    def _finish(self, ctx: RunContext, model: GraphModel, selected: List[int],
                rejected: List[int], total: int, required: int, idx) -> StepSnapshot:
        if len(selected) == required:
            outcome = Outcome.SPANNING_TREE
            message = f"Spanning tree with {len(selected)} edges, total weight {total}"
        else:
            outcome = Outcome.SPANNING_FOREST
            message = f"Graph is disconnected: {len(selected)} of {required} edges, total weight {total}"
        return self.snapshot(
            ctx,
            current_edge=idx,
            selected_edges=tuple(selected),
            rejected_edges=tuple(rejected),
            total_weight=total,
            cost=total,
            outcome=outcome,
            message=message,
        )
