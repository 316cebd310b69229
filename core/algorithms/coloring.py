from __future__ import annotations

from typing import Dict, Iterator, Optional, Set

from graph.builder import build_nx_graph
from graph.model import GraphModel
from graph.validator import find_conflicts

from ..models import AlgorithmKind, Outcome, StepSnapshot
from .base import BaseAlgorithm, RunContext


class GreedyColoring(BaseAlgorithm):
    """Ascending-id greedy coloring with the lowest free palette index.

    Manual colors on the model are ignored; the run starts uncolored.
    """

    kind = AlgorithmKind.GREEDY_COLORING
    model_type = GraphModel

    def steps(self, model: GraphModel, ctx: RunContext) -> Iterator[StepSnapshot]:
        g = build_nx_graph(model, directed=False)
        palette_size = ctx.options.palette_size
        colors: Dict[int, int] = {}
        order = model.node_ids()

        for i, node in enumerate(order):
            used: Set[int] = {colors[nb] for nb in g.neighbors(node) if nb in colors}
            free = self._lowest_free(used, palette_size)

            if free is None:
                yield self.snapshot(
                    ctx,
                    current=node,
                    visited=frozenset(colors),
                    colors=dict(colors),
                    colors_used=len(set(colors.values())),
                    outcome=Outcome.NO_COLOR_AVAILABLE,
                    message=f"No free color for {model.label(node)} with a palette of {palette_size}",
                )
                return

            colors[node] = free
            last = i == len(order) - 1
            fields = {}
            if last:
                used_count = len(set(colors.values()))
                fields = {
                    "outcome": Outcome.COLORED,
                    "message": f"Colored {len(colors)} nodes with {used_count} colors",
                }
            yield self.snapshot(
                ctx,
                current=node,
                visited=frozenset(colors),
                colors=dict(colors),
                conflicts=tuple(find_conflicts(model, colors)),
                colors_used=len(set(colors.values())),
                **fields,
            )

    @staticmethod
    def _lowest_free(used: Set[int], palette_size: int) -> Optional[int]:
        for color in range(palette_size):
            if color not in used:
                return color
        return None
