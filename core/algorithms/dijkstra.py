from __future__ import annotations

import heapq
import math
from typing import Dict, Iterator, List, Optional, Set, Tuple

from graph.grid import GridModel

from ..models import AlgorithmKind, Outcome, StepSnapshot
from ..paths import reconstruct_path
from .base import BaseAlgorithm, RunContext


class DijkstraShortestPath(BaseAlgorithm):
    """Weighted grid shortest path.

    Entering a cell costs that cell's weight; the start cell is free. Cells
    are settled in (distance, row-major index) order, which the heap gives
    directly. Stale heap entries are skipped on pop.
    """

    kind = AlgorithmKind.DIJKSTRA
    model_type = GridModel

    def steps(self, grid: GridModel, ctx: RunContext) -> Iterator[StepSnapshot]:
        start, end = grid.start_index, grid.end_index
        dist: Dict[int, int] = {start: 0}
        back: Dict[int, Optional[int]] = {start: None}
        visited: Set[int] = set()
        heap: List[Tuple[int, int]] = [(0, start)]

        while heap:
            d, cell = heapq.heappop(heap)
            if cell in visited or d > dist[cell]:
                continue
            visited.add(cell)

            if cell == end:
                path = reconstruct_path(back, end)
                yield self.snapshot(
                    ctx,
                    current=cell,
                    visited=frozenset(visited),
                    frontier=self._frontier(heap, visited, dist),
                    path=tuple(path),
                    cost=d,
                    distances=dict(dist),
                    outcome=Outcome.FOUND,
                    message=f"Shortest path to {grid.end} costs {d} over {len(path)} cells",
                )
                return

            for nb in grid.neighbors(cell):
                if nb in visited:
                    continue
                nd = d + grid.cells[nb].weight
                if nd < dist.get(nb, math.inf):
                    dist[nb] = nd
                    back[nb] = cell
                    heapq.heappush(heap, (nd, nb))

            yield self.snapshot(
                ctx,
                current=cell,
                visited=frozenset(visited),
                frontier=self._frontier(heap, visited, dist),
                cost=d,
                distances=dict(dist),
            )

        yield self.snapshot(
            ctx,
            visited=frozenset(visited),
            distances=dict(dist),
            outcome=Outcome.UNREACHABLE,
            message=f"{grid.end} is unreachable from {grid.start}",
        )

    @staticmethod
    def _frontier(heap: List[Tuple[int, int]], visited: Set[int], dist: Dict[int, int]) -> Tuple[int, ...]:
        """Live heap entries in settle order"""
        return tuple(c for d, c in sorted(heap) if c not in visited and d == dist[c])
