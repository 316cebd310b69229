from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterator, Optional, Set, Tuple

from graph.grid import GridModel

from ..models import AlgorithmKind, Outcome, StepSnapshot
from ..paths import reconstruct_path
from .base import BaseAlgorithm, RunContext


class GridSearch(BaseAlgorithm):
    """Unweighted grid search over (cell, predecessor) frontier entries.

    A cell's predecessor is fixed on its first visit; repeated frontier
    entries for a visited cell are dropped without a step.
    """

    model_type = GridModel
    lifo = False

    def steps(self, grid: GridModel, ctx: RunContext) -> Iterator[StepSnapshot]:
        start, end = grid.start_index, grid.end_index
        frontier: Deque[Tuple[int, Optional[int]]] = deque([(start, None)])
        visited: Set[int] = set()
        back: Dict[int, Optional[int]] = {}

        while frontier:
            cell, pred = frontier.pop() if self.lifo else frontier.popleft()
            if cell in visited:
                continue
            visited.add(cell)
            back[cell] = pred

            if cell == end:
                path = reconstruct_path(back, end)
                yield self.snapshot(
                    ctx,
                    current=cell,
                    visited=frozenset(visited),
                    frontier=self._frontier(frontier, visited),
                    path=tuple(path),
                    cost=len(path) - 1,
                    outcome=Outcome.FOUND,
                    message=f"Reached {grid.end} in {len(path) - 1} moves, {len(visited)} cells visited",
                )
                return

            for nb in grid.neighbors(cell):
                if nb not in visited:
                    frontier.append((nb, cell))

            yield self.snapshot(
                ctx,
                current=cell,
                visited=frozenset(visited),
                frontier=self._frontier(frontier, visited),
            )

        yield self.snapshot(
            ctx,
            visited=frozenset(visited),
            outcome=Outcome.NO_PATH,
            message=f"No path from {grid.start} to {grid.end}, {len(visited)} cells visited",
        )

    @staticmethod
    def _frontier(frontier: Deque[Tuple[int, Optional[int]]], visited: Set[int]) -> Tuple[int, ...]:
        """Unvisited frontier cells in queue order, each listed once"""
        return tuple(dict.fromkeys(c for c, _ in frontier if c not in visited))


class BFSTraversal(GridSearch):
    """FIFO frontier; the first path found has the fewest moves."""
    kind = AlgorithmKind.BFS
    lifo = False


class DFSTraversal(GridSearch):
    kind = AlgorithmKind.DFS
    lifo = True
