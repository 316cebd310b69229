"""
Unit tests for weighted grid shortest path.
"""

import networkx as nx
import pytest

from core.algorithms import BFSTraversal, DijkstraShortestPath
from core.models import Outcome
from graph.builder import build_grid_graph
from graph.generate import weighted_grid


def dijkstra(grid):
    return list(DijkstraShortestPath().run(grid))


def oracle_cost(grid):
    """Entering a cell costs its weight: directed view of the grid graph."""
    g = build_grid_graph(grid).to_directed()
    for u, v in g.edges():
        g[u][v]["cost"] = grid.cells[v].weight
    return nx.dijkstra_path_length(g, grid.start_index, grid.end_index, weight="cost")


class TestDijkstra:
    """Dijkstra over cell weights."""

    def test_uniform_grid_matches_bfs(self, open_grid):
        result = dijkstra(open_grid)[-1]
        bfs = list(BFSTraversal().run(open_grid))[-1]
        assert result.outcome == Outcome.FOUND
        assert result.path_length == 9
        assert result.cost == 8
        assert result.path_length == bfs.path_length

    def test_prefers_cheap_detour(self, corridor_grid):
        result = dijkstra(corridor_grid)[-1]
        assert result.cost == 5
        assert result.path_length == 6
        bfs = list(BFSTraversal().run(corridor_grid))[-1]
        assert bfs.path_length == 4

    def test_cost_is_sum_of_weights_after_start(self, corridor_grid):
        result = dijkstra(corridor_grid)[-1]
        assert result.cost == sum(corridor_grid.cells[i].weight for i in result.path[1:])

    def test_ties_break_by_index(self, open_grid):
        """(1, 0) and (0, 1) both sit at distance 1; the lower index settles first."""
        snaps = dijkstra(open_grid)
        assert snaps[0].current == open_grid.start_index
        assert snaps[1].current == open_grid.index(1, 0)
        assert snaps[2].current == open_grid.index(0, 1)

    def test_distances_start_at_zero(self, open_grid):
        first = dijkstra(open_grid)[0]
        assert first.distances[open_grid.start_index] == 0
        assert first.frontier == (open_grid.index(1, 0), open_grid.index(0, 1))

    def test_unreachable(self, walled_grid):
        result = dijkstra(walled_grid)[-1]
        assert result.outcome == Outcome.UNREACHABLE
        assert result.path == ()
        assert walled_grid.end_index not in result.distances

    def test_start_weight_ignored(self, open_grid):
        open_grid.cell(0, 0).weight = 6
        assert dijkstra(open_grid)[-1].cost == 8

    @pytest.mark.parametrize("seed", range(10))
    def test_cost_is_minimal(self, seed):
        grid = weighted_grid(seed=seed)
        result = dijkstra(grid)[-1]
        assert result.outcome == Outcome.FOUND
        assert result.cost == oracle_cost(grid)
