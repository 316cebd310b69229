"""
Smoke tests for PNG rendering.
"""

from core.engine import StepEngine
from graph.visualize import draw_snapshot


class TestDrawSnapshot:
    """Files are written for both model shapes."""

    def test_grid(self, tmp_path, corridor_grid):
        result = StepEngine(corridor_grid).run("dijkstra").drain()
        out = tmp_path / "grid.png"
        draw_snapshot(corridor_grid, result, str(out))
        assert out.exists() and out.stat().st_size > 0

    def test_graph(self, tmp_path, directed_cycle):
        result = StepEngine(directed_cycle).run("cycle_detection").drain()
        out = tmp_path / "graph.png"
        draw_snapshot(directed_cycle, result, str(out))
        assert out.exists() and out.stat().st_size > 0

    def test_without_snapshot(self, tmp_path, triangle):
        out = tmp_path / "plain.png"
        draw_snapshot(triangle, None, str(out))
        assert out.exists()
