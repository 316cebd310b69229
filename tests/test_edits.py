"""
Unit tests for edit parsing and validation.
"""

import pytest

from core.edits import AddEdge, EditApplier, ToggleWall, parse_edit
from core.errors import InvalidEdit
from graph.grid import GridModel
from graph.model import GraphModel


@pytest.fixture
def applier() -> EditApplier:
    return EditApplier(palette_size=4)


@pytest.fixture
def maze() -> GridModel:
    return GridModel(width=5, height=5, start=(1, 1), end=(3, 3), bordered=True)


class TestParseEdit:
    """Discriminated union on ``op``."""

    def test_builds_model(self):
        edit = parse_edit({"op": "toggle_wall", "x": 1, "y": 2})
        assert isinstance(edit, ToggleWall)
        assert (edit.x, edit.y) == (1, 2)

    def test_passes_models_through(self):
        edit = AddEdge(source=0, target=1)
        assert parse_edit(edit) is edit

    @pytest.mark.parametrize("data", [
        {"op": "teleport"},
        {"op": "toggle_wall", "x": 1},
        {"op": "add_edge", "source": 0, "target": 1, "color": 3},
        {"x": 1, "y": 1},
    ])
    def test_malformed(self, data):
        with pytest.raises(InvalidEdit):
            parse_edit(data)


class TestGridEdits:
    """Walls and weights."""

    def test_toggle_wall_twice(self, applier, maze):
        applier.apply(maze, {"op": "toggle_wall", "x": 2, "y": 2})
        assert maze.cell(2, 2).blocked
        applier.apply(maze, {"op": "toggle_wall", "x": 2, "y": 2})
        assert not maze.cell(2, 2).blocked

    @pytest.mark.parametrize("x,y", [(1, 1), (3, 3)])
    def test_markers_protected(self, applier, maze, x, y):
        with pytest.raises(InvalidEdit) as exc:
            applier.apply(maze, {"op": "toggle_wall", "x": x, "y": y})
        assert "marker" in exc.value.reason

    def test_border_protected(self, applier, maze):
        with pytest.raises(InvalidEdit):
            applier.apply(maze, {"op": "toggle_wall", "x": 0, "y": 2})
        assert maze.cell(0, 2).blocked

    def test_border_editable_when_not_bordered(self, applier, open_grid):
        applier.apply(open_grid, {"op": "toggle_wall", "x": 0, "y": 2})
        assert open_grid.cell(0, 2).blocked

    def test_out_of_bounds(self, applier, maze):
        with pytest.raises(InvalidEdit):
            applier.apply(maze, {"op": "toggle_wall", "x": 9, "y": 9})

    def test_set_weight(self, applier, maze):
        applier.apply(maze, {"op": "set_weight", "x": 2, "y": 2, "weight": 5})
        assert maze.cell(2, 2).weight == 5

    def test_non_positive_weight(self, applier, maze):
        with pytest.raises(InvalidEdit):
            applier.apply(maze, {"op": "set_weight", "x": 2, "y": 2, "weight": 0})
        assert maze.cell(2, 2).weight == 1

    def test_grid_edit_on_graph(self, applier, triangle):
        with pytest.raises(InvalidEdit):
            applier.apply(triangle, {"op": "toggle_wall", "x": 0, "y": 0})


class TestGraphEdits:
    """Edges and colors."""

    def test_add_edge_returns_index(self, applier):
        g = GraphModel.from_labels("ABC")
        assert applier.apply(g, {"op": "add_edge", "source": 0, "target": 2, "weight": 3}) == 0
        assert g.edges[0].weight == 3

    def test_duplicate_undirected(self, applier, triangle):
        with pytest.raises(InvalidEdit):
            applier.apply(triangle, {"op": "add_edge", "source": 1, "target": 0})
        assert len(triangle.edges) == 3

    def test_reverse_allowed_when_directed(self, applier, directed_cycle):
        applier.apply(directed_cycle, {"op": "add_edge", "source": 1, "target": 0})
        with pytest.raises(InvalidEdit):
            applier.apply(directed_cycle, {"op": "add_edge", "source": 0, "target": 1})

    def test_self_loop(self, applier, triangle):
        with pytest.raises(InvalidEdit):
            applier.apply(triangle, {"op": "add_edge", "source": 1, "target": 1})

    def test_unknown_node(self, applier, triangle):
        with pytest.raises(InvalidEdit):
            applier.apply(triangle, {"op": "add_edge", "source": 0, "target": 8})

    def test_remove_by_index_and_endpoints(self, applier, triangle):
        applier.apply(triangle, {"op": "remove_edge", "index": 0})
        applier.apply(triangle, {"op": "remove_edge", "source": 0, "target": 2})
        assert [(e.source, e.target) for e in triangle.edges] == [(1, 2)]

    def test_remove_missing(self, applier, triangle):
        with pytest.raises(InvalidEdit):
            applier.apply(triangle, {"op": "remove_edge", "index": 5})
        with pytest.raises(InvalidEdit):
            applier.apply(triangle, {"op": "remove_edge"})

    def test_color_outside_palette(self, applier, triangle):
        with pytest.raises(InvalidEdit):
            applier.apply(triangle, {"op": "assign_manual_color", "node": 0, "color": 4})
        assert triangle.nodes[0].color is None

    def test_set_and_clear_node_color(self, applier, triangle):
        applier.apply(triangle, {"op": "set_node_color", "node": 0, "color": 2})
        assert triangle.nodes[0].color == 2
        applier.apply(triangle, {"op": "set_node_color", "node": 0})
        assert triangle.nodes[0].color is None

    def test_clear_colors(self, applier, star):
        for n in star.node_ids():
            applier.apply(star, {"op": "assign_manual_color", "node": n, "color": 1})
        applier.apply(star, {"op": "clear_colors"})
        assert star.colors() == {}

    def test_clear_edges_keeps_nodes(self, applier, triangle):
        applier.apply(triangle, {"op": "clear_edges"})
        assert triangle.edges == []
        assert len(triangle.nodes) == 3

    def test_set_directed_round_trip(self, applier, triangle):
        applier.apply(triangle, {"op": "set_directed", "directed": True})
        assert triangle.directed
        applier.apply(triangle, {"op": "set_directed", "directed": False})
        assert not triangle.directed

    def test_undirected_switch_rejected_on_opposite_pair(self, applier, two_way_pair):
        with pytest.raises(InvalidEdit):
            applier.apply(two_way_pair, {"op": "set_directed", "directed": False})
        assert two_way_pair.directed

    def test_graph_edit_on_grid(self, applier, maze):
        with pytest.raises(InvalidEdit):
            applier.apply(maze, {"op": "clear_colors"})
