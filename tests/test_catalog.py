"""
Unit tests for the game catalog, board generators and settings.
"""

import pytest

from core.catalog import GAMES, get_game, new_board
from core.config import PALETTE, PALETTE_NAMES, EngineSettings, load_settings
from core.errors import ConfigurationError, UnknownAlgorithm
from core.models import AlgorithmKind
from graph.generate import complete_network, cycle_board, random_maze, ring_graph, weighted_grid
from graph.grid import GridModel
from graph.model import GraphModel
from graph.validator import validate_graph, validate_grid


class TestCatalog:
    """The five games."""

    def test_game_ids(self):
        assert [g.id for g in GAMES] == [
            "maze-solver", "path-finder", "graph-coloring", "network-connector", "cycle-detector",
        ]

    def test_difficulties(self):
        assert [g.difficulty for g in GAMES] == ["Easy", "Medium", "Medium", "Hard", "Hard"]

    def test_get_game(self):
        assert get_game("path-finder").default_kind == AlgorithmKind.DIJKSTRA

    def test_unknown_game(self):
        with pytest.raises(ValueError):
            get_game("tetris")

    @pytest.mark.parametrize("game_id,model_type", [
        ("maze-solver", GridModel),
        ("path-finder", GridModel),
        ("graph-coloring", GraphModel),
        ("network-connector", GraphModel),
        ("cycle-detector", GraphModel),
    ])
    def test_new_board_types(self, game_id, model_type):
        assert isinstance(new_board(game_id, seed=1), model_type)


class TestGenerators:
    """Seeded starting boards."""

    def test_maze_is_seeded(self):
        assert random_maze(seed=3) == random_maze(seed=3)
        assert random_maze(seed=3) != random_maze(seed=4)

    def test_maze_layout(self):
        maze = random_maze(seed=0)
        assert (maze.width, maze.height) == (25, 15)
        assert maze.start == (1, 1)
        assert maze.end == (23, 13)
        assert validate_grid(maze).ok

    def test_path_grid_layout(self):
        grid = weighted_grid(seed=0)
        assert grid.start == (2, 6)
        assert grid.end == (17, 6)
        assert all(1 <= c.weight <= 6 for c in grid.cells)
        assert any(c.weight > 1 for c in grid.cells)
        assert validate_grid(grid).ok

    def test_ring_graph(self):
        g = ring_graph(seed=0)
        assert len(g.nodes) == 8
        assert 16 <= len(g.edges) <= 19
        assert validate_graph(g).ok

    def test_complete_network(self):
        g = complete_network(seed=0)
        assert [g.label(n) for n in g.node_ids()] == list("ABCDEF")
        assert len(g.edges) == 15
        assert all(e.weight >= 1 for e in g.edges)

    def test_cycle_board(self):
        g = cycle_board()
        assert len(g.nodes) == 5
        assert g.edges == []
        assert g.directed


class TestSettings:
    """Environment-driven settings."""

    def test_defaults(self):
        settings = load_settings(env={})
        assert settings == EngineSettings()
        assert len(PALETTE) == len(PALETTE_NAMES) == settings.palette_size

    def test_env_values(self):
        settings = load_settings(env={"GRAPH_GAMES_MAZE_WIDTH": "31", "GRAPH_GAMES_STEP_DELAY": "0"})
        assert settings.maze_width == 31
        assert settings.step_delay == 0.0

    def test_overrides_win(self):
        settings = load_settings(env={"GRAPH_GAMES_PALETTE_SIZE": "3"}, palette_size=5)
        assert settings.palette_size == 5

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError):
            load_settings(env={"GRAPH_GAMES_WALL_DENSITY": "2.5"})


class TestAlgorithmKind:
    """Name and alias lookup."""

    @pytest.mark.parametrize("name,kind", [
        ("bfs", AlgorithmKind.BFS),
        ("DFS", AlgorithmKind.DFS),
        ("shortest-path", AlgorithmKind.DIJKSTRA),
        ("mst", AlgorithmKind.KRUSKAL),
        ("coloring", AlgorithmKind.GREEDY_COLORING),
        ("cycle detector", AlgorithmKind.CYCLE_DETECTION),
    ])
    def test_aliases(self, name, kind):
        assert AlgorithmKind.from_string(name) == kind

    def test_unknown(self):
        with pytest.raises(UnknownAlgorithm):
            AlgorithmKind.from_string("astar")
