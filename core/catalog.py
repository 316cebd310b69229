from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import Field

from graph.generate import complete_network, cycle_board, random_maze, ring_graph, weighted_grid
from graph.grid import GridModel
from graph.model import GraphModel

from .config import EngineSettings
from .models import AlgorithmKind, BaseConfig


class GameInfo(BaseConfig):
    """Menu entry for one game"""
    id: str
    title: str
    description: str
    algorithm: str
    difficulty: Literal["Easy", "Medium", "Hard"]
    kinds: List[AlgorithmKind] = Field(default_factory=list)

    @property
    def default_kind(self) -> AlgorithmKind:
        return self.kinds[0]


GAMES: List[GameInfo] = [
    GameInfo(
        id="maze-solver",
        title="Maze Solver",
        description="Navigate through mazes using BFS and DFS algorithms. Compare their approaches and efficiency.",
        algorithm="BFS & DFS",
        difficulty="Easy",
        kinds=[AlgorithmKind.BFS, AlgorithmKind.DFS],
    ),
    GameInfo(
        id="path-finder",
        title="Path Finder",
        description="Find the shortest path between points using Dijkstra's algorithm on weighted graphs.",
        algorithm="Dijkstra's",
        difficulty="Medium",
        kinds=[AlgorithmKind.DIJKSTRA],
    ),
    GameInfo(
        id="graph-coloring",
        title="Graph Coloring",
        description="Color vertices so no adjacent vertices share the same color. Master greedy algorithms.",
        algorithm="Greedy Coloring",
        difficulty="Medium",
        kinds=[AlgorithmKind.GREEDY_COLORING],
    ),
    GameInfo(
        id="network-connector",
        title="Network Connector",
        description="Connect all nodes with minimum cost using Minimum Spanning Tree algorithms.",
        algorithm="MST (Kruskal)",
        difficulty="Hard",
        kinds=[AlgorithmKind.KRUSKAL],
    ),
    GameInfo(
        id="cycle-detector",
        title="Cycle Detective",
        description="Detect cycles in graphs and understand the mathematics behind cycle detection.",
        algorithm="DFS Cycle Detection",
        difficulty="Hard",
        kinds=[AlgorithmKind.CYCLE_DETECTION],
    ),
]


def get_game(game_id: str) -> GameInfo:
    for game in GAMES:
        if game.id == game_id:
            return game
    raise ValueError(f"Unknown game {game_id!r}; choose from {[g.id for g in GAMES]}")


def new_board(game_id: str, settings: Optional[EngineSettings] = None,
              seed: Optional[int] = None) -> Union[GridModel, GraphModel]:
    """Starting board for ``game_id``"""
    settings = settings or EngineSettings()
    game = get_game(game_id)
    if game.id == "maze-solver":
        return random_maze(settings.maze_width, settings.maze_height, settings.wall_density, seed=seed)
    if game.id == "path-finder":
        return weighted_grid(settings.path_width, settings.path_height, settings.heavy_ratio, seed=seed)
    if game.id == "graph-coloring":
        return ring_graph(seed=seed)
    if game.id == "network-connector":
        return complete_network(seed=seed)
    return cycle_board()
