"""Seeded starting boards for the five games."""

from __future__ import annotations

import logging
import math
import random
import string
from typing import List, Optional, Tuple

from .grid import GridModel
from .model import GraphModel

logger = logging.getLogger(__name__)


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed)


def random_maze(
    width: int = 25,
    height: int = 15,
    wall_density: float = 0.3,
    seed: Optional[int] = None,
) -> GridModel:
    """Bordered maze with start at (1, 1) and end at (width-2, height-2).

    Interior cells become walls with probability ``wall_density``; the start
    and end cells never do. The end is not guaranteed to be reachable.
    """
    if width < 4 or height < 3:
        raise ValueError(f"Maze must be at least 4x3, got {width}x{height}")
    rng = _rng(seed)
    grid = GridModel(
        width=width,
        height=height,
        start=(1, 1),
        end=(width - 2, height - 2),
        bordered=True,
    )
    for c in grid.cells:
        if c.blocked or grid.is_marker(c.x, c.y):
            continue
        c.blocked = rng.random() < wall_density
    logger.debug(f"Generated {width}x{height} maze with {grid.size - len(grid.open_cells())} walls")
    return grid


def weighted_grid(
    width: int = 20,
    height: int = 12,
    heavy_ratio: float = 0.3,
    seed: Optional[int] = None,
) -> GridModel:
    """Open path-finder grid; about ``heavy_ratio`` of cells weigh 2..6."""
    if width < 6 or height < 1:
        raise ValueError(f"Path grid must be at least 6x1, got {width}x{height}")
    rng = _rng(seed)
    row = height // 2
    grid = GridModel(width=width, height=height, start=(2, row), end=(width - 3, row))
    for c in grid.cells:
        if rng.random() < heavy_ratio:
            c.weight = rng.randint(2, 6)
    return grid


def ring_graph(node_count: int = 8, extra_edges: int = 3, seed: Optional[int] = None) -> GraphModel:
    """Coloring board: a ring where each node joins the next two, plus chords.

    Chord attempts that hit an existing pair or a self-loop are skipped, so
    the graph may end up with fewer than ``extra_edges`` chords.
    """
    if node_count < 3:
        raise ValueError(f"Ring graph needs at least 3 nodes, got {node_count}")
    rng = _rng(seed)
    model = GraphModel()
    for i in range(node_count):
        model.add_node(str(i))

    for i in range(node_count):
        for step in (1, 2):
            j = (i + step) % node_count
            if i != j and model.find_edge(i, j) is None:
                model.add_edge(i, j)

    for _ in range(extra_edges):
        a = rng.randrange(node_count)
        b = rng.randrange(node_count)
        if a != b and model.find_edge(a, b) is None:
            model.add_edge(a, b)
    return model


def _circle_positions(
    node_count: int, rng: random.Random, radius: float = 120.0, jitter: float = 40.0
) -> List[Tuple[float, float]]:
    out = []
    for i in range(node_count):
        angle = i / node_count * 2 * math.pi
        r = radius + rng.random() * jitter
        out.append((math.cos(angle) * r, math.sin(angle) * r))
    return out


def complete_network(node_count: int = 6, seed: Optional[int] = None) -> GraphModel:
    """Network board: complete graph on A.. with distance-derived weights.

    weight = floor(distance / 10) + randint(0, 4) + 1, nodes on a jittered
    circle.
    """
    if not 2 <= node_count <= len(string.ascii_uppercase):
        raise ValueError(f"Network needs 2..26 nodes, got {node_count}")
    rng = _rng(seed)
    model = GraphModel.from_labels(string.ascii_uppercase[:node_count])
    pos = _circle_positions(node_count, rng)
    for i in range(node_count):
        for j in range(i + 1, node_count):
            dist = math.dist(pos[i], pos[j])
            model.add_edge(i, j, int(dist // 10) + rng.randint(0, 4) + 1)
    return model


def cycle_board(node_count: int = 5, directed: bool = True) -> GraphModel:
    """Cycle board: labelled nodes A.. and no edges; the player adds them."""
    if not 1 <= node_count <= len(string.ascii_uppercase):
        raise ValueError(f"Cycle board needs 1..26 nodes, got {node_count}")
    return GraphModel.from_labels(string.ascii_uppercase[:node_count], directed=directed)
