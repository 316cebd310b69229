"""
Pytest configuration and shared fixtures.

Boards used across the test modules: small grids and graphs whose
algorithm results are easy to work out by hand.
"""

import pytest

from graph.grid import GridModel
from graph.model import GraphModel
from graph.preprocess import normalize_raw_to_graph, parse_grid


@pytest.fixture
def open_grid() -> GridModel:
    """5x5 grid with no walls, start top-left and end bottom-right."""
    return GridModel(width=5, height=5, start=(0, 0), end=(4, 4))


@pytest.fixture
def walled_grid() -> GridModel:
    """Grid whose end is sealed off by walls."""
    return parse_grid([
        "S..#.",
        "...#.",
        "...#E",
    ])


@pytest.fixture
def corridor_grid() -> GridModel:
    """Grid with a cheap detour around an expensive straight line."""
    return parse_grid([
        "S99E",
        "....",
    ])


@pytest.fixture
def triangle() -> GraphModel:
    """Undirected triangle A-B (1), B-C (2), C-A (3)."""
    return normalize_raw_to_graph({
        "A": [{"name": "B", "weight": 1}],
        "B": [{"name": "C", "weight": 2}],
        "C": [{"name": "A", "weight": 3}],
    })


@pytest.fixture
def star() -> GraphModel:
    """Center node 0 joined to four leaves."""
    return normalize_raw_to_graph({"center": ["l1", "l2", "l3", "l4"]})


@pytest.fixture
def directed_cycle() -> GraphModel:
    """Directed A->B, B->C, C->A."""
    return normalize_raw_to_graph({"A": ["B"], "B": ["C"], "C": ["A"]}, directed=True)


@pytest.fixture
def two_way_pair() -> GraphModel:
    """Directed A->B and B->A."""
    return normalize_raw_to_graph({"A": ["B"], "B": ["A"]}, directed=True)
