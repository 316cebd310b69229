"""
Graph package: grid and node/edge models, validation, generators and rendering
"""

from .schema import Cell, NodeDef, EdgeDef, ValidationReport, ColoringReport, SpanningTreeReport
from .grid import GridModel
from .model import GraphModel
from .validator import validate_grid, validate_graph, check_coloring, check_spanning_tree
from .preprocess import normalize_raw_to_graph, parse_grid
from .builder import build_nx_graph, build_grid_graph
from .generate import random_maze, weighted_grid, ring_graph, complete_network, cycle_board
from .visualize import draw_snapshot

__all__ = [
    'Cell', 'NodeDef', 'EdgeDef', 'ValidationReport', 'ColoringReport', 'SpanningTreeReport',
    'GridModel', 'GraphModel',
    'validate_grid', 'validate_graph', 'check_coloring', 'check_spanning_tree',
    'normalize_raw_to_graph', 'parse_grid',
    'build_nx_graph', 'build_grid_graph',
    'random_maze', 'weighted_grid', 'ring_graph', 'complete_network', 'cycle_board',
    'draw_snapshot',
]
