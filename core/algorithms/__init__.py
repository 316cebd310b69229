"""Stepwise algorithm variants and their registry"""

from .base import BaseAlgorithm, RunContext
from .coloring import GreedyColoring
from .cycles import CycleDetector
from .dijkstra import DijkstraShortestPath
from .factory import AlgorithmFactory, algorithm_factory
from .kruskal import KruskalMST
from .traversal import BFSTraversal, DFSTraversal

__all__ = [
    'BaseAlgorithm', 'RunContext',
    'BFSTraversal', 'DFSTraversal', 'DijkstraShortestPath',
    'GreedyColoring', 'KruskalMST', 'CycleDetector',
    'AlgorithmFactory', 'algorithm_factory',
]
