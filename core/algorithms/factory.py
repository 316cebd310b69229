from __future__ import annotations

import logging
from typing import Dict, Type, Union

from ..errors import UnknownAlgorithm
from ..models import AlgorithmKind
from .base import BaseAlgorithm
from .coloring import GreedyColoring
from .cycles import CycleDetector
from .dijkstra import DijkstraShortestPath
from .kruskal import KruskalMST
from .traversal import BFSTraversal, DFSTraversal

logger = logging.getLogger(__name__)


class AlgorithmFactory:
    """Registry of algorithm variants keyed by AlgorithmKind."""

    def __init__(self) -> None:
        self.algorithms: Dict[AlgorithmKind, Type[BaseAlgorithm]] = {
            AlgorithmKind.BFS: BFSTraversal,
            AlgorithmKind.DFS: DFSTraversal,
            AlgorithmKind.DIJKSTRA: DijkstraShortestPath,
            AlgorithmKind.GREEDY_COLORING: GreedyColoring,
            AlgorithmKind.KRUSKAL: KruskalMST,
            AlgorithmKind.CYCLE_DETECTION: CycleDetector,
        }
        self._cache: Dict[AlgorithmKind, BaseAlgorithm] = {}

    def get(self, kind: Union[str, AlgorithmKind]) -> BaseAlgorithm:
        kind = AlgorithmKind.from_string(kind)
        if kind not in self._cache:
            algorithm_cls = self.algorithms.get(kind)
            if algorithm_cls is None:
                raise UnknownAlgorithm(f"No algorithm registered for {kind.value!r}")
            self._cache[kind] = algorithm_cls()
        return self._cache[kind]

    def register(self, kind: Union[str, AlgorithmKind], algorithm_class: Type[BaseAlgorithm]):
        kind = AlgorithmKind.from_string(kind)
        self.algorithms[kind] = algorithm_class
        self._cache.pop(kind, None)
        logger.debug(f"Registered {algorithm_class.__name__} for {kind.value}")


algorithm_factory = AlgorithmFactory()
