from __future__ import annotations

import logging

from core.engine import StepEngine, solve
from core.models import AlgorithmKind
from graph.grid import GridModel
from graph.preprocess import normalize_raw_to_graph


def main() -> None:
    logging.basicConfig(level=logging.WARNING)

    print("=" * 60)
    print("Graph algorithm engine demo")
    print("=" * 60)

    # 5x5 open grid, corner to corner
    grid = GridModel(width=5, height=5, start=(0, 0), end=(4, 4))
    engine = StepEngine(grid)
    for kind in (AlgorithmKind.BFS, AlgorithmKind.DFS, AlgorithmKind.DIJKSTRA):
        result = engine.run(kind).drain()
        print(f"{kind.value:<9} {result.outcome.value:<6} length={result.path_length} "
              f"moves={result.moves} cost={result.cost} visited={len(result.visited)}")

    # Weighted triangle
    triangle = normalize_raw_to_graph({
        "A": [{"name": "B", "weight": 1}],
        "B": [{"name": "C", "weight": 2}],
        "C": [{"name": "A", "weight": 3}],
    })
    mst = solve(triangle, AlgorithmKind.KRUSKAL)
    picked = [f"{triangle.label(triangle.edges[i].source)}{triangle.label(triangle.edges[i].target)}"
              for i in mst.selected_edges]
    print(f"\nKruskal: {mst.outcome.value} edges={picked} total={mst.total_weight}")

    # Star coloring with two colors
    star = normalize_raw_to_graph({"hub": ["a", "b", "c", "d"]})
    coloring = solve(star, AlgorithmKind.GREEDY_COLORING, {"palette_size": 2})
    print(f"Coloring: {coloring.outcome.value} colors={dict(coloring.colors)} used={coloring.colors_used}")

    # A->B->A, directed and undirected
    pair = normalize_raw_to_graph({"A": ["B"], "B": ["A"]}, directed=True)
    for directed in (True, False):
        cycle = solve(pair, AlgorithmKind.CYCLE_DETECTION, {"directed": directed})
        print(f"Cycle (directed={directed}): {cycle.outcome.value} edges={list(cycle.cycle_edges)}")


if __name__ == "__main__":
    main()
