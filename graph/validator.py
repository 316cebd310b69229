from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

import networkx as nx

from .builder import build_grid_graph
from .grid import GridModel
from .model import GraphModel
from .schema import ColoringReport, SpanningTreeReport, ValidationReport


def validate_grid(grid: GridModel) -> ValidationReport:
    warnings: List[str] = []
    errors: List[str] = []

    if grid.width < 1 or grid.height < 1:
        errors.append(f"Grid must be at least 1x1, got {grid.width}x{grid.height}")
        return ValidationReport(ok=False, errors=errors)
    if len(grid.cells) != grid.size:
        errors.append(f"Grid has {len(grid.cells)} cells, expected {grid.size}")
        return ValidationReport(ok=False, errors=errors)

    for name, pos in (("start", grid.start), ("end", grid.end)):
        if pos is None:
            errors.append(f"Missing {name} cell")
        elif not grid.in_bounds(*pos):
            errors.append(f"{name.capitalize()} cell {pos} is outside the grid")
        elif grid.cell(*pos).blocked:
            errors.append(f"{name.capitalize()} cell {pos} is blocked")
    if grid.start == grid.end:
        errors.append(f"Start and end share cell {grid.start}")

    light = [(c.x, c.y) for c in grid.cells if c.weight < 1]
    if light:
        errors.append(f"Cell weights must be positive integers: {light[:5]}")

    if grid.bordered:
        open_border = [(c.x, c.y) for c in grid.cells if grid.is_border(c.x, c.y) and not c.blocked]
        if open_border:
            errors.append(f"Border cells must stay blocked: {open_border[:5]}")

    unreachable_end = False
    if not errors:
        g = build_grid_graph(grid)
        if not nx.has_path(g, grid.start_index, grid.end_index):
            unreachable_end = True
            warnings.append(f"End {grid.end} is not reachable from start {grid.start}")

    return ValidationReport(
        ok=not errors,
        warnings=warnings,
        errors=errors,
        unreachable_end=unreachable_end,
    )


def validate_graph(model: GraphModel) -> ValidationReport:
    warnings: List[str] = []
    errors: List[str] = []

    if not model.nodes:
        errors.append("Graph has no nodes")

    for idx, edge in enumerate(model.edges):
        if edge.source not in model.nodes or edge.target not in model.nodes:
            errors.append(f"Edge {idx} references an unknown node: {edge.source} -> {edge.target}")
        elif edge.source == edge.target:
            errors.append(f"Edge {idx} is a self-loop on node {edge.source}")
        if edge.weight < 1:
            errors.append(f"Edge {idx} has non-positive weight {edge.weight}")
        for prev in range(idx):
            if model.edges[prev].joins(edge.source, edge.target, model.directed):
                errors.append(f"Edge {idx} duplicates edge {prev}: {edge.source} -> {edge.target}")
                break

    isolated = [n for n in model.node_ids() if model.degree(n) == 0]
    if isolated and model.edges:
        warnings.append(f"Isolated nodes: {[model.label(n) for n in isolated]}")

    return ValidationReport(
        ok=not errors,
        warnings=warnings,
        errors=errors,
        isolated_nodes=isolated,
    )


def find_conflicts(model: GraphModel, colors: Dict[int, int]) -> List[int]:
    conflicts: Set[int] = set()
    for edge in model.edges:
        a = colors.get(edge.source)
        if a is not None and a == colors.get(edge.target):
            conflicts.add(edge.source)
            conflicts.add(edge.target)
    return sorted(conflicts)


def check_coloring(model: GraphModel, colors: Optional[Dict[int, int]] = None) -> ColoringReport:
    """Score a (manual) coloring; defaults to the colors stored on the nodes."""
    colors = model.colors() if colors is None else dict(colors)
    return ColoringReport(
        colors=colors,
        conflicts=find_conflicts(model, colors),
        all_colored=all(n in colors for n in model.nodes),
        colors_used=len(set(colors.values())),
    )


def check_spanning_tree(
    model: GraphModel, edge_indices: Iterable[int], mst_cost: Optional[int] = None
) -> SpanningTreeReport:
    selected = sorted(set(edge_indices))
    reasons: List[str] = []
    required = max(len(model.nodes) - 1, 0)

    unknown = [i for i in selected if not 0 <= i < len(model.edges)]
    if unknown:
        reasons.append(f"Unknown edge indices: {unknown}")
        selected = [i for i in selected if i not in unknown]

    user_cost = sum(model.edges[i].weight for i in selected)
    if len(selected) != required:
        reasons.append(f"Spanning tree needs {required} edges, got {len(selected)}")

    reachable: List[int] = []
    if model.nodes:
        root = model.node_ids()[0]
        reachable = _reachable_from(model, root, selected)
        if len(reachable) != len(model.nodes):
            missing = [model.label(n) for n in model.node_ids() if n not in reachable]
            reasons.append(f"Not connected, unreachable from {model.label(root)}: {missing}")

    return SpanningTreeReport(
        valid=not reasons,
        edge_count=len(selected),
        required_edges=required,
        reachable_nodes=len(reachable),
        user_cost=user_cost,
        mst_cost=mst_cost,
        reasons=reasons,
    )


def _reachable_from(model: GraphModel, start: int, edge_indices: Iterable[int]) -> List[int]:
    adjacency: Dict[int, List[int]] = {n: [] for n in model.nodes}
    for idx in edge_indices:
        edge = model.edges[idx]
        adjacency[edge.source].append(edge.target)
        adjacency[edge.target].append(edge.source)

    visited = set()
    stack = [start]
    while stack:
        cur = stack.pop()
        if cur in visited:
            continue
        visited.add(cur)
        for nb in adjacency[cur]:
            if nb not in visited:
                stack.append(nb)
    return list(visited)
