from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .grid import GridModel
from .model import GraphModel
from .schema import Coord


def normalize_raw_to_graph(raw: Dict[str, Any], directed: bool = False) -> GraphModel:
    """Build a GraphModel from a plain adjacency mapping.

    ``raw`` maps a node label to either a list of neighbour labels or a dict
    with a ``next_nodes`` list whose items are labels or
    ``{"name": ..., "weight": ...}`` dicts. Labels only seen as targets are
    added as nodes too. Self references are dropped.
    """
    if not isinstance(raw, dict) or not raw:
        raise ValueError("Graph description must be a non-empty dict")

    model = GraphModel(directed=directed)
    ids: Dict[str, int] = {}

    def node_id(label: str) -> int:
        if label not in ids:
            ids[label] = model.add_node(label)
        return ids[label]

    for label in raw:
        node_id(str(label))

    for label, cfg in raw.items():
        source = node_id(str(label))
        next_nodes = cfg.get("next_nodes", []) if isinstance(cfg, dict) else (cfg or [])

        for nxt in next_nodes:
            if isinstance(nxt, dict):
                target_label = nxt.get("name")
                weight = int(nxt.get("weight", 1))
            else:
                target_label = nxt
                weight = 1

            if target_label is None or str(target_label) == str(label):
                continue  # empty target / self reference

            target = node_id(str(target_label))
            if model.find_edge(source, target) is not None:
                continue
            model.add_edge(source, target, weight)

    return model


def parse_grid(rows: Sequence[str], bordered: bool = False) -> GridModel:
    """Build a GridModel from text rows.

    ``#`` is a wall, ``S`` and ``E`` mark start and end, a digit sets the cell
    weight and anything else is an open cell of weight 1.
    """
    if not rows:
        raise ValueError("Grid needs at least one row")
    width = len(rows[0])
    if any(len(r) != width for r in rows):
        raise ValueError("All grid rows must have the same length")

    start: Optional[Coord] = None
    end: Optional[Coord] = None
    walls: List[Coord] = []
    weights: Dict[Coord, int] = {}
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch == "#":
                walls.append((x, y))
            elif ch == "S":
                start = (x, y)
            elif ch == "E":
                end = (x, y)
            elif ch.isdigit():
                weights[(x, y)] = int(ch)

    if start is None or end is None:
        raise ValueError("Grid rows must contain one 'S' and one 'E'")

    grid = GridModel(width=width, height=len(rows), start=start, end=end)
    grid.bordered = bordered
    for x, y in walls:
        grid.cell(x, y).blocked = True
    for (x, y), w in weights.items():
        grid.cell(x, y).weight = w
    return grid
