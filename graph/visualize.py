from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import networkx as nx

from core.config import PALETTE

from .grid import GridModel
from .model import GraphModel

logger = logging.getLogger(__name__)

# Grid cell state -> color, first match wins in this order
GRID_COLORS: Dict[str, str] = {
    "start": "#22c55e",
    "end": "#ef4444",
    "path": "#facc15",
    "current": "#f97316",
    "frontier": "#c4b5fd",
    "visited": "#93c5fd",
    "wall": "#1f2937",
    "open": "#ffffff",
}

MARK_COLORS: Dict[str, str] = {
    "unvisited": "#D3D3D3",
    "in_progress": "#f59e0b",
    "done": "#22c55e",
}


def _grid_state(grid: GridModel, idx: int, snapshot: Any) -> str:
    x, y = grid.coord(idx)
    if (x, y) == grid.start:
        return "start"
    if (x, y) == grid.end:
        return "end"
    if snapshot is not None:
        if idx in snapshot.path:
            return "path"
        if idx == snapshot.current:
            return "current"
        if idx in snapshot.frontier:
            return "frontier"
        if idx in snapshot.visited:
            return "visited"
    return "wall" if grid.cells[idx].blocked else "open"


def draw_grid(grid: GridModel, snapshot: Any, save_path: str) -> None:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from matplotlib.colors import to_rgb
    from matplotlib.patches import Patch

    image = [
        [to_rgb(GRID_COLORS[_grid_state(grid, y * grid.width + x, snapshot)]) for x in range(grid.width)]
        for y in range(grid.height)
    ]

    fig, ax = plt.subplots(figsize=(max(grid.width / 2.5, 4), max(grid.height / 2.5, 3)))
    ax.imshow(image, interpolation="nearest")

    # Weights above 1 are written on the cell
    for c in grid.cells:
        if not c.blocked and c.weight > 1:
            ax.text(c.x, c.y, str(c.weight), ha="center", va="center", fontsize=7, color="#111111")

    ax.set_xticks([])
    ax.set_yticks([])
    handles = [Patch(facecolor=col, edgecolor="#444444", label=state) for state, col in GRID_COLORS.items()]
    ax.legend(handles=handles, loc="upper left", bbox_to_anchor=(1.02, 1), borderaxespad=0.0)
    _finish(fig, plt, snapshot, save_path)


def draw_graph(model: GraphModel, snapshot: Any, save_path: str,
               palette: Optional[List[str]] = None) -> None:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from matplotlib.patches import Patch

    palette = palette or PALETTE
    g: Union[nx.Graph, nx.DiGraph] = nx.DiGraph() if model.directed else nx.Graph()
    g.add_nodes_from(model.node_ids())
    edge_pairs: Dict[int, Tuple[int, int]] = {}
    for idx, edge in enumerate(model.edges):
        g.add_edge(edge.source, edge.target)
        edge_pairs[idx] = (edge.source, edge.target)
    pos = nx.circular_layout(g)

    # Node colors: coloring > DFS marks > stored manual color
    colors = dict(snapshot.colors) if snapshot is not None and snapshot.colors else model.colors()
    node_colors: List[str] = []
    for n in model.node_ids():
        if snapshot is not None and snapshot.marks:
            node_colors.append(MARK_COLORS[snapshot.marks[n].value])
        elif n in colors:
            node_colors.append(palette[colors[n] % len(palette)])
        else:
            node_colors.append("#D3D3D3")

    selected = set(snapshot.selected_edges) if snapshot is not None else set()
    rejected = set(snapshot.rejected_edges) if snapshot is not None else set()
    cycle = set(snapshot.cycle_edges) if snapshot is not None else set()

    fig, ax = plt.subplots(figsize=(8, 8))
    nx.draw_networkx_nodes(g, pos, ax=ax, node_color=node_colors, node_size=900,
                           edgecolors="#444444", linewidths=2)
    nx.draw_networkx_labels(g, pos, ax=ax, labels={n: model.label(n) for n in model.node_ids()},
                            font_size=11, font_weight="bold", font_color="#111111")

    groups = [
        ([edge_pairs[i] for i in edge_pairs if i in cycle], "#ef4444", 3.5, "solid"),
        ([edge_pairs[i] for i in edge_pairs if i in selected and i not in cycle], "#22c55e", 3.5, "solid"),
        ([edge_pairs[i] for i in edge_pairs if i in rejected], "#AAAAAA", 1.5, "dashed"),
        ([edge_pairs[i] for i in edge_pairs if i not in cycle | selected | rejected], "#555555", 2.0, "solid"),
    ]
    for edgelist, color, width, style in groups:
        if edgelist:
            nx.draw_networkx_edges(g, pos, ax=ax, edgelist=edgelist, edge_color=color, width=width,
                                   style=style, arrows=model.directed, arrowsize=20,
                                   connectionstyle="arc3,rad=0.08" if model.directed else "arc3")

    if any(e.weight != 1 for e in model.edges):
        nx.draw_networkx_edge_labels(
            g, pos, ax=ax,
            edge_labels={(e.source, e.target): str(e.weight) for e in model.edges},
            font_size=9,
            bbox=dict(boxstyle="round,pad=0.3", facecolor="white", edgecolor="gray", alpha=0.9),
        )

    handles = [
        Patch(facecolor="#ef4444", label="cycle"),
        Patch(facecolor="#22c55e", label="selected"),
        Patch(facecolor="#AAAAAA", label="rejected"),
    ]
    ax.legend(handles=handles, loc="lower left", bbox_to_anchor=(1.02, 0), borderaxespad=0.0)
    ax.axis("off")
    _finish(fig, plt, snapshot, save_path)


def draw_snapshot(model: Union[GridModel, GraphModel], snapshot: Any, save_path: str,
                  palette: Optional[List[str]] = None) -> None:
    """Render ``model`` with the state of ``snapshot`` (or none) to a PNG"""
    if isinstance(model, GridModel):
        draw_grid(model, snapshot, save_path)
    else:
        draw_graph(model, snapshot, save_path, palette=palette)
    logger.info(f"Snapshot rendered: {save_path}")


def _finish(fig, plt, snapshot: Any, save_path: str) -> None:
    if snapshot is not None:
        fig.suptitle(f"{snapshot.kind.value} step {snapshot.step}: {snapshot.message}", fontsize=10)
    fig.tight_layout()
    fig.savefig(save_path, dpi=150, bbox_inches="tight", facecolor="white", edgecolor="none")
    plt.close(fig)
