from __future__ import annotations

from typing import Any, Dict, Optional, Union

import networkx as nx

from .grid import GridModel
from .model import GraphModel


def build_nx_graph(
    model: GraphModel, directed: Optional[bool] = None
) -> Union[nx.MultiGraph, nx.MultiDiGraph]:
    """Multigraph view of ``model`` keyed by edge index.

    Parallel edges stay distinct, so A->B and B->A read as two edges
    when the graph is treated as undirected.
    """
    directed = model.directed if directed is None else directed
    g: Union[nx.MultiGraph, nx.MultiDiGraph] = nx.MultiDiGraph() if directed else nx.MultiGraph()

    # add nodes
    for node_id in model.node_ids():
        node = model.nodes[node_id]
        attrs: Dict[str, Any] = {"label": node.label, "color": node.color}
        g.add_node(node_id, **attrs)

    # add edges
    for idx, edge in enumerate(model.edges):
        g.add_edge(edge.source, edge.target, key=idx, weight=edge.weight)

    return g


def build_grid_graph(grid: GridModel) -> nx.Graph:
    """Open cells of ``grid`` as an undirected graph of row-major indices."""
    g: nx.Graph = nx.Graph()
    for idx in grid.open_cells():
        cell = grid.cells[idx]
        g.add_node(idx, x=cell.x, y=cell.y, weight=cell.weight)
    for idx in grid.open_cells():
        for nb in grid.neighbors(idx):
            g.add_edge(idx, nb)
    return g
