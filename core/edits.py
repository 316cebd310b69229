from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from graph.grid import GridModel
from graph.model import GraphModel
from graph.schema import ColoringReport
from graph.validator import check_coloring

from .errors import InvalidEdit

logger = logging.getLogger(__name__)


# ============================================================================
# Edit Operations
# ============================================================================

class EditOp(BaseModel):
    """Base for edit operations"""
    model_config = ConfigDict(extra="forbid", frozen=True)


class ToggleWall(EditOp):
    op: Literal["toggle_wall"] = "toggle_wall"
    x: int
    y: int


class SetWeight(EditOp):
    op: Literal["set_weight"] = "set_weight"
    x: int
    y: int
    weight: int


class AddEdge(EditOp):
    op: Literal["add_edge"] = "add_edge"
    source: int
    target: int
    weight: int = 1


class RemoveEdge(EditOp):
    """Remove by edge index, or by endpoints when ``index`` is omitted"""
    op: Literal["remove_edge"] = "remove_edge"
    index: Optional[int] = None
    source: Optional[int] = None
    target: Optional[int] = None


class SetNodeColor(EditOp):
    """Set or clear (``color=None``) a node's stored color"""
    op: Literal["set_node_color"] = "set_node_color"
    node: int
    color: Optional[int] = None


class AssignManualColor(EditOp):
    """Player move in manual coloring; answers with a ColoringReport"""
    op: Literal["assign_manual_color"] = "assign_manual_color"
    node: int
    color: int


class ClearColors(EditOp):
    op: Literal["clear_colors"] = "clear_colors"


class ClearEdges(EditOp):
    op: Literal["clear_edges"] = "clear_edges"


class SetDirected(EditOp):
    """Switch between directed and undirected edge semantics"""
    op: Literal["set_directed"] = "set_directed"
    directed: bool


Edit = Annotated[
    Union[
        ToggleWall, SetWeight, AddEdge, RemoveEdge, SetNodeColor, AssignManualColor, ClearColors,
        ClearEdges, SetDirected,
    ],
    Field(discriminator="op"),
]

_edit_adapter: TypeAdapter = TypeAdapter(Edit)


def parse_edit(data: Union[Dict[str, Any], EditOp]) -> EditOp:
    """Build an edit operation from plain data like ``{"op": "toggle_wall", "x": 1, "y": 2}``"""
    if isinstance(data, EditOp):
        return data
    try:
        return _edit_adapter.validate_python(data)
    except ValidationError as e:
        raise InvalidEdit(f"Malformed edit {data!r}: {e.errors()[0].get('msg', e)}") from e


# ============================================================================
# Edit Applier
# ============================================================================

class EditApplier:
    """Validates an edit against the model, then applies it.

    Every check runs before the first mutation, so a rejected edit leaves
    the model untouched.
    """

    def __init__(self, palette_size: int = 8):
        self.palette_size = palette_size
        self.operators = {
            'toggle_wall': self._toggle_wall,
            'set_weight': self._set_weight,
            'add_edge': self._add_edge,
            'remove_edge': self._remove_edge,
            'set_node_color': self._set_node_color,
            'assign_manual_color': self._assign_manual_color,
            'clear_colors': self._clear_colors,
            'clear_edges': self._clear_edges,
            'set_directed': self._set_directed,
        }

    def apply(self, model: Union[GridModel, GraphModel], edit: Union[Dict[str, Any], EditOp]) -> Any:
        """Apply ``edit`` to ``model``.

        Returns the new edge index for ``add_edge``, a ColoringReport for
        ``assign_manual_color`` and None otherwise. Raises InvalidEdit.
        """
        edit = parse_edit(edit)
        handler = self.operators.get(edit.op)
        if handler is None:
            raise InvalidEdit(f"Unsupported edit: {edit.op}")
        result = handler(model, edit)
        logger.debug(f"Applied {edit.op}: {edit.model_dump(exclude={'op'})}")
        return result

    # ----------------------------------------------------------------
    # Grid edits
    # ----------------------------------------------------------------

    def _require_grid(self, model, op: str) -> GridModel:
        if not isinstance(model, GridModel):
            raise InvalidEdit(f"{op} applies to grids only")
        return model

    def _require_cell(self, grid: GridModel, x: int, y: int) -> None:
        if not grid.in_bounds(x, y):
            raise InvalidEdit(f"Cell ({x}, {y}) is outside the {grid.width}x{grid.height} grid")

    def _toggle_wall(self, model, edit: ToggleWall) -> None:
        grid = self._require_grid(model, edit.op)
        self._require_cell(grid, edit.x, edit.y)
        if grid.is_marker(edit.x, edit.y):
            raise InvalidEdit(f"Cell ({edit.x}, {edit.y}) holds the start or end marker")
        if grid.bordered and grid.is_border(edit.x, edit.y):
            raise InvalidEdit(f"Border cell ({edit.x}, {edit.y}) must stay a wall")
        cell = grid.cell(edit.x, edit.y)
        cell.blocked = not cell.blocked

    def _set_weight(self, model, edit: SetWeight) -> None:
        grid = self._require_grid(model, edit.op)
        self._require_cell(grid, edit.x, edit.y)
        if edit.weight < 1:
            raise InvalidEdit(f"Weight must be a positive integer, got {edit.weight}")
        grid.cell(edit.x, edit.y).weight = edit.weight

    # ----------------------------------------------------------------
    # Graph edits
    # ----------------------------------------------------------------

    def _require_graph(self, model, op: str) -> GraphModel:
        if not isinstance(model, GraphModel):
            raise InvalidEdit(f"{op} applies to graphs only")
        return model

    def _require_node(self, graph: GraphModel, node: int) -> None:
        if node not in graph.nodes:
            raise InvalidEdit(f"Unknown node {node}")

    def _require_color(self, color: int) -> None:
        if not 0 <= color < self.palette_size:
            raise InvalidEdit(f"Color {color} is outside the palette of {self.palette_size}")

    def _add_edge(self, model, edit: AddEdge) -> int:
        graph = self._require_graph(model, edit.op)
        self._require_node(graph, edit.source)
        self._require_node(graph, edit.target)
        if edit.source == edit.target:
            raise InvalidEdit(f"Self-loop on node {graph.label(edit.source)}")
        if edit.weight < 1:
            raise InvalidEdit(f"Weight must be a positive integer, got {edit.weight}")
        if graph.find_edge(edit.source, edit.target) is not None:
            arrow = "->" if graph.directed else "-"
            raise InvalidEdit(
                f"Edge {graph.label(edit.source)}{arrow}{graph.label(edit.target)} already exists"
            )
        return graph.add_edge(edit.source, edit.target, edit.weight)

    def _remove_edge(self, model, edit: RemoveEdge) -> None:
        graph = self._require_graph(model, edit.op)
        idx = edit.index
        if idx is None:
            if edit.source is None or edit.target is None:
                raise InvalidEdit("remove_edge needs an index or both endpoints")
            idx = graph.find_edge(edit.source, edit.target)
            if idx is None:
                raise InvalidEdit(f"No edge between {edit.source} and {edit.target}")
        elif not 0 <= idx < len(graph.edges):
            raise InvalidEdit(f"Unknown edge index {idx}")
        graph.remove_edge(idx)

    def _set_node_color(self, model, edit: SetNodeColor) -> None:
        graph = self._require_graph(model, edit.op)
        self._require_node(graph, edit.node)
        if edit.color is not None:
            self._require_color(edit.color)
        graph.nodes[edit.node].color = edit.color

    def _assign_manual_color(self, model, edit: AssignManualColor) -> ColoringReport:
        graph = self._require_graph(model, edit.op)
        self._require_node(graph, edit.node)
        self._require_color(edit.color)
        graph.nodes[edit.node].color = edit.color
        return check_coloring(graph)

    def _clear_colors(self, model, edit: ClearColors) -> None:
        graph = self._require_graph(model, edit.op)
        for node in graph.nodes.values():
            node.color = None

    def _clear_edges(self, model, edit: ClearEdges) -> None:
        graph = self._require_graph(model, edit.op)
        graph.edges.clear()

    def _set_directed(self, model, edit: SetDirected) -> None:
        graph = self._require_graph(model, edit.op)
        if graph.directed and not edit.directed:
            for idx, edge in enumerate(graph.edges):
                for prev in range(idx):
                    if graph.edges[prev].joins(edge.source, edge.target, False):
                        raise InvalidEdit(
                            f"Edges {prev} and {idx} would both join "
                            f"{graph.label(edge.source)}-{graph.label(edge.target)} once undirected"
                        )
        graph.directed = edit.directed
