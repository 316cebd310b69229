from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .errors import UnknownAlgorithm


# ============================================================================
# Base Configuration
# ============================================================================

class BaseConfig(BaseModel):
    """Base configuration with common settings"""
    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class FrozenConfig(BaseModel):
    """Immutable variant used for options and snapshots"""
    model_config = ConfigDict(extra="forbid", frozen=True)


# ============================================================================
# Algorithm Kinds and Outcomes
# ============================================================================

class AlgorithmKind(str, Enum):
    """Algorithms the engine can step through"""
    BFS = "bfs"
    DFS = "dfs"
    DIJKSTRA = "dijkstra"
    GREEDY_COLORING = "greedy_coloring"
    KRUSKAL = "kruskal"
    CYCLE_DETECTION = "cycle_detection"

    @classmethod
    def from_string(cls, name: str) -> 'AlgorithmKind':
        """Convert string to AlgorithmKind with alias mapping"""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            aliases = {
                "breadth_first": cls.BFS,
                "breadth_first_search": cls.BFS,
                "depth_first": cls.DFS,
                "depth_first_search": cls.DFS,
                "shortest_path": cls.DIJKSTRA,
                "coloring": cls.GREEDY_COLORING,
                "greedy": cls.GREEDY_COLORING,
                "mst": cls.KRUSKAL,
                "minimum_spanning_tree": cls.KRUSKAL,
                "cycle": cls.CYCLE_DETECTION,
                "cycles": cls.CYCLE_DETECTION,
                "cycle_detector": cls.CYCLE_DETECTION,
            }
            if key not in aliases:
                raise UnknownAlgorithm(f"Unknown algorithm: {name!r}")
            return aliases[key]

    @property
    def on_grid(self) -> bool:
        return self in (AlgorithmKind.BFS, AlgorithmKind.DFS, AlgorithmKind.DIJKSTRA)


class Outcome(str, Enum):
    """Terminal result of a run"""
    FOUND = "found"
    NO_PATH = "no_path"
    UNREACHABLE = "unreachable"
    COLORED = "colored"
    NO_COLOR_AVAILABLE = "no_color_available"
    SPANNING_TREE = "spanning_tree"
    SPANNING_FOREST = "spanning_forest"
    CYCLE = "cycle"
    NO_CYCLE = "no_cycle"
    CANCELLED = "cancelled"


class DfsMark(str, Enum):
    """Tri-color DFS state"""
    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    DONE = "done"


# ============================================================================
# Run Options
# ============================================================================

class RunOptions(FrozenConfig):
    """Per-run knobs; unknown keys are rejected"""
    palette_size: int = Field(default=8, ge=1)
    directed: Optional[bool] = None


# ============================================================================
# Step Snapshot
# ============================================================================

class StepSnapshot(FrozenConfig):
    """Immutable view of one algorithm step.

    Fields that don't apply to the running algorithm keep their empty
    defaults. ``path`` is only filled on a successful terminal step and
    ``outcome`` stays ``None`` until the run ends.
    """
    run_id: str
    kind: AlgorithmKind
    step: int = 0

    # Active element
    current: Optional[int] = None
    current_edge: Optional[int] = None

    # Traversal / shortest path
    visited: FrozenSet[int] = frozenset()
    frontier: Tuple[int, ...] = ()
    path: Tuple[int, ...] = ()
    cost: Optional[int] = None
    distances: Mapping[int, int] = Field(default_factory=dict, validate_default=True)

    # Coloring
    colors: Mapping[int, int] = Field(default_factory=dict, validate_default=True)
    conflicts: Tuple[int, ...] = ()
    colors_used: int = 0

    # Kruskal
    selected_edges: Tuple[int, ...] = ()
    rejected_edges: Tuple[int, ...] = ()
    total_weight: int = 0

    # Cycle detection
    marks: Mapping[int, DfsMark] = Field(default_factory=dict, validate_default=True)
    cycle_edges: Tuple[int, ...] = ()
    closing_edge: Optional[int] = None

    # Result
    outcome: Optional[Outcome] = None
    message: str = ""

    @field_validator('kind', mode='before')
    @classmethod
    def validate_kind(cls, v):
        """Accept algorithm names as well as enum members"""
        if isinstance(v, str):
            return AlgorithmKind.from_string(v)
        return v

    @field_validator('distances', 'colors', 'marks', mode='after')
    @classmethod
    def freeze_mapping(cls, v):
        """Store a read-only copy so recorded runs can't be edited"""
        return MappingProxyType(dict(v))

    @field_serializer('distances', 'colors', 'marks')
    def serialize_mapping(self, v) -> dict:
        return dict(v)

    @property
    def is_terminal(self) -> bool:
        return self.outcome is not None

    @property
    def path_length(self) -> int:
        """Cells on the path, start and end included"""
        return len(self.path)

    @property
    def moves(self) -> int:
        return max(len(self.path) - 1, 0)
