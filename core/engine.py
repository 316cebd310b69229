from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional, Union
from uuid import uuid4
import logging

from pydantic import ValidationError

from graph.grid import GridModel
from graph.model import GraphModel
from graph.schema import ColoringReport, SpanningTreeReport
from graph.validator import check_coloring, check_spanning_tree
from storage.run_history import RunHistory

from .algorithms.base import RunContext
from .algorithms.factory import AlgorithmFactory, algorithm_factory
from .config import EngineSettings
from .edits import EditApplier, EditOp
from .errors import ConfigurationError, GraphGameError, InvalidEdit
from .models import AlgorithmKind, Outcome, RunOptions, StepSnapshot

logger = logging.getLogger(__name__)

Model = Union[GridModel, GraphModel]


class RunHandle:
    """Pull-based iterator over one run's snapshots.

    Once cancelled, the next pull yields a single CANCELLED snapshot and the
    one after that stops iteration.
    """

    def __init__(self, engine: "StepEngine", ctx: RunContext, steps: Iterator[StepSnapshot]):
        self.run_id = ctx.run_id
        self.kind = ctx.kind
        self._ctx = ctx
        self._engine = engine
        self._steps = steps
        self.snapshots: List[StepSnapshot] = []
        self.result: Optional[StepSnapshot] = None
        self.cancelled = False
        self.finished = False

    def __iter__(self) -> "RunHandle":
        return self

    def __next__(self) -> StepSnapshot:
        if self.finished:
            raise StopIteration
        if self.cancelled:
            self.finished = True
            self.result = StepSnapshot(
                run_id=self.run_id,
                kind=self.kind,
                step=self._ctx.step + 1,
                outcome=Outcome.CANCELLED,
                message="Run cancelled",
            )
            return self.result

        try:
            snap = next(self._steps)
        except StopIteration:
            self.finished = True
            self._engine._release(self)
            raise
        except Exception as e:
            self.finished = True
            self._engine._discard(self, e)
            raise

        self.snapshots.append(snap)
        self._engine._commit(self, snap)
        if snap.is_terminal:
            self.finished = True
            self.result = snap
            self._engine._complete(self)
        return snap

    @property
    def is_active(self) -> bool:
        return not self.finished and not self.cancelled

    def cancel(self) -> None:
        if self._engine._active is self:
            self._engine.cancel()
        else:
            self._abort()

    def drain(self) -> Optional[StepSnapshot]:
        """Consume the remaining steps and return the terminal snapshot"""
        for _ in self:
            pass
        return self.result

    def _abort(self) -> None:
        if self.finished or self.cancelled:
            return
        self.cancelled = True
        self._steps.close()


class StepEngine:
    """Owns one model and at most one active run against it.

    Runs step through a deep copy of the model, so the live model only
    changes through ``edit``. The display slot holds the latest snapshot of
    the active or last finished run.
    """

    def __init__(self, model: Optional[Model] = None, settings: Optional[EngineSettings] = None,
                 factory: Optional[AlgorithmFactory] = None, history: Optional[RunHistory] = None):
        self.settings = settings or EngineSettings()
        self.factory = factory or algorithm_factory
        self.history = history or RunHistory(max_runs=self.settings.history_max_runs)
        self.editor = EditApplier(palette_size=self.settings.palette_size)
        self.model: Optional[Model] = None
        self.display: Optional[StepSnapshot] = None
        self._active: Optional[RunHandle] = None
        self._pre_run_display: Optional[StepSnapshot] = None
        if model is not None:
            self.configure(model)

    # ========================================
    # Model
    # ========================================

    def configure(self, model: Model) -> None:
        """Set or replace the model, discarding any in-flight run"""
        if not isinstance(model, (GridModel, GraphModel)):
            raise ConfigurationError(f"Unsupported model type: {type(model).__name__}")
        self.cancel()
        self.model = model
        self.display = None
        logger.info(f"Engine configured with {type(model).__name__}")

    def edit(self, operation: Union[Dict[str, Any], EditOp], abort_active: bool = False) -> Any:
        """Apply one edit to the live model.

        Rejected with InvalidEdit while a run is active unless
        ``abort_active`` is set, in which case the run is cancelled first.
        """
        model = self._require_model()
        if self.is_running:
            if not abort_active:
                logger.warning(f"Edit rejected, run {self._active.run_id} is active")
                raise InvalidEdit("A run is active; cancel it or pass abort_active=True")
            self.cancel()
        try:
            return self.editor.apply(model, operation)
        except InvalidEdit as e:
            logger.warning(f"Edit rejected: {e.reason}")
            raise

    # ========================================
    # Runs
    # ========================================

    @property
    def is_running(self) -> bool:
        return self._active is not None and self._active.is_active

    @property
    def active_run(self) -> Optional[RunHandle]:
        return self._active if self.is_running else None

    def run(self, kind: Union[str, AlgorithmKind], options: Union[RunOptions, Dict[str, Any], None] = None,
            **overrides: Any) -> RunHandle:
        """Start ``kind`` on a copy of the model and return its handle.

        Configuration problems raise here, before any step runs.
        """
        model = self._require_model()
        algorithm = self.factory.get(kind)
        options = self._build_options(options, overrides)
        algorithm.validate(model, options)

        self.cancel()
        ctx = RunContext(run_id=str(uuid4()), kind=algorithm.kind, options=options)
        handle = RunHandle(self, ctx, algorithm.steps(model.copy(), ctx))
        self._pre_run_display = self.display
        self._active = handle
        logger.info(f"Run {ctx.run_id} started: {algorithm.kind.value}")
        return handle

    def cancel(self) -> bool:
        """Abort the active run and restore the display; False if idle"""
        handle = self._active
        if handle is None or not handle.is_active:
            return False
        handle._abort()
        self._active = None
        self.display = self._pre_run_display
        logger.info(f"Run {handle.run_id} cancelled after {len(handle.snapshots)} steps")
        return True

    def replay(self, run_id: str) -> Iterator[StepSnapshot]:
        """Iterate the recorded snapshots of a finished run"""
        snapshots = self.history.load_run(run_id)
        if snapshots is None:
            raise KeyError(f"No recorded run {run_id!r}")
        return iter(snapshots)

    # ========================================
    # Manual play scoring
    # ========================================

    def coloring_report(self) -> ColoringReport:
        return check_coloring(self._require_graph())

    def spanning_tree_report(self, edges: Iterable[int]) -> SpanningTreeReport:
        """Check a player's edge selection and score it against the MST"""
        graph = self._require_graph()
        mst = solve(graph, AlgorithmKind.KRUSKAL, factory=self.factory)
        mst_cost = mst.total_weight if mst.outcome == Outcome.SPANNING_TREE else None
        return check_spanning_tree(graph, edges, mst_cost=mst_cost)

    # ========================================
    # Handle callbacks
    # ========================================

    def _commit(self, handle: RunHandle, snap: StepSnapshot) -> None:
        if self._active is handle:
            self.display = snap

    def _complete(self, handle: RunHandle) -> None:
        self.history.save_run(handle.run_id, handle.snapshots)
        self._release(handle)
        logger.info(f"Run {handle.run_id} finished: {handle.result.outcome.value} in {len(handle.snapshots)} steps")

    def _release(self, handle: RunHandle) -> None:
        if self._active is handle:
            self._active = None

    def _discard(self, handle: RunHandle, error: Exception) -> None:
        logger.error(f"Run {handle.run_id} failed at step {len(handle.snapshots) + 1}: {error}")
        if self._active is handle:
            self._active = None
            self.display = self._pre_run_display

    # ========================================
    # Helpers
    # ========================================

    def _require_model(self) -> Model:
        if self.model is None:
            raise ConfigurationError("No model configured")
        return self.model

    def _require_graph(self) -> GraphModel:
        model = self._require_model()
        if not isinstance(model, GraphModel):
            raise ConfigurationError("This report needs a graph model")
        return model

    def _build_options(self, options: Union[RunOptions, Dict[str, Any], None],
                       overrides: Dict[str, Any]) -> RunOptions:
        values: Dict[str, Any] = {"palette_size": self.settings.palette_size}
        if isinstance(options, RunOptions):
            values.update(options.model_dump(exclude_unset=True))
        elif options:
            values.update(options)
        values.update(overrides)
        try:
            return RunOptions(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid run options: {e}") from e


def solve(model: Model, kind: Union[str, AlgorithmKind],
          options: Union[RunOptions, Dict[str, Any], None] = None,
          factory: Optional[AlgorithmFactory] = None) -> StepSnapshot:
    """Run ``kind`` to completion outside any engine and return the terminal snapshot"""
    algorithm = (factory or algorithm_factory).get(kind)
    if isinstance(options, dict):
        try:
            options = RunOptions(**options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid run options: {e}") from e
    last: Optional[StepSnapshot] = None
    for snap in algorithm.run(model, options):
        last = snap
    if last is None or not last.is_terminal:
        raise GraphGameError(f"{algorithm.kind.value} ended without a result")
    return last
