from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Iterator, Optional, Type, Union
from uuid import uuid4
import logging

from graph.grid import GridModel
from graph.model import GraphModel
from graph.schema import ValidationReport
from graph.validator import validate_graph, validate_grid

from ..errors import ConfigurationError
from ..models import AlgorithmKind, RunOptions, StepSnapshot

logger = logging.getLogger(__name__)

Model = Union[GridModel, GraphModel]


@dataclass
class RunContext:
    """Identity and counters for one run; owned by that run only."""
    run_id: str
    kind: AlgorithmKind
    options: RunOptions
    step: int = 0


class BaseAlgorithm(ABC):
    """Base class for all stepwise algorithms.

    ``steps`` is a generator over a private copy of the model. It yields one
    StepSnapshot per step and the last one carries the outcome.
    """

    kind: ClassVar[AlgorithmKind]
    model_type: ClassVar[Type[Any]] = GraphModel

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def steps(self, model: Model, ctx: RunContext) -> Iterator[StepSnapshot]:
        """Yield snapshots until a terminal one"""
        pass

    def validate(self, model: Model, options: RunOptions) -> ValidationReport:
        """Raise ConfigurationError unless ``model`` can drive this algorithm"""
        if not isinstance(model, self.model_type):
            raise ConfigurationError(
                f"{self.kind.value} needs a {self.model_type.__name__}, got {type(model).__name__}"
            )
        report = validate_grid(model) if isinstance(model, GridModel) else validate_graph(model)
        if not report.ok:
            raise ConfigurationError("; ".join(report.errors))
        for warning in report.warnings:
            self.logger.warning(warning)
        return report

    def run(self, model: Model, options: Optional[RunOptions] = None,
            run_id: Optional[str] = None) -> Iterator[StepSnapshot]:
        """Validate, then step through a private copy of ``model``"""
        options = options or RunOptions()
        self.validate(model, options)
        ctx = RunContext(run_id=run_id or str(uuid4()), kind=self.kind, options=options)
        return self.steps(model.copy(), ctx)

    def snapshot(self, ctx: RunContext, **fields: Any) -> StepSnapshot:
        ctx.step += 1
        snap = StepSnapshot(run_id=ctx.run_id, kind=self.kind, step=ctx.step, **fields)
        if snap.is_terminal:
            self.logger.info(f"[{ctx.run_id[:8]}] step {snap.step}: {snap.outcome.value} {snap.message}")
        else:
            self.logger.debug(f"[{ctx.run_id[:8]}] step {snap.step}: current={snap.current}")
        return snap
