from __future__ import annotations


class GraphGameError(Exception):
    """Base class for engine errors."""


class ConfigurationError(GraphGameError):
    """The model or options can't drive the requested run."""


class InvalidEdit(GraphGameError):
    """An edit was rejected before touching the model."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class UnknownAlgorithm(GraphGameError, ValueError):
    """No algorithm is registered under the requested name."""
