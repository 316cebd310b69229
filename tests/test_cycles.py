"""
Unit tests for tri-color DFS cycle detection.
"""

import pytest

from core.algorithms import CycleDetector
from core.errors import ConfigurationError
from core.models import DfsMark, Outcome, RunOptions
from graph.model import GraphModel
from graph.preprocess import normalize_raw_to_graph


def detect(model, directed=None):
    return list(CycleDetector().run(model, RunOptions(directed=directed)))


class TestDirected:
    """Back edges to in-progress nodes."""

    def test_three_cycle(self, directed_cycle):
        result = detect(directed_cycle)[-1]
        assert result.outcome == Outcome.CYCLE
        assert set(result.cycle_edges) == {0, 1, 2}
        assert result.closing_edge == 2
        assert "A -> B -> C -> A" in result.message

    def test_broken_cycle(self, directed_cycle):
        directed_cycle.remove_edge(2)
        result = detect(directed_cycle)[-1]
        assert result.outcome == Outcome.NO_CYCLE
        assert set(result.marks.values()) == {DfsMark.DONE}

    def test_two_way_pair(self, two_way_pair):
        result = detect(two_way_pair)[-1]
        assert result.outcome == Outcome.CYCLE
        assert set(result.cycle_edges) == {0, 1}

    def test_cross_edge_is_not_a_cycle(self):
        """A->B, A->C, C->B reaches a finished node, not an ancestor."""
        g = normalize_raw_to_graph({"A": ["B", "C"], "C": ["B"]}, directed=True)
        assert detect(g)[-1].outcome == Outcome.NO_CYCLE

    def test_disconnected_components_are_covered(self):
        g = normalize_raw_to_graph({"A": ["B"], "C": ["D"], "D": ["C"]}, directed=True)
        result = detect(g)[-1]
        assert result.outcome == Outcome.CYCLE
        assert set(result.cycle_edges) == {1, 2}

    def test_stops_at_first_cycle(self, directed_cycle):
        snaps = detect(directed_cycle)
        assert sum(1 for s in snaps if s.is_terminal) == 1
        assert snaps[-1].marks[0] == DfsMark.IN_PROGRESS


class TestUndirected:
    """Any non-arrival edge into a visited node."""

    def test_path_is_not_a_cycle(self, directed_cycle):
        directed_cycle.remove_edge(2)
        assert detect(directed_cycle, directed=False)[-1].outcome == Outcome.NO_CYCLE

    def test_single_edge_is_not_a_cycle(self):
        g = GraphModel.from_labels("AB")
        g.add_edge(0, 1)
        assert detect(g)[-1].outcome == Outcome.NO_CYCLE

    def test_parallel_edges_form_a_cycle(self, two_way_pair):
        result = detect(two_way_pair, directed=False)[-1]
        assert result.outcome == Outcome.CYCLE
        assert set(result.cycle_edges) == {0, 1}

    def test_triangle(self, triangle):
        result = detect(triangle)[-1]
        assert result.outcome == Outcome.CYCLE
        assert set(result.cycle_edges) == {0, 1, 2}


class TestSteps:
    """Entry and exit each emit a step."""

    def test_single_node(self):
        snaps = detect(GraphModel.from_labels("A"))
        assert [s.marks[0] for s in snaps] == [DfsMark.IN_PROGRESS, DfsMark.DONE, DfsMark.DONE]
        assert snaps[-1].outcome == Outcome.NO_CYCLE

    def test_entry_records_arrival_edge(self, directed_cycle):
        snaps = detect(directed_cycle)
        assert snaps[0].current == 0 and snaps[0].current_edge is None
        assert snaps[1].current == 1 and snaps[1].current_edge == 0

    def test_model_flag_used_by_default(self):
        g = normalize_raw_to_graph({"A": ["B", "C"], "C": ["B"]}, directed=True)
        assert detect(g)[-1].outcome == Outcome.NO_CYCLE
        g.directed = False
        assert detect(g)[-1].outcome == Outcome.CYCLE

    def test_duplicate_undirected_edge_rejected(self):
        g = GraphModel.from_labels("AB")
        g.add_edge(0, 1)
        g.add_edge(0, 1)
        with pytest.raises(ConfigurationError):
            detect(g)
