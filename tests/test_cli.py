"""
Tests for the terminal player.
"""

import sys

import pytest

from cli import play
from core.engine import StepEngine
from core.models import Outcome


class TestRenderGrid:
    """ASCII board rendering."""

    def test_blank_board(self, walled_grid):
        assert play.render_grid(walled_grid, None).splitlines() == [
            "S  # ",
            "   # ",
            "   #E",
        ]

    def test_path_marked(self, open_grid):
        result = StepEngine(open_grid).run("bfs").drain()
        text = play.render_grid(open_grid, result)
        assert text.count("*") == result.path_length - 2


class TestPlay:
    """Stepping a run and Ctrl-C handling."""

    def interrupt_on(self, monkeypatch, when):
        real = play.describe_graph_step

        def describe(model, snap):
            if when(snap):
                raise KeyboardInterrupt
            return real(model, snap)

        monkeypatch.setattr(play, "describe_graph_step", describe)

    def test_interrupt_mid_run_cancels(self, monkeypatch, triangle):
        self.interrupt_on(monkeypatch, lambda snap: snap.step == 2)
        engine = StepEngine(triangle)
        result = play.play(engine, "kruskal", 0.0)
        assert result.outcome == Outcome.CANCELLED
        assert not engine.is_running

    def test_interrupt_after_last_step_keeps_result(self, monkeypatch, triangle):
        self.interrupt_on(monkeypatch, lambda snap: snap.is_terminal)
        result = play.play(StepEngine(triangle), "kruskal", 0.0)
        assert result.outcome == Outcome.SPANNING_TREE


class TestMain:
    """End-to-end runs through argparse."""

    def run_main(self, monkeypatch, *argv):
        monkeypatch.setattr(sys, "argv", ["play.py", *argv])
        play.main()

    def test_list(self, monkeypatch, capsys):
        self.run_main(monkeypatch, "--list")
        out = capsys.readouterr().out
        assert "maze-solver" in out and "cycle-detector" in out

    def test_compare(self, monkeypatch, capsys):
        self.run_main(monkeypatch, "--game", "maze-solver", "--seed", "2", "--compare")
        out = capsys.readouterr().out
        assert "bfs" in out and "dfs" in out

    def test_cycle_game_with_edges(self, monkeypatch, capsys):
        self.run_main(monkeypatch, "--game", "cycle-detector", "--delay", "0",
                      "--edge", "A:B", "--edge", "B:C", "--edge", "C:A")
        assert "cycle -" in capsys.readouterr().out

    def test_undirected_rejects_opposite_edges(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            self.run_main(monkeypatch, "--game", "cycle-detector", "--delay", "0", "--undirected",
                          "--edge", "A:B", "--edge", "B:A")
        assert exc.value.code == 1
        assert "already exists" in capsys.readouterr().out

    def test_bad_game_exits(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            self.run_main(monkeypatch, "--game", "tetris")
        assert exc.value.code == 1
