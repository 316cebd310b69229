#!/usr/bin/env python3
"""
Terminal player for the graph algorithm games
"""

import argparse
import os
import sys
import time
import logging
from typing import List, Optional

from dotenv import load_dotenv

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core.catalog import GAMES, get_game, new_board
from core.config import EngineSettings, PALETTE_NAMES, load_settings
from core.engine import StepEngine
from core.errors import GraphGameError
from core.models import AlgorithmKind, StepSnapshot
from graph.grid import GridModel
from graph.model import GraphModel
from graph.visualize import draw_snapshot

load_dotenv()


def setup_logging(verbose: bool = False, log_file: Optional[str] = None, level: str = "INFO"):
    """Setup logging configuration"""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )
    logging.getLogger('matplotlib').setLevel(logging.WARNING)
    logging.getLogger('PIL').setLevel(logging.WARNING)


def render_grid(grid: GridModel, snap: Optional[StepSnapshot]) -> str:
    """ASCII view: # wall, S/E markers, * path, @ current, o frontier, . visited"""
    path = set(snap.path) if snap else set()
    frontier = set(snap.frontier) if snap else set()
    visited = snap.visited if snap else frozenset()
    rows = []
    for y in range(grid.height):
        row = []
        for x in range(grid.width):
            idx = y * grid.width + x
            cell = grid.cells[idx]
            if (x, y) == grid.start:
                ch = "S"
            elif (x, y) == grid.end:
                ch = "E"
            elif cell.blocked:
                ch = "#"
            elif idx in path:
                ch = "*"
            elif snap is not None and idx == snap.current:
                ch = "@"
            elif idx in frontier:
                ch = "o"
            elif idx in visited:
                ch = "."
            elif cell.weight > 1:
                ch = str(min(cell.weight, 9))
            else:
                ch = " "
            row.append(ch)
        rows.append("".join(row))
    return "\n".join(rows)


def describe_graph_step(model: GraphModel, snap: StepSnapshot) -> str:
    parts = [f"step {snap.step:>3}"]
    if snap.current is not None:
        parts.append(f"node={model.label(snap.current)}")
    if snap.current_edge is not None and snap.current_edge < len(model.edges):
        e = model.edges[snap.current_edge]
        parts.append(f"edge={model.label(e.source)}-{model.label(e.target)}({e.weight})")
    if snap.kind == AlgorithmKind.GREEDY_COLORING and snap.colors:
        parts.append("colors=" + ",".join(
            f"{model.label(n)}:{PALETTE_NAMES[c % len(PALETTE_NAMES)]}" for n, c in sorted(snap.colors.items())
        ))
    if snap.kind == AlgorithmKind.KRUSKAL:
        parts.append(f"selected={list(snap.selected_edges)} total={snap.total_weight}")
    if snap.kind == AlgorithmKind.CYCLE_DETECTION and snap.marks:
        parts.append("marks=" + ",".join(f"{model.label(n)}:{m.value}" for n, m in sorted(snap.marks.items())))
    if snap.message:
        parts.append(f"| {snap.message}")
    return " ".join(parts)


def play(engine: StepEngine, kind: AlgorithmKind, delay: float, quiet: bool = False, **options) -> StepSnapshot:
    """Step one run at ``delay`` seconds per step; Ctrl-C cancels it"""
    handle = engine.run(kind, **options)
    model = engine.model
    last: Optional[StepSnapshot] = None
    try:
        for snap in handle:
            last = snap
            if quiet:
                continue
            if isinstance(model, GridModel):
                print("\033[2J\033[H" if delay else "", end="")
                print(render_grid(model, snap))
                print(f"step {snap.step} visited={len(snap.visited)} {snap.message}")
            else:
                print(describe_graph_step(model, snap))
            if delay and not snap.is_terminal:
                time.sleep(delay)
    except KeyboardInterrupt:
        handle.cancel()
        last = next(handle, last)
        print(f"\n{last.message}")
    return last


def compare_maze(engine: StepEngine) -> None:
    """BFS and DFS on the same maze, side by side"""
    print(f"{'algorithm':<10} {'outcome':<10} {'visited':>8} {'length':>7} {'moves':>6}")
    for kind in (AlgorithmKind.BFS, AlgorithmKind.DFS):
        snap = engine.run(kind).drain()
        print(f"{kind.value:<10} {snap.outcome.value:<10} {len(snap.visited):>8} "
              f"{snap.path_length:>7} {snap.moves:>6}")


def add_edges(engine: StepEngine, specs: List[str]) -> None:
    """Apply ``A:B`` or ``A:B:weight`` edge specs to the board"""
    model = engine.model
    for spec in specs:
        parts = spec.split(":")
        if len(parts) not in (2, 3):
            raise GraphGameError(f"Edge spec must be A:B or A:B:weight, got {spec!r}")
        try:
            source, target = model.id_for(parts[0]), model.id_for(parts[1])
        except KeyError as e:
            raise GraphGameError(str(e)) from e
        weight = int(parts[2]) if len(parts) == 3 else 1
        engine.edit({"op": "add_edge", "source": source, "target": target, "weight": weight})


def print_games() -> None:
    for game in GAMES:
        kinds = ", ".join(k.value for k in game.kinds)
        print(f"{game.id:<18} {game.title:<18} [{game.difficulty}] {game.algorithm} ({kinds})")
        print(f"{'':<18} {game.description}")


def main():
    """Main CLI function"""
    parser = argparse.ArgumentParser(
        description="Step through classic graph algorithms in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli/play.py --list
  python cli/play.py --game maze-solver --seed 7 --compare
  python cli/play.py --game path-finder --delay 0 --save-png path.png
  python cli/play.py --game cycle-detector --edge A:B --edge B:C --edge C:A
        """
    )
    parser.add_argument('--game', default='maze-solver', help='Game id (see --list)')
    parser.add_argument('--algorithm', help='Algorithm to run (default: the game\'s first)')
    parser.add_argument('--seed', type=int, help='Seed for the board generator')
    parser.add_argument('--delay', type=float, help='Seconds between steps')
    parser.add_argument('--palette-size', type=int, help='Colors available to greedy coloring')
    parser.add_argument('--undirected', action='store_true', help='Treat cycle-board edges as undirected')
    parser.add_argument('--edge', action='append', default=[], help='Add an edge A:B[:weight] before running')
    parser.add_argument('--compare', action='store_true', help='Maze only: compare BFS and DFS')
    parser.add_argument('--save-png', help='Render the final snapshot to this PNG path')
    parser.add_argument('--quiet', '-q', action='store_true', help='Only print the result')
    parser.add_argument('--log-file', help='Also write logs to this file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')
    parser.add_argument('--list', action='store_true', help='List games and exit')

    args = parser.parse_args()

    if args.list:
        print_games()
        return

    try:
        settings: EngineSettings = load_settings(log_file=args.log_file, palette_size=args.palette_size)
        setup_logging(args.verbose, settings.log_file, settings.log_level)
        logger = logging.getLogger(__name__)

        game = get_game(args.game)
        kind = AlgorithmKind.from_string(args.algorithm) if args.algorithm else game.default_kind
        board = new_board(game.id, settings, seed=args.seed)
        logger.info(f"Starting {game.title} with {kind.value}")

        engine = StepEngine(board, settings=settings)
        if args.undirected and isinstance(board, GraphModel):
            engine.edit({"op": "set_directed", "directed": False})
        add_edges(engine, args.edge)

        if args.compare:
            if not isinstance(board, GridModel):
                raise GraphGameError("--compare needs a grid game")
            compare_maze(engine)
            return

        delay = settings.step_delay if args.delay is None else args.delay
        result = play(engine, kind, delay, quiet=args.quiet)
        print("\n" + "=" * 60)
        print(f"{game.title}: {result.outcome.value} - {result.message}")
        if result.path:
            print(f"   Path length: {result.path_length} cells, {result.moves} moves, cost {result.cost}")

        if args.save_png:
            draw_snapshot(board, engine.display or result, args.save_png)
            print(f"   Saved: {args.save_png}")

    except (GraphGameError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
