from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import ClassVar, List, Tuple

from .schema import Cell, Coord


@dataclass
class GridModel:
    """Rectangular board of cells used by the maze and path-finder games.

    Cells live in a flat row-major list, so a cell's identity is the integer
    ``y * width + x``. Algorithms only ever pass these indices around.
    """

    # up, right, down, left
    DIRECTIONS: ClassVar[Tuple[Coord, ...]] = ((0, -1), (1, 0), (0, 1), (-1, 0))

    width: int
    height: int
    start: Coord
    end: Coord
    bordered: bool = False
    cells: List[Cell] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [
                Cell(x=i % self.width, y=i // self.width)
                for i in range(self.width * self.height)
            ]
            if self.bordered:
                self.block_border()

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def start_index(self) -> int:
        return self.index(*self.start)

    @property
    def end_index(self) -> int:
        return self.index(*self.end)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def coord(self, idx: int) -> Coord:
        return idx % self.width, idx // self.width

    def cell(self, x: int, y: int) -> Cell:
        return self.cells[self.index(x, y)]

    def is_border(self, x: int, y: int) -> bool:
        return x in (0, self.width - 1) or y in (0, self.height - 1)

    def is_marker(self, x: int, y: int) -> bool:
        return (x, y) in (self.start, self.end)

    def block_border(self) -> None:
        for c in self.cells:
            if self.is_border(c.x, c.y):
                c.blocked = True

    def neighbors(self, idx: int) -> List[int]:
        """Unblocked 4-neighbours of ``idx`` in up, right, down, left order."""
        x, y = self.coord(idx)
        out: List[int] = []
        for dx, dy in self.DIRECTIONS:
            cx, cy = x + dx, y + dy
            if not self.in_bounds(cx, cy):
                continue
            nb = cy * self.width + cx
            if not self.cells[nb].blocked:
                out.append(nb)
        return out

    def open_cells(self) -> List[int]:
        return [i for i, c in enumerate(self.cells) if not c.blocked]

    def copy(self) -> "GridModel":
        return copy.deepcopy(self)
