from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Union


class Cell(NamedTuple):
    col: int
    row: int


class CellOutOfRange(IndexError):
    """Raised when a coordinate does not address a grid cell."""


@dataclass(frozen=True)
class Unpainted:
    pass


@dataclass(frozen=True)
class PaintedWith:
    index: int


ColorRef = Union[Unpainted, PaintedWith]

UNPAINTED = Unpainted()


class GridState:
    """Square grid of color references, stored row-major as ``cells[row][col]``."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"grid size must be positive, got {size}")
        self.size = size
        self._cells: List[List[ColorRef]] = [[UNPAINTED] * size for _ in range(size)]

    def _check(self, col: int, row: int) -> None:
        if not self.contains(col, row):
            raise CellOutOfRange(f"cell ({col}, {row}) outside {self.size}x{self.size} grid")

    def contains(self, col: int, row: int) -> bool:
        return 0 <= col < self.size and 0 <= row < self.size

    def get(self, col: int, row: int) -> ColorRef:
        self._check(col, row)
        return self._cells[row][col]

    def paint(self, col: int, row: int, index: int) -> None:
        self._check(col, row)
        self._cells[row][col] = PaintedWith(index)

    def clear(self) -> None:
        for row in self._cells:
            for col in range(self.size):
                row[col] = UNPAINTED

    def rows(self) -> Iterator[List[ColorRef]]:
        """Yield copies of each row, top row first."""
        for row in self._cells:
            yield list(row)

    def cells(self) -> Iterator[Cell]:
        for row in range(self.size):
            for col in range(self.size):
                yield Cell(col, row)

    def painted_count(self) -> int:
        return sum(isinstance(ref, PaintedWith) for row in self._cells for ref in row)
