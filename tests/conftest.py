from typing import List, Tuple

import pytest

from pixelgrid.grid.controller import PaintController
from pixelgrid.grid.palette import PaletteEntry, PaletteStore
from pixelgrid.grid.picking import CellPicker, OrthoCamera, PointerResolver
from pixelgrid.grid.state import Cell, GridState

FIVE_COLORS = [
    PaletteEntry("red", (239, 68, 68)),
    PaletteEntry("green", (34, 197, 94)),
    PaletteEntry("blue", (59, 130, 246)),
    PaletteEntry("yellow", (234, 179, 8)),
    PaletteEntry("purple", (168, 85, 247)),
]


class RecordingSink:
    def __init__(self) -> None:
        self.painted: List[Tuple[Cell, Tuple[int, int, int]]] = []
        self.resets = 0

    def paint_cell(self, cell, color) -> None:
        self.painted.append((cell, color))

    def reset_cells(self) -> None:
        self.resets += 1


def _build_controller(size: int = 4, entries=FIVE_COLORS):
    grid = GridState(size)
    palette = PaletteStore(entries)
    picker = CellPicker(size)
    resolver = PointerResolver(picker, OrthoCamera.framed(size, size, size, size))
    sink = RecordingSink()
    return PaintController(grid, palette, resolver, sink), sink


@pytest.fixture
def five_colors():
    return PaletteStore(FIVE_COLORS)


@pytest.fixture
def make_controller():
    return _build_controller
