from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Protocol

from pixelgrid.grid.palette import Color, PaletteStore
from pixelgrid.grid.picking import NormalizedCoord, PointerResolver
from pixelgrid.grid.state import Cell, GridState

logger = logging.getLogger(__name__)


class CellSink(Protocol):
    def paint_cell(self, cell: Cell, color: Color) -> None:
        ...

    def reset_cells(self) -> None:
        ...


class PaintState(Enum):
    IDLE = "idle"
    PAINTING = "painting"


class PaintController:
    """Paint-while-held state machine over a grid, a palette and a visual sink."""

    def __init__(
        self,
        grid: GridState,
        palette: PaletteStore,
        resolver: PointerResolver,
        sink: CellSink,
    ) -> None:
        self.grid = grid
        self.palette = palette
        self.resolver = resolver
        self.sink = sink
        self.state = PaintState.IDLE

    @property
    def painting(self) -> bool:
        return self.state is PaintState.PAINTING

    def pointer_down(self, coord: Optional[NormalizedCoord]) -> Optional[Cell]:
        self.state = PaintState.PAINTING
        return self.paint_at(coord)

    def pointer_move(self, coord: Optional[NormalizedCoord]) -> Optional[Cell]:
        if self.state is not PaintState.PAINTING:
            return None
        return self.paint_at(coord)

    def pointer_up(self) -> None:
        self.state = PaintState.IDLE

    def pointer_cancel(self) -> None:
        self.state = PaintState.IDLE

    def paint_at(self, coord: Optional[NormalizedCoord]) -> Optional[Cell]:
        cell = self.resolver.resolve_cell(coord)
        if cell is None:
            return None
        self.paint_cell(cell)
        return cell

    def paint_cell(self, cell: Cell) -> None:
        index = self.palette.current_selection()
        self.grid.paint(cell.col, cell.row, index)
        self.sink.paint_cell(cell, self.palette.value_of(index))
        logger.debug("Painted cell (%d, %d) with %s", cell.col, cell.row, self.palette.name_of(index))

    def clear(self) -> None:
        self.grid.clear()
        self.sink.reset_cells()
        logger.debug("Cleared %dx%d grid", self.grid.size, self.grid.size)
