from __future__ import annotations

from typing import List, Tuple

import pygame

from pixelgrid.grid.palette import Color
from pixelgrid.grid.picking import CellPicker, NormalizedCoord, OrthoCamera, WorldPoint
from pixelgrid.grid.state import Cell

CENTER_LINE_COLOR: Color = (102, 102, 102)


class GridCanvas:
    """On-screen colors of the cells, written by the paint controller."""

    def __init__(self, size: int, empty_color: Color) -> None:
        self.size = size
        self.empty_color = empty_color
        self.colors: List[List[Color]] = [[empty_color] * size for _ in range(size)]

    def paint_cell(self, cell: Cell, color: Color) -> None:
        self.colors[cell.row][cell.col] = color

    def reset_cells(self) -> None:
        for row in self.colors:
            for col in range(self.size):
                row[col] = self.empty_color

    def color_at(self, cell: Cell) -> Color:
        return self.colors[cell.row][cell.col]


def to_screen(coord: NormalizedCoord, viewport: pygame.Rect) -> Tuple[float, float]:
    x = viewport.left + (coord.x + 1) / 2 * viewport.width
    y = viewport.top + (1 - coord.y) / 2 * viewport.height
    return x, y


def cell_screen_rect(
    picker: CellPicker,
    camera: OrthoCamera,
    cell: Cell,
    viewport: pygame.Rect,
) -> pygame.Rect:
    center = picker.cell_center(cell)
    extent = picker.half_extent
    left, top = to_screen(camera.project(WorldPoint(center.x - extent, center.y + extent)), viewport)
    right, bottom = to_screen(camera.project(WorldPoint(center.x + extent, center.y - extent)), viewport)
    return pygame.Rect(
        int(round(left)),
        int(round(top)),
        max(1, int(round(right - left))),
        max(1, int(round(bottom - top))),
    )


def draw_grid(
    surface: pygame.Surface,
    canvas: GridCanvas,
    picker: CellPicker,
    camera: OrthoCamera,
    viewport: pygame.Rect,
    line_color: Color,
) -> None:
    half_world = picker.world_size / 2
    center_index = picker.size // 2
    for idx in range(picker.size + 1):
        offset = -half_world + idx * picker.cell_size
        color = CENTER_LINE_COLOR if idx == center_index and picker.size % 2 == 0 else line_color
        start = to_screen(camera.project(WorldPoint(offset, -half_world)), viewport)
        end = to_screen(camera.project(WorldPoint(offset, half_world)), viewport)
        pygame.draw.line(surface, color, start, end)
        start = to_screen(camera.project(WorldPoint(-half_world, offset)), viewport)
        end = to_screen(camera.project(WorldPoint(half_world, offset)), viewport)
        pygame.draw.line(surface, color, start, end)

    for row in range(canvas.size):
        for col in range(canvas.size):
            cell = Cell(col, row)
            rect = cell_screen_rect(picker, camera, cell, viewport)
            pygame.draw.rect(surface, canvas.color_at(cell), rect)
