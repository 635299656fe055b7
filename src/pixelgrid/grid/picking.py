"""Pointer-to-cell resolution.

Screen positions are mapped to normalized coordinates in ``[-1, 1]`` with the
Y axis pointing up, then unprojected through an orthographic camera into the
world plane where the cells live. Cell ``(0, 0)`` is the top-left cell; the
grid is centered on the world origin.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Protocol, Tuple

from pixelgrid.grid.state import Cell

Point = Tuple[float, float]

CAMERA_DISTANCE = 10.0


class NormalizedCoord(NamedTuple):
    x: float
    y: float


class WorldPoint(NamedTuple):
    x: float
    y: float


class ViewportRect(Protocol):
    left: int
    top: int
    width: int
    height: int


@dataclass
class OrthoCamera:
    left: float
    right: float
    top: float
    bottom: float
    distance: float = CAMERA_DISTANCE

    @classmethod
    def framed(
        cls,
        viewport_width: float,
        viewport_height: float,
        world_width: float,
        world_height: float,
    ) -> "OrthoCamera":
        """Frame the world so it fits entirely, padding the longer viewport axis."""
        if viewport_width > 0 and viewport_height > 0:
            aspect = viewport_width / viewport_height
        else:
            aspect = 1.0
        view_w = world_width
        view_h = world_height
        if view_w / view_h < aspect:
            view_w = view_h * aspect
        else:
            view_h = view_w / aspect
        return cls(left=-view_w / 2, right=view_w / 2, top=view_h / 2, bottom=-view_h / 2)

    def unproject(self, coord: NormalizedCoord) -> WorldPoint:
        x = self.left + (coord.x + 1) / 2 * (self.right - self.left)
        y = self.bottom + (coord.y + 1) / 2 * (self.top - self.bottom)
        return WorldPoint(x, y)

    def project(self, point: WorldPoint) -> NormalizedCoord:
        x = (point.x - self.left) / (self.right - self.left) * 2 - 1
        y = (point.y - self.bottom) / (self.top - self.bottom) * 2 - 1
        return NormalizedCoord(x, y)


class CellPicker:
    """Intersects normalized coordinates with the cell quads of an ``N x N`` grid."""

    def __init__(self, size: int, cell_size: float = 1.0, cell_fill: float = 0.96) -> None:
        self.size = size
        self.cell_size = cell_size
        self.cell_fill = cell_fill

    @property
    def world_size(self) -> float:
        return self.size * self.cell_size

    @property
    def half_extent(self) -> float:
        return self.cell_size * self.cell_fill / 2

    def cell_center(self, cell: Cell) -> WorldPoint:
        half = self.size / 2
        x = (cell.col - half) * self.cell_size + self.cell_size * 0.5
        y = (half - cell.row) * self.cell_size - self.cell_size * 0.5
        return WorldPoint(x, y)

    def intersect(self, coord: NormalizedCoord, camera: OrthoCamera) -> List[Tuple[float, Cell]]:
        """Return ``(distance, cell)`` hits, nearest first."""
        world = camera.unproject(coord)
        half = self.size / 2
        col = math.floor(world.x / self.cell_size + half)
        row = math.floor(half - world.y / self.cell_size)
        if not (0 <= col < self.size and 0 <= row < self.size):
            return []
        cell = Cell(col, row)
        center = self.cell_center(cell)
        extent = self.half_extent
        if abs(world.x - center.x) > extent or abs(world.y - center.y) > extent:
            return []
        return [(camera.distance, cell)]


def normalize(point: Point, viewport: ViewportRect) -> NormalizedCoord:
    x = (point[0] - viewport.left) / viewport.width
    y = (point[1] - viewport.top) / viewport.height
    return NormalizedCoord(x * 2 - 1, -(y * 2 - 1))


class PointerResolver:
    def __init__(self, picker: CellPicker, camera: OrthoCamera) -> None:
        self.picker = picker
        self.camera = camera

    def reframe(self, viewport_width: float, viewport_height: float) -> None:
        world = self.picker.world_size
        self.camera = OrthoCamera.framed(viewport_width, viewport_height, world, world)

    normalize = staticmethod(normalize)

    def resolve_cell(self, coord: Optional[NormalizedCoord]) -> Optional[Cell]:
        if coord is None:
            return None
        if not (-1.0 <= coord.x <= 1.0 and -1.0 <= coord.y <= 1.0):
            return None
        hits = self.picker.intersect(coord, self.camera)
        if not hits:
            return None
        return min(hits, key=lambda hit: hit[0])[1]

    def locate(self, point: Optional[Point], viewport: ViewportRect) -> Optional[NormalizedCoord]:
        # Touch events without a usable point resolve to nothing.
        if point is None or viewport.width <= 0 or viewport.height <= 0:
            return None
        return normalize(point, viewport)
