import pygame
import pytest

from pixelgrid.grid.picking import (
    CellPicker,
    NormalizedCoord,
    OrthoCamera,
    PointerResolver,
    WorldPoint,
    normalize,
)
from pixelgrid.grid.state import Cell


def test_normalize_maps_viewport_corners_with_y_up():
    viewport = pygame.Rect(100, 50, 200, 100)
    assert normalize((100, 50), viewport) == NormalizedCoord(-1.0, 1.0)
    assert normalize((300, 150), viewport) == NormalizedCoord(1.0, -1.0)
    assert normalize((200, 100), viewport) == NormalizedCoord(0.0, 0.0)


def test_normalize_screen_down_is_negative_y():
    viewport = pygame.Rect(0, 0, 100, 100)
    upper = normalize((50, 10), viewport)
    lower = normalize((50, 90), viewport)
    assert upper.y > 0 > lower.y


def test_framed_camera_pads_wide_viewport():
    camera = OrthoCamera.framed(800, 600, 30, 30)
    assert camera.right - camera.left == pytest.approx(40)
    assert camera.top - camera.bottom == pytest.approx(30)


def test_framed_camera_pads_tall_viewport():
    camera = OrthoCamera.framed(600, 800, 30, 30)
    assert camera.right - camera.left == pytest.approx(30)
    assert camera.top - camera.bottom == pytest.approx(40)


def test_project_inverts_unproject():
    camera = OrthoCamera.framed(640, 480, 12, 12)
    coord = NormalizedCoord(0.25, -0.6)
    back = camera.project(camera.unproject(coord))
    assert back.x == pytest.approx(coord.x)
    assert back.y == pytest.approx(coord.y)


def test_cell_zero_zero_is_top_left():
    picker = CellPicker(30)
    top_left = picker.cell_center(Cell(0, 0))
    bottom_right = picker.cell_center(Cell(29, 29))
    assert top_left == WorldPoint(-14.5, 14.5)
    assert bottom_right == WorldPoint(14.5, -14.5)


@pytest.mark.parametrize("viewport", [(800, 600), (600, 800), (500, 500)])
def test_cell_center_resolves_to_that_cell(viewport):
    picker = CellPicker(30)
    resolver = PointerResolver(picker, OrthoCamera.framed(1, 1, 1, 1))
    resolver.reframe(*viewport)
    for row in range(30):
        for col in range(30):
            cell = Cell(col, row)
            coord = resolver.camera.project(picker.cell_center(cell))
            assert resolver.resolve_cell(coord) == cell


def test_gap_between_cells_is_a_miss():
    picker = CellPicker(4)
    camera = OrthoCamera.framed(100, 100, 4, 4)
    resolver = PointerResolver(picker, camera)
    # World x = -1.0 is the boundary between columns 0 and 1.
    coord = camera.project(WorldPoint(-1.0, 1.5))
    assert resolver.resolve_cell(coord) is None


def test_beyond_grid_edge_is_a_miss():
    picker = CellPicker(4)
    camera = OrthoCamera.framed(200, 100, 4, 4)
    resolver = PointerResolver(picker, camera)
    coord = camera.project(WorldPoint(3.0, 0.5))
    assert -1.0 <= coord.x <= 1.0
    assert resolver.resolve_cell(coord) is None


@pytest.mark.parametrize("coord", [(1.5, 0.5), (0.5, -1.01), (-2.0, 0.0)])
def test_coordinates_outside_unit_square_never_resolve(coord):
    picker = CellPicker(30)
    # A camera zoomed into the grid so these coordinates would land on cells.
    resolver = PointerResolver(picker, OrthoCamera(left=-1, right=1, top=1, bottom=-1))
    assert resolver.resolve_cell(NormalizedCoord(*coord)) is None


def test_resolve_takes_nearest_hit(monkeypatch):
    picker = CellPicker(4)
    resolver = PointerResolver(picker, OrthoCamera.framed(1, 1, 4, 4))
    monkeypatch.setattr(picker, "intersect", lambda coord, camera: [(12.0, Cell(1, 1)), (10.0, Cell(2, 2))])
    assert resolver.resolve_cell(NormalizedCoord(0.0, 0.0)) == Cell(2, 2)


def test_locate_without_point_resolves_to_nothing():
    resolver = PointerResolver(CellPicker(4), OrthoCamera.framed(1, 1, 4, 4))
    viewport = pygame.Rect(0, 0, 100, 100)
    assert resolver.locate(None, viewport) is None
    assert resolver.resolve_cell(resolver.locate(None, viewport)) is None
    assert resolver.locate((25, 25), viewport) == NormalizedCoord(-0.5, 0.5)


@pytest.mark.parametrize("width,height", [(0, 600), (600, 0), (0, 0)])
def test_framed_camera_tolerates_collapsed_viewport(width, height):
    camera = OrthoCamera.framed(width, height, 30, 30)
    assert camera.right - camera.left == pytest.approx(30)
    assert camera.top - camera.bottom == pytest.approx(30)
