import pygame

from pixelgrid.editor.canvas import GridCanvas, cell_screen_rect, to_screen
from pixelgrid.grid.picking import CellPicker, NormalizedCoord, OrthoCamera
from pixelgrid.grid.state import Cell


def test_canvas_paint_and_reset():
    canvas = GridCanvas(3, (1, 1, 1))
    canvas.paint_cell(Cell(2, 0), (9, 9, 9))
    assert canvas.colors[0][2] == (9, 9, 9)
    assert canvas.color_at(Cell(2, 0)) == (9, 9, 9)

    canvas.reset_cells()
    assert all(color == (1, 1, 1) for row in canvas.colors for color in row)


def test_to_screen_flips_y():
    viewport = pygame.Rect(100, 0, 300, 300)
    assert to_screen(NormalizedCoord(-1.0, 1.0), viewport) == (100, 0)
    assert to_screen(NormalizedCoord(1.0, -1.0), viewport) == (400, 300)


def test_cell_rect_is_smaller_than_pitch_and_covers_center():
    picker = CellPicker(4)
    camera = OrthoCamera.framed(300, 300, 4, 4)
    viewport = pygame.Rect(100, 0, 300, 300)

    rect = cell_screen_rect(picker, camera, Cell(0, 0), viewport)

    assert 70 <= rect.width < 75
    assert 70 <= rect.height < 75
    assert rect.collidepoint((137, 37))
    assert rect.left > 100 and rect.top > 0
