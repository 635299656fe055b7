from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pygame

from pixelgrid.config import grid_settings, load_config, palette_entries, window_size
from pixelgrid.editor.canvas import GridCanvas, draw_grid
from pixelgrid.grid.controller import PaintController
from pixelgrid.grid.export import write_export
from pixelgrid.grid.palette import PaletteStore
from pixelgrid.grid.picking import CellPicker, NormalizedCoord, OrthoCamera, PointerResolver
from pixelgrid.grid.state import GridState
from pixelgrid.logging_config import setup_logging
from pixelgrid.paths import ensure_directories, get_data_root
from pixelgrid.ui.common import (
    Button,
    Point,
    create_window,
    is_pointer_cancel,
    is_pointer_motion,
    is_primary_pointer_event,
    pointer_event_pos,
)

logger = logging.getLogger(__name__)

# --- Layout constants ---
MARGIN = 16
PANEL_PAD = 10
PANEL_GAP = 10
PANEL_WIDTH = 160
SWATCH_HEIGHT = 40
ACTION_HEIGHT = 40

PANEL_BG = (32, 34, 36)
ACTION_FILL = (58, 62, 66)
HIGHLIGHT = (245, 245, 245)
STATUS_COLOR = (170, 170, 170)

NUMBER_KEYS = [
    pygame.K_1,
    pygame.K_2,
    pygame.K_3,
    pygame.K_4,
    pygame.K_5,
    pygame.K_6,
    pygame.K_7,
    pygame.K_8,
    pygame.K_9,
]


class PixelGridApp:
    def __init__(
        self,
        *,
        config: Optional[Dict[str, Any]] = None,
        screen: Optional[pygame.Surface] = None,
        screen_rect: Optional[pygame.Rect] = None,
        clock: Optional[pygame.time.Clock] = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        self.data_root = get_data_root(self.config)
        self.export_dir = ensure_directories(self.data_root)["exports"]

        if screen is None:
            window = self.config.get("window", {}) or {}
            self.screen, self.screen_rect = create_window(
                window_size(self.config),
                fullscreen=bool(window.get("fullscreen", False)),
            )
        else:
            self.screen = screen
            self.screen_rect = screen_rect or screen.get_rect()
        self.clock = clock or pygame.time.Clock()

        settings = grid_settings(self.config)
        self.background = settings["background"]
        self.line_color = settings["line_color"]
        self.palette = PaletteStore.from_config(palette_entries(self.config))
        self.grid = GridState(settings["size"])
        self.picker = CellPicker(settings["size"], settings["cell_size"], settings["cell_fill"])
        self.canvas = GridCanvas(settings["size"], settings["empty_color"])
        world = self.picker.world_size
        self.resolver = PointerResolver(self.picker, OrthoCamera.framed(world, world, world, world))
        self.controller = PaintController(self.grid, self.palette, self.resolver, self.canvas)

        self.font = pygame.font.SysFont("sans", 18)
        self.status = ""
        self.action_buttons: Dict[str, Button] = {}
        self.palette_buttons: List[Button] = []
        self._build_ui()
        logger.info(
            "Editor ready: %dx%d grid, %d colors, exports to %s",
            self.grid.size,
            self.grid.size,
            len(self.palette),
            self.export_dir,
        )

    def _build_ui(self) -> None:
        self.action_buttons.clear()
        self.palette_buttons.clear()

        self.controls_rect = pygame.Rect(
            MARGIN,
            MARGIN,
            PANEL_WIDTH,
            max(1, self.screen_rect.height - 2 * MARGIN),
        )
        self.canvas_rect = pygame.Rect(
            self.controls_rect.right + MARGIN,
            MARGIN,
            max(1, self.screen_rect.width - PANEL_WIDTH - 3 * MARGIN),
            max(1, self.screen_rect.height - 2 * MARGIN),
        )
        self.resolver.reframe(self.canvas_rect.width, self.canvas_rect.height)

        left = self.controls_rect.left + PANEL_PAD
        inner_w = self.controls_rect.width - PANEL_PAD * 2
        top = self.controls_rect.top + PANEL_PAD

        export_rect = pygame.Rect(
            left,
            self.controls_rect.bottom - PANEL_PAD - ACTION_HEIGHT - self.font.get_height() - PANEL_GAP,
            inner_w,
            ACTION_HEIGHT,
        )
        clear_rect = export_rect.move(0, -(ACTION_HEIGHT + PANEL_GAP))
        self.action_buttons["clear"] = Button(rect=clear_rect, label="Clear", fill=ACTION_FILL)
        self.action_buttons["export"] = Button(rect=export_rect, label="Export CSV", fill=ACTION_FILL)

        # Swatches share whatever height is left above the action buttons.
        rows = max(1, len(self.palette))
        available = clear_rect.top - PANEL_GAP - top
        swatch_height = max(1, min(SWATCH_HEIGHT, (available + PANEL_GAP) // rows - PANEL_GAP))
        for idx, entry in enumerate(self.palette.colors()):
            rect = pygame.Rect(left, top + idx * (swatch_height + PANEL_GAP), inner_w, swatch_height)
            self.palette_buttons.append(
                Button(rect=rect, label=entry.name, fill=entry.value, border_color=HIGHLIGHT)
            )
        self._highlight_selection()

    def _highlight_selection(self) -> None:
        selected = self.palette.current_selection()
        for idx, button in enumerate(self.palette_buttons):
            button.border_width = 3 if idx == selected else 0

    def _locate(self, pos: Optional[Point]) -> Optional[NormalizedCoord]:
        return self.resolver.locate(pos, self.canvas_rect)

    def select_color(self, index: int) -> None:
        self.palette.select(index)
        self._highlight_selection()
        logger.debug("Selected color %s", self.palette.current_entry().name)

    def clear(self) -> None:
        self.controller.clear()
        self.status = "Cleared"

    def export(self) -> Optional[Path]:
        try:
            path = write_export(self.grid, self.palette, self.export_dir)
        except OSError:
            logger.exception("Export to %s failed", self.export_dir)
            self.status = "Export failed"
            return None
        self.status = f"Saved {path.name}"
        return path

    def _resize(self, size: tuple) -> None:
        self.screen_rect = pygame.Rect(0, 0, size[0], size[1])
        self._build_ui()

    def _handle_pointer_down(self, pos: Point) -> None:
        if self.canvas_rect.collidepoint(pos):
            self.controller.pointer_down(self._locate(pos))
            return

        if self.action_buttons["clear"].hit(pos):
            self.clear()
            return
        if self.action_buttons["export"].hit(pos):
            self.export()
            return

        for idx, button in enumerate(self.palette_buttons):
            if button.hit(pos):
                self.select_color(idx)
                return

    def _handle_key(self, event: pygame.event.Event) -> bool:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key in NUMBER_KEYS:
            index = NUMBER_KEYS.index(event.key)
            if index < len(self.palette):
                self.select_color(index)
        elif event.key in {pygame.K_DELETE, pygame.K_BACKSPACE}:
            self.clear()
        elif event.key == pygame.K_s and getattr(event, "mod", 0) & pygame.KMOD_CTRL:
            self.export()
        return True

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Dispatch one event; returns False when the editor should close."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            return self._handle_key(event)
        if event.type == pygame.VIDEORESIZE:
            self._resize(event.size)
        elif is_primary_pointer_event(event, is_down=True):
            pos = pointer_event_pos(event, self.screen_rect)
            if pos is not None:
                self._handle_pointer_down(pos)
        elif is_pointer_motion(event):
            if self.controller.painting:
                self.controller.pointer_move(self._locate(pointer_event_pos(event, self.screen_rect)))
        elif is_primary_pointer_event(event, is_down=False):
            self.controller.pointer_up()
        elif is_pointer_cancel(event):
            self.controller.pointer_cancel()
        return True

    def _render(self) -> None:
        self.screen.fill(self.background)
        pygame.draw.rect(self.screen, PANEL_BG, self.controls_rect)
        draw_grid(
            self.screen,
            self.canvas,
            self.picker,
            self.resolver.camera,
            self.canvas_rect,
            self.line_color,
        )

        for button in self.palette_buttons:
            button.draw(self.screen, self.font)

        for button in self.action_buttons.values():
            button.draw(self.screen, self.font)

        if self.status:
            text = self.font.render(self.status, True, STATUS_COLOR)
            self.screen.blit(
                text,
                (self.controls_rect.left + PANEL_PAD, self.controls_rect.bottom - PANEL_PAD - text.get_height()),
            )

        pygame.display.flip()

    def run(self, *, quit_on_exit: bool = True) -> None:
        running = True
        self._render()
        while running:
            for event in pygame.event.get():
                if not self.handle_event(event):
                    running = False
            self._render()
            self.clock.tick(60)

        if quit_on_exit:
            pygame.quit()


def main() -> None:
    config = load_config()
    log_settings = config.get("logging", {}) or {}
    setup_logging(log_settings.get("level", "INFO"), log_settings.get("file"))
    try:
        PixelGridApp(config=config).run(quit_on_exit=True)
    except Exception:
        logger.exception("pixelgrid editor stopped unexpectedly")
        pygame.quit()


if __name__ == "__main__":
    main()
