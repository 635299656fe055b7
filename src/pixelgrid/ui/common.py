from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import pygame

from pixelgrid.grid.palette import Color

Point = Tuple[int, int]

FINGERDOWN = getattr(pygame, "FINGERDOWN", None)
FINGERMOTION = getattr(pygame, "FINGERMOTION", None)
FINGERUP = getattr(pygame, "FINGERUP", None)
FINGER_EVENTS = {event for event in (FINGERDOWN, FINGERMOTION, FINGERUP) if event is not None}
WINDOWFOCUSLOST = getattr(pygame, "WINDOWFOCUSLOST", None)
WINDOWLEAVE = getattr(pygame, "WINDOWLEAVE", None)
CANCEL_EVENTS = {event for event in (WINDOWFOCUSLOST, WINDOWLEAVE) if event is not None}


@dataclass
class Button:
    rect: pygame.Rect
    label: str = ""
    fill: Optional[Color] = None
    border_color: Optional[Color] = (30, 30, 30)
    border_width: int = 0
    text_color: Color = (230, 230, 230)

    def draw(self, surface: pygame.Surface, font: Optional[pygame.font.Font] = None) -> None:
        if self.fill is not None:
            pygame.draw.rect(surface, self.fill, self.rect, border_radius=8)
        if self.border_color is not None and self.border_width > 0:
            pygame.draw.rect(
                surface,
                self.border_color,
                self.rect,
                width=self.border_width,
                border_radius=8,
            )
        if self.label and font is not None:
            text = font.render(self.label, True, self.text_color)
            text_rect = text.get_rect(center=self.rect.center)
            surface.blit(text, text_rect)

    def hit(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


def create_window(size: Tuple[int, int], *, fullscreen: bool = False) -> Tuple[pygame.Surface, pygame.Rect]:
    pygame.init()
    if fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    else:
        screen = pygame.display.set_mode(size, pygame.RESIZABLE)
    pygame.display.set_caption("pixelgrid")
    pygame.mouse.set_visible(True)
    return screen, screen.get_rect()


def is_primary_pointer_event(event: pygame.event.Event, *, is_down: bool) -> bool:
    expected_type = pygame.MOUSEBUTTONDOWN if is_down else pygame.MOUSEBUTTONUP
    if event.type == expected_type:
        # Some touch stacks emit emulated mouse events with button 0.
        button = getattr(event, "button", 1)
        if button in {0, 1}:
            return True
        return bool(getattr(event, "touch", False))
    finger_type = FINGERDOWN if is_down else FINGERUP
    return finger_type is not None and event.type == finger_type


def is_pointer_motion(event: pygame.event.Event) -> bool:
    return event.type == pygame.MOUSEMOTION or (FINGERMOTION is not None and event.type == FINGERMOTION)


def is_pointer_cancel(event: pygame.event.Event) -> bool:
    return event.type in CANCEL_EVENTS


def pointer_event_pos(event: pygame.event.Event, screen_rect: pygame.Rect) -> Optional[Point]:
    """Screen position of a mouse or finger event.

    A mouse-style ``pos`` wins over finger coordinates. Finger coordinates are
    normalized to the window, so they are scaled by the screen size. A finger
    event with no coordinates has no position.
    """
    if hasattr(event, "pos"):
        return event.pos
    if event.type in FINGER_EVENTS:
        x = getattr(event, "x", None)
        y = getattr(event, "y", None)
        if x is None or y is None:
            return None
        return (
            int(x * screen_rect.width),
            int(y * screen_rect.height),
        )
    return None
