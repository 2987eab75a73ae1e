from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import pygame

from paintbox.ui.common import Color, Point


MIN_SIZE = 1
MAX_SIZE = 50
DEFAULT_SIZE = 8


class ToolSettings:
    MIN_SIZE = MIN_SIZE
    MAX_SIZE = MAX_SIZE

    def __init__(self, current_color: Color = (0, 0, 0), brush_size: int = DEFAULT_SIZE) -> None:
        self.current_color: Color = current_color
        self._brush_size = DEFAULT_SIZE
        self.set_brush_size(brush_size)

    def set_color(self, color: Color) -> None:
        self.current_color = color

    def get_brush_size(self) -> int:
        return self._brush_size

    def set_brush_size(self, size: int) -> None:
        # Out-of-range sizes clamp; callers wanting rejection use is_valid_size.
        self._brush_size = int(max(self.MIN_SIZE, min(self.MAX_SIZE, size)))

    def is_valid_size(self, size: int) -> bool:
        return self.MIN_SIZE <= size <= self.MAX_SIZE


def draw_line(surface: pygame.Surface, color: Color, start: Point, end: Point, width: int) -> None:
    if width <= 1:
        pygame.draw.line(surface, color, start, end)
        return

    half = width * 0.5
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = math.hypot(dx, dy)
    if length > 1e-6:
        nx = -dy / length
        ny = dx / length
        quad = [
            (start[0] + nx * half, start[1] + ny * half),
            (start[0] - nx * half, start[1] - ny * half),
            (end[0] - nx * half, end[1] - ny * half),
            (end[0] + nx * half, end[1] + ny * half),
        ]
        pygame.draw.polygon(surface, color, [(int(round(x)), int(round(y))) for x, y in quad])

    radius = max(1, int(round(half)))
    pygame.draw.circle(surface, color, start, radius)
    pygame.draw.circle(surface, color, end, radius)


class BaseTool:
    name = "Tool"

    def apply(
        self,
        surface: pygame.Surface,
        start: Point,
        end: Point,
        settings: ToolSettings,
        background: Color,
    ) -> None:
        raise NotImplementedError("apply() must be implemented by a concrete tool")


ColorSource = Callable[[ToolSettings, Color], Color]


@dataclass(eq=False)
class StrokeTool(BaseTool):
    color_source: ColorSource
    name: str = "Stroke"

    def apply(
        self,
        surface: pygame.Surface,
        start: Point,
        end: Point,
        settings: ToolSettings,
        background: Color,
    ) -> None:
        color = self.color_source(settings, background)
        draw_line(surface, color, start, end, settings.get_brush_size())


def _settings_color(settings: ToolSettings, background: Color) -> Color:
    return settings.current_color


def _background_color(settings: ToolSettings, background: Color) -> Color:
    return background


def make_brush() -> StrokeTool:
    return StrokeTool(name="Brush", color_source=_settings_color)


def make_eraser() -> StrokeTool:
    # Erasing paints in the background color; nothing is removed.
    return StrokeTool(name="Eraser", color_source=_background_color)
