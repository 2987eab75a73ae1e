from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Optional, Protocol, Union

import pygame

from paintbox.ui.common import Color

if TYPE_CHECKING:
    from paintbox.paint.tools import BaseTool


BUTTON_FILL = (180, 180, 180)
BUTTON_ACTIVE_FILL = (100, 100, 100)
TEXT_COLOR = (0, 0, 0)
SLIDER_TRACK = (180, 180, 180)
SLIDER_HANDLE = (120, 120, 120)
SLIDER_HANDLE_DRAGGING = (100, 100, 100)


class PaintTarget(Protocol):
    def set_color(self, color: Color) -> None: ...

    def set_tool(self, tool: BaseTool) -> None: ...

    def clear_canvas(self) -> None: ...


@dataclass(frozen=True)
class SetColor:
    color: Color
    group: ClassVar[Optional[str]] = "color"

    def execute(self, target: PaintTarget) -> None:
        target.set_color(self.color)


@dataclass(frozen=True)
class SelectTool:
    tool: BaseTool
    group: ClassVar[Optional[str]] = "tool"

    def execute(self, target: PaintTarget) -> None:
        target.set_tool(self.tool)


@dataclass(frozen=True)
class ClearCanvas:
    group: ClassVar[Optional[str]] = None

    def execute(self, target: PaintTarget) -> None:
        target.clear_canvas()


ButtonAction = Union[SetColor, SelectTool, ClearCanvas]


def _inclusive_contains(x: int, y: int, width: int, height: int, px: float, py: float) -> bool:
    # pygame.Rect.collidepoint excludes the right and bottom edges; widgets do not.
    return x <= px <= x + width and y <= py <= y + height


def _blit_text(
    surface: pygame.Surface,
    font: Optional[pygame.font.Font],
    text: str,
    **anchor: object,
) -> None:
    if not text or font is None:
        return
    rendered = font.render(text, True, TEXT_COLOR)
    surface.blit(rendered, rendered.get_rect(**anchor))


@dataclass
class Button:
    x: int
    y: int
    width: int
    height: int
    label: str
    action: ButtonAction
    is_active: bool = False

    @property
    def group(self) -> Optional[str]:
        return self.action.group

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, self.width, self.height)

    def contains(self, px: float, py: float) -> bool:
        return _inclusive_contains(self.x, self.y, self.width, self.height, px, py)

    def execute(self, target: PaintTarget) -> None:
        self.action.execute(target)

    def draw(self, surface: pygame.Surface, font: Optional[pygame.font.Font] = None) -> None:
        rect = self.rect
        if isinstance(self.action, SetColor):
            pygame.draw.rect(surface, self.action.color, rect)
            if self.is_active:
                pygame.draw.rect(surface, TEXT_COLOR, rect, width=3)
            _blit_text(surface, font, self.label, center=(rect.centerx, rect.top - 8))
            return
        pygame.draw.rect(surface, BUTTON_ACTIVE_FILL if self.is_active else BUTTON_FILL, rect)
        _blit_text(surface, font, self.label, center=rect.center)


def color_button(x: int, y: int, width: int, height: int, color: Color, label: str) -> Button:
    return Button(x, y, width, height, label, SetColor(color))


def tool_button(x: int, y: int, width: int, height: int, tool: BaseTool, label: str) -> Button:
    return Button(x, y, width, height, label, SelectTool(tool))


def clear_button(x: int, y: int, width: int, height: int, label: str = "CLEAR") -> Button:
    return Button(x, y, width, height, label, ClearCanvas())


@dataclass
class Slider:
    x: int
    y: int
    width: int
    height: int
    min_value: int
    max_value: int
    value: int
    label: str = ""
    is_dragging: bool = False

    def __post_init__(self) -> None:
        self.set_value(self.value)

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, self.width, self.height)

    def contains(self, px: float, py: float) -> bool:
        return _inclusive_contains(self.x, self.y, self.width, self.height, px, py)

    def start_drag(self) -> None:
        self.is_dragging = True

    def stop_drag(self) -> None:
        self.is_dragging = False

    def update_value(self, px: float) -> None:
        if not self.is_dragging:
            return
        pos = (px - self.x) / self.width if self.width > 0 else 1.0
        pos = max(0.0, min(1.0, pos))
        # Round half up so the midpoint between two steps picks the larger one.
        self.value = int(math.floor(self.min_value + pos * (self.max_value - self.min_value) + 0.5))

    def get_value(self) -> int:
        return self.value

    def set_value(self, value: int) -> None:
        self.value = int(max(self.min_value, min(self.max_value, value)))

    def handle_x(self) -> int:
        span = self.max_value - self.min_value
        if span <= 0:
            return self.x
        return int(round(self.x + (self.value - self.min_value) / span * self.width))

    def draw(self, surface: pygame.Surface, font: Optional[pygame.font.Font] = None) -> None:
        pygame.draw.rect(surface, SLIDER_TRACK, self.rect)
        handle = pygame.Rect(self.handle_x() - 5, self.y - 5, 10, self.height + 10)
        pygame.draw.rect(surface, SLIDER_HANDLE_DRAGGING if self.is_dragging else SLIDER_HANDLE, handle)
        _blit_text(surface, font, self.label, midleft=(self.x, self.y - 12))
        _blit_text(surface, font, str(self.value), midright=(self.x + self.width, self.y - 12))
