from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pygame

from paintbox.config import DEFAULT_CONFIG, coerce_color, coerce_int, load_config
from paintbox.paint.tools import (
    DEFAULT_SIZE,
    MAX_SIZE,
    MIN_SIZE,
    BaseTool,
    ToolSettings,
    make_brush,
    make_eraser,
)
from paintbox.ui.common import (
    Color,
    Point,
    create_window,
    is_pointer_motion,
    is_primary_pointer_event,
    pointer_event_pos,
)
from paintbox.ui.widgets import Button, Slider, clear_button, color_button, tool_button

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND: Color = (225, 225, 225)
DEFAULT_UI_ZONE_TOP = 340
UI_ZONE_FILL = (210, 210, 210)
STATUS_FILL = (225, 225, 225)
STATUS_RECT = (0, 0, 250, 25)

# --- Chrome layout, relative to the top of the UI zone ---
SWATCH_LEFT = 10
SWATCH_SIZE = 30
SWATCH_STEP = 40
ROW_OFFSET = 20
SLIDER_WIDTH = 140
SLIDER_HEIGHT = 10
BUTTON_WIDTH = 40
BUTTON_HEIGHT = 30
BUTTON_STEP = 45


def _load_palette(entries: Any) -> List[Tuple[str, Color]]:
    palette: List[Tuple[str, Color]] = []
    if not isinstance(entries, list):
        return palette
    for entry in entries:
        if isinstance(entry, dict):
            color = coerce_color(entry.get("color"), ())
            label = str(entry.get("label", ""))
        else:
            color = coerce_color(entry, ())
            label = ""
        if color:
            palette.append((label, color))
    return palette


def _paint_section(config: Mapping[str, Any]) -> Mapping[str, Any]:
    section = config.get("paint")
    return section if isinstance(section, Mapping) else {}


class PaintApp:
    def __init__(
        self,
        width: int,
        height: int,
        background: Color = DEFAULT_BACKGROUND,
        *,
        config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        paint_config = _paint_section(DEFAULT_CONFIG if config is None else config)

        self.width = width
        self.height = height
        self.background = background
        self.ui_zone_top = coerce_int(paint_config.get("ui_zone_top", DEFAULT_UI_ZONE_TOP), DEFAULT_UI_ZONE_TOP)

        self.canvas = pygame.Surface((width, height))
        self.canvas.fill(background)

        initial_color = coerce_color(paint_config.get("initial_color"), (0, 0, 0))
        initial_size = coerce_int(paint_config.get("brush_size", DEFAULT_SIZE), DEFAULT_SIZE)
        self.settings = ToolSettings(initial_color, initial_size)

        self.tools: Dict[str, BaseTool] = {"brush": make_brush(), "eraser": make_eraser()}
        self.current_tool: BaseTool = self.tools["brush"]

        palette = _load_palette(paint_config.get("palette"))
        self.buttons: List[Button] = []
        self.slider: Slider = self._build_ui(palette)

    def _build_ui(self, palette: List[Tuple[str, Color]]) -> Slider:
        row_y = self.ui_zone_top + ROW_OFFSET

        for idx, (label, color) in enumerate(palette):
            button = color_button(SWATCH_LEFT + idx * SWATCH_STEP, row_y, SWATCH_SIZE, SWATCH_SIZE, color, label)
            button.is_active = color == self.settings.current_color
            self.buttons.append(button)
        # Only one swatch may start active when the palette repeats a color.
        active_colors = [button for button in self.buttons if button.is_active]
        for button in active_colors[1:]:
            button.is_active = False

        slider_x = SWATCH_LEFT + len(palette) * SWATCH_STEP + 10
        slider = Slider(
            slider_x,
            row_y + 5,
            SLIDER_WIDTH,
            SLIDER_HEIGHT,
            MIN_SIZE,
            MAX_SIZE,
            self.settings.get_brush_size(),
            "Size:",
        )

        buttons_x = slider_x + SLIDER_WIDTH + 10
        brush_button = tool_button(buttons_x, row_y, BUTTON_WIDTH, BUTTON_HEIGHT, self.tools["brush"], "BRUSH")
        brush_button.is_active = True
        self.buttons.append(brush_button)
        self.buttons.append(
            tool_button(buttons_x + BUTTON_STEP, row_y, BUTTON_WIDTH, BUTTON_HEIGHT, self.tools["eraser"], "ERASE")
        )
        self.buttons.append(clear_button(buttons_x + 2 * BUTTON_STEP, row_y, BUTTON_WIDTH, BUTTON_HEIGHT, "CLEAR"))
        return slider

    # --- Commands invoked by buttons ---

    def set_color(self, color: Color) -> None:
        logger.debug("Color set to %s", color)
        self.settings.set_color(color)

    def set_tool(self, tool: BaseTool) -> None:
        logger.debug("Tool set to %s", tool.name)
        self.current_tool = tool

    def clear_canvas(self) -> None:
        logger.debug("Canvas cleared")
        self.canvas.fill(self.background)

    # --- Read-only state for rendering ---

    @property
    def current_tool_name(self) -> str:
        return self.current_tool.name

    @property
    def brush_size(self) -> int:
        return self.settings.get_brush_size()

    def status_text(self) -> str:
        return f"Tool: {self.current_tool_name} | Size: {self.brush_size}"

    # --- Event routing ---

    def set_active_in_group(self, active: Button) -> None:
        if active.group is None:
            return
        for button in self.buttons:
            if button.group == active.group:
                button.is_active = button is active

    def is_in_drawing_area(self, x: float, y: float) -> bool:
        return y < self.ui_zone_top

    def _sync_brush_size(self) -> None:
        self.settings.set_brush_size(self.slider.get_value())

    def on_pointer_down(self, x: int, y: int) -> None:
        if self.slider.contains(x, y):
            self.slider.start_drag()
            self.slider.update_value(x)
            self._sync_brush_size()
            return
        for button in self.buttons:
            if button.contains(x, y):
                button.execute(self)
                self.set_active_in_group(button)
                break

    def on_pointer_move(self, prev_x: int, prev_y: int, x: int, y: int) -> None:
        if self.slider.is_dragging:
            self.slider.update_value(x)
            self._sync_brush_size()
            return
        self.draw_stroke(prev_x, prev_y, x, y)

    def on_pointer_up(self) -> None:
        self.slider.stop_drag()

    def draw_stroke(self, x1: int, y1: int, x2: int, y2: int) -> None:
        if self.is_in_drawing_area(x1, y1) and self.is_in_drawing_area(x2, y2):
            self.current_tool.apply(self.canvas, (x1, y1), (x2, y2), self.settings, self.background)

    def render(self, screen: pygame.Surface, font: Optional[pygame.font.Font] = None) -> None:
        screen.blit(self.canvas, (0, 0))
        pygame.draw.rect(
            screen,
            UI_ZONE_FILL,
            pygame.Rect(0, self.ui_zone_top, self.width, self.height - self.ui_zone_top),
        )
        for button in self.buttons:
            button.draw(screen, font)
        self.slider.draw(screen, font)
        pygame.draw.rect(screen, STATUS_FILL, pygame.Rect(STATUS_RECT))
        if font is not None:
            text = font.render(self.status_text(), True, (0, 0, 0))
            screen.blit(text, text.get_rect(midleft=(10, 15)))


class PaintWindow:
    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        self.config = config if config is not None else load_config()
        paint_config = _paint_section(self.config)
        width = coerce_int(paint_config.get("width", 600), 600)
        height = coerce_int(paint_config.get("height", 600), 600)
        background = coerce_color(paint_config.get("background"), DEFAULT_BACKGROUND)
        self.fps = coerce_int(paint_config.get("fps", 60), 60)

        self.screen, self.screen_rect = create_window((width, height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("sans", 12)
        self.app = PaintApp(width, height, background, config=self.config)

        self.pointer_down = False
        self.last_pos: Optional[Point] = None

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Dispatch one event; returns False when the window should close."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return False
        if is_primary_pointer_event(event, is_down=True):
            pos = pointer_event_pos(event, self.screen_rect)
            if pos is None:
                return True
            self.pointer_down = True
            self.last_pos = pos
            self.app.on_pointer_down(*pos)
        elif is_pointer_motion(event):
            if event.type == pygame.MOUSEMOTION:
                if not (self.pointer_down or event.buttons[0]):
                    return True
            elif not self.pointer_down:
                return True
            pos = pointer_event_pos(event, self.screen_rect)
            if pos is None:
                return True
            prev = self.last_pos or pos
            self.last_pos = pos
            self.app.on_pointer_move(prev[0], prev[1], pos[0], pos[1])
        elif is_primary_pointer_event(event, is_down=False):
            self.pointer_down = False
            self.last_pos = None
            self.app.on_pointer_up()
        return True

    def run(self) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if not self.handle_event(event):
                    running = False
            self.app.render(self.screen, self.font)
            pygame.display.flip()
            self.clock.tick(self.fps)


def _log_level(value: object) -> int:
    level = getattr(logging, str(value).upper(), None)
    return level if isinstance(level, int) else logging.WARNING


def main() -> None:
    config = load_config()
    logging.basicConfig(
        level=_log_level(config.get("log_level", "WARNING")),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    try:
        PaintWindow(config).run()
    except Exception:
        logger.exception("Paintbox crashed")
        raise
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
