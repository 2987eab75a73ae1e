import pygame

from paintbox.paint.tools import make_brush
from paintbox.ui.widgets import (
    Button,
    ClearCanvas,
    PaintTarget,
    SelectTool,
    SetColor,
    clear_button,
    color_button,
    tool_button,
)


class RecordingTarget(PaintTarget):
    def __init__(self):
        self.colors = []
        self.tools = []
        self.clears = 0

    def set_color(self, color):
        self.colors.append(color)

    def set_tool(self, tool):
        self.tools.append(tool)

    def clear_canvas(self):
        self.clears += 1


def test_contains_is_inclusive_on_every_edge():
    button = clear_button(10, 10, 30, 30, "TEST")
    assert button.contains(15, 15)
    assert button.contains(10, 10)
    assert button.contains(40, 40)
    assert button.contains(40, 10)
    assert button.contains(10, 40)
    assert not button.contains(9, 15)
    assert not button.contains(41, 15)
    assert not button.contains(15, 9)
    assert not button.contains(15, 41)


def test_color_button_sets_color_once():
    target = RecordingTarget()
    button = color_button(0, 0, 30, 30, (255, 0, 0), "RED")

    button.execute(target)

    assert target.colors == [(255, 0, 0)]
    assert target.tools == []
    assert target.clears == 0


def test_tool_button_passes_exact_tool_instance():
    target = RecordingTarget()
    tool = make_brush()
    button = tool_button(0, 0, 30, 30, tool, "BR")

    button.execute(target)

    assert len(target.tools) == 1
    assert target.tools[0] is tool
    assert target.colors == []


def test_clear_button_clears_once():
    target = RecordingTarget()
    clear_button(0, 0, 30, 30).execute(target)
    assert target.clears == 1
    assert target.colors == []
    assert target.tools == []


def test_groups_follow_action_kind():
    assert color_button(0, 0, 1, 1, (0, 0, 0), "K").group == "color"
    assert tool_button(0, 0, 1, 1, make_brush(), "B").group == "tool"
    assert clear_button(0, 0, 1, 1).group is None


def test_factories_build_expected_actions():
    brush = make_brush()
    assert isinstance(color_button(0, 0, 1, 1, (1, 2, 3), "").action, SetColor)
    assert tool_button(0, 0, 1, 1, brush, "").action == SelectTool(brush)
    assert clear_button(0, 0, 1, 1).action == ClearCanvas()


def test_draw_does_not_change_state():
    surface = pygame.Surface((60, 60))
    surface.fill((255, 255, 255))
    button = Button(10, 10, 20, 20, "RED", SetColor((255, 0, 0)), is_active=True)

    button.draw(surface)

    assert surface.get_at((20, 20))[:3] == (255, 0, 0)
    assert surface.get_at((10, 10))[:3] == (0, 0, 0)
    assert button.is_active


def test_plain_button_fill_reflects_active_flag():
    surface = pygame.Surface((60, 60))
    button = clear_button(10, 10, 20, 20, "")

    button.draw(surface)
    assert surface.get_at((20, 20))[:3] == (180, 180, 180)

    button.is_active = True
    button.draw(surface)
    assert surface.get_at((20, 20))[:3] == (100, 100, 100)
