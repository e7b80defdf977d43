"""Mode-aware screen layout planning.

``plan`` is pure and total: for any mode, zoom state, and root rectangle it
returns an ordered list of ``(ComponentId, Rect)`` whose rectangles are
disjoint and contained in the root. Components left out of the plan are not
drawn that frame.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .mode import ComponentId, Mode, focused_component

TITLE_MAX_ROWS = 10
MESSAGES_MAX_ROWS = 5
SIDEBAR_PERCENT = 25
EDITOR_PERCENT = 35
POPUP_WIDTH_PERCENT = 60
POPUP_HEIGHT_PERCENT = 20
POPUP_MIN_ROWS = 3


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def intersects(self, other: Rect) -> bool:
        """Return whether the two rectangles share at least one cell."""
        if self.is_empty() or other.is_empty():
            return False
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def contains(self, other: Rect) -> bool:
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def inner(self, margin: int = 1) -> Rect:
        """Return the rectangle shrunk by ``margin`` on every side."""
        width = max(0, self.width - 2 * margin)
        height = max(0, self.height - 2 * margin)
        return Rect(self.x + min(margin, self.width), self.y + min(margin, self.height), width, height)


def split_vertical(area: Rect, heights: Sequence[int]) -> list[Rect]:
    """Stack rows of the given heights top to bottom, clipped to ``area``."""
    out: list[Rect] = []
    y = area.y
    remaining = max(0, area.height)
    for height in heights:
        size = max(0, min(height, remaining))
        out.append(Rect(area.x, y, max(0, area.width), size))
        y += size
        remaining -= size
    return out


def split_horizontal(area: Rect, widths: Sequence[int]) -> list[Rect]:
    """Place columns of the given widths left to right, clipped to ``area``."""
    out: list[Rect] = []
    x = area.x
    remaining = max(0, area.width)
    for width in widths:
        size = max(0, min(width, remaining))
        out.append(Rect(x, area.y, size, max(0, area.height)))
        x += size
        remaining -= size
    return out


def _normalized(root: Rect) -> Rect:
    return Rect(root.x, root.y, max(0, root.width), max(0, root.height))


def _connection_menu_plan(root: Rect) -> list[tuple[ComponentId, Rect]]:
    height = root.height
    title_rows = min(TITLE_MAX_ROWS, height // 3)
    message_rows = min(MESSAGES_MAX_ROWS, height // 3)
    menu_rows = height - title_rows - message_rows
    title, menu, messages = split_vertical(root, [title_rows, menu_rows, message_rows])
    return [
        (ComponentId.TITLE, title),
        (ComponentId.CONNECTION_MENU, menu),
        (ComponentId.MESSAGES, messages),
    ]


def sidebar_component(mode: Mode) -> ComponentId:
    return ComponentId.SCHEMA_LIST if mode is Mode.EXPLORE_SCHEMAS else ComponentId.TABLE_LIST


def result_view_component(mode: Mode) -> ComponentId:
    return ComponentId.STRUCTURE_TABLE if mode is Mode.EXPLORE_STRUCTURE else ComponentId.RESULTS_TABLE


def _default_plan(mode: Mode, root: Rect) -> list[tuple[ComponentId, Rect]]:
    sidebar_cols = max(1, root.width * SIDEBAR_PERCENT // 100) if root.width >= 2 else 0
    sidebar, main = split_horizontal(root, [sidebar_cols, root.width - sidebar_cols])

    height = main.height
    message_rows = min(MESSAGES_MAX_ROWS, height // 4)
    editor_rows = height * EDITOR_PERCENT // 100
    result_rows = height - editor_rows - message_rows
    editor, results, messages = split_vertical(main, [editor_rows, result_rows, message_rows])
    return [
        (sidebar_component(mode), sidebar),
        (ComponentId.TEXT_EDITOR, editor),
        (result_view_component(mode), results),
        (ComponentId.MESSAGES, messages),
    ]


def plan(mode: Mode, zoomed: bool, root: Rect) -> list[tuple[ComponentId, Rect]]:
    """Return the ordered draw plan for ``mode``.

    The connection menu ignores zoom. Any other mode, when zoomed, gives the
    whole root to the component owning that mode.
    """
    root = _normalized(root)
    if mode is Mode.CONNECTION_MENU:
        return _connection_menu_plan(root)
    if zoomed:
        return [(focused_component(mode), root)]
    return _default_plan(mode, root)


def centered_rect(root: Rect, width_percent: int, height_percent: int, min_rows: int = 0) -> Rect:
    root = _normalized(root)
    width = root.width * width_percent // 100
    height = min(root.height, max(min_rows, root.height * height_percent // 100))
    return Rect(
        root.x + (root.width - width) // 2,
        root.y + (root.height - height) // 2,
        width,
        height,
    )


def plan_overlays(mode: Mode, root: Rect) -> list[tuple[ComponentId, Rect]]:
    """Return popups drawn on top of the plan; they may overlap it."""
    if mode is not Mode.EXPLORE_RESULTS:
        return []
    return [
        (
            ComponentId.CELL_POPUP,
            centered_rect(root, POPUP_WIDTH_PERCENT, POPUP_HEIGHT_PERCENT, POPUP_MIN_ROWS),
        )
    ]


__all__ = [
    "Rect",
    "centered_rect",
    "plan",
    "plan_overlays",
    "result_view_component",
    "sidebar_component",
    "split_horizontal",
    "split_vertical",
]
