"""Character-grid frame that components draw into.

Each cell holds one character and the ANSI style prefix it is drawn with.
All writes are clipped to the frame and to the caller's rectangle, so a
component can never paint outside the area it was given.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from ..layout import Rect

_CONTROL_TRANSLATION = {code: " " for code in list(range(0, 32)) + [127]}

BOX_PLAIN = ("┌", "┐", "└", "┘", "─", "│")
BOX_THICK = ("┏", "┓", "┗", "┛", "━", "┃")


def sanitize_cell_text(text: str) -> str:
    """Replace control characters so they cannot move the cursor."""
    return str(text).translate(_CONTROL_TRANSLATION)


def char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


class Frame:
    """Mutable cell grid for one rendered screen."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._chars = [[" "] * self.width for _ in range(self.height)]
        self._styles = [[""] * self.width for _ in range(self.height)]

    @property
    def area(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def cell(self, x: int, y: int) -> tuple[str, str]:
        return self._chars[y][x], self._styles[y][x]

    def _put(self, x: int, y: int, ch: str, style: str) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._chars[y][x] = ch
            self._styles[y][x] = style

    def write(self, x: int, y: int, text: str, style: str = "", max_width: int | None = None) -> int:
        """Write ``text`` at ``(x, y)`` and return the number of columns used."""
        return self.write_segments(x, y, [(text, style)], max_width)

    def write_segments(
        self,
        x: int,
        y: int,
        segments: Iterable[tuple[str, str]],
        max_width: int | None = None,
    ) -> int:
        """Write pre-styled ``(text, style)`` runs left to right on one row."""
        limit = self.width - x if max_width is None else min(max_width, self.width - x)
        if y < 0 or y >= self.height or limit <= 0:
            return 0
        used = 0
        for text, style in segments:
            for ch in sanitize_cell_text(text):
                w = char_width(ch)
                if w == 0:
                    continue
                if used + w > limit:
                    return used
                self._put(x + used, y, ch, style)
                if w == 2:
                    self._put(x + used + 1, y, "", style)
                used += w
        return used

    def fill(self, area: Rect, ch: str = " ", style: str = "") -> None:
        for y in range(max(0, area.y), min(self.height, area.bottom)):
            for x in range(max(0, area.x), min(self.width, area.right)):
                self._put(x, y, ch, style)

    def draw_box(self, area: Rect, title: str = "", style: str = "", thick: bool = False) -> Rect:
        """Draw a bordered box with a centred title; return the inner area."""
        if area.width < 2 or area.height < 2:
            return Rect(area.x, area.y, 0, 0)
        top_left, top_right, bottom_left, bottom_right, horizontal, vertical = BOX_THICK if thick else BOX_PLAIN
        inner_width = area.width - 2
        self.write(area.x, area.y, top_left + horizontal * inner_width + top_right, style)
        for y in range(area.y + 1, area.bottom - 1):
            self.write(area.x, y, vertical, style)
            self.write(area.right - 1, y, vertical, style)
        self.write(area.x, area.bottom - 1, bottom_left + horizontal * inner_width + bottom_right, style)
        if title and inner_width > 2:
            label = f" {title} "[:inner_width]
            offset = area.x + 1 + (inner_width - len(label)) // 2
            self.write(offset, area.y, label, style, max_width=inner_width)
        return area.inner()

    def lines(self) -> list[str]:
        """Return the frame as unstyled text rows (used by tests and logs)."""
        return ["".join(row).rstrip() for row in self._chars]

    def to_ansi(self, reset: str = "\033[0m") -> str:
        """Serialize to a full-screen ANSI payload with cursor positioning."""
        out: list[str] = []
        for y in range(self.height):
            out.append(f"\033[{y + 1};1H")
            current = None
            for x in range(self.width):
                ch = self._chars[y][x]
                if ch == "":
                    continue
                style = self._styles[y][x]
                if style != current:
                    out.append(reset)
                    out.append(style)
                    current = style
                out.append(ch)
            out.append(reset)
        return "".join(out)


__all__ = ["BOX_PLAIN", "BOX_THICK", "Frame", "char_width", "sanitize_cell_text"]
