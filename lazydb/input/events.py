"""Terminal events delivered to the orchestrator by the event source."""

from __future__ import annotations

from dataclasses import dataclass

KEY = "key"
TICK = "tick"
RENDER = "render"
RESIZE = "resize"
QUIT = "quit"


@dataclass(frozen=True)
class TerminalEvent:
    kind: str
    key: str = ""
    width: int = 0
    height: int = 0

    @classmethod
    def key_press(cls, key: str) -> TerminalEvent:
        return cls(KEY, key=key)

    @classmethod
    def tick(cls) -> TerminalEvent:
        return cls(TICK)

    @classmethod
    def render(cls) -> TerminalEvent:
        return cls(RENDER)

    @classmethod
    def resize(cls, width: int, height: int) -> TerminalEvent:
        return cls(RESIZE, width=width, height=height)

    @classmethod
    def quit(cls) -> TerminalEvent:
        return cls(QUIT)


__all__ = ["KEY", "QUIT", "RENDER", "RESIZE", "TICK", "TerminalEvent"]
