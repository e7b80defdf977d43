"""Terminal event source: keys, ticks, render requests, and resizes."""

from __future__ import annotations

import math
import time
from collections.abc import Callable

from ..input.events import TerminalEvent
from ..input.reader import read_key
from .terminal import terminal_size


class EventSource:
    """Produce the next ``TerminalEvent`` for the orchestrator.

    Waits for a key for at most the time left until the next tick or render
    deadline, so ticks and renders keep their cadence while the user types.
    """

    def __init__(
        self,
        stdin_fd: int,
        tick_rate: float,
        frame_rate: float,
        *,
        read_key: Callable[[int, int | None], str] = read_key,
        get_size: Callable[[], tuple[int, int]] = terminal_size,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.stdin_fd = stdin_fd
        self.tick_interval = 1.0 / tick_rate
        self.render_interval = 1.0 / frame_rate
        self._read_key = read_key
        self._get_size = get_size
        self._clock = clock
        now = clock()
        self._next_tick = now + self.tick_interval
        self._next_render = now
        self._size = get_size()

    def next_event(self) -> TerminalEvent:
        while True:
            size = self._get_size()
            if size != self._size:
                self._size = size
                return TerminalEvent.resize(*size)

            now = self._clock()
            if now >= self._next_tick:
                self._next_tick = now + self.tick_interval
                return TerminalEvent.tick()
            if now >= self._next_render:
                self._next_render = now + self.render_interval
                return TerminalEvent.render()

            wait_ms = math.ceil(max(0.0, min(self._next_tick, self._next_render) - now) * 1000)
            key = self._read_key(self.stdin_fd, wait_ms)
            if key:
                return TerminalEvent.key_press(key)


__all__ = ["EventSource"]
