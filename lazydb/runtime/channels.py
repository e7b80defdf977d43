"""Unbounded multi-producer, single-consumer channels."""

from __future__ import annotations

import threading
from queue import Empty, SimpleQueue
from typing import Generic, TypeVar

from ..errors import ChannelClosedError

T = TypeVar("T")


class Channel(Generic[T]):
    """``SimpleQueue`` with a closed flag and a non-blocking drain."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._queue: SimpleQueue[T] = SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, item: T) -> None:
        if self._closed.is_set():
            raise ChannelClosedError(f"{self.name} channel is closed")
        self._queue.put(item)

    def try_receive(self) -> T | None:
        try:
            return self._queue.get_nowait()
        except Empty:
            return None

    def drain(self) -> list[T]:
        """Take everything queued right now, in FIFO order."""
        items: list[T] = []
        while True:
            try:
                items.append(self._queue.get_nowait())
            except Empty:
                return items

    def empty(self) -> bool:
        return self._queue.empty()

    def close(self) -> None:
        self._closed.set()


__all__ = ["Channel"]
