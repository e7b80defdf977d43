"""Background connection and query tasks.

Every call returns immediately. Outcomes reach the orchestrator only as app
events sent through ``send_event``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping

from ..app_event import AppEvent, ConnectionEstablished, QueryResult, Severity, UserMessage
from ..database.connection import ConnectionConfig, ConnectionHandle, QueryExecutor
from ..database.query import QueryRequest
from ..errors import ChannelClosedError, UnknownConnectionError

logger = logging.getLogger(__name__)

NO_CONNECTION_MESSAGE = "No connection established."

Spawn = Callable[[Callable[[], None], str], None]


def spawn_thread(target: Callable[[], None], name: str) -> None:
    worker = threading.Thread(target=target, name=name, daemon=True)
    worker.start()


def _describe(exc: BaseException) -> str:
    text = str(exc).strip()
    return text or type(exc).__name__


class CommandDispatcher:
    """Spawns fire-and-forget tasks for ``OpenConnection`` and ``ExecuteQuery``."""

    def __init__(
        self,
        executor: QueryExecutor,
        connections: Mapping[str, ConnectionConfig],
        send_event: Callable[[AppEvent], None],
        spawn: Spawn | None = None,
    ) -> None:
        self.executor = executor
        self.connections = connections
        self.send_event = send_event
        self._spawn = spawn_thread if spawn is None else spawn
        self._lock = threading.Lock()
        self._generation = 0
        self._in_flight: dict[ConnectionHandle, int] = {}
        self._retired: set[ConnectionHandle] = set()
        self.tasks_spawned = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _start(self, target: Callable[[], None], name: str) -> None:
        self.tasks_spawned += 1
        self._spawn(target, name)

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def in_flight(self, handle: ConnectionHandle) -> int:
        with self._lock:
            return self._in_flight.get(handle, 0)

    def _acquire(self, handle: ConnectionHandle) -> None:
        with self._lock:
            self._in_flight[handle] = self._in_flight.get(handle, 0) + 1

    def _finish(self, handle: ConnectionHandle) -> bool:
        """Drop one query's use of ``handle``; True when it should close now."""
        with self._lock:
            remaining = self._in_flight[handle] - 1
            if remaining:
                self._in_flight[handle] = remaining
                return False
            del self._in_flight[handle]
            if handle in self._retired:
                self._retired.discard(handle)
                return True
            return False

    def _close(self, handle: ConnectionHandle) -> None:
        try:
            handle.close()
        except Exception:
            logger.warning("closing a connection failed", exc_info=True)

    def release(self, handle: ConnectionHandle) -> None:
        """Retire ``handle`` without blocking the caller.

        The handle is closed on a background task once no query task still
        uses it.
        """
        with self._lock:
            if handle in self._in_flight:
                self._retired.add(handle)
                return
        self._start(lambda: self._close(handle), "lazydb-close")

    def open_connection(self, name: str) -> bool:
        """Start connecting to ``name``; return whether a task was spawned."""
        config = self.connections.get(name)
        if config is None:
            error = UnknownConnectionError(name)
            logger.error("%s", error)
            self.send_event(UserMessage(Severity.ERROR, str(error)))
            return False

        generation = self._next_generation()

        def task() -> None:
            self.send_event(UserMessage(Severity.INFO, f"Connecting to {name}..."))
            try:
                handle = self.executor.connect(config)
            except ChannelClosedError:
                raise
            except Exception as exc:
                logger.warning("connection %r failed", name, exc_info=True)
                self.send_event(UserMessage(Severity.ERROR, _describe(exc)))
                return
            if not self.is_current(generation):
                logger.debug("discarding stale connection %r (generation %d)", name, generation)
                handle.close()
                return
            self.send_event(ConnectionEstablished(handle, generation))
            self.send_event(UserMessage(Severity.INFO, f"Connected to {name}"))

        self._start(task, f"lazydb-connect-{name}")
        return True

    def execute_query(self, handle: ConnectionHandle | None, request: QueryRequest) -> bool:
        """Run ``request`` on ``handle``; return whether a task was spawned."""
        if handle is None:
            logger.error("query %s requested without a connection", request.tag.kind.value)
            self.send_event(UserMessage(Severity.ERROR, NO_CONNECTION_MESSAGE))
            return False

        def task() -> None:
            try:
                try:
                    result = handle.execute(request)
                except ChannelClosedError:
                    raise
                except Exception as exc:
                    logger.warning("query %s failed", request.tag.kind.value, exc_info=True)
                    self.send_event(UserMessage(Severity.ERROR, _describe(exc)))
                    return
                self.send_event(QueryResult(result, request.tag))
            finally:
                if self._finish(handle):
                    self._close(handle)

        self._acquire(handle)
        self._start(task, f"lazydb-query-{request.tag.kind.value}")
        return True


__all__ = ["CommandDispatcher", "NO_CONNECTION_MESSAGE", "spawn_thread"]
