"""Background connection and query tasks, run synchronously for determinism."""

from __future__ import annotations

import threading
import unittest
from unittest import mock

from lazydb.app_event import ConnectionEstablished, QueryResult, Severity, UserMessage
from lazydb.database.connection import ConnectionConfig, ConnectionHandle, QueryExecutor
from lazydb.database.query import QueryRequest, QueryTag, ResultSet
from lazydb.errors import QueryExecutionError
from lazydb.runtime.dispatcher import NO_CONNECTION_MESSAGE, CommandDispatcher


class StubHandle(ConnectionHandle):
    def __init__(self, result: ResultSet | None = None, error: Exception | None = None) -> None:
        self.result = result or ResultSet()
        self.error = error
        self.closed = False
        self.requests: list[QueryRequest] = []

    def execute(self, request: QueryRequest) -> ResultSet:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result

    def close(self) -> None:
        self.closed = True


class StubExecutor(QueryExecutor):
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.handles: list[StubHandle] = []

    def connect(self, config: ConnectionConfig) -> ConnectionHandle:
        if self.error is not None:
            raise self.error
        handle = StubHandle()
        self.handles.append(handle)
        return handle


class RecordingSpawn:
    """Collects tasks so tests decide when (and in which order) they run."""

    def __init__(self) -> None:
        self.tasks = []

    def __call__(self, target, name: str) -> None:
        self.tasks.append((name, target))

    def run_all(self) -> None:
        tasks, self.tasks = self.tasks, []
        for _name, target in tasks:
            target()


def run_now(target, name: str) -> None:
    target()


CONNECTIONS = {"local": ConnectionConfig(host="localhost", port=5432, database_name="app")}


class OpenConnectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.events = []

    def _dispatcher(self, executor: QueryExecutor, spawn=run_now) -> CommandDispatcher:
        return CommandDispatcher(executor, CONNECTIONS, self.events.append, spawn)

    def test_known_connection_establishes_exactly_once(self) -> None:
        dispatcher = self._dispatcher(StubExecutor())
        self.assertTrue(dispatcher.open_connection("local"))

        established = [event for event in self.events if isinstance(event, ConnectionEstablished)]
        errors = [
            event for event in self.events
            if isinstance(event, UserMessage) and event.severity is Severity.ERROR
        ]
        self.assertEqual(len(established), 1)
        self.assertEqual(errors, [])
        self.assertEqual(dispatcher.tasks_spawned, 1)
        self.assertEqual(
            [event.text for event in self.events if isinstance(event, UserMessage)],
            ["Connecting to local...", "Connected to local"],
        )

    def test_unknown_connection_spawns_nothing_and_logs(self) -> None:
        spawn = RecordingSpawn()
        dispatcher = self._dispatcher(StubExecutor(), spawn)
        with self.assertLogs("lazydb.runtime.dispatcher", level="ERROR") as logs:
            self.assertFalse(dispatcher.open_connection("remote"))

        self.assertEqual(spawn.tasks, [])
        self.assertEqual(dispatcher.tasks_spawned, 0)
        self.assertEqual(self.events, [UserMessage(Severity.ERROR, "Unknown connection: remote")])
        self.assertIn("remote", logs.output[0])

    def test_connection_failure_becomes_error_message(self) -> None:
        dispatcher = self._dispatcher(StubExecutor(QueryExecutionError("connection refused")))
        with self.assertLogs("lazydb.runtime.dispatcher", level="WARNING"):
            dispatcher.open_connection("local")
        self.assertEqual(self.events[-1], UserMessage(Severity.ERROR, "connection refused"))
        self.assertFalse(any(isinstance(event, ConnectionEstablished) for event in self.events))

    def test_stale_connection_is_closed_not_installed(self) -> None:
        executor = StubExecutor()
        spawn = RecordingSpawn()
        dispatcher = self._dispatcher(executor, spawn)
        dispatcher.open_connection("local")
        dispatcher.open_connection("local")
        spawn.run_all()

        established = [event for event in self.events if isinstance(event, ConnectionEstablished)]
        self.assertEqual(len(established), 1)
        self.assertEqual(established[0].generation, 2)
        self.assertTrue(executor.handles[0].closed)
        self.assertIs(established[0].handle, executor.handles[1])

    def test_default_spawn_runs_on_a_thread(self) -> None:
        done = threading.Event()
        dispatcher = CommandDispatcher(
            StubExecutor(),
            CONNECTIONS,
            lambda event: done.set() if isinstance(event, ConnectionEstablished) else None,
        )
        dispatcher.open_connection("local")
        self.assertTrue(done.wait(2.0))


class ExecuteQueryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.events = []
        self.spawn = RecordingSpawn()
        self.dispatcher = CommandDispatcher(StubExecutor(), CONNECTIONS, self.events.append, self.spawn)
        self.request = QueryRequest(QueryTag.user(), "SELECT 1")

    def test_without_connection_reports_synchronously(self) -> None:
        self.assertFalse(self.dispatcher.execute_query(None, self.request))
        self.assertEqual(self.spawn.tasks, [])
        self.assertEqual(self.events, [UserMessage(Severity.ERROR, NO_CONNECTION_MESSAGE)])

    def test_result_is_reported_with_its_tag(self) -> None:
        result = ResultSet(("?column?",), (("1",),))
        self.assertTrue(self.dispatcher.execute_query(StubHandle(result), self.request))
        self.assertEqual(self.events, [])
        self.spawn.run_all()
        self.assertEqual(self.events, [QueryResult(result, QueryTag.user())])

    def test_query_failure_becomes_error_message(self) -> None:
        handle = StubHandle(error=QueryExecutionError('syntax error at or near "SELEC"'))
        self.dispatcher.execute_query(handle, self.request)
        with self.assertLogs("lazydb.runtime.dispatcher", level="WARNING"):
            self.spawn.run_all()
        self.assertEqual(self.events, [UserMessage(Severity.ERROR, 'syntax error at or near "SELEC"')])

    def test_unexpected_exception_is_contained(self) -> None:
        self.dispatcher.execute_query(StubHandle(error=RuntimeError()), self.request)
        with self.assertLogs("lazydb.runtime.dispatcher", level="WARNING"):
            self.spawn.run_all()
        self.assertEqual(self.events, [UserMessage(Severity.ERROR, "RuntimeError")])


class ReleaseTests(unittest.TestCase):
    def setUp(self) -> None:
        self.events = []
        self.spawn = RecordingSpawn()
        self.dispatcher = CommandDispatcher(StubExecutor(), CONNECTIONS, self.events.append, self.spawn)
        self.request = QueryRequest(QueryTag.user(), "SELECT 1")

    def test_idle_handle_is_closed_on_a_task(self) -> None:
        handle = StubHandle()
        self.dispatcher.release(handle)
        self.assertFalse(handle.closed)
        self.spawn.run_all()
        self.assertTrue(handle.closed)

    def test_close_waits_for_queries_in_flight(self) -> None:
        result = ResultSet(("n",), (("1",),))
        handle = StubHandle(result)
        self.dispatcher.execute_query(handle, self.request)
        self.dispatcher.execute_query(handle, self.request)
        self.assertEqual(self.dispatcher.in_flight(handle), 2)

        self.dispatcher.release(handle)
        self.assertEqual(len(self.spawn.tasks), 2)

        _name, first = self.spawn.tasks.pop(0)
        first()
        self.assertFalse(handle.closed)
        self.spawn.run_all()
        self.assertTrue(handle.closed)
        self.assertEqual(self.events, [QueryResult(result, QueryTag.user())] * 2)
        self.assertEqual(self.dispatcher.in_flight(handle), 0)

    def test_failed_query_still_lets_the_handle_close(self) -> None:
        handle = StubHandle(error=QueryExecutionError("boom"))
        self.dispatcher.execute_query(handle, self.request)
        self.dispatcher.release(handle)
        with self.assertLogs("lazydb.runtime.dispatcher", level="WARNING"):
            self.spawn.run_all()
        self.assertTrue(handle.closed)

    def test_close_failure_is_logged(self) -> None:
        handle = StubHandle()
        handle.close = mock.Mock(side_effect=OSError("socket gone"))
        self.dispatcher.release(handle)
        with self.assertLogs("lazydb.runtime.dispatcher", level="WARNING"):
            self.spawn.run_all()
        handle.close.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
