"""Connection parameters and the query-executor seam.

The orchestration layer only knows ``QueryExecutor.connect`` and
``ConnectionHandle.execute``. ``PostgresExecutor`` is the shipped
implementation, built on psycopg 3.
"""

from __future__ import annotations

import datetime as _dt
import json
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ..errors import QueryExecutionError
from .query import QueryRequest, ResultSet

NULL_DISPLAY = "NULL"


@dataclass(frozen=True)
class ConnectionConfig:
    """Connection parameters resolved from the connection directory."""

    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database_name: str | None = None

    def connect_kwargs(self) -> dict[str, object]:
        """Return only the parameters that were configured, keyed for libpq."""
        pairs = (
            ("host", self.host),
            ("port", self.port),
            ("user", self.user),
            ("password", self.password),
            ("dbname", self.database_name),
        )
        return {key: value for key, value in pairs if value is not None}


class ConnectionHandle(ABC):
    """Capability bound to one open database connection.

    Handles are shared by the orchestrator and any in-flight query task. The
    dispatcher closes a released handle once its last query task finishes.
    """

    @abstractmethod
    def execute(self, request: QueryRequest) -> ResultSet:
        """Run ``request`` and return its rows; blocks the calling thread."""

    def close(self) -> None:
        pass


class QueryExecutor(ABC):
    """Opens connections; blocking calls run on background tasks only."""

    @abstractmethod
    def connect(self, config: ConnectionConfig) -> ConnectionHandle:
        """Open a connection described by ``config``."""


def format_value(value: object) -> str:
    """Format one database value as display text."""
    if value is None:
        return NULL_DISPLAY
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return "\\x" + raw.hex()
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(format_value(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, default=str, sort_keys=True)
    return str(value)


class PostgresConnectionHandle(ConnectionHandle):
    """One psycopg connection used serially by concurrent query tasks."""

    def __init__(self, connection) -> None:
        self._connection = connection
        self._lock = threading.Lock()

    def execute(self, request: QueryRequest) -> ResultSet:
        import psycopg

        with self._lock:
            try:
                with self._connection.cursor() as cursor:
                    cursor.execute(request.statement, request.parameters)
                    if cursor.description is None:
                        return ResultSet()
                    columns = tuple(column.name for column in cursor.description)
                    rows = tuple(
                        tuple(format_value(value) for value in row)
                        for row in cursor.fetchall()
                    )
            except psycopg.Error as exc:
                raise QueryExecutionError(str(exc).strip() or type(exc).__name__) from exc
        return ResultSet(columns=columns, rows=rows)

    def close(self) -> None:
        with self._lock:
            self._connection.close()


class PostgresExecutor(QueryExecutor):
    """Executor backed by psycopg, autocommitting each statement."""

    def __init__(self, connect_timeout: int = 10) -> None:
        self.connect_timeout = connect_timeout

    def connect(self, config: ConnectionConfig) -> ConnectionHandle:
        import psycopg

        try:
            connection = psycopg.connect(
                autocommit=True,
                connect_timeout=self.connect_timeout,
                **config.connect_kwargs(),
            )
        except psycopg.Error as exc:
            raise QueryExecutionError(str(exc).strip() or type(exc).__name__) from exc
        return PostgresConnectionHandle(connection)


__all__ = [
    "ConnectionConfig",
    "ConnectionHandle",
    "NULL_DISPLAY",
    "PostgresConnectionHandle",
    "PostgresExecutor",
    "QueryExecutor",
    "format_value",
]
