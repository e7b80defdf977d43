"""Query value types, system queries, and the executor seam."""

from .connection import (
    ConnectionConfig,
    ConnectionHandle,
    PostgresExecutor,
    QueryExecutor,
    format_value,
)
from .query import (
    QueryKind,
    QueryRequest,
    QueryTag,
    ResultSet,
    TableRef,
    parse_table_ref,
    quote_identifier,
    system_query,
    validate_identifier,
)

__all__ = [
    "ConnectionConfig",
    "ConnectionHandle",
    "PostgresExecutor",
    "QueryExecutor",
    "QueryKind",
    "QueryRequest",
    "QueryTag",
    "ResultSet",
    "TableRef",
    "format_value",
    "parse_table_ref",
    "quote_identifier",
    "system_query",
    "validate_identifier",
]
