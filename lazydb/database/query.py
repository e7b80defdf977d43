"""Query requests, result sets, and generated system queries.

System queries embed table and schema names as structure, so those names are
validated against a safe identifier grammar and quoted before interpolation.
Only literal values travel as bind parameters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from ..errors import IdentifierError

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
MAX_IDENTIFIER_LENGTH = 128
INITIAL_TABLE_ROW_LIMIT = 1000


@dataclass(frozen=True)
class TableRef:
    """A table name, optionally qualified by schema."""

    name: str
    schema: str | None = None

    def display_name(self) -> str:
        if self.schema:
            return f"{self.schema}.{self.name}"
        return self.name


def parse_table_ref(text: str) -> TableRef:
    """Split ``"schema.table"`` into a ``TableRef``; bare names have no schema."""
    schema, sep, name = str(text).partition(".")
    if not sep:
        return TableRef(name=schema)
    return TableRef(name=name, schema=schema)


class QueryKind(Enum):
    USER = "User"
    LIST_TABLES = "ListTables"
    INITIAL_TABLE = "InitialTable"
    TABLE_STRUCTURE = "TableStructure"


@dataclass(frozen=True)
class QueryTag:
    """Why a query was issued; travels with the request and its result."""

    kind: QueryKind
    table: TableRef | None = None

    @classmethod
    def user(cls) -> QueryTag:
        return cls(QueryKind.USER)

    @classmethod
    def list_tables(cls) -> QueryTag:
        return cls(QueryKind.LIST_TABLES)

    @classmethod
    def initial_table(cls, table: TableRef | str) -> QueryTag:
        return cls(QueryKind.INITIAL_TABLE, _as_table_ref(table))

    @classmethod
    def table_structure(cls, table: TableRef | str) -> QueryTag:
        return cls(QueryKind.TABLE_STRUCTURE, _as_table_ref(table))

    @property
    def is_user_visible(self) -> bool:
        """Results of these queries belong in the results view."""
        return self.kind in (QueryKind.USER, QueryKind.INITIAL_TABLE)


def _as_table_ref(table: TableRef | str) -> TableRef:
    if isinstance(table, TableRef):
        return table
    return parse_table_ref(table)


@dataclass(frozen=True)
class QueryRequest:
    tag: QueryTag
    statement: str
    parameters: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ResultSet:
    """Display-ready query output; every row has ``len(columns)`` cells."""

    columns: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = field(default_factory=tuple)

    @property
    def row_count(self) -> int:
        return len(self.rows)


def validate_identifier(text: str) -> str:
    """Return ``text`` unchanged when it is a safe SQL identifier.

    Raises ``IdentifierError`` for empty, oversized, or non-matching names.
    """
    if not isinstance(text, str) or not text:
        raise IdentifierError("Identifier must not be empty")
    if len(text) > MAX_IDENTIFIER_LENGTH:
        raise IdentifierError(f"Identifier longer than {MAX_IDENTIFIER_LENGTH} characters: {text[:32]}...")
    if IDENTIFIER_RE.match(text) is None:
        raise IdentifierError(f"Invalid identifier: {text!r}")
    return text


def quote_identifier(text: str) -> str:
    """Wrap an identifier in double quotes, doubling any embedded quote."""
    return '"' + text.replace('"', '""') + '"'


def _qualified_name(table: TableRef) -> str:
    validate_identifier(table.name)
    if table.schema is None:
        return quote_identifier(table.name)
    validate_identifier(table.schema)
    return f"{quote_identifier(table.schema)}.{quote_identifier(table.name)}"


LIST_TABLES_SQL = """
SELECT
    table_schema,
    table_name
FROM
    information_schema.tables
WHERE
    table_schema NOT IN ('pg_catalog', 'information_schema')
ORDER BY
    table_schema, table_name ASC;
"""

TABLE_STRUCTURE_SQL = """
SELECT
    col.column_name column_name,
    CASE
        WHEN udt_name IN ('varchar', 'bpchar') THEN concat(udt_name, '(', character_maximum_length, ')')
        WHEN udt_name = 'numeric'
        AND numeric_precision IS NOT NULL THEN concat('numeric(', numeric_precision, ',', numeric_scale, ')')
        ELSE udt_name
    END AS data_type,
    is_nullable,
    CASE
        WHEN column_default IS NULL THEN ''
        ELSE column_default
    END AS column_default,
    CASE
        WHEN rel.column_name IS NOT NULL THEN concat(rel.table_schema, '.', rel.table_name, '(', rel.column_name, ')')
        ELSE ''
    END AS foreign_key
FROM
    information_schema.columns col
    LEFT JOIN (
        SELECT
            kcu.constraint_schema,
            kcu.constraint_name,
            kcu.table_schema,
            kcu.table_name,
            kcu.column_name,
            kcu.ordinal_position,
            kcu.position_in_unique_constraint
        FROM
            information_schema.key_column_usage kcu
            JOIN information_schema.table_constraints tco ON kcu.constraint_schema = tco.constraint_schema
            AND kcu.constraint_name = tco.constraint_name
            AND tco.constraint_type = 'FOREIGN KEY'
    ) AS kcu ON col.table_schema = kcu.table_schema
    AND col.table_name = kcu.table_name
    AND col.column_name = kcu.column_name
    LEFT JOIN information_schema.referential_constraints rco ON rco.constraint_name = kcu.constraint_name
    AND rco.constraint_schema = kcu.table_schema
    LEFT JOIN information_schema.key_column_usage rel ON rco.unique_constraint_name = rel.constraint_name
    AND rco.unique_constraint_schema = rel.constraint_schema
    AND rel.ordinal_position = kcu.position_in_unique_constraint
WHERE
    col.table_schema NOT IN ('information_schema', 'pg_catalog')
    AND col.table_schema = %s AND col.table_name = %s
ORDER BY
    col.ordinal_position;
"""


def system_query(tag: QueryTag) -> QueryRequest:
    """Build the statement the system issues for ``tag``.

    ``InitialTable`` and ``TableStructure`` validate their table reference and
    raise ``IdentifierError`` before any SQL is produced. ``User`` queries are
    typed by the user and have no system statement.
    """
    if tag.kind is QueryKind.LIST_TABLES:
        return QueryRequest(tag=tag, statement=LIST_TABLES_SQL)
    if tag.kind is QueryKind.INITIAL_TABLE:
        if tag.table is None:
            raise IdentifierError("Identifier must not be empty")
        statement = f"SELECT * FROM {_qualified_name(tag.table)} LIMIT {INITIAL_TABLE_ROW_LIMIT};"
        return QueryRequest(tag=tag, statement=statement)
    if tag.kind is QueryKind.TABLE_STRUCTURE:
        if tag.table is None:
            raise IdentifierError("Identifier must not be empty")
        validate_identifier(tag.table.name)
        schema = tag.table.schema if tag.table.schema is not None else "public"
        validate_identifier(schema)
        return QueryRequest(
            tag=tag,
            statement=TABLE_STRUCTURE_SQL,
            parameters=(schema, tag.table.name),
        )
    raise ValueError(f"{tag.kind.value} queries are written by the user, not generated")


__all__ = [
    "IDENTIFIER_RE",
    "INITIAL_TABLE_ROW_LIMIT",
    "MAX_IDENTIFIER_LENGTH",
    "QueryKind",
    "QueryRequest",
    "QueryTag",
    "ResultSet",
    "TableRef",
    "parse_table_ref",
    "quote_identifier",
    "system_query",
    "validate_identifier",
]
