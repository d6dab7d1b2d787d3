"""Value types exchanged between the mocking engine and its SQL front-end.

Nothing here imports a parser.  The front-end adapter translates what it
reads into these views, and the mocking code reads only the views.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Dialect
# ---------------------------------------------------------------------------


class Dialect(str, enum.Enum):
    """Lexical conventions the toolkit can read and write.

    ``JAVA_LEX`` is the job-script convention: identifiers are
    case-sensitive, quoted with back-ticks, and unquoted names are kept
    exactly as written.
    """

    JAVA_LEX = "java_lex"


# ---------------------------------------------------------------------------
# Statement Kinds
# ---------------------------------------------------------------------------


class SqlNodeKind(str, enum.Enum):
    """The statement types the mocking engine tells apart."""

    SELECT = "select"
    CREATE = "create"
    INSERT = "insert"
    DELETE = "delete"
    DROP = "drop"
    ALTER = "alter"
    SET = "set"
    USE = "use"
    COMMAND = "command"
    WITH = "with"

    # Catch-all
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Reference Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TableRef:
    """Possibly-qualified table name.  Hashable, so it can key sets and dicts."""

    catalog: str | None = None
    schema: str | None = None
    name: str = ""

    @property
    def parts(self) -> tuple[str, ...]:
        """Non-empty identifier parts, outermost first."""
        return tuple(p for p in (self.catalog, self.schema, self.name) if p)

    @property
    def fully_qualified(self) -> str:
        """Dot-joined :attr:`parts`."""
        return ".".join(self.parts)

    def __str__(self) -> str:
        return self.fully_qualified


# ---------------------------------------------------------------------------
# Statement Views
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class InsertStatement:
    """A parsed ``INSERT`` statement.

    ``sql`` is the statement text as read and ``target_span`` the
    ``[start, end)`` offsets of the target table name inside it, quotes
    included.  Rendering replaces that span and nothing else, so the source
    query, hints and comments survive byte for byte.

    ``target_columns`` is the explicit column list after the target table
    (empty when the statement has none).
    """

    target: TableRef
    sql: str
    target_span: tuple[int, int]
    target_columns: tuple[str, ...] = ()
    overwrite: bool = False
    dialect: Dialect = Dialect.JAVA_LEX


@dataclass(frozen=True, slots=True)
class DdlStatement:
    """A parsed DDL statement.

    ``object_kind`` is the created/dropped object type in upper case
    (``TABLE``, ``VIEW``, ``FUNCTION``...) or ``""`` when the statement has
    none.  ``columns_sql`` is the text between the column-list parentheses,
    taken verbatim from the source statement.
    """

    kind: SqlNodeKind
    object_kind: str = ""
    table: TableRef | None = None
    columns_sql: str = ""
    sql: str = ""

    @property
    def is_create_table(self) -> bool:
        """True for ``CREATE TABLE`` statements that declare a column list."""
        return (
            self.kind == SqlNodeKind.CREATE
            and self.object_kind == "TABLE"
            and self.table is not None
            and bool(self.columns_sql.strip())
        )


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SqlToolkitError(Exception):
    """Raised by SQL front-ends; never a sqlglot exception type."""


class SqlParseError(SqlToolkitError):
    """The text is not one well-formed statement."""


class UnexpectedStatementError(SqlToolkitError):
    """SQL parsed cleanly but is not the kind of statement that was asked for."""

    def __init__(self, expected: SqlNodeKind, actual: SqlNodeKind, *, detail: str = "") -> None:
        message = f"Expected {expected.value} statement, got {actual.value}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.expected = expected
        self.actual = actual
