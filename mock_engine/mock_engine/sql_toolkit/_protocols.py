"""Capabilities the mocking engine needs from a SQL front-end.

The mocking package is written against these protocols only, so any parser
with the same grammar coverage can be plugged in through
:func:`~mock_engine.sql_toolkit.register_implementation`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ._types import DdlStatement, Dialect, InsertStatement, TableRef

# ---------------------------------------------------------------------------
# Individual Capability Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class SqlParser(Protocol):
    """Parse DML with the general SQL grammar."""

    def parse_insert(
        self,
        sql: str,
        dialect: Dialect = Dialect.JAVA_LEX,
    ) -> InsertStatement:
        """Parse exactly one ``INSERT`` statement.

        Only the ``INSERT INTO|OVERWRITE <table>`` header has to be
        understood; the source query may use syntax the grammar does not
        model.

        Raises:
            SqlParseError: The text is empty, does not tokenize, holds more
                than one statement, or is not well formed.
            UnexpectedStatementError: The text parses but is not an
                ``INSERT`` into a table.
        """
        ...


@runtime_checkable
class DdlParser(Protocol):
    """Parse DDL with the extended grammar (``CREATE TABLE ... WITH (...)``)."""

    def parse_statement(
        self,
        sql: str,
        dialect: Dialect = Dialect.JAVA_LEX,
    ) -> DdlStatement:
        """Parse a single DDL statement into a :class:`DdlStatement` view.

        Statements that parse but are not DDL are returned with their node
        kind and no table.

        Raises:
            SqlParseError: If the text cannot be parsed.
        """
        ...


@runtime_checkable
class SqlRenderer(Protocol):
    """Render parsed statements back to SQL strings."""

    def render_insert(
        self,
        insert: InsertStatement,
        dialect: Dialect = Dialect.JAVA_LEX,
    ) -> str:
        """Render an :class:`InsertStatement` to reparsable SQL.

        Only the target name is written in *dialect*'s quoting; the rest of
        the statement is the text it was parsed from.
        """
        ...


@runtime_checkable
class SqlRewriter(Protocol):
    """Produce modified copies of parsed statements."""

    def retarget_insert(
        self,
        insert: InsertStatement,
        target: TableRef,
    ) -> InsertStatement:
        """Return a copy of *insert* writing to *target*.

        Everything except the target identifier is preserved.  The input
        statement is never modified.
        """
        ...


# ---------------------------------------------------------------------------
# Composite Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class SqlToolkit(Protocol):
    """Everything :func:`get_sql_toolkit` hands out, one capability per property."""

    @property
    def parser(self) -> SqlParser:
        ...

    @property
    def ddl_parser(self) -> DdlParser:
        ...

    @property
    def renderer(self) -> SqlRenderer:
        ...

    @property
    def rewriter(self) -> SqlRewriter:
        ...
