"""Discover sink tables of a job's transforms and redirect them to mocks.

Each transform declared as ``INSERT`` is read under the Java lexical
convention.  Its target is recorded by plain table name and the mock table
name is written over the target in the statement text; the source query is
not touched.  A transform that fails to parse is dropped from the
output; a transform that parses but is not an ``INSERT`` into a table is
kept as is.  Every other statement is copied through in place.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from mock_engine.mocking.naming import mock_table_identifier
from mock_engine.models.statement import SqlType, StatementParam
from mock_engine.sql_toolkit import (
    Dialect,
    SqlParseError,
    SqlToolkit,
    UnexpectedStatementError,
)

logger = logging.getLogger(__name__)


class RewriteStatus(str, Enum):
    REWRITTEN = "rewritten"
    PASSED_THROUGH = "passed_through"
    DROPPED = "dropped"


@dataclass(frozen=True)
class InsertRewrite:
    """Outcome of rewriting one transform statement."""

    original: StatementParam
    status: RewriteStatus
    rewritten: StatementParam | None = None
    target_table: str | None = None
    error: SqlParseError | None = None

    @property
    def output(self) -> StatementParam | None:
        """The statement that belongs in the rewritten list, if any."""
        if self.status is RewriteStatus.REWRITTEN:
            return self.rewritten
        if self.status is RewriteStatus.PASSED_THROUGH:
            return self.original
        return None


@dataclass(frozen=True)
class InsertScanResult:
    """Rewritten transform list plus the sink tables it no longer writes to."""

    tables: frozenset[str]
    statements: list[StatementParam]
    results: list[InsertRewrite] = field(default_factory=list)

    @property
    def dropped(self) -> list[InsertRewrite]:
        return [r for r in self.results if r.status is RewriteStatus.DROPPED]

    @property
    def rewritten_count(self) -> int:
        return sum(1 for r in self.results if r.status is RewriteStatus.REWRITTEN)


class InsertTargetScanner:
    """Rewrites ``INSERT`` transforms to target mock tables.

    Parameters
    ----------
    toolkit:
        SQL toolkit used for parsing and rendering.
    dialect:
        Lexical convention of the job's statements, used both to read them
        and to quote the mock table name.
    """

    def __init__(
        self,
        toolkit: SqlToolkit,
        *,
        dialect: Dialect = Dialect.JAVA_LEX,
    ) -> None:
        self._toolkit = toolkit
        self._dialect = dialect

    def rewrite_statement(self, statement: StatementParam) -> InsertRewrite:
        """Rewrite a single transform statement."""
        if statement.type != SqlType.INSERT:
            return InsertRewrite(original=statement, status=RewriteStatus.PASSED_THROUGH)

        try:
            insert = self._toolkit.parser.parse_insert(statement.value, self._dialect)
        except UnexpectedStatementError as exc:
            logger.debug("Transform declared as INSERT kept unchanged: %s", exc)
            return InsertRewrite(original=statement, status=RewriteStatus.PASSED_THROUGH)
        except SqlParseError as exc:
            logger.error(
                "Statement parse error, statement dropped: %s",
                statement.value,
                extra={"statement": statement.value},
            )
            return InsertRewrite(original=statement, status=RewriteStatus.DROPPED, error=exc)

        table_name = insert.target.name
        mocked = self._toolkit.rewriter.retarget_insert(insert, mock_table_identifier(table_name))
        rewritten = StatementParam(
            value=self._toolkit.renderer.render_insert(mocked, self._dialect),
            type=SqlType.INSERT,
        )
        return InsertRewrite(
            original=statement,
            status=RewriteStatus.REWRITTEN,
            rewritten=rewritten,
            target_table=table_name,
        )

    def scan(self, statements: Sequence[StatementParam]) -> InsertScanResult:
        """Rewrite every transform in order and collect the sink tables.

        The input sequence is not modified.
        """
        results = [self.rewrite_statement(statement) for statement in statements]

        tables: set[str] = set()
        rewritten: list[StatementParam] = []
        for result in results:
            if result.target_table is not None:
                tables.add(result.target_table)
            output = result.output
            if output is not None:
                rewritten.append(output)

        return InsertScanResult(tables=frozenset(tables), statements=rewritten, results=results)
