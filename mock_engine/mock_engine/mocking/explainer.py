"""Redirect a job's sinks to mock tables.

:class:`MockStatementExplainer` rewrites the ``INSERT`` transforms of a job
to write to ``default_catalog.default_database.mock_sink_<table>`` and
swaps the ``CREATE TABLE`` of each such table for one backed by the mock
sink connector.  All other statements keep their text and position.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from mock_engine.config import DdlParseFailurePolicy, Settings, load_settings
from mock_engine.mocking.ddl_generator import mock_sink_ddl
from mock_engine.mocking.insert_scanner import InsertTargetScanner
from mock_engine.models.report import MockReport
from mock_engine.models.statement import JobParam, SqlType, StatementParam
from mock_engine.sql_toolkit import Dialect, SqlParseError, SqlToolkit, get_sql_toolkit

logger = logging.getLogger(__name__)


class MockingError(Exception):
    """Mocking was aborted; the job was left unchanged."""


class MockStatementExplainer:
    """Rewrites a :class:`JobParam` so its output lands in mock sinks.

    Parameters
    ----------
    toolkit:
        SQL toolkit for parsing and rendering.  Defaults to the shared
        instance from :func:`get_sql_toolkit`.
    settings:
        Engine settings.  ``settings.mock_sink`` is the initial value of the
        mocking toggle; :meth:`mock_sink` changes it afterwards.
    """

    def __init__(
        self,
        toolkit: SqlToolkit | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings if settings is not None else load_settings()
        self._toolkit = toolkit if toolkit is not None else get_sql_toolkit()
        self._is_mock_sink = self._settings.mock_sink
        self._scanner = InsertTargetScanner(self._toolkit)

    @classmethod
    def build(
        cls,
        toolkit: SqlToolkit | None = None,
        settings: Settings | None = None,
    ) -> MockStatementExplainer:
        return cls(toolkit=toolkit, settings=settings)

    def mock_sink(self, enabled: bool) -> MockStatementExplainer:
        """Enable or disable sink mocking.  Returns ``self`` for chaining."""
        self._is_mock_sink = enabled
        return self

    @property
    def is_mock_sink(self) -> bool:
        return self._is_mock_sink

    def job_param_mock(self, job: JobParam) -> None:
        """Mock the sinks of *job* in place.

        Replaces ``job.ddl`` and ``job.trans`` with rewritten lists.  Does
        nothing when mocking is disabled.

        Raises
        ------
        MockingError
            Only under :attr:`DdlParseFailurePolicy.ABORT`, when a DDL
            statement cannot be parsed.  *job* is not modified in that case.
        """
        if not self._is_mock_sink:
            return

        mocked, _ = self._mock(job)
        job.ddl = mocked.ddl
        job.trans = mocked.trans

    def rewrite(self, job: JobParam) -> tuple[JobParam, MockReport]:
        """Return a mocked copy of *job* and a report of what changed.

        *job* itself is never modified.  When mocking is disabled the copy
        is identical to the input.
        """
        if not self._is_mock_sink:
            return job.model_copy(deep=True), MockReport(enabled=False)
        return self._mock(job)

    # -- internals -----------------------------------------------------------

    def _mock(self, job: JobParam) -> tuple[JobParam, MockReport]:
        scan = self._scanner.scan(job.trans)
        ddl, mocked_tables, ddl_mocked, unparsed = self._mock_ddl(job.ddl, scan.tables)

        mocked_job = job.model_copy(update={"ddl": ddl, "trans": scan.statements}, deep=True)
        report = MockReport(
            mocked_tables=sorted(scan.tables),
            tables_without_ddl=sorted(scan.tables - mocked_tables),
            inserts_rewritten=scan.rewritten_count,
            ddl_mocked=ddl_mocked,
            dropped_statements=[r.original.value for r in scan.dropped],
            unparsed_ddl=unparsed,
        )

        for table in report.tables_without_ddl:
            logger.info("Sink table %s has no CREATE TABLE in the job; no mock DDL generated", table)
        logger.debug("Mock sink succeed: %s", mocked_job.model_dump_json())
        return mocked_job, report

    def _mock_ddl(
        self,
        statements: Iterable[StatementParam],
        tables: frozenset[str],
    ) -> tuple[list[StatementParam], set[str], int, list[str]]:
        """Swap each ``CREATE TABLE`` of a table in *tables* for its mock.

        Returns the new DDL list, the table names that got mock DDL, the
        number of statements replaced, and the statements the DDL parser
        rejected.
        """
        mocked_ddl: list[StatementParam] = []
        mocked_tables: set[str] = set()
        mocked_count = 0
        unparsed: list[str] = []

        for statement in statements:
            try:
                parsed = self._toolkit.ddl_parser.parse_statement(statement.value, Dialect.JAVA_LEX)
            except SqlParseError as exc:
                if self._settings.ddl_parse_failure is DdlParseFailurePolicy.ABORT:
                    raise MockingError(f"DDL statement could not be parsed: {statement.value}") from exc
                logger.warning(
                    "DDL parse error, statement kept unchanged: %s",
                    exc,
                    extra={"statement": statement.value},
                )
                mocked_ddl.append(statement)
                unparsed.append(statement.value)
                continue

            if parsed.is_create_table and parsed.table is not None and parsed.table.name in tables:
                table_name = parsed.table.name
                mocked_ddl.append(
                    StatementParam(
                        value=mock_sink_ddl(table_name, parsed.columns_sql, self._settings.mock_connector),
                        type=SqlType.CREATE,
                    )
                )
                mocked_tables.add(table_name)
                mocked_count += 1
            else:
                mocked_ddl.append(statement)

        return mocked_ddl, mocked_tables, mocked_count, unparsed
