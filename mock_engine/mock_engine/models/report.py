"""Summary of one mock-sink rewrite."""

from __future__ import annotations

from pydantic import BaseModel, Field


class MockReport(BaseModel):
    """What a mocking pass changed in a job.

    ``tables_without_ddl`` lists sinks whose ``INSERT`` was redirected but
    for which the job declares no ``CREATE TABLE``; no mock DDL exists for
    them.  ``dropped_statements`` are transforms declared as ``INSERT`` that
    failed to parse and were removed.  ``unparsed_ddl`` are DDL statements
    kept unchanged because the DDL parser rejected them.
    """

    enabled: bool = True
    mocked_tables: list[str] = Field(default_factory=list)
    tables_without_ddl: list[str] = Field(default_factory=list)
    inserts_rewritten: int = 0
    ddl_mocked: int = 0
    dropped_statements: list[str] = Field(default_factory=list)
    unparsed_ddl: list[str] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.tables_without_ddl or self.dropped_statements or self.unparsed_ddl)
