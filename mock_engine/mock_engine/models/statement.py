"""Job statement models shared with the job-submission pipeline."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SqlType(str, Enum):
    """Declared kind of a job statement, assigned when the script is split."""

    CREATE = "CREATE"
    DROP = "DROP"
    ALTER = "ALTER"
    INSERT = "INSERT"
    SELECT = "SELECT"
    WITH = "WITH"
    USE = "USE"
    SET = "SET"
    RESET = "RESET"
    SHOW = "SHOW"
    DESC = "DESC"
    DESCRIBE = "DESCRIBE"
    EXPLAIN = "EXPLAIN"
    LOAD = "LOAD"
    UNLOAD = "UNLOAD"
    EXECUTE = "EXECUTE"
    ADD = "ADD"
    ADD_JAR = "ADD_JAR"
    ADD_FILE = "ADD_FILE"
    PRINT = "PRINT"
    CTAS = "CTAS"
    UNKNOWN = "UNKNOWN"


class StatementParam(BaseModel):
    """One statement of a job: its text and declared kind.

    Frozen; rewriting replaces statements instead of editing them.
    """

    model_config = ConfigDict(frozen=True)

    value: str
    type: SqlType = SqlType.UNKNOWN


class JobParam(BaseModel):
    """The statement lists of one job submission.

    ``ddl`` holds catalog statements (``CREATE TABLE`` and friends),
    ``trans`` the transforms (``INSERT``), and ``execute`` the remaining
    executable statements.  ``statements`` is the raw split script.
    """

    statements: list[str] = Field(default_factory=list)
    ddl: list[StatementParam] = Field(default_factory=list)
    trans: list[StatementParam] = Field(default_factory=list)
    execute: list[StatementParam] = Field(default_factory=list)
