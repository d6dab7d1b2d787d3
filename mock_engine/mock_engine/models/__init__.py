"""Domain models for the mocksink engine."""

from mock_engine.models.report import MockReport
from mock_engine.models.statement import JobParam, SqlType, StatementParam

__all__ = [
    "JobParam",
    "MockReport",
    "SqlType",
    "StatementParam",
]
