"""Mock-sink rewriting of job statements."""

from mock_engine.mocking.ddl_generator import drop_mock_sink_ddl, mock_sink_ddl
from mock_engine.mocking.explainer import MockingError, MockStatementExplainer
from mock_engine.mocking.insert_scanner import (
    InsertRewrite,
    InsertScanResult,
    InsertTargetScanner,
    RewriteStatus,
)
from mock_engine.mocking.naming import mock_table_identifier, mock_table_name

__all__ = [
    "InsertRewrite",
    "InsertScanResult",
    "InsertTargetScanner",
    "MockStatementExplainer",
    "MockingError",
    "RewriteStatus",
    "drop_mock_sink_ddl",
    "mock_sink_ddl",
    "mock_table_identifier",
    "mock_table_name",
]
