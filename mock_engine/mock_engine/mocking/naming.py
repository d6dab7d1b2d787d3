"""Mapping from a sink table name to its mock table identifier.

The DML rewrite and the generated DDL both go through
:func:`mock_table_identifier`, so an ``INSERT`` and the ``CREATE TABLE``
it writes to always agree on the fully-qualified name.
"""

from __future__ import annotations

from mock_engine.sql_toolkit import TableRef

MOCK_CATALOG = "default_catalog"
MOCK_DATABASE = "default_database"
MOCK_TABLE_PREFIX = "mock_sink_"


def mock_table_identifier(table_name: str) -> TableRef:
    """Return ``default_catalog.default_database.mock_sink_<table_name>``."""
    return TableRef(
        catalog=MOCK_CATALOG,
        schema=MOCK_DATABASE,
        name=f"{MOCK_TABLE_PREFIX}{table_name}",
    )


def mock_table_name(table_name: str) -> str:
    """Dot-joined rendering of :func:`mock_table_identifier`."""
    return mock_table_identifier(table_name).fully_qualified
