"""Templated DDL for mock sink tables."""

from __future__ import annotations

from mock_engine.connectors import MOCK_SINK_CONNECTOR
from mock_engine.mocking.naming import mock_table_name

_MOCK_DDL_TEMPLATE = "CREATE TABLE {table} ({columns}) WITH ({options})"
_DROP_DDL_TEMPLATE = "DROP TABLE IF EXISTS {table}"


def mock_sink_ddl(table_name: str, columns: str, connector: str = MOCK_SINK_CONNECTOR) -> str:
    """Build the ``CREATE TABLE`` statement for the mock of *table_name*.

    Parameters
    ----------
    table_name:
        Plain (unqualified) name of the sink table being mocked.
    columns:
        Column definitions of the original table, inserted verbatim.
    connector:
        Sink factory identifier placed in the ``WITH`` clause.  Every other
        option of the original table is dropped.

    Returns
    -------
    str
        ``CREATE TABLE default_catalog.default_database.mock_sink_<name>
        (<columns>) WITH ('connector'='<connector>')``
    """
    return _MOCK_DDL_TEMPLATE.format(
        table=mock_table_name(table_name),
        columns=columns,
        options=f"'connector'='{connector}'",
    )


def drop_mock_sink_ddl(table_name: str) -> str:
    """``DROP TABLE IF EXISTS`` for the mock of *table_name*."""
    return _DROP_DDL_TEMPLATE.format(table=mock_table_name(table_name))
