"""Shared fixtures for mock_engine tests."""

from __future__ import annotations

import os

import pytest

from mock_engine.config import Settings
from mock_engine.models import JobParam, SqlType, StatementParam
from mock_engine.sql_toolkit import get_sql_toolkit, reset_toolkit


@pytest.fixture(autouse=True)
def _isolate(monkeypatch, tmp_path):
    """Fresh toolkit per test, and no MOCKSINK_* settings leaking in from the host."""
    for key in list(os.environ):
        if key.upper().startswith("MOCKSINK_"):
            monkeypatch.delenv(key)
    # Settings also reads a .env from the working directory.
    monkeypatch.chdir(tmp_path)

    reset_toolkit()
    yield
    reset_toolkit()


@pytest.fixture()
def toolkit():
    return get_sql_toolkit()


@pytest.fixture()
def mock_settings() -> Settings:
    """Settings with sink mocking switched on."""
    return Settings(mock_sink=True)


RAW_SALES_DDL = "CREATE TABLE raw_sales (id INT, amt DOUBLE) WITH ('connector'='kafka', 'topic'='raw')"
SALES_DDL = "CREATE TABLE sales (id INT, amt DOUBLE) WITH ('connector'='kafka', 'topic'='sales')"
SALES_INSERT = "INSERT INTO sales SELECT * FROM raw_sales"


@pytest.fixture()
def sales_job() -> JobParam:
    """One Kafka source, one Kafka sink, one INSERT between them."""
    return JobParam(
        statements=[RAW_SALES_DDL, SALES_DDL, SALES_INSERT],
        ddl=[
            StatementParam(value=RAW_SALES_DDL, type=SqlType.CREATE),
            StatementParam(value=SALES_DDL, type=SqlType.CREATE),
        ],
        trans=[StatementParam(value=SALES_INSERT, type=SqlType.INSERT)],
        execute=[StatementParam(value="SET 'pipeline.name' = 'sales'", type=SqlType.SET)],
    )
