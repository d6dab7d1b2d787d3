"""Shared fixtures for CLI tests."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate(monkeypatch, tmp_path):
    """Keep host MOCKSINK_* settings and log handlers out of each test."""
    for key in list(os.environ):
        if key.upper().startswith("MOCKSINK_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    # configure_logging binds its handler to the runner's captured stderr.
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture()
def job_file(tmp_path: Path) -> Path:
    """A job with one source, one sink, and one INSERT between them."""
    job = {
        "statements": [],
        "ddl": [
            {
                "value": "CREATE TABLE raw_sales (id INT, amt DOUBLE) WITH ('connector'='kafka')",
                "type": "CREATE",
            },
            {
                "value": "CREATE TABLE sales (id INT, amt DOUBLE) WITH ('connector'='kafka')",
                "type": "CREATE",
            },
        ],
        "trans": [{"value": "INSERT INTO sales SELECT * FROM raw_sales", "type": "INSERT"}],
        "execute": [],
    }
    path = tmp_path / "job.json"
    path.write_text(json.dumps(job), encoding="utf-8")
    return path
