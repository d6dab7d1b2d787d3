"""Unit tests for the job statement and report models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mock_engine.models import JobParam, MockReport, SqlType, StatementParam


class TestStatementParam:
    def test_default_type(self):
        assert StatementParam(value="SELECT 1").type == SqlType.UNKNOWN

    def test_frozen(self):
        statement = StatementParam(value="SELECT 1", type=SqlType.SELECT)
        with pytest.raises(ValidationError):
            statement.value = "SELECT 2"  # type: ignore[misc]

    def test_type_from_string(self):
        assert StatementParam.model_validate({"value": "x", "type": "INSERT"}).type == SqlType.INSERT

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            StatementParam.model_validate({"value": "x", "type": "MERGE"})


class TestJobParam:
    def test_empty_lists_by_default(self):
        job = JobParam()
        assert job.statements == []
        assert job.ddl == []
        assert job.trans == []
        assert job.execute == []

    def test_json_roundtrip(self):
        job = JobParam(
            statements=["INSERT INTO t SELECT 1"],
            trans=[StatementParam(value="INSERT INTO t SELECT 1", type=SqlType.INSERT)],
        )
        assert JobParam.model_validate_json(job.model_dump_json()) == job

    def test_deep_copy_is_independent(self):
        job = JobParam(trans=[StatementParam(value="INSERT INTO t SELECT 1", type=SqlType.INSERT)])
        copy = job.model_copy(deep=True)
        copy.trans.append(StatementParam(value="SELECT 1"))
        assert len(job.trans) == 1


class TestMockReport:
    def test_defaults(self):
        report = MockReport()
        assert report.enabled is True
        assert report.inserts_rewritten == 0
        assert not report.has_warnings

    @pytest.mark.parametrize(
        "field",
        ["tables_without_ddl", "dropped_statements", "unparsed_ddl"],
    )
    def test_warnings(self, field):
        assert MockReport(**{field: ["x"]}).has_warnings
