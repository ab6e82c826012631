"""Tests for SQL Server metadata introspection."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import ProgrammingError

from typedsql.exceptions import MetadataQueryError
from typedsql.introspect.metadata import (
    DESCRIBE_PARAMETERS_SQL,
    MetadataRow,
    SqlServerMetadataSource,
)


def _connection(rows: list[dict]) -> MagicMock:
    conn = MagicMock()
    conn.execute.return_value.mappings.return_value.all.return_value = rows
    return conn


class TestDescribeParameters:
    """Tests for SqlServerMetadataSource.describe_parameters."""

    def test_reads_name_and_suggested_type(self):
        conn = _connection(
            [
                {"parameter_ordinal": 1, "name": "@id", "suggested_system_type_name": "int"},
                {"parameter_ordinal": 2, "name": "@q", "suggested_system_type_name": "nvarchar(50)"},
            ]
        )
        rows = SqlServerMetadataSource(conn).describe_parameters("SELECT 1 WHERE @id = @q")
        assert rows == [MetadataRow("@id", "int"), MetadataRow("@q", "nvarchar(50)")]

    def test_passes_query_as_bound_parameter(self):
        conn = _connection([])
        SqlServerMetadataSource(conn).describe_parameters("SELECT @x")

        statement, params = conn.execute.call_args.args
        assert str(statement) == DESCRIBE_PARAMETERS_SQL
        assert params == {"sql": "SELECT @x"}

    def test_engine_error_wrapped(self):
        conn = MagicMock()
        conn.execute.side_effect = ProgrammingError(
            "EXEC", {}, Exception("Incorrect syntax near 'SELEC'.")
        )
        with pytest.raises(MetadataQueryError) as exc_info:
            SqlServerMetadataSource(conn).describe_parameters("SELEC 1")
        assert exc_info.value.engine_message == "Incorrect syntax near 'SELEC'."


class TestDescribeFirstResultSetColumns:
    """Tests for SqlServerMetadataSource.describe_first_result_set_columns."""

    def test_reads_name_and_type(self):
        conn = _connection(
            [
                {"name": "UserId", "system_type_name": "int", "error_number": None, "error_message": None},
                {"name": "Name", "system_type_name": "varchar(100)", "error_number": None, "error_message": None},
            ]
        )
        rows = SqlServerMetadataSource(conn).describe_first_result_set_columns("SELECT ...")
        assert rows == [MetadataRow("UserId", "int"), MetadataRow("Name", "varchar(100)")]

    def test_error_row_raises(self):
        """The DMV reports failures as a row rather than raising."""
        conn = _connection(
            [
                {
                    "name": None,
                    "system_type_name": None,
                    "error_number": 208,
                    "error_message": "Invalid object name 'Userz'.",
                }
            ]
        )
        with pytest.raises(MetadataQueryError) as exc_info:
            SqlServerMetadataSource(conn).describe_first_result_set_columns("SELECT * FROM Userz")
        assert exc_info.value.engine_message == "Msg 208: Invalid object name 'Userz'."

    def test_no_columns(self):
        conn = _connection([])
        assert SqlServerMetadataSource(conn).describe_first_result_set_columns("DELETE FROM t") == []

    def test_engine_error_wrapped(self):
        conn = MagicMock()
        conn.execute.side_effect = ProgrammingError("SELECT", {}, Exception("Login failed"))
        with pytest.raises(MetadataQueryError, match="Login failed"):
            SqlServerMetadataSource(conn).describe_first_result_set_columns("SELECT 1")
