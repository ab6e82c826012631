"""Shared test fixtures for typedsql."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from typedsql.exceptions import MetadataQueryError
from typedsql.introspect.metadata import MetadataRow

GET_USER_SQL = "SELECT @id AS UserId, Name FROM Users WHERE Id = @id"
LIST_FLAGS_SQL = "SELECT TOP 1 IsActive, Payload FROM Flags"

FIXED_TIMESTAMP = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class FakeMetadataSource:
    """In-memory stand-in for the engine's describe calls.

    Maps query text to the rows the engine would report. Unknown text fails the
    way a syntax error would.
    """

    def __init__(
        self,
        parameters: dict[str, list[tuple[str | None, str | None]]] | None = None,
        columns: dict[str, list[tuple[str | None, str | None]]] | None = None,
    ) -> None:
        self.parameters = parameters or {}
        self.columns = columns or {}
        self.calls: list[tuple[str, str]] = []

    def describe_parameters(self, sql_text: str) -> list[MetadataRow]:
        self.calls.append(("parameters", sql_text))
        if sql_text not in self.parameters:
            raise MetadataQueryError("Incorrect syntax near 'SELEC'.")
        return [MetadataRow(name, type_name) for name, type_name in self.parameters[sql_text]]

    def describe_first_result_set_columns(self, sql_text: str) -> list[MetadataRow]:
        self.calls.append(("columns", sql_text))
        if sql_text not in self.columns:
            raise MetadataQueryError("Incorrect syntax near 'SELEC'.")
        return [MetadataRow(name, type_name) for name, type_name in self.columns[sql_text]]


@pytest.fixture
def fake_source() -> FakeMetadataSource:
    """Metadata source that knows the GetUser and ListFlags queries."""
    return FakeMetadataSource(
        parameters={
            GET_USER_SQL: [("@id", "int")],
            LIST_FLAGS_SQL: [],
        },
        columns={
            GET_USER_SQL: [("UserId", "int"), ("Name", "varchar(100)")],
            LIST_FLAGS_SQL: [("IsActive", "bit"), ("Payload", "varbinary(max)")],
        },
    )


@pytest.fixture
def query_dir(tmp_path: Path) -> Path:
    """Directory with two query files and one file that is not a query."""
    directory = tmp_path / "queries"
    directory.mkdir()
    (directory / "GetUser.sql").write_text(GET_USER_SQL)
    (directory / "ListFlags.sql").write_text(LIST_FLAGS_SQL)
    (directory / "README.md").write_text("not a query")
    return directory


@pytest.fixture
def make_source() -> type[FakeMetadataSource]:
    """The FakeMetadataSource class, for tests that need custom engine answers."""
    return FakeMetadataSource


@pytest.fixture
def fixed_timestamp() -> datetime:
    """Deterministic generation time."""
    return FIXED_TIMESTAMP


@pytest.fixture
def get_user_sql() -> str:
    return GET_USER_SQL


@pytest.fixture
def list_flags_sql() -> str:
    return LIST_FLAGS_SQL
