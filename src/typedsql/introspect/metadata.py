"""Metadata introspection against a live SQL Server session.

The engine describes a query without executing it:
- sp_describe_undeclared_parameters reports the @-parameters the text uses
- sys.dm_exec_describe_first_result_set reports the columns of the first result set
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from typedsql.exceptions import MetadataQueryError

if TYPE_CHECKING:
    from sqlalchemy import Connection

logger = logging.getLogger(__name__)

DESCRIBE_PARAMETERS_SQL = "EXEC sp_describe_undeclared_parameters @tsql = :sql"

DESCRIBE_RESULT_SET_SQL = """
SELECT name, system_type_name, error_number, error_message
FROM sys.dm_exec_describe_first_result_set(:sql, NULL, 0)
ORDER BY column_ordinal
"""


@dataclass(frozen=True)
class MetadataRow:
    """One described parameter or column, as reported by the engine."""

    name: str | None
    type_name: str | None


class MetadataSource(Protocol):
    """Anything that can describe a query's parameters and first result set."""

    def describe_parameters(self, sql_text: str) -> list[MetadataRow]: ...

    def describe_first_result_set_columns(self, sql_text: str) -> list[MetadataRow]: ...


class SqlServerMetadataSource:
    """MetadataSource backed by a SQLAlchemy connection to SQL Server."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def describe_parameters(self, sql_text: str) -> list[MetadataRow]:
        """Describe the undeclared parameters of a query.

        Raises:
            MetadataQueryError: If the engine rejects the query
        """
        try:
            result = self._connection.execute(text(DESCRIBE_PARAMETERS_SQL), {"sql": sql_text})
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            raise MetadataQueryError(_engine_message(e)) from e

        logger.debug(f"Engine described {len(rows)} parameter(s)")
        return [MetadataRow(row["name"], row["suggested_system_type_name"]) for row in rows]

    def describe_first_result_set_columns(self, sql_text: str) -> list[MetadataRow]:
        """Describe the columns of a query's first result set.

        The DMV does not raise on a broken query; it returns a single row with
        error_number set instead.

        Raises:
            MetadataQueryError: If the engine rejects the query
        """
        try:
            result = self._connection.execute(text(DESCRIBE_RESULT_SET_SQL), {"sql": sql_text})
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            raise MetadataQueryError(_engine_message(e)) from e

        for row in rows:
            if row["error_number"] is not None:
                raise MetadataQueryError(f"Msg {row['error_number']}: {row['error_message']}")

        logger.debug(f"Engine described {len(rows)} result column(s)")
        return [MetadataRow(row["name"], row["system_type_name"]) for row in rows]


def _engine_message(error: SQLAlchemyError) -> str:
    """Prefer the driver's message over SQLAlchemy's wrapper text."""
    orig = getattr(error, "orig", None)
    if orig is not None:
        return str(orig)
    return str(error)
