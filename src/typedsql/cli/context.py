"""CLI context management for the introspection connection and shared state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from typedsql.config import Settings, get_connection_string
from typedsql.core.connection import DatabaseConnection
from typedsql.introspect.metadata import MetadataSource, SqlServerMetadataSource

if TYPE_CHECKING:
    from sqlalchemy import Connection


@dataclass
class CLIContext:
    """Shared context for CLI commands.

    Manages the connection lifecycle and output preferences.
    """

    connection_string: str | None
    echo: bool
    json_output: bool
    settings: Settings = field(default_factory=Settings)
    _database: DatabaseConnection | None = field(default=None, init=False, repr=False)
    _connection: Connection | None = field(default=None, init=False, repr=False)

    def get_metadata_source(self) -> MetadataSource:
        """Open the introspection session (lazy initialization).

        Raises:
            ConfigurationError: If no connection string is configured
            ConnectionError: If the server cannot be reached
        """
        if self._connection is None:
            url = get_connection_string(self.connection_string, self.settings)
            self._database = DatabaseConnection(url, echo=self.echo)
            self._connection = self._database.connect()
        return SqlServerMetadataSource(self._connection)

    def close(self) -> None:
        """Close the connection and engine if open."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        if self._database is not None:
            self._database.close()
            self._database = None
