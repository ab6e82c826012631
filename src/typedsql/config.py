"""Settings loaded from the environment and a local .env file."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from typedsql.exceptions import ConfigurationError
from typedsql.pipeline import DEFAULT_EMBED_DIR, DEFAULT_OUTPUT, DEFAULT_PACKAGE


class Settings(BaseSettings):
    """typedsql settings.

    Every value can be overridden on the command line. The connection string is
    also read from plain CONNECTION_STRING.
    """

    connection_string: str = Field(
        default="",
        validation_alias=AliasChoices("TYPEDSQL_CONNECTION_STRING", "CONNECTION_STRING"),
    )
    output: str = DEFAULT_OUTPUT
    go_package: str = DEFAULT_PACKAGE
    embed_dir: str = DEFAULT_EMBED_DIR

    model_config = SettingsConfigDict(env_prefix="TYPEDSQL_", env_file=".env", extra="ignore")


def get_connection_string(explicit: str | None, settings: Settings | None = None) -> str:
    """Resolve the connection string.

    Priority:
    1. Explicit --connection-string value
    2. TYPEDSQL_CONNECTION_STRING / CONNECTION_STRING (environment or .env)

    Raises:
        ConfigurationError: If neither is set
    """
    if explicit:
        return explicit
    settings = settings or Settings()
    if settings.connection_string:
        return settings.connection_string
    raise ConfigurationError(
        "No connection string configured. Pass --connection-string or set "
        "CONNECTION_STRING in the environment or a .env file."
    )
