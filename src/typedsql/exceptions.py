"""Custom exceptions for typedsql.

Every error aborts the generation run. Messages name the offending query file and
carry the engine's own message where there is one, so the SQL can be fixed directly.
"""

from __future__ import annotations

from typing import Any


class TypedSQLError(Exception):
    """Base exception for all typedsql errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Return error as JSON-serializable dict."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(TypedSQLError):
    """Missing or unusable configuration (flags, directories, files)."""

    pass


class ConnectionError(TypedSQLError):
    """Failed to connect to the database."""

    pass


class MetadataQueryError(TypedSQLError):
    """The engine could not describe a query's parameters or result set."""

    def __init__(self, engine_message: str, query: str | None = None) -> None:
        if query:
            message = f"Failed to describe query '{query}': {engine_message}"
        else:
            message = f"Failed to describe query: {engine_message}"
        super().__init__(message, {"query": query, "engine_message": engine_message})
        self.query = query
        self.engine_message = engine_message


class EmptyResultSetError(TypedSQLError):
    """A query describes zero result columns."""

    def __init__(self, query: str) -> None:
        message = (
            f"Query '{query}' returns no result columns. "
            "Generated accessors scan exactly one row; make the query return at least one column."
        )
        super().__init__(message, {"query": query})
        self.query = query


class NameCollisionError(TypedSQLError):
    """Two names in one generated accessor would shadow each other."""

    def __init__(self, query: str, name: str, kind: str, reason: str | None = None) -> None:
        detail = reason or f"more than one {kind} is named '{name}'"
        message = f"Name collision in query '{query}': {detail}."
        super().__init__(message, {"query": query, "name": name, "kind": kind})
        self.query = query
        self.name = name
        self.kind = kind


class InvalidNameError(TypedSQLError):
    """A parameter or column name is not usable as a Go identifier."""

    def __init__(self, query: str, name: str, kind: str, position: int) -> None:
        if name:
            message = (
                f"{kind.capitalize()} {position} of query '{query}' is named '{name}', "
                "which is not a valid identifier."
            )
        else:
            message = (
                f"{kind.capitalize()} {position} of query '{query}' has no name. "
                "Give it an alias with AS."
            )
        super().__init__(
            message, {"query": query, "name": name, "kind": kind, "position": position}
        )
        self.query = query
        self.name = name
        self.kind = kind
        self.position = position
