"""Describe a query's parameters and result columns.

Both lists come straight from the engine and are mapped through the type mapper.
Order is preserved as reported: parameters bind by name, but scan targets line up
with the row positionally.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from typedsql.core.type_mapper import map_parameter_type, map_result_type
from typedsql.core.types import ParameterDescriptor, ResultColumnDescriptor
from typedsql.exceptions import InvalidNameError, MetadataQueryError, NameCollisionError

if TYPE_CHECKING:
    from typedsql.introspect.metadata import MetadataSource

logger = logging.getLogger(__name__)

PARAMETER_SIGIL = "@"

GO_KEYWORDS = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)

# Names the generated accessor body already uses: locals, imported packages, and
# the predeclared identifiers that appear in signatures and return statements.
RESERVED_LOCALS = frozenset(
    {
        "_",
        "ctx",
        "q",
        "conn",
        "err",
        "sql",
        "fmt",
        "context",
        "sqlx",
        "string",
        "int",
        "bool",
        "any",
        "true",
        "false",
        "nil",
    }
)


def is_go_identifier(name: str) -> bool:
    """Check a name against Go's identifier rule.

    Go accepts Unicode letters and underscore, followed by letters, underscore and
    decimal digits. Other numeric characters such as superscripts are rejected.
    """
    if not name or not (name[0] == "_" or name[0].isalpha()):
        return False
    return all(ch == "_" or ch.isalpha() or ch.isdecimal() for ch in name[1:])


def package_level_names(identifier: str) -> frozenset[str]:
    """Package-level names an accessor body refers to."""
    return frozenset({f"{identifier}Query", "Queries", "New"})


def strip_sigil(name: str | None) -> str:
    """Drop the leading @ from an engine-reported parameter name."""
    return (name or "").lstrip(PARAMETER_SIGIL)


class QueryDescriptor:
    """Builds descriptor lists for a query using a metadata source."""

    def __init__(self, source: MetadataSource) -> None:
        self._source = source

    def describe(
        self, raw_sql: str, name: str | None = None
    ) -> tuple[list[ParameterDescriptor], list[ResultColumnDescriptor]]:
        """Describe a query's parameters and first-result-set columns.

        Args:
            raw_sql: Query text as read from disk
            name: Query identifier, used only for error context

        Returns:
            (parameters, result_columns), each in engine-reported order

        Raises:
            MetadataQueryError: If either introspection call fails
        """
        try:
            parameter_rows = self._source.describe_parameters(raw_sql)
            column_rows = self._source.describe_first_result_set_columns(raw_sql)
        except MetadataQueryError as e:
            if name is None or e.query is not None:
                raise
            raise MetadataQueryError(e.engine_message, query=name) from e

        parameters = [
            ParameterDescriptor(
                name=strip_sigil(row.name),
                sql_type_name=row.type_name or "",
                mapped_type=map_parameter_type(row.type_name),
            )
            for row in parameter_rows
        ]
        results = [
            ResultColumnDescriptor(
                name=row.name or "",
                sql_type_name=row.type_name or "",
                mapped_type=map_result_type(row.type_name),
            )
            for row in column_rows
        ]

        logger.debug(
            f"Described {name or 'query'}: {len(parameters)} parameter(s), "
            f"{len(results)} result column(s)"
        )
        return parameters, results


def validate_names(
    identifier: str,
    parameters: list[ParameterDescriptor],
    results: list[ResultColumnDescriptor],
) -> None:
    """Check that every name can become a distinct local in the generated accessor.

    Parameters and result columns share one Go function scope, so a name may
    appear only once across both lists.

    Raises:
        InvalidNameError: If a name is empty or not an identifier
        NameCollisionError: If a name repeats or collides with a reserved name
    """
    seen: dict[str, str] = {}
    named = [("parameter", p.name) for p in parameters] + [("result column", c.name) for c in results]
    positions = {"parameter": 0, "result column": 0}
    shadowed = package_level_names(identifier)

    for kind, name in named:
        positions[kind] += 1
        if not is_go_identifier(name):
            raise InvalidNameError(identifier, name, kind, positions[kind])
        if name in GO_KEYWORDS or name in RESERVED_LOCALS:
            raise NameCollisionError(
                identifier,
                name,
                kind,
                reason=f"{kind} '{name}' collides with a name the generated code uses",
            )
        if name in shadowed:
            raise NameCollisionError(
                identifier,
                name,
                kind,
                reason=f"{kind} '{name}' would shadow the package-level '{name}'",
            )
        if name in seen:
            previous = seen[name]
            reason = None
            if previous != kind:
                reason = f"parameter and result column are both named '{name}'"
            raise NameCollisionError(identifier, name, kind, reason=reason)
        seen[name] = kind
