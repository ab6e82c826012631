"""Query introspection: ask the engine what a query takes and returns."""

from typedsql.introspect.descriptor import QueryDescriptor, strip_sigil, validate_names
from typedsql.introspect.metadata import MetadataRow, MetadataSource, SqlServerMetadataSource

__all__ = [
    "QueryDescriptor",
    "validate_names",
    "strip_sigil",
    "MetadataRow",
    "MetadataSource",
    "SqlServerMetadataSource",
]
