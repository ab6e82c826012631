"""Core components for typedsql."""

from typedsql.core.connection import DatabaseConnection
from typedsql.core.type_mapper import map_parameter_type, map_result_type
from typedsql.core.types import (
    GeneratedUnit,
    MappedType,
    ParameterDescriptor,
    QueryUnit,
    ResultColumnDescriptor,
)

__all__ = [
    "DatabaseConnection",
    "map_parameter_type",
    "map_result_type",
    "MappedType",
    "QueryUnit",
    "ParameterDescriptor",
    "ResultColumnDescriptor",
    "GeneratedUnit",
]
