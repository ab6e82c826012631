"""Map engine-reported SQL type names to Go type categories.

This is a coarse heuristic. Names are matched by case-sensitive substring,
and "varchar" is checked before "int".
"""

from __future__ import annotations

from typedsql.core.types import MappedType


def map_parameter_type(sql_type_name: str | None) -> MappedType:
    """Map a parameter's suggested type name (e.g. ``varchar(50)``, ``bigint``)."""
    name = sql_type_name or ""
    if "varchar" in name:
        return MappedType.STRING
    if "int" in name:
        return MappedType.INT
    return MappedType.ANY


def map_result_type(sql_type_name: str | None) -> MappedType:
    """Map a result column's type name. Unlike parameters, ``bit`` maps to bool."""
    name = sql_type_name or ""
    if "varchar" in name:
        return MappedType.STRING
    if "int" in name:
        return MappedType.INT
    if name == "bit":
        return MappedType.BOOL
    return MappedType.ANY
