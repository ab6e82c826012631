"""Derive binding artifacts from descriptor lists.

Pure data transform. Each artifact list lines up positionally with its source list.
"""

from __future__ import annotations

from typedsql.core.types import (
    Bindings,
    FormalParameter,
    NamedArgument,
    ParameterDescriptor,
    ResultColumnDescriptor,
    ScanTarget,
)


def synthesize(
    parameters: list[ParameterDescriptor],
    results: list[ResultColumnDescriptor],
) -> Bindings:
    """Build the signature, argument, return-type and scan-target lists for a query.

    Parameters are bound by name, passing the local of the same name by value.
    Every result column is scanned into the address of a local named after it.
    """
    return Bindings(
        formal_parameters=[FormalParameter(name=p.name, type=p.mapped_type) for p in parameters],
        named_arguments=[NamedArgument(name=p.name, value=p.name) for p in parameters],
        result_types=[c.mapped_type for c in results],
        scan_targets=[ScanTarget(variable=c.name) for c in results],
    )
