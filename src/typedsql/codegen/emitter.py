"""Render generated units into a single Go source file."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from typedsql.core.types import GeneratedUnit
from typedsql.exceptions import EmptyResultSetError

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "accessors.go.j2"

env = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)


class Emitter:
    """Renders the shared preamble and one accessor per unit."""

    def __init__(self, go_package: str = "database") -> None:
        self.go_package = go_package

    def emit(self, units: list[GeneratedUnit], timestamp: datetime) -> str:
        """Render all units, in order, into one Go source file.

        Output is deterministic for a given unit list except for the timestamp.

        Raises:
            EmptyResultSetError: If any unit has no result columns. Checked for
                every unit before anything is rendered.
        """
        for unit in units:
            if not unit.results:
                raise EmptyResultSetError(unit.identifier)

        template = env.get_template(TEMPLATE_NAME)
        output = template.render(
            timestamp=timestamp.isoformat(),
            package=self.go_package,
            uses_named_arguments=any(unit.parameters for unit in units),
            units=[_unit_context(unit) for unit in units],
        )
        logger.debug(f"Rendered {len(units)} accessor(s)")
        return output


def _unit_context(unit: GeneratedUnit) -> dict[str, Any]:
    bindings = unit.bindings
    signature = ["ctx context.Context"]
    if bindings.formal_parameters:
        signature.append(bindings.parameter_string)

    return {
        "identifier": unit.identifier,
        "embedded_source_path": unit.embedded_source_path,
        "query_variable": unit.query_variable,
        "signature": ", ".join(signature),
        "returns": ", ".join(["bool", bindings.result_type_string, "error"]),
        "failure": ", ".join(["false"] + [t.zero_value for t in bindings.result_types]),
        "columns": unit.results,
        "arguments": bindings.named_argument_string,
        "scan_targets": bindings.scan_string,
        "return_values": ", ".join(c.name for c in unit.results),
    }
