"""Generation pipeline: describe, validate, synthesize, emit, write.

Runs sequentially and stops at the first error. Nothing is written to disk
until the whole output has been rendered in memory.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from typedsql.codegen.bindings import synthesize
from typedsql.codegen.emitter import Emitter
from typedsql.core.types import GeneratedUnit, GenerationResult, QueryUnit
from typedsql.introspect.descriptor import QueryDescriptor, validate_names
from typedsql.loader import load_query_units

if TYPE_CHECKING:
    from typedsql.introspect.metadata import MetadataSource

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "output.go"
DEFAULT_PACKAGE = "database"
DEFAULT_EMBED_DIR = "sql"


class CodeGenerator:
    """Turns a directory of query files into one Go source file."""

    def __init__(
        self,
        source: MetadataSource,
        go_package: str = DEFAULT_PACKAGE,
        embed_dir: str = DEFAULT_EMBED_DIR,
    ) -> None:
        """Initialize the generator.

        Args:
            source: Metadata capability used to describe each query
            go_package: Package clause of the generated file
            embed_dir: Directory, relative to the generated file, that holds the
                embedded copies of the query files
        """
        self._descriptor = QueryDescriptor(source)
        self._emitter = Emitter(go_package)
        self.embed_dir = embed_dir

    def embedded_path(self, identifier: str) -> str:
        """Path used in the //go:embed directive for a query."""
        return str(PurePosixPath(self.embed_dir) / f"{identifier}.sql")

    def build_unit(self, unit: QueryUnit) -> GeneratedUnit:
        """Describe one query and synthesize its bindings.

        Raises:
            MetadataQueryError: If the engine cannot describe the query
            InvalidNameError: If a parameter or column name is unusable
            NameCollisionError: If names collide within the query
        """
        parameters, results = self._descriptor.describe(unit.raw_text, name=unit.identifier)
        validate_names(unit.identifier, parameters, results)
        return GeneratedUnit(
            identifier=unit.identifier,
            embedded_source_path=self.embedded_path(unit.identifier),
            raw_text=unit.raw_text,
            parameters=parameters,
            results=results,
            bindings=synthesize(parameters, results),
        )

    def build(self, units: list[QueryUnit]) -> list[GeneratedUnit]:
        """Build every unit in order."""
        generated = []
        for unit in units:
            logger.info(f"Describing {unit.identifier}")
            generated.append(self.build_unit(unit))
        return generated

    def render(self, generated: list[GeneratedUnit], timestamp: datetime | None = None) -> str:
        """Render the Go source for a list of built units."""
        return self._emitter.emit(generated, timestamp or datetime.now(UTC))

    def generate(
        self,
        query_dir: str | Path,
        output_path: str | Path = DEFAULT_OUTPUT,
        *,
        copy_sql: bool = False,
        timestamp: datetime | None = None,
    ) -> GenerationResult:
        """Run the whole pipeline and write the output file.

        Args:
            query_dir: Directory of .sql files
            output_path: Go file to write (overwritten)
            copy_sql: Also write each query's text under embed_dir next to the
                output, so the //go:embed paths resolve
            timestamp: Generation time to embed (defaults to now, UTC)

        Returns:
            GenerationResult describing what was written
        """
        return self.generate_units(
            load_query_units(query_dir), output_path, copy_sql=copy_sql, timestamp=timestamp
        )

    def generate_units(
        self,
        units: list[QueryUnit],
        output_path: str | Path = DEFAULT_OUTPUT,
        *,
        copy_sql: bool = False,
        timestamp: datetime | None = None,
    ) -> GenerationResult:
        """Same as generate, for units that were already loaded."""
        timestamp = timestamp or datetime.now(UTC)
        output = Path(output_path)

        generated = self.build(units)
        source = self.render(generated, timestamp)

        # The Go file goes last: it only changes once every embedded copy is in place.
        files: dict[Path, str] = {}
        if copy_sql:
            for unit in generated:
                files[output.parent / unit.embedded_source_path] = unit.raw_text
        files[output] = source

        write_files(files)
        logger.info(f"Wrote {len(generated)} accessor(s) to {output}")

        return GenerationResult(
            output_path=output,
            units=[unit.identifier for unit in generated],
            generated_at=timestamp,
            sql_copies=[path for path in files if path != output],
        )


def write_files(files: dict[Path, str]) -> None:
    """Write several files, replacing each target only once all are staged.

    Each file is first written to a temporary sibling, then moved over its target
    with os.replace. If staging fails, no target is touched. Targets are replaced
    in insertion order, so the last entry changes only after the others landed.
    """
    staged: list[tuple[Path, Path]] = []
    try:
        for target, content in files.items():
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
            )
            staged.append((Path(tmp_name), target))
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)

        while staged:
            tmp, target = staged[0]
            os.replace(tmp, target)
            staged.pop(0)
    except BaseException:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)
        raise
