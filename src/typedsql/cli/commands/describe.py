"""Query description command."""

from pathlib import Path
from typing import Annotated

import typer

from typedsql.cli.context import CLIContext
from typedsql.cli.output import OutputFormatter
from typedsql.introspect.descriptor import QueryDescriptor, validate_names
from typedsql.loader import load_query_file


def describe_command(
    ctx: typer.Context,
    query_file: Annotated[Path, typer.Argument(help="Query file to describe")],
) -> None:
    """Show how the engine describes one query, and the Go types it maps to.

    Examples:

        typedsql describe queries/GetUser.sql
        typedsql --json describe queries/GetUser.sql
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        unit = load_query_file(query_file)
        descriptor = QueryDescriptor(cli_ctx.get_metadata_source())
        parameters, results = descriptor.describe(unit.raw_text, name=unit.identifier)
        validate_names(unit.identifier, parameters, results)
        formatter.print_descriptors(unit.identifier, parameters, results)

    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
