"""Accessor generation command."""

from typing import Annotated

import typer

from typedsql.cli.context import CLIContext
from typedsql.cli.output import OutputFormatter
from typedsql.exceptions import ConfigurationError
from typedsql.loader import load_query_units
from typedsql.pipeline import CodeGenerator


# Registered as a standalone command in main.py
def generate_command(
    ctx: typer.Context,
    directory: Annotated[
        str | None,
        typer.Option("--dir", help="Directory of .sql query files (required)"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--out", "-o", help="Go file to write [default: output.go]"),
    ] = None,
    go_package: Annotated[
        str | None,
        typer.Option("--package", "-p", help="Package clause of the generated file [default: database]"),
    ] = None,
    embed_dir: Annotated[
        str | None,
        typer.Option("--embed-dir", help="Directory of embedded queries, relative to the output [default: sql]"),
    ] = None,
    copy_sql: Annotated[
        bool,
        typer.Option("--copy-sql/--no-copy-sql", help="Copy each query into the embed directory"),
    ] = False,
) -> None:
    """Generate typed Go accessors for a directory of SQL queries.

    Each query is described by the database engine, never executed. The first
    error aborts the run and nothing is written.

    Examples:

        typedsql generate --dir queries
        typedsql generate --dir queries --out internal/database/queries.go --copy-sql
        typedsql --json generate --dir queries
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)
    settings = cli_ctx.settings

    try:
        if not directory:
            raise ConfigurationError("Query directory is required. Pass --dir <path>.")

        # Read every file before connecting so a bad directory fails fast
        units = load_query_units(directory)

        generator = CodeGenerator(
            cli_ctx.get_metadata_source(),
            go_package=go_package or settings.go_package,
            embed_dir=embed_dir or settings.embed_dir,
        )
        result = generator.generate_units(units, output or settings.output, copy_sql=copy_sql)
        formatter.print_generation(result)

    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
