"""typedsql CLI - Main entry point."""

import logging
import sys
from typing import Annotated

import typer

import typedsql
from typedsql.cli.context import CLIContext

# Create main Typer app
app = typer.Typer(
    name="typedsql",
    help="typedsql - Typed Go accessors for hand-written SQL Server queries",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    connection_string: Annotated[
        str | None,
        typer.Option(
            "--connection-string",
            "-c",
            help="SQL Server connection string [env: CONNECTION_STRING]",
        ),
    ] = None,
    echo: Annotated[
        bool,
        typer.Option(
            "--echo",
            "-e",
            help="Echo SQL statements to console",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON (machine-readable)",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every step to stderr",
        ),
    ] = False,
) -> None:
    """Initialize CLI context with global options."""
    if verbose:
        level = logging.DEBUG
    elif json_output:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s"
    )

    # Store in Typer context for command access
    ctx.obj = CLIContext(
        connection_string=connection_string,
        echo=echo,
        json_output=json_output,
    )


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"typedsql v{typedsql.__version__}")


# Register commands
from typedsql.cli.commands import describe, generate

app.command(name="generate")(generate.generate_command)
app.command(name="describe")(describe.describe_command)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
