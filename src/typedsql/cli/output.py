"""Output formatting for CLI commands."""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from typedsql.core.types import GenerationResult, ParameterDescriptor, ResultColumnDescriptor
from typedsql.exceptions import TypedSQLError

console = Console()
error_console = Console(stderr=True)


class OutputFormatter:
    """Formats output for terminal or JSON mode."""

    def __init__(self, json_mode: bool = False) -> None:
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode

    def print_descriptors(
        self,
        name: str,
        parameters: list[ParameterDescriptor],
        results: list[ResultColumnDescriptor],
    ) -> None:
        """Print a query's parameters and result columns.

        Args:
            name: Query identifier
            parameters: Described parameters
            results: Described result columns
        """
        if self.json_mode:
            data = {
                "query": name,
                "parameters": [p.model_dump(mode="json") for p in parameters],
                "results": [c.model_dump(mode="json") for c in results],
            }
            print(json.dumps(data, indent=2))
            return

        console.print(f"\n[bold]Query:[/bold] {name}")
        for title, rows in (("Parameters", parameters), ("Result columns", results)):
            console.print(f"\n[bold]{title} ({len(rows)}):[/bold]")
            if not rows:
                console.print("  (none)", style="dim")
                continue
            table = Table(show_header=True, header_style="bold cyan")
            table.add_column("#")
            table.add_column("Name")
            table.add_column("SQL type")
            table.add_column("Go type")
            for position, row in enumerate(rows, start=1):
                table.add_row(str(position), row.name, row.sql_type_name, str(row.mapped_type))
            console.print(table)

    def print_generation(self, result: GenerationResult) -> None:
        """Print a summary of a generation run.

        Args:
            result: Completed generation result
        """
        if self.json_mode:
            print(json.dumps(result.model_dump(mode="json"), indent=2))
            return

        console.print(
            f"✓ Generated {len(result.units)} accessor(s) in {result.output_path}", style="green"
        )
        for name in result.units:
            console.print(f"  {name}", style="dim")
        if result.sql_copies:
            console.print(f"  copied {len(result.sql_copies)} query file(s) for embedding", style="dim")

    def print_error(self, error: Exception) -> None:
        """Print error message.

        Args:
            error: Exception to display
        """
        if self.json_mode:
            if isinstance(error, TypedSQLError):
                print(json.dumps(error.to_dict(), default=str, indent=2))
            else:
                print(json.dumps({"error": str(error)}, indent=2))
        else:
            error_text = str(error)
            # For TypedSQLError, include context if available
            if isinstance(error, TypedSQLError) and error.context:
                context_str = "\n".join(
                    f"{k}: {v}" for k, v in error.context.items() if v is not None
                )
                error_text = f"{error_text}\n\n{context_str}"

            panel = Panel(
                error_text,
                title="[red]Error[/red]",
                border_style="red",
            )
            error_console.print(panel)
