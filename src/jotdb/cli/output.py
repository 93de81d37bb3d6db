"""Output formatting for CLI commands."""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from jotdb.core.types import ID_FIELD, CollectionInfo, Document
from jotdb.exceptions import JotDBError

console = Console()


def _dump(data: Any) -> None:
    print(json.dumps(data, default=str, indent=2, ensure_ascii=False))


def _cell(value: Any) -> str:
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class OutputFormatter:
    """Formats output for terminal or JSON mode."""

    def __init__(self, json_mode: bool = False) -> None:
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode

    def print_table(
        self,
        title: str,
        data: list[dict[str, Any]],
        columns: list[str],
    ) -> None:
        """Print data as Rich table or JSON array."""
        if self.json_mode:
            _dump(data)
        else:
            table = Table(title=title, show_header=True, header_style="bold magenta")
            for col in columns:
                table.add_column(col)
            for row in data:
                table.add_row(*[_cell(row.get(col, "")) for col in columns])
            console.print(table)

    def print_documents(self, title: str, documents: list[Document], fields: list[str]) -> None:
        """Print documents with ``_id`` followed by the schema fields."""
        self.print_table(title, documents, [ID_FIELD, *fields])

    def print_collection_info(self, info: CollectionInfo) -> None:
        """Print collection information with its fields."""
        if self.json_mode:
            _dump(info.model_dump())
            return

        console.print(f"\n[bold]Collection:[/bold] {info.name}")
        console.print(f"Storage: {info.storage}")
        console.print(f"Records: {info.record_count:,}")

        if info.fields:
            console.print(f"\n[bold]Fields ({len(info.fields)}):[/bold]")
            fields_table = Table(show_header=True, header_style="bold cyan")
            fields_table.add_column("Name")
            fields_table.add_column("Type")
            fields_table.add_column("Indexed")
            fields_table.add_column("Ignore case")
            fields_table.add_column("Default")

            for field in info.fields:
                fields_table.add_row(
                    field.name,
                    field.type,
                    "✓" if field.indexed else "",
                    "✓" if field.ignore_case else "",
                    "" if field.default is None else _cell(field.default),
                )
            console.print(fields_table)

    def print_success(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Print success message with optional details."""
        if self.json_mode:
            output = {"success": True, "message": message}
            if details:
                output.update(details)
            _dump(output)
        else:
            console.print(f"✓ {message}", style="green")
            if details:
                for key, value in details.items():
                    console.print(f"  {key}: {value}", style="dim")

    def print_error(self, error: Exception) -> None:
        """Print error message."""
        if self.json_mode:
            if isinstance(error, JotDBError):
                _dump(error.to_dict())
            else:
                _dump({"error": type(error).__name__, "message": str(error)})
        else:
            error_text = str(error)
            if isinstance(error, JotDBError) and error.context:
                context_str = "\n".join(f"{k}: {v}" for k, v in error.context.items())
                error_text = f"{error_text}\n\n{context_str}"

            panel = Panel(
                error_text,
                title="[red]Error[/red]",
                border_style="red",
            )
            console.print(panel)

    def print_data(self, data: Any) -> None:
        """Print generic data (dict, list, etc.)."""
        if self.json_mode:
            _dump(data)
        else:
            console.print_json(json.dumps(data, default=str, ensure_ascii=False))
