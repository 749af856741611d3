"""Rich presentation helpers shared by the CLI and the interactive wizard."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .logging_config import get_logger

logger = get_logger(__name__)

# File suffix -> pygments lexer
LEXERS = {
    ".html": "html",
    ".java": "java",
    ".xml": "xml",
    ".scss": "scss",
    ".md": "markdown",
}


def lexer_for(filename: str) -> str:
    return LEXERS.get(Path(filename).suffix.lower(), "text")


def print_type_table(console: Console, types: Iterable[Mapping[str, Any]]) -> None:
    """Show the selectable component types."""
    table = Table(
        title="🧩 Component Types", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", style="bold green", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Fields", justify="right")
    table.add_column("Description", style="dim")

    for i, info in enumerate(types, 1):
        table.add_row(
            str(i),
            f"{info['icon']} {info['key']}",
            info["title"],
            info["category"],
            str(info["field_count"]),
            info["description"],
        )

    console.print()
    console.print(table)


def print_schema_table(console: Console, schema: Mapping[str, Any]) -> None:
    """Show the form schema of one component type."""
    table = Table(
        title=f"{schema['icon']} {schema['title']} ({schema['key']})",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Field", style="bold")
    table.add_column("Kind", style="cyan")
    table.add_column("Required", justify="center")
    table.add_column("Label")
    table.add_column("Options / Default", style="green")

    for descriptor in schema["fields"]:
        extra = []
        if descriptor.get("options"):
            extra.append(" | ".join(descriptor["options"]))
        if "default" in descriptor:
            extra.append(f"default: {descriptor['default']}")
        table.add_row(
            descriptor["name"],
            descriptor["kind"],
            "✓" if descriptor["required"] else "",
            descriptor["label"],
            "; ".join(extra),
        )

    console.print()
    console.print(table)
    console.print(f"[dim]{schema['description']}[/dim]")
    if schema.get("aliases"):
        console.print(f"[dim]Aliases: {', '.join(schema['aliases'])}[/dim]")


def print_validation_errors(console: Console, errors: Iterable[Any]) -> None:
    """Show field errors of a refused request."""
    table = Table(
        title="✗ Please fix the following",
        box=box.SIMPLE,
        title_style="bold red",
        header_style="bold red",
    )
    table.add_column("Field", style="bold")
    table.add_column("Problem")

    for error in errors:
        table.add_row(error.field, error.message)

    console.print()
    console.print(table)


def print_artifacts(console: Console, artifacts: Mapping[str, str]) -> None:
    """Print every artifact with syntax highlighting."""
    for filename, content in artifacts.items():
        console.print()
        console.print(
            Panel(
                Syntax(content, lexer_for(filename), theme="monokai", line_numbers=True),
                title=f"📄 {filename}",
                border_style="green",
            )
        )


def print_metadata(console: Console, metadata: Mapping[str, Any]) -> None:
    table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    for key, value in metadata.items():
        if isinstance(value, Mapping):
            value = ", ".join(f"{k}={v}" for k, v in value.items()) or "-"
        elif isinstance(value, (list, tuple)):
            value = ", ".join(str(v) for v in value)
        table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(table)


def write_artifacts(artifacts: Mapping[str, str], output_dir: str | Path) -> list[Path]:
    """Write an artifact map below a directory.

    Returns:
        Paths of the written files, in artifact order.

    Raises:
        OSError: If a directory or file cannot be written.
    """
    root = Path(output_dir)
    written = []
    for filename, content in artifacts.items():
        path = root / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", path)
        written.append(path)
    logger.info("Wrote %d artifact(s) to %s", len(written), root)
    return written
