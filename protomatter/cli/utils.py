# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""CLI output helpers."""

from rich.console import Console

console = Console()


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def warning(message: str, details: list[str] | None = None) -> None:
    """Print a warning message with optional detail bullets."""
    console.print(f"[yellow]Warning:[/yellow] {message}")
    if details:
        for detail in details:
            console.print(f"  • {detail}")
