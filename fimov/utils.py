"""
Utility functions for fimov.

Includes:
- Console output helpers
- Report table
- JSON save/load helpers
"""

import json
from pathlib import Path
from typing import Any
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Global console instance
console = Console()


def print_header(title: str, subtitle: str = ""):
    """Print a styled header."""
    console.print(Panel(f"[bold blue]{escape(title)}[/bold blue]\n[italic]{escape(subtitle)}[/italic]", expand=False))


def print_report_table(report: dict):
    """Print a summary table of an organize run."""
    table = Table(title="Organize Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("Source", escape(report["source"]))
    table.add_row("Destination", escape(report["destination"]))
    table.add_row("Date source", report["date_source"])
    table.add_row("Matched", str(report["matched_count"]))
    table.add_row("Moved", str(report["moved_count"]))
    table.add_row("Failed", str(report["failed_count"]))

    console.print(table)

    failures = report.get("failures", [])
    if failures:
        console.print("\n[bold red]Failed moves:[/bold red]")
        for failure in failures[:5]:
            console.print(f"  - {escape(failure['path'])}: {escape(failure['error'])}")
        if len(failures) > 5:
            console.print(f"  ... and {len(failures) - 5} more")


def print_error(msg: str):
    console.print(f"[bold red]ERROR:[/bold red] {escape(msg)}")


def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {escape(msg)}")


def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {escape(msg)}")


def save_json(data: Any, path: Path) -> None:
    """
    Save data to a JSON file with pretty formatting.

    Args:
        data: The data to serialize.
        path: The output file path.
    """
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    console.print(f"[INFO] Saved: {escape(str(path))}")


def load_json(path: Path) -> Any:
    """
    Load data from a JSON file.

    Args:
        path: The input file path.

    Returns:
        The deserialized data.
    """
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)
