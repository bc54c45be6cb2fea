"""Display components for console output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from policyextract.core.types import ComparisonStatus, RunStatus


if TYPE_CHECKING:
    from rich.console import Console

    from policyextract.core.models import ComparisonReport, ExtractionResult, LogEntry, PlanSchema


_STATUS_STYLE = {
    ComparisonStatus.SAME: "green",
    ComparisonStatus.DIFFERENT: "red",
    ComparisonStatus.BOTH_ABSENT: "yellow",
}

_RUN_STYLE = {
    RunStatus.STARTED: "dim",
    RunStatus.SUCCESS: "green",
    RunStatus.ERROR: "red",
}


def _cell(value: str | None) -> str:
    return "[dim]null[/dim]" if value is None else value


def print_extraction_result(console: Console, result: ExtractionResult) -> None:
    """Print extracted values in schema order."""
    table = Table(title=f"Extracted Fields - {result.source}", border_style="blue")
    table.add_column("Field", style="bold", width=40)
    table.add_column("Value")
    for field, value in result.values.items():
        table.add_row(field, _cell(value))
    console.print(table)
    found, total = len(result.found), len(result.values)
    color = "green" if found == total else "yellow" if found else "red"
    console.print(f"  [{color}]{found}/{total}[/{color}] fields found")


def print_comparison_table(console: Console, report: ComparisonReport) -> None:
    """Print per-field comparison."""
    table = Table(title="Comparison", border_style="blue")
    table.add_column("Field", style="bold", width=36)
    table.add_column(report.left_source or "File 1")
    table.add_column(report.right_source or "File 2")
    table.add_column("Status", justify="center", width=10)
    for record in report.records:
        style = _STATUS_STYLE[record.status]
        table.add_row(
            record.field,
            _cell(record.left),
            _cell(record.right),
            f"[{style}]{record.status.value}[/{style}]",
        )
    console.print(table)


def print_comparison_summary(console: Console, report: ComparisonReport) -> None:
    """Print comparison counts."""
    console.print(
        Panel(
            f"[bold]Fields:[/bold] {len(report.records)}\n"
            f"[green]Same:[/green] {report.count(ComparisonStatus.SAME)}\n"
            f"[red]Different:[/red] {report.count(ComparisonStatus.DIFFERENT)}\n"
            f"[yellow]Missing:[/yellow] {report.count(ComparisonStatus.BOTH_ABSENT)}",
            title="Comparison Summary",
            border_style="blue",
        )
    )


def print_plans(
    console: Console, schemas: list[PlanSchema], overrides: dict[str, list[str]]
) -> None:
    """Print static plans and stored overrides."""
    tree = Tree("[bold]Payer Plans[/bold]")
    for schema in schemas:
        required = set(schema.required_fields)
        label = f"[cyan]{schema.plan}[/cyan] ({len(schema.fields)} fields)"
        if schema.plan in overrides:
            label += " [yellow]overridden[/yellow]"
        branch = tree.add(label)
        for spec in schema.fields:
            marker = "[bold]*[/bold] " if spec.name in required else ""
            branch.add(f"{marker}{spec.name} [dim]{spec.kind.value}[/dim]")
    for plan, fields in overrides.items():
        branch = tree.add(f"[magenta]{plan}[/magenta] ({len(fields)} stored fields)")
        for name in fields:
            branch.add(name)
    console.print(tree)


def print_logs(console: Console, entries: list[LogEntry]) -> None:
    """Print extraction log entries, newest first."""
    if not entries:
        console.print("  [yellow]⚠[/yellow] No extraction log entries")
        return
    table = Table(title="Extraction Log", border_style="dim")
    table.add_column("Time", style="dim", width=19)
    table.add_column("Status", width=8)
    table.add_column("Source", width=30)
    table.add_column("Plan", width=10)
    table.add_column("Details")
    for entry in entries:
        style = _RUN_STYLE[entry.status]
        table.add_row(
            entry.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            f"[{style}]{entry.status.value.upper()}[/{style}]",
            entry.source,
            entry.plan or "",
            entry.details or "",
        )
    console.print(table)
