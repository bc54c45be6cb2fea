"""Console output and logging setup for the CLI."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.text import Text

from policyextract.console.display import (
    print_comparison_summary,
    print_comparison_table,
    print_extraction_result,
    print_logs,
    print_plans,
)


if TYPE_CHECKING:
    from collections.abc import Iterator

    from policyextract.core.models import ComparisonReport, ExtractionResult, LogEntry, PlanSchema


class PipelineConsole:
    """Rich console interface for pipeline progress and results."""

    def __init__(self, verbose: bool = False) -> None:
        self.console = Console()
        self.verbose = verbose

    def setup_logging(self, level: str = "INFO") -> None:
        logging.basicConfig(
            level=level if self.verbose else "WARNING",
            format="%(message)s",
            handlers=[
                RichHandler(
                    console=self.console, rich_tracebacks=True, show_time=False, show_path=False
                )
            ],
            force=True,
        )

    def print_header(self, plan: str, *sources: str) -> None:
        header = Text()
        header.append("policyExtract", style="bold blue")
        header.append(" - Insurance Policy Field Extractor\n\n", style="dim")
        header.append("Plan: ", style="bold")
        header.append(f"{plan}\n", style="green")
        for source in sources:
            header.append("Source: ", style="bold")
            header.append(f"{source}\n", style="dim")
        header.rstrip()
        self.console.print(Panel(header, border_style="blue"))
        self.console.print()

    @contextmanager
    def spinner(self, description: str) -> Iterator[Progress]:
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        with progress:
            progress.add_task(description, total=None)
            yield progress

    def print_result(self, result: ExtractionResult) -> None:
        print_extraction_result(self.console, result)

    def print_comparison(self, report: ComparisonReport) -> None:
        print_comparison_table(self.console, report)
        print_comparison_summary(self.console, report)

    def print_plans(self, schemas: list[PlanSchema], overrides: dict[str, list[str]]) -> None:
        print_plans(self.console, schemas, overrides)

    def print_logs(self, entries: list[LogEntry]) -> None:
        print_logs(self.console, entries)

    def print_json(self, text: str) -> None:
        self.console.print_json(text)

    def print_success(self, message: str, output_path: str | None = None) -> None:
        body = f"[green]✓ {message}[/green]"
        if output_path:
            body += f"\n\n[bold]Output:[/bold] {output_path}"
        self.console.print()
        self.console.print(Panel(body, title="[green]Complete[/green]", border_style="green"))

    def print_error(self, error: str) -> None:
        self.console.print()
        self.console.print(
            Panel(f"[red]{error}[/red]", title="[red]Error[/red]", border_style="red")
        )
