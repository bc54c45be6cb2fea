"""Command-line interface for policyExtract."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from policyextract.config.fields import PLAN_SCHEMAS, plan_key
from policyextract.config.settings import Settings
from policyextract.console.logger import PipelineConsole
from policyextract.core.events import CompositeSink, LoggingSink
from policyextract.core.types import RunStatus
from policyextract.orchestrator.pipeline import Pipeline
from policyextract.storage.repository import PayerRepository, RepositorySink
from policyextract.tools.html import HTMLTool


console = PipelineConsole()


def _split_fields(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    return [f.strip() for f in raw.split(",") if f.strip()]


def _open_repository(settings: Settings, db_path: str | None) -> PayerRepository:
    return PayerRepository(db_path or settings.storage.db_path)


def _build_pipeline(settings: Settings, repo: PayerRepository, mock: bool) -> Pipeline:
    sink = CompositeSink([LoggingSink(), RepositorySink(repo)])
    return Pipeline(settings, mock=mock, repository=repo, sink=sink)


async def run_extract(
    pdf_path: str,
    plan: str,
    fields: list[str] | None = None,
    json_path: str | None = None,
    db_path: str | None = None,
    mock: bool = False,
) -> None:
    """Extract fields from one policy PDF."""
    settings = Settings()
    console.setup_logging(settings.log_level)
    console.print_header(plan, pdf_path)
    if mock:
        console.console.print("[yellow]Running in MOCK mode (no API calls)[/yellow]\n")

    repo = _open_repository(settings, db_path)
    pipeline = _build_pipeline(settings, repo, mock)
    with console.spinner(f"Extracting {Path(pdf_path).name}..."):
        result = await pipeline.extract(pdf_path, plan, fields)

    console.print_result(result)
    if json_path:
        output = Path(json_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.to_json(), encoding="utf-8")
        console.print_success("Extraction saved", str(output.absolute()))
    else:
        console.print_json(result.to_json())


async def run_compare(
    left_path: str,
    right_path: str,
    plan: str,
    fields: list[str] | None = None,
    html_path: str | None = None,
    json_path: str | None = None,
    db_path: str | None = None,
    mock: bool = False,
) -> None:
    """Extract two policy PDFs concurrently and compare them."""
    settings = Settings()
    console.setup_logging(settings.log_level)
    console.print_header(plan, left_path, right_path)
    if mock:
        console.console.print("[yellow]Running in MOCK mode (no API calls)[/yellow]\n")

    repo = _open_repository(settings, db_path)
    pipeline = _build_pipeline(settings, repo, mock)
    with console.spinner("Extracting both documents..."):
        report = await pipeline.compare(left_path, right_path, plan, fields)

    console.print_comparison(report)
    if json_path:
        output = Path(json_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report.to_json(), encoding="utf-8")
        console.print_success("Comparison saved", str(output.absolute()))
    if html_path:
        written = HTMLTool().write(report, html_path)
        console.print_success("Report generated successfully!", str(written))


def show_plans(db_path: str | None = None) -> None:
    """List static plans and stored overrides."""
    settings = Settings()
    repo = _open_repository(settings, db_path)
    console.print_plans(list(PLAN_SCHEMAS.values()), repo.list_plans())


def add_plan(name: str, fields: list[str], db_path: str | None = None) -> None:
    """Store a dynamic field list for a plan."""
    settings = Settings()
    repo = _open_repository(settings, db_path)
    name = plan_key(name)
    repo.set_fields(name, fields)
    console.console.print(f"[green]✓[/green] Stored {len(fields)} fields for plan {name}")


def remove_plan(name: str, db_path: str | None = None) -> None:
    """Delete a dynamic field list."""
    settings = Settings()
    repo = _open_repository(settings, db_path)
    name = plan_key(name)
    if repo.delete_fields(name):
        console.console.print(f"[green]✓[/green] Removed stored fields for plan {name}")
    else:
        console.console.print(f"[yellow]⚠[/yellow] No stored fields for plan {name}")


def show_log(limit: int = 20, status: str | None = None, db_path: str | None = None) -> None:
    """Show recent extraction log entries."""
    settings = Settings()
    repo = _open_repository(settings, db_path)
    console.print_logs(repo.recent_logs(limit, RunStatus(status) if status else None))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="policyextract", description="Insurance policy field extraction and comparison"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    ext = subparsers.add_parser("extract", help="Extract fields from a policy PDF")
    ext.add_argument("pdf_path", help="Path to the input PDF file")
    ext.add_argument("--plan", "-p", default="QLM", help="Payer plan name")
    ext.add_argument("--fields", "-f", help="Explicit field list (comma-separated)")
    ext.add_argument("--json", dest="json_path", help="Write the result JSON to this path")
    ext.add_argument("--db", help="Plan/log database path")
    ext.add_argument("--mock", action="store_true", help="Use mock submitter for testing")

    cmp_cmd = subparsers.add_parser("compare", help="Compare two policy PDFs")
    cmp_cmd.add_argument("left_path", help="First PDF")
    cmp_cmd.add_argument("right_path", help="Second PDF")
    cmp_cmd.add_argument("--plan", "-p", default="QLM", help="Payer plan name")
    cmp_cmd.add_argument("--fields", "-f", help="Explicit field list (comma-separated)")
    cmp_cmd.add_argument("--html", dest="html_path", help="Write an HTML report to this path")
    cmp_cmd.add_argument("--json", dest="json_path", help="Write the comparison JSON to this path")
    cmp_cmd.add_argument("--db", help="Plan/log database path")
    cmp_cmd.add_argument("--mock", action="store_true", help="Use mock submitter for testing")

    plans_cmd = subparsers.add_parser("plans", help="List payer plans")
    plans_cmd.add_argument("--db", help="Plan/log database path")

    add_cmd = subparsers.add_parser("add-plan", help="Store a field list for a plan")
    add_cmd.add_argument("name", help="Plan name")
    add_cmd.add_argument("fields", nargs="+", help="Field names")
    add_cmd.add_argument("--db", help="Plan/log database path")

    rm_cmd = subparsers.add_parser("remove-plan", help="Delete a stored field list")
    rm_cmd.add_argument("name", help="Plan name")
    rm_cmd.add_argument("--db", help="Plan/log database path")

    log_cmd = subparsers.add_parser("log", help="Show recent extraction runs")
    log_cmd.add_argument("--limit", "-n", type=int, default=20, help="Number of entries")
    log_cmd.add_argument("--status", choices=[s.value for s in RunStatus])
    log_cmd.add_argument("--db", help="Plan/log database path")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "extract":
            asyncio.run(
                run_extract(
                    args.pdf_path,
                    args.plan,
                    _split_fields(args.fields),
                    args.json_path,
                    args.db,
                    args.mock,
                )
            )
        elif args.command == "compare":
            asyncio.run(
                run_compare(
                    args.left_path,
                    args.right_path,
                    args.plan,
                    _split_fields(args.fields),
                    args.html_path,
                    args.json_path,
                    args.db,
                    args.mock,
                )
            )
        elif args.command == "plans":
            show_plans(args.db)
        elif args.command == "add-plan":
            add_plan(args.name, args.fields, args.db)
        elif args.command == "remove-plan":
            remove_plan(args.name, args.db)
        elif args.command == "log":
            show_log(args.limit, args.status, args.db)
    except KeyboardInterrupt:
        console.console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
