"""
Dossier Batch CLI

Operator entry point for the retention maintenance batches.
Run: dossier-batch [command]

Commands:
    legal-hold      - Sync document legal hold flags with employees
    retention       - Derive retention status and deletion dates
    all             - Legal hold, then retention
    jobs            - List available batch jobs

Options:
    --today YYYY-MM-DD  - Run date for retention classification
    --dry-run           - Compute and report without writing
    --json              - Print reports as JSON
    --config-dir DIR    - Directory with default.yaml / <env>.yaml
"""

import argparse
import json
import logging
import sys
from datetime import date
from typing import List, Optional

from dotenv import load_dotenv
from rich import box
from rich.console import Console
from rich.table import Table

from .config import initialize_config
from .core.container import Container
from .errors import DossierError
from .services.jobs import JOB_CONFIGS, BatchReport, run_all_jobs, run_job

logger = logging.getLogger(__name__)

COMMANDS = {
    "legal-hold": "legal_hold",
    "retention": "retention_status",
}


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dossier-batch",
        description="Run the document retention and legal hold batches.",
    )
    parser.add_argument("command", choices=[*COMMANDS, "all", "jobs"])
    parser.add_argument("--today", type=_parse_day, default=None,
                        help="run date for retention classification (default: today)")
    parser.add_argument("--dry-run", action="store_true",
                        help="compute and report without writing to the store")
    parser.add_argument("--json", action="store_true", dest="as_json",
                        help="print reports as JSON")
    parser.add_argument("--config-dir", default="config",
                        help="configuration directory (default: ./config)")
    return parser


def print_report(console: Console, report: BatchReport):
    """Print the labelled report table and the success line."""
    table = Table(title=f"{report.display_name} Batch", box=box.SIMPLE_HEAD)
    table.add_column("Element", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")

    for row in report.rows():
        table.add_row(row.label, row.value)

    console.print(table)
    console.print(f"[green]{report.success_message}[/green]")


def print_jobs(console: Console):
    table = Table(title="Batch Jobs", box=box.SIMPLE_HEAD)
    table.add_column("Name", style="cyan")
    table.add_column("Display name")
    table.add_column("Description")
    table.add_column("Schedule")
    for key, config in JOB_CONFIGS.items():
        table.add_row(key, config.name, config.description, config.schedule)
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    console = Console()

    if args.command == "jobs":
        print_jobs(console)
        return 0

    reports: List[BatchReport] = []

    def on_report(report: BatchReport):
        reports.append(report)
        if not args.as_json:
            print_report(console, report)

    try:
        config = initialize_config(args.config_dir)
        logging.basicConfig(
            level=config.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        container = Container(config)

        if args.command == "all":
            run_all_jobs(container=container, today=args.today, dry_run=args.dry_run, on_report=on_report)
        else:
            on_report(run_job(COMMANDS[args.command], container=container,
                              today=args.today, dry_run=args.dry_run))
    except DossierError as e:
        logger.error(f"Batch {args.command} failed: {e}")
        if args.as_json:
            print(json.dumps({
                "command": args.command,
                "status": "failed",
                "error": str(e),
                "completed": [r.to_dict() for r in reports],
            }, indent=2))
        else:
            console.print(f"[red]Error: {e}[/red]")
        return 1

    if args.as_json:
        print(json.dumps([r.to_dict() for r in reports], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
