"""Command line entry point for assetdiff."""

# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from assetdiff.app import (
    export_remote_inventory,
    export_report,
    import_remote,
    recent_jobs,
    run_diff,
    scan_local,
    show_summary,
)
from assetdiff.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from assetdiff.domain.model import JobRun
    from assetdiff.domain.projection import DiffSummary

log = logging.getLogger(__name__)


def _add_db_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--db",
        type=Path,
        help="Path to the catalog database file (defaults to config)",
    )


def _add_source_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--source",
        type=str,
        help="Remote source name (defaults to ASSETDIFF_SOURCE_NAME or 'icloud')",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile remote assets against local files")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan-local", help="Scan the local tree into the catalog")
    scan.add_argument(
        "--root",
        type=Path,
        help="Directory to scan (defaults to ASSETDIFF_LOCAL_ROOT)",
    )
    _add_db_argument(scan)

    import_ = subparsers.add_parser("import-remote", help="Import a JSONL remote inventory")
    import_.add_argument(
        "--file",
        type=Path,
        required=True,
        help="JSONL file with one remote asset per line",
    )
    _add_source_argument(import_)
    _add_db_argument(import_)

    diff = subparsers.add_parser("diff", help="Reconcile remote assets against local files")
    _add_source_argument(diff)
    _add_db_argument(diff)

    report = subparsers.add_parser("report", help="Export the latest diff results as JSONL")
    report.add_argument("--out", type=Path, required=True, help="Output JSONL file")
    _add_source_argument(report)
    _add_db_argument(report)

    export = subparsers.add_parser(
        "export-remote",
        help="Export the stored remote inventory as JSONL",
    )
    export.add_argument("--out", type=Path, required=True, help="Output JSONL file")
    _add_source_argument(export)
    _add_db_argument(export)

    summary = subparsers.add_parser("summary", help="Show verdict counts for a source")
    _add_source_argument(summary)
    _add_db_argument(summary)

    jobs = subparsers.add_parser("jobs", help="List recent operations")
    jobs.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Number of jobs to show (default: %(default)s)",
    )
    _add_db_argument(jobs)

    args = parser.parse_args(list(argv))
    if args.command == "jobs" and args.limit <= 0:
        raise ValueError("Job limit must be positive")
    if args.command == "import-remote" and not args.file.is_file():
        raise ValueError(f"Inventory file not found: {args.file}")
    return args


def _print_summary(summary: DiffSummary) -> None:
    last_diff = summary.last_diff_at.isoformat() if summary.last_diff_at else "never"
    print(f"Source:    {summary.source_name}")
    print(f"Present:   {summary.present}")
    print(f"Missing:   {summary.missing}")
    print(f"Uncertain: {summary.uncertain}")
    print(f"Total:     {summary.total}")
    print(f"Last diff: {last_diff}")


def _print_jobs(jobs: Sequence[JobRun]) -> None:
    if not jobs:
        print("No jobs recorded")
        return
    for job in jobs:
        completed = job.completed_at.isoformat() if job.completed_at else "-"
        print(
            f"{job.id:>5}  {job.job_type:<7} {job.status:<10} "
            f"{job.started_at.isoformat()}  {completed}  "
            f"{job.source_name or '-'}  {job.detail or ''}".rstrip()
        )


def _run(args: argparse.Namespace) -> None:
    if args.command == "scan-local":
        outcome = scan_local(root=args.root, database_path=args.db)
        log.info("Scanned %s files under %s", outcome.files_scanned, outcome.root)
    elif args.command == "import-remote":
        imported = import_remote(inventory=args.file, source_name=args.source, database_path=args.db)
        log.info(
            "Imported %s assets for %s (%s lines skipped)",
            imported.imported,
            imported.source_name,
            imported.skipped,
        )
    elif args.command == "diff":
        result = run_diff(source_name=args.source, database_path=args.db)
        _print_summary(result.summary)
    elif args.command == "report":
        exported = export_report(out=args.out, source_name=args.source, database_path=args.db)
        log.info("Wrote %s results to %s", exported.written, exported.path)
    elif args.command == "export-remote":
        exported = export_remote_inventory(
            out=args.out, source_name=args.source, database_path=args.db
        )
        log.info("Wrote %s remote assets to %s", exported.written, exported.path)
    elif args.command == "summary":
        _print_summary(show_summary(source_name=args.source, database_path=args.db))
    elif args.command == "jobs":
        _print_jobs(recent_jobs(limit=args.limit, database_path=args.db))
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging()
        parsed_args = _parse_args(args_list)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _run(parsed_args)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def cli() -> None:
    """Console script entry: load ``.env`` and run ``main``."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    cli()
