"""CLI entrypoint for sorting PDF manuals into brand/model folders.

Usage:
    manual-sorter ./manuals
    manual-sorter --dry-run ./manuals ./sorted-manuals
    manual-sorter ./input-folder ./output-folder --report run.json
    manual-sorter ./manuals --verbose --log-file sorter.log

Manuals end up in folders such as:
    Honda_CBR600RR_2003-2006_workshop_manual/
    Yamaha_YZF-R1_2009_owner_manual/
    Kawasaki_Ninja_250_parts_catalog/
"""

from __future__ import annotations

import argparse
import logging
from logging.handlers import RotatingFileHandler
import sys
import time
from pathlib import Path

log = logging.getLogger(__name__)


def _setup_logging(
    *,
    verbose: bool,
    detailed_logging: bool,
    log_file: Path | None,
) -> None:
    """Configure root logging: console handler plus optional rotating file."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    root_level = logging.DEBUG if verbose else logging.INFO
    root_logger.setLevel(root_level)

    console_fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    detailed_fmt = (
        "%(asctime)s | %(levelname)-8s | %(name)s | "
        "%(threadName)s | %(filename)s:%(lineno)d | %(message)s"
    )
    formatter = logging.Formatter(
        detailed_fmt if detailed_logging else console_fmt,
        "%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(root_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=20 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(detailed_fmt, "%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(file_handler)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="manual-sorter",
        description=(
            "Sort PDF manuals into Brand_Model_Year_Type folders "
            "using their companion JSON metadata"
        ),
        epilog=(
            "Files are skipped when they have no JSON metadata, when the "
            "metadata has no brand, or when they already sit in their target "
            "folder. The reason is logged and recorded in --report."
        ),
    )
    parser.add_argument(
        "source_dir",
        type=Path,
        help="Directory containing PDF manuals with JSON metadata",
    )
    parser.add_argument(
        "target_dir",
        type=Path,
        nargs="?",
        default=None,
        help=(
            "Directory where sorted folders are created "
            "(default: sort within the source directory)"
        ),
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without moving files",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write a JSON report of every file's outcome to this path",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--detailed-logging",
        action="store_true",
        help="Enable detailed log format (thread, file/line)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional rotating log file path",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run one sorting pass."""
    from tqdm import tqdm

    from .models import SortStats
    from .sorter import sort_single_pdf, summary_lines
    from .sources import iter_pdfs
    from .utils import REPORT_FILE_NAME, save_sort_report

    args = parse_args(argv)
    _setup_logging(
        verbose=args.verbose,
        detailed_logging=args.detailed_logging,
        log_file=args.log_file,
    )

    source_dir = args.source_dir.resolve()
    target_dir = args.target_dir.resolve() if args.target_dir else source_dir
    if not source_dir.is_dir():
        log.error("Source directory does not exist: %s", args.source_dir)
        sys.exit(1)

    log.info("Manual sorter starting")
    log.info("  Source directory: %s", source_dir)
    log.info("  Target directory: %s", target_dir)
    if args.dry_run:
        log.info("DRY RUN MODE - no files will be moved")

    t0 = time.perf_counter()
    stats = SortStats()
    tasks = []
    try:
        for pdf_path in tqdm(
            iter_pdfs(source_dir, stats),
            desc="Sorting manuals",
            unit="pdf",
            disable=args.no_progress,
        ):
            tasks.append(
                sort_single_pdf(pdf_path, target_dir, stats, dry_run=args.dry_run)
            )
    except Exception:
        log.exception("Fatal error during sorting")
        sys.exit(1)

    for line in summary_lines(stats, dry_run=args.dry_run):
        log.info(line)
    log.info("  Total runtime:        %.1fs", time.perf_counter() - t0)

    if args.report is not None:
        report_path = args.report
        if report_path.is_dir():
            report_path = report_path / REPORT_FILE_NAME
        save_sort_report(
            report_path,
            tasks,
            stats,
            source_dir=source_dir,
            target_dir=target_dir,
            dry_run=args.dry_run,
        )
        log.info("Report written to %s", report_path)

    failed = [task for task in tasks if task.status == "error"]
    if failed:
        log.warning("Failed files:")
        for task in failed:
            log.warning("  - %s: %s", task.filename, (task.error or "unknown")[:200])
