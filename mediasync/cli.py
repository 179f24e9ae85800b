#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
mediasync — copy media folders (e.g. "Movie (1999)") from a source tree to a destination.

Examples:
  # What would be copied for 2000+ releases that are missing at the destination
  media-sync /mnt/nas/Movies /mnt/usb/Movies -c "Year >= 2000" --copy --difference --simulate

  # Copy the missing ones, then delete them from the source once they exist at the destination
  media-sync /mnt/nas/Movies /mnt/usb/Movies --copy --difference --delete --progress-size

  # Size of everything released before 1990 (destination is not touched)
  media-sync /mnt/nas/Movies /mnt/usb/Movies -c "Year < 1990" --full-size

  # Just list both sides
  media-sync /mnt/nas/Movies /mnt/usb/Movies --list

Defaults come from mediasync.toml (see mediasync/core/config.py); flags override them.
Every decision is echoed to stdout and appended to the log file.
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from mediasync.core.config import Settings, load_settings
from mediasync.core.logs import close_logging, new_run_id, run_logger, setup_logging
from mediasync.schemas.media import BatchResult, SyncOptions
from mediasync.services.conditions import is_blank, parse_condition
from mediasync.services.executor import Log, run_copy_batch, run_delete_batch
from mediasync.services.planner import build_plan, plan_deletions
from mediasync.services.scanner import enumerate_media_items, list_directories
from mediasync.services.sizes import folder_size_gb, to_gb
from mediasync.utils.console import Confirm, confirm as ask
from mediasync.utils.paths import relative_key

LINE_LENGTH = 50


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="media-sync",
        description="Sync media folders from a source directory to a destination directory.",
    )
    parser.add_argument("source", nargs="?", default=settings.source or None,
                        help="Source root (default: [paths] source in config)")
    parser.add_argument("destination", nargs="?", default=settings.destination or None,
                        help="Destination root (default: [paths] destination in config)")
    parser.add_argument("--config", default=None,
                        help="Path to mediasync.toml (default: $MEDIASYNC_CONFIG or search from CWD)")
    parser.add_argument("-c", "--condition", default=settings.condition,
                        help='Year filter on folder names, e.g. "Year >= 2000"')
    parser.add_argument("--log-file", default=settings.log_file,
                        help=f"Append-only log file (default: {settings.log_file})")

    parser.add_argument("--list", action="store_true",
                        help="List source and destination items, then stop")
    parser.add_argument("--list-source", action="store_true",
                        help="List filtered source items, then stop")
    parser.add_argument("--list-destination", action="store_true",
                        help="List destination directories, then stop")

    parser.add_argument("--copy", action="store_true",
                        help="Run the copy batch")
    parser.add_argument("--difference", action=argparse.BooleanOptionalAction, default=settings.difference,
                        help="Only copy items missing at the destination; enables delete candidates")
    parser.add_argument("--delete", action="store_true",
                        help="Delete source items already present at the destination (requires --difference)")
    parser.add_argument("--simulate", action=argparse.BooleanOptionalAction, default=settings.simulate,
                        help="Change nothing on disk; log what would happen")
    parser.add_argument("--full-size", action="store_true",
                        help="Only report the total size of the filtered source items")
    parser.add_argument("--progress-size", action=argparse.BooleanOptionalAction, default=settings.progress_size,
                        help="Annotate progress lines with processed/total GB")
    parser.add_argument("-y", "--yes", action=argparse.BooleanOptionalAction, default=settings.assume_yes,
                        help="Answer yes to the copy/delete confirmation prompts")

    parser.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Force console and file log level (overrides -v/-q)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase console verbosity (repeatable)")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="No console output (the log file is still written)")
    return parser


def parse_args(argv: Optional[List[str]] = None):
    # --config has to be known before the real parser picks up its defaults
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", default=None)
    known, _ = pre.parse_known_args(argv)
    settings = load_settings(known.config)

    parser = build_parser(settings)
    args = parser.parse_args(argv)

    if not args.source:
        parser.error("source is required (argument or [paths] source in config)")
    if not args.destination:
        parser.error("destination is required (argument or [paths] destination in config)")
    if args.delete and not args.difference:
        parser.error("--delete requires --difference")
    return args, settings


# ---------- Modes ----------

def report_full_size(source: Path, condition: str, log: Log) -> None:
    items = enumerate_media_items(source, condition)
    gb = folder_size_gb(it.full_path for it in items)
    log.info("Total size of %d source item(s): %.2f GB", len(items), gb)


def report_listing(source: Path, destination: Path, condition: str, *,
                   show_source: bool, show_destination: bool, log: Log) -> None:
    if show_source:
        items = enumerate_media_items(source, condition)
        log.info("--- Source: %s (%d item(s)) ---", source, len(items))
        for it in items:
            log.info("  %s", it.relative_path)
    if show_destination:
        dirs = list_directories(destination)
        log.info("--- Destination: %s (%d item(s)) ---", destination, len(dirs))
        for d in dirs:
            log.info("  %s", relative_key(destination, d))


def run_sync(source: Path, destination: Path, condition: str, options: SyncOptions, *,
             do_copy: bool, confirm: Confirm, log: Log) -> List[BatchResult]:
    items = enumerate_media_items(source, condition)
    dest_dirs = list_directories(destination)
    # delete candidates are computed after the copy batch, so the plan here is copy-only
    plan = build_plan(items, destination, dest_dirs, options.model_copy(update={"delete": False}))

    log.info("Source items: %d, destination dirs: %d", len(items), len(dest_dirs))
    log.info("To copy: %d (%.2f GB)", len(plan.to_copy),
             folder_size_gb(t.item.full_path for t in plan.to_copy))
    if options.difference:
        log.info("Already present: %d", len(plan.already_present))
        for it in plan.already_present:
            log.debug("= present: %s", it.relative_path)

    results: List[BatchResult] = []
    if do_copy:
        log.info("*" * LINE_LENGTH)
        results.append(run_copy_batch(plan.to_copy, options, confirm=confirm, log=log))
    else:
        log.info("Copy batch not requested (use --copy)")

    if options.delete and options.difference:
        # recheck the disk after the copy batch; see plan_deletions()
        plan.to_delete = plan_deletions(items, destination)
        log.info("*" * LINE_LENGTH)
        log.info("Delete candidates: %d", len(plan.to_delete))
        results.append(run_delete_batch(plan.to_delete, options, confirm=confirm, log=log))

    return results


def log_summary(results: List[BatchResult], simulate: bool, elapsed: float, log: Log) -> None:
    log.info("=== Run summary ===")
    for r in results:
        if r.declined:
            status = "declined"
        elif simulate:
            status = f"{r.total}(sim)"
        else:
            status = f"{r.done}/{r.total}"
        line = f"{r.action}: {status}"
        if r.total_bytes is not None:
            line += f", size={to_gb(r.total_bytes):.2f} GB"
        log.info(line)
    log.info("=== mediasync complete. Total time: %.1f seconds ===", elapsed)


# ---------- Main ----------

def main(argv: Optional[List[str]] = None, confirm: Confirm = ask) -> int:
    args, settings = parse_args(argv)

    source = Path(args.source).expanduser()
    destination = Path(args.destination).expanduser()
    log_file = Path(args.log_file).expanduser()

    setup_logging(log_file, verbose=args.verbose, quiet=args.quiet, log_level=args.log_level)
    log = run_logger(new_run_id())

    options = SyncOptions(
        simulate=args.simulate,
        difference=args.difference,
        delete=args.delete,
        progress_size=args.progress_size,
        assume_yes=args.yes,
    )
    condition = args.condition or ""

    t0 = time.perf_counter()
    try:
        log.info("=" * LINE_LENGTH)
        log.info("Mode: %s", "SIMULATE" if options.simulate else "WRITE")
        log.info("Source: %s", source)
        log.debug("Config: %s", settings.source_file or "(defaults)")
        if not is_blank(condition) and parse_condition(condition) is None:
            log.warning("Condition %r is not of the form 'Year <op> YYYY'; nothing will match", condition)
        if not source.is_dir():
            log.warning("Source not found: %s", source)

        if args.full_size:
            log.info("Condition: %s", condition or "(none)")
            report_full_size(source, condition, log)
            return 0

        log.info("Destination: %s", destination)
        log.info("Condition: %s", condition or "(none)")
        log.info("difference=%s, delete=%s, progress_size=%s",
                 options.difference, options.delete, options.progress_size)

        if args.list or args.list_source or args.list_destination:
            report_listing(
                source, destination, condition,
                show_source=args.list or args.list_source,
                show_destination=args.list or args.list_destination,
                log=log,
            )
            return 0

        results = run_sync(
            source, destination, condition, options,
            do_copy=args.copy,
            confirm=confirm,
            log=log,
        )
        log_summary(results, options.simulate, time.perf_counter() - t0, log)
        return 0
    except KeyboardInterrupt:
        log.warning("Interrupted")
        return 130
    except Exception:
        log.exception("Sync failed")
        raise
    finally:
        close_logging()


if __name__ == "__main__":
    sys.exit(main())
