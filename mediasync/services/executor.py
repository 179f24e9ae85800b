"""
Copy/delete batches for a sync plan.

Each batch is gated by one yes/no prompt (skipped in simulate mode or when
assume_yes is set). Declining skips the batch only. Filesystem errors are
not caught here: they end the run.
"""

import logging
import shutil
from pathlib import Path
from typing import List, Optional, Union

from mediasync.core.logs import LOGGER
from mediasync.schemas.media import BatchResult, CopyTask, MediaItem, SyncOptions
from mediasync.services.sizes import directory_bytes, to_gb, total_bytes
from mediasync.utils.console import Confirm, confirm as ask

Log = Union[logging.Logger, logging.LoggerAdapter]


def progress_label(index: int, count: int, processed: Optional[int] = None,
                   total: Optional[int] = None) -> str:
    label = f"[{index}/{count}]"
    if processed is not None and total is not None:
        label += f" ({to_gb(processed):.2f} GB / {to_gb(total):.2f} GB)"
    return label


def _gate(action: str, count: int, options: SyncOptions, confirm: Confirm, log: Log) -> bool:
    # no prompt in simulate mode: the batch only logs, nothing on disk changes
    if options.simulate or options.assume_yes:
        return True
    if confirm(f"{action} {count} item(s)?"):
        return True
    log.info("%s batch declined; skipping %d item(s)", action, count)
    return False


def run_copy_batch(tasks: List[CopyTask], options: SyncOptions, *,
                   confirm: Confirm = ask, log: Log = LOGGER) -> BatchResult:
    result = BatchResult(action="copy", total=len(tasks))
    if not tasks:
        log.info("Nothing to copy")
        return result
    if not _gate("Copy", len(tasks), options, confirm, log):
        result.declined = True
        return result

    if options.progress_size:
        result.total_bytes = total_bytes(t.item.full_path for t in tasks)

    sim = "[SIM] " if options.simulate else ""
    verb = "Would copy" if options.simulate else "Copying"
    for i, task in enumerate(tasks, start=1):
        src = Path(task.item.full_path)
        dst = Path(task.target)

        if options.progress_size:
            result.bytes_processed += directory_bytes(src)
            label = progress_label(i, len(tasks), result.bytes_processed, result.total_bytes)
        else:
            label = progress_label(i, len(tasks))
        log.info("%s%s %s %s -> %s", sim, label, verb, src, dst)

        if options.simulate:
            continue
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(src, dst, dirs_exist_ok=True)
        result.done += 1

    return result


def run_delete_batch(items: List[MediaItem], options: SyncOptions, *,
                     confirm: Confirm = ask, log: Log = LOGGER) -> BatchResult:
    result = BatchResult(action="delete", total=len(items))
    if not items:
        log.info("Nothing to delete")
        return result
    if not _gate("Delete", len(items), options, confirm, log):
        result.declined = True
        return result

    if options.progress_size:
        result.total_bytes = total_bytes(it.full_path for it in items)

    sim = "[SIM] " if options.simulate else ""
    verb = "Would delete" if options.simulate else "Deleting"
    for i, item in enumerate(items, start=1):
        src = Path(item.full_path)

        # nested items vanish together with an already-deleted parent
        if not options.simulate and not src.exists():
            log.info("%s Already gone: %s", progress_label(i, len(items)), src)
            continue

        if options.progress_size:
            result.bytes_processed += directory_bytes(src)
            label = progress_label(i, len(items), result.bytes_processed, result.total_bytes)
        else:
            label = progress_label(i, len(items))
        log.info("%s%s %s %s", sim, label, verb, src)

        if options.simulate:
            continue
        shutil.rmtree(src)
        result.done += 1

    return result
