# mediasync/services/sizes.py
import os
from pathlib import Path
from typing import Iterable

GB = 1024 ** 3


def directory_bytes(root: Path | str) -> int:
    """
    Sum of regular-file sizes below root. Symlinks are not followed.
    Unreadable entries are skipped; a missing root counts as zero.
    """
    total = 0
    stack = [str(root)]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError:
            continue
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    stack.append(entry.path)
                elif entry.is_file(follow_symlinks=False):
                    total += entry.stat(follow_symlinks=False).st_size
            except OSError:
                continue
    return total


def total_bytes(paths: Iterable[Path | str]) -> int:
    return sum(directory_bytes(p) for p in paths)


def to_gb(n_bytes: int) -> float:
    return round(n_bytes / GB, 2)


def folder_size_gb(paths: Iterable[Path | str]) -> float:
    """Aggregate size of all paths in GB, rounded to two decimals."""
    return to_gb(total_bytes(paths))
