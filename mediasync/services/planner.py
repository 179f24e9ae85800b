# mediasync/services/planner.py
# Classifies source items against the destination tree:
#   to_copy          -> missing at the destination (or every item without difference mode)
#   already_present  -> excluded from copy by difference mode
#   to_delete        -> destination copy exists on disk (delete + difference only)

from pathlib import Path
from typing import Iterable, List, Set, Tuple

from mediasync.schemas.media import CopyTask, MediaItem, SyncOptions, SyncPlan
from mediasync.utils.paths import lookup_key


def build_destination_lookup(dest_dirs: Iterable[Path | str]) -> Set[str]:
    """Lower-cased destination paths. Not a real case-insensitive filesystem check."""
    return {lookup_key(p) for p in dest_dirs}


def plan_copies(items: Iterable[MediaItem], dest_root: Path, dest_lookup: Set[str],
                difference: bool) -> Tuple[List[CopyTask], List[MediaItem]]:
    to_copy: List[CopyTask] = []
    present: List[MediaItem] = []
    for item in items:
        target = item.destination_path(dest_root)
        if difference and lookup_key(target) in dest_lookup:
            present.append(item)
            continue
        to_copy.append(CopyTask(item=item, target=str(target)))
    return to_copy, present


def plan_deletions(items: Iterable[MediaItem], dest_root: Path) -> List[MediaItem]:
    """
    Source items whose destination copy exists on disk right now.

    NOTE: this checks the filesystem directly instead of reusing the lookup
    set from plan_copies(). The two checks can observe the destination at
    different moments (e.g. after the copy batch ran, or if something else
    writes to it mid-run), so they may disagree.
    """
    return [item for item in items if item.destination_path(dest_root).exists()]


def build_plan(items: List[MediaItem], dest_root: Path, dest_dirs: Iterable[Path | str],
               options: SyncOptions) -> SyncPlan:
    lookup = build_destination_lookup(dest_dirs)
    to_copy, present = plan_copies(items, dest_root, lookup, options.difference)
    to_delete: List[MediaItem] = []
    if options.delete and options.difference:
        to_delete = plan_deletions(items, dest_root)
    return SyncPlan(to_copy=to_copy, already_present=present, to_delete=to_delete)
