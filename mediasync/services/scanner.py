# mediasync/services/scanner.py
import os
from pathlib import Path
from typing import Iterator, List, Optional

from mediasync.schemas.media import MediaItem
from mediasync.services.conditions import is_blank, matches_condition
from mediasync.utils.paths import relative_key


def walk_directories(root: Path) -> Iterator[Path]:
    """Every directory below root at any depth (root excluded), siblings in lexical order."""
    if not root.is_dir():
        return
    for current, dirs, _files in os.walk(root):
        dirs.sort()
        for d in dirs:
            yield Path(current) / d


def list_directories(root: Path) -> List[Path]:
    """Unfiltered directory listing (used for the destination tree)."""
    return list(walk_directories(root))


def enumerate_media_items(root: Path, condition: Optional[str] = None) -> List[MediaItem]:
    """
    MediaItems for every directory under root whose *name* satisfies condition.
    relative_path is fixed here and used as the join key with the destination.
    """
    items: List[MediaItem] = []
    match_all = is_blank(condition)
    for p in walk_directories(root):
        if not match_all and not matches_condition(condition, p.name):
            continue
        items.append(MediaItem(
            name=p.name,
            full_path=str(p),
            relative_path=relative_key(root, p),
        ))
    return items
