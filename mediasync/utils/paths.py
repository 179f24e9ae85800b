# mediasync/utils/paths.py
import os
from pathlib import Path
from typing import Optional


def safe_rel_under(base: Path, target: Path) -> Optional[Path]:
    """
    Return target's path relative to base if target is inside base, else None.
    Both sides are compared as given (no symlink resolution).
    """
    try:
        return Path(os.path.abspath(target)).relative_to(os.path.abspath(base))
    except ValueError:
        return None


def relative_key(base: Path, target: Path) -> str:
    """
    Relative path of target under base, '/'-separated with no leading separator.
    Falls back to stripping the base prefix textually when target is not under base.
    """
    rel = safe_rel_under(base, target)
    if rel is not None:
        return rel.as_posix().lstrip("/")
    text = str(target)
    prefix = str(base)
    if text.startswith(prefix):
        text = text[len(prefix):]
    return text.replace("\\", "/").lstrip("/")


def lookup_key(path: Path | str) -> str:
    """Case-insensitive key for destination existence checks (plain lower-casing)."""
    return os.path.normpath(str(path)).lower()
