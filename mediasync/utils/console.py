# mediasync/utils/console.py
from typing import Callable

Confirm = Callable[[str], bool]


def confirm(prompt: str) -> bool:
    """Blocking yes/no prompt; anything but y/yes means no."""
    try:
        ans = input(prompt + " [y/N]: ").strip().lower()
    except EOFError:
        return False
    return ans in ("y", "yes")
