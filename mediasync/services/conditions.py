# mediasync/services/conditions.py
# Year filter for media folder names such as "Movie (1999)".
# - extract_year(): first "(YYYY)" in a name, or None
# - parse_condition(): "Year <op> YYYY" -> Condition, or None when malformed
# - matches_condition(): fail-closed evaluation (malformed or yearless -> False)

import operator
import re
from typing import Optional

from mediasync.schemas.media import Condition

_YEAR_RE = re.compile(r"\((\d{4})\)")

# Two-character operators must come first in the alternation, otherwise ">=" reads as ">".
_CONDITION_RE = re.compile(r"Year\s*(==|!=|>=|<=|>|<)\s*(\d{4})", re.IGNORECASE)

_OPERATORS = {
    "==": operator.eq,
    "!=": operator.ne,
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
}


def extract_year(name: str) -> Optional[int]:
    """Return the first parenthesized 4-digit year in name. Later ones are ignored."""
    m = _YEAR_RE.search(name or "")
    return int(m.group(1)) if m else None


def is_blank(condition: Optional[str]) -> bool:
    return not (condition or "").strip()


def parse_condition(condition: Optional[str]) -> Optional[Condition]:
    if is_blank(condition):
        return None
    m = _CONDITION_RE.search(condition)
    if not m:
        return None
    return Condition(operator=m.group(1), year=int(m.group(2)))


def evaluate(cond: Condition, name: str) -> bool:
    year = extract_year(name)
    if year is None:
        return False
    return _OPERATORS[cond.operator](year, cond.year)


def matches_condition(condition: Optional[str], name: str) -> bool:
    """
    True when no condition is configured. A condition that does not parse
    never matches, and neither does a name without a year.
    """
    if is_blank(condition):
        return True
    cond = parse_condition(condition)
    if cond is None:
        return False
    return evaluate(cond, name)
