"""Date strings from résumés and profiles to sortable values."""
from __future__ import annotations

import datetime as _dt
import math
import re
from typing import Optional

__all__ = ["MONTH_MAP", "ONGOING_WORDS", "parse_month", "parse_date_value"]

# Month name to number mapping (1-12)
MONTH_MAP = {m.lower(): i for i, m in enumerate(
    ["January", "February", "March", "April", "May", "June",
     "July", "August", "September", "October", "November", "December"],
    start=1,
)}
MONTH_MAP.update({k[:3]: v for k, v in list(MONTH_MAP.items())})
MONTH_MAP["sept"] = 9

ONGOING_WORDS = {"present", "current", "now", "today", "ongoing"}

_ISO_RE = re.compile(r"^(\d{4})-(\d{1,2})(?:-(\d{1,2}))?")
_NUMERIC_MONTH_RE = re.compile(r"^(\d{1,2})/(\d{4})$")
_MONTH_YEAR_RE = re.compile(r"^([a-z]+)\.?,?\s+(?:(\d{1,2}),?\s+)?(\d{4})$")
_YEAR_RE = re.compile(r"^(\d{4})$")


def parse_month(name: str) -> Optional[int]:
    """Return 1-12 for a month name or abbreviation, None otherwise."""
    return MONTH_MAP.get((name or "").strip().lower().rstrip("."))


def _ordinal(year: int, month: int = 1, day: int = 1) -> float:
    try:
        return float(_dt.date(year, month, day).toordinal())
    except ValueError:
        return 0.0


def parse_date_value(value) -> float:
    """Convert a date string into a sort key (proleptic day ordinal).

    Ongoing words ("Present", "Current") sort after every real date, and
    missing or unparsable values sort before every real date (0).
    Recognized shapes: ``2021``, ``Jan 2021``, ``January 2021``,
    ``Jan 15, 2022``, ``2021-03``, ``2021-03-15`` and ``03/2021``.
    """
    text = str(value or "").strip().lower()
    if not text:
        return 0.0
    if text in ONGOING_WORDS:
        return math.inf
    m = _ISO_RE.match(text)
    if m:
        return _ordinal(int(m.group(1)), int(m.group(2)), int(m.group(3) or 1))
    m = _NUMERIC_MONTH_RE.match(text)
    if m:
        return _ordinal(int(m.group(2)), int(m.group(1)))
    m = _MONTH_YEAR_RE.match(text)
    if m:
        month = parse_month(m.group(1))
        if month is None:
            return 0.0
        return _ordinal(int(m.group(3)), month, int(m.group(2) or 1))
    m = _YEAR_RE.match(text)
    if m:
        return _ordinal(int(m.group(1)))
    return 0.0
