"""Heuristics for contact details and job-history lines."""
from __future__ import annotations

import re
from typing import Iterable

from .model import JOBSEP, Token

__all__ = ["contains_contact_info", "is_job_entry", "tokens_contact_text"]

EMAIL_RE = re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.I)
PHONE_RE = re.compile(r"\+?\d[\d\-\s().]{7,}\d")
URL_RE = re.compile(r"\bhttps?://\S+", re.I)
PROFILE_RE = re.compile(r"linkedin|github", re.I)

MONTH_RANGE_RE = re.compile(
    r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\s+\d{4}.*?(present|\d{4})"
)
YEAR_RANGE_RE = re.compile(r"\b\d{4}\b\s*(?:-|–|—|to)+\s*(present|\d{4})")

# Year ranges like "2019 - 2021" look phone-shaped; real numbers carry more digits
MIN_PHONE_DIGITS = 10


def _has_phone(text: str) -> bool:
    for match in PHONE_RE.finditer(text):
        if sum(ch.isdigit() for ch in match.group(0)) >= MIN_PHONE_DIGITS:
            return True
    return False


def contains_contact_info(text: str) -> bool:
    """True when ``text`` carries an email, phone number, URL or profile mention."""
    text = text or ""
    return bool(
        EMAIL_RE.search(text)
        or _has_phone(text)
        or URL_RE.search(text)
        or PROFILE_RE.search(text)
    )


def tokens_contact_text(tokens: Iterable[Token]) -> str:
    return " ".join(f"{t.text} {t.href}" for t in tokens)


def is_job_entry(tokens: Iterable[Token]) -> bool:
    """True when a token sequence reads like a job-history line.

    Contact-bearing lines never qualify. Otherwise a job separator, a
    month-year range or a bare year range marks the line as a job entry.
    """
    tokens = list(tokens)
    text = tokens_contact_text(tokens)
    if contains_contact_info(text):
        return False
    if any(t.kind == JOBSEP for t in tokens):
        return True
    lower = text.lower()
    return bool(MONTH_RANGE_RE.search(lower) or YEAR_RANGE_RE.search(lower))
