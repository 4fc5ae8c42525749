"""Move job-history lines out of the Summary section."""
from __future__ import annotations

import logging
from typing import Iterable, List

from .contact import contains_contact_info, is_job_entry, tokens_contact_text
from .headings import SUMMARY, WORK_EXPERIENCE, heading_key
from .model import JOBSEP, Line, Section, Token

__all__ = ["move_summary_job_entries", "sanitize_tokens"]

LOG = logging.getLogger(__name__)


def _blank(tok: Token) -> bool:
    return tok.kind == JOBSEP or (tok.has_text and not tok.text.strip())


def sanitize_tokens(tokens: Iterable[Token]) -> List[Token]:
    """Drop contact-bearing tokens and tidy the separators left behind."""
    kept: List[Token] = []
    for tok in tokens:
        if tok.kind != JOBSEP and contains_contact_info(f"{tok.text} {tok.href}"):
            continue
        if tok.kind == JOBSEP and kept and kept[-1].kind == JOBSEP:
            continue
        kept.append(tok)
    while kept and _blank(kept[0]):
        kept.pop(0)
    while kept and _blank(kept[-1]):
        kept.pop()
    return kept


def move_summary_job_entries(sections: Iterable[Section]) -> List[Section]:
    """Reclassify Summary lines that look like job history.

    Lines carrying contact details always stay. Matching lines move to the
    end of Work Experience, which is created only when something moves. A
    Summary left with no lines is removed.
    """
    sections = list(sections)
    summary_key = SUMMARY.lower()
    work_key = WORK_EXPERIENCE.lower()
    summary_idx = next(
        (i for i, s in enumerate(sections) if heading_key(s.heading) == summary_key), None
    )
    if summary_idx is None:
        return sections

    summary = sections[summary_idx]
    keep: List[Line] = []
    moved: List[Line] = []
    for line in summary.lines:
        if contains_contact_info(tokens_contact_text(line.tokens)):
            keep.append(line)
            continue
        cleaned = sanitize_tokens(line.tokens)
        if cleaned and is_job_entry(cleaned):
            moved.append(Line.of(cleaned))
        else:
            keep.append(line)
    if not moved:
        return sections

    LOG.debug("moving %d job line(s) out of %s", len(moved), summary.heading)
    sections[summary_idx] = summary.with_lines(keep)
    work_idx = next(
        (i for i, s in enumerate(sections) if heading_key(s.heading) == work_key), None
    )
    if work_idx is None:
        sections.append(Section(WORK_EXPERIENCE, tuple(moved)))
    else:
        work = sections[work_idx]
        sections[work_idx] = work.with_lines(work.lines + tuple(moved))
    if not keep:
        del sections[summary_idx]
    return sections
