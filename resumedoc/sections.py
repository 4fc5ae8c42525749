"""Section-level passes: duplicate merging and empty pruning."""
from __future__ import annotations

import re
from typing import Dict, Iterable, List

from .headings import normalize_heading
from .model import Line, Section

__all__ = ["line_has_content", "merge_duplicate_sections", "prune_empty_sections"]

# Bullets, dashes and whitespace alone do not count as content
_VISIBLE_RE = re.compile(r"[^\s•·\-–—]")


def line_has_content(line: Line) -> bool:
    return any(tok.has_text and _VISIBLE_RE.search(tok.text) for tok in line.tokens)


def merge_duplicate_sections(sections: Iterable[Section]) -> List[Section]:
    """Collapse sections sharing a normalized heading.

    Headings come back normalized and the first occurrence keeps its
    position. If it is still empty when a non-empty duplicate arrives, the
    duplicate takes its slot wholesale; otherwise the duplicate's lines are
    appended. Sections that end up empty are dropped.
    """
    merged: List[Section] = []
    slots: Dict[str, int] = {}
    for section in sections:
        heading = normalize_heading(section.heading)
        key = heading.lower()
        if key not in slots:
            slots[key] = len(merged)
            merged.append(section.with_heading(heading))
            continue
        idx = slots[key]
        current = merged[idx]
        if current.is_empty:
            merged[idx] = section.with_heading(heading)
        else:
            merged[idx] = current.with_lines(current.lines + section.lines)
    return [s for s in merged if not s.is_empty]


def prune_empty_sections(sections: Iterable[Section]) -> List[Section]:
    out: List[Section] = []
    for section in sections:
        lines = [line for line in section.lines if line_has_content(line)]
        if lines:
            out.append(section.with_lines(lines))
    return out
