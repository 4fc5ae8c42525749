"""Skills section splitting, filtering and grouping."""
from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Sequence

from .model import LINK, Line, Section, Token, render_text
from .tokenizer import normalize_url, parse_line

__all__ = [
    "MAX_GROUP_MEMBERS",
    "MAX_SKILL_LINES",
    "SKILL_CATEGORY_MAP",
    "split_skills",
]

SKILL_CATEGORY_MAP: Dict[str, List[str]] = {
    "database": ["mysql", "postgres", "postgresql", "oracle", "sqlite", "mongodb", "sql"],
}

MAX_GROUP_MEMBERS = 4
MAX_SKILL_LINES = 5

_SPLIT_RE = re.compile(r"[;,]")
_KEY_RE = re.compile(r"[^a-z0-9+]+")


def _skill_key(value: str) -> str:
    return _KEY_RE.sub(" ", value.lower()).strip()


def _category(lower: str) -> Optional[str]:
    for label, members in SKILL_CATEGORY_MAP.items():
        if lower == label or lower in members:
            return label
    return None


def _line_text(line: Line) -> str:
    return render_text(t for t in line.tokens if t.has_text).strip()


def _expand(section: Section) -> Section:
    lines: List[Line] = []
    for line in section.lines:
        text = _line_text(line)
        if _SPLIT_RE.search(text):
            for skill in _SPLIT_RE.split(text):
                skill = skill.strip()
                if skill:
                    lines.append(parse_line(skill).with_bullet())
        else:
            lines.append(line.with_bullet())
    return section.with_lines(lines)


class _Skill:
    __slots__ = ("display", "href")

    def __init__(self, display: str, href: str = ""):
        self.display = display
        self.href = href


def _match_link(skill: str, links: Sequence[Token]) -> str:
    key = _skill_key(skill)
    if not key:
        return ""
    for test in (
        lambda other: other == key,
        lambda other: key in other,
        lambda other: other in key,
    ):
        for tok in links:
            other = _skill_key(tok.text)
            if other and test(other):
                return normalize_url(tok.href)
    return ""


def _collect(section: Section) -> Dict[str, _Skill]:
    found: Dict[str, _Skill] = {}
    for line in section.lines:
        text = _line_text(line)
        if not text:
            continue
        links = [t for t in line.tokens if t.kind == LINK and t.href and t.text.strip()]
        for part in _SPLIT_RE.split(text):
            skill = part.strip()
            if not skill:
                continue
            lower = skill.lower()
            href = _match_link(skill, links)
            if lower not in found:
                found[lower] = _Skill(skill, href)
            elif href and not found[lower].href:
                found[lower].href = href
    return found


def _grouped_line(entries: List[_Skill]) -> Line:
    tokens: List[Token] = [Token.bullet()]
    for i, entry in enumerate(entries):
        if i:
            tokens.append(Token.text_run(", "))
        if entry.href:
            tokens.append(Token.link(entry.display, entry.href))
        else:
            tokens.append(Token.text_run(entry.display))
    return Line.of(tokens)


def _filter_and_group(section: Section, wanted: set) -> Section:
    groups: Dict[str, List[_Skill]] = {}
    for lower, skill in _collect(section).items():
        if lower not in wanted:
            continue
        label = _category(lower)
        if label is None:
            groups.setdefault(lower, [skill])
            continue
        group = groups.setdefault(label, [_Skill(label)])
        if lower != label:
            group.append(skill)
    lines = [_grouped_line(entries[:MAX_GROUP_MEMBERS]) for entries in groups.values()]
    return section.with_lines(lines[:MAX_SKILL_LINES])


def split_skills(sections: Iterable[Section], job_skills: Optional[Iterable] = None) -> List[Section]:
    """Normalize every section whose heading mentions "skill".

    Without ``job_skills`` each comma/semicolon separated skill becomes its
    own bulleted line. With ``job_skills`` the skills are deduplicated
    (first casing wins), filtered to the job's skills, grouped by category
    and returned as at most five bulleted lines.
    """
    wanted = {str(s).strip().lower() for s in (job_skills or []) if s is not None}
    wanted.discard("")
    out: List[Section] = []
    for section in sections:
        if "skill" not in (section.heading or "").lower():
            out.append(section)
        elif wanted:
            out.append(_filter_and_group(section, wanted))
        else:
            out.append(_expand(section))
    return out
