"""Assemble raw résumé content into a normalized Document.

Two input shapes are accepted: a JSON object (``{"name", "sections": [...]}``
or a bare heading-to-content map) and loose plain text with Markdown-ish
headings and bullets. Anything that does not decode to a JSON object is
treated as plain text.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from .headings import BARE_HEADING_RE, normalize_heading
from .model import NEWLINE, TAB, Document, Line, Section, Token
from .options import ParseOptions
from .reconcile import ensure_required_sections
from .sections import merge_duplicate_sections, prune_empty_sections
from .skills import split_skills
from .summary import move_summary_job_entries
from .tokenizer import BULLET_RE, parse_line, strip_markers

__all__ = ["DEFAULT_NAME", "assemble_sections", "normalize_name", "parse_content"]

LOG = logging.getLogger(__name__)

DEFAULT_NAME = "Resume"

_MD_HEADING_RE = re.compile(r"^#{1,6}\s+(.*)")
_INDENT_RE = re.compile(r"^(\s+)(.*)")


def normalize_name(name: Any) -> str:
    cleaned = strip_markers(str(name or "")).strip()
    return cleaned or DEFAULT_NAME


def _bulleted(line: Line) -> Line:
    return line if line.has_bullet else line.with_bullet()


# =============================================================================
# Structured input
# =============================================================================


def _decode_structured(text: str) -> Optional[Mapping[str, Any]]:
    try:
        data = json.loads(text)
    except ValueError:
        LOG.debug("content is not JSON; parsing as plain text")
        return None
    if not isinstance(data, dict):
        LOG.debug("JSON root is %s, not an object; parsing as plain text", type(data).__name__)
        return None
    return data


def _structured_sections(data: Mapping[str, Any], preserve_link_text: bool) -> List[Section]:
    raw = data.get("sections")
    if isinstance(raw, list):
        entries = [s for s in raw if isinstance(s, Mapping)]
    else:
        entries = [{"heading": k, "content": v} for k, v in data.items() if k != "name"]

    sections: List[Section] = []
    for entry in entries:
        heading = str(entry.get("heading") or "")
        source = entry.get("items")
        if source is None:
            source = entry.get("content")
        if isinstance(source, list):
            items = source
        elif source:
            items = [source]
        else:
            items = []
        lines = [_bulleted(parse_line(str(item), preserve_link_text)) for item in items]
        sections.append(Section(heading, tuple(lines)))
    return sections


# =============================================================================
# Plain-text input
# =============================================================================


@dataclass
class _Draft:
    heading: str
    lines: List[Line] = field(default_factory=list)


class _TextAssembler:
    """Line-by-line state machine for plain-text résumés."""

    def __init__(self, default_heading: str, preserve_link_text: bool):
        self.preserve_link_text = preserve_link_text
        self.default = _Draft(default_heading)
        self.drafts: List[_Draft] = [self.default]
        self.current: List[Token] = []

    @property
    def section(self) -> _Draft:
        return self.drafts[-1]

    def close_line(self) -> None:
        tokens = self.current
        while tokens and tokens[-1].kind in (NEWLINE, TAB):
            tokens.pop()
        if tokens:
            self.section.lines.append(Line.of(tokens))
        self.current = []

    def start_section(self, heading: str) -> None:
        self.close_line()
        self.drafts.append(_Draft(heading))

    def parse(self, text: str) -> List[Token]:
        return list(parse_line(text, self.preserve_link_text).tokens)

    def feed(self, raw: str) -> None:
        trimmed = raw.strip()
        if not trimmed:
            if self.current:
                self.current.append(Token.newline())
            return
        heading = _MD_HEADING_RE.match(trimmed)
        if heading:
            self.start_section(heading.group(1).strip())
            return
        if BARE_HEADING_RE.match(trimmed):
            self.start_section(normalize_heading(trimmed))
            return
        if BULLET_RE.match(raw):
            self.close_line()
            self.current = self.parse(raw)
            return
        indent = _INDENT_RE.match(raw)
        if indent and self.current:
            self.current.append(Token.newline())
            self.current.extend(Token.tab() for ch in indent.group(1) if ch == "\t")
            self.current.extend(self.parse(indent.group(2)))
            return
        self.close_line()
        self.current = self.parse(trimmed)

    def finish(self) -> List[Section]:
        self.close_line()
        drafts = [d for d in self.drafts if d is not self.default or d.lines]
        return [Section(d.heading, tuple(d.lines)) for d in drafts]


def _text_sections(text: str, opts: ParseOptions) -> Tuple[str, List[Section]]:
    lines = text.splitlines()
    name = DEFAULT_NAME
    for i, line in enumerate(lines):
        if line.strip():
            name = normalize_name(line)
            lines = lines[i + 1:]
            break
    else:
        lines = []
    assembler = _TextAssembler(opts.default_heading, opts.preserve_link_text)
    for raw in lines:
        assembler.feed(raw)
    return name, assembler.finish()


# =============================================================================
# Pipeline
# =============================================================================


def _normalize_headings(sections) -> List[Section]:
    return [s.with_heading(normalize_heading(s.heading)) for s in sections]


def assemble_sections(text: str, options=None) -> Tuple[str, List[Section]]:
    """Group raw content into named sections without any normalization passes."""
    opts = ParseOptions.from_mapping(options)
    text = text or ""
    data = _decode_structured(text)
    if data is None:
        return _text_sections(text, opts)
    return normalize_name(data.get("name")), _structured_sections(data, opts.preserve_link_text)


def parse_content(text: str, options=None) -> Document:
    """Parse résumé content into a normalized :class:`Document`.

    ``options`` is a :class:`ParseOptions` or a mapping with camelCase or
    snake_case keys (``jobSkills``, ``resumeExperience``, ``credlyProfileUrl``
    and so on).
    """
    opts = ParseOptions.from_mapping(options)
    name, sections = assemble_sections(text, opts)
    LOG.debug("assembled %d section(s) for %r", len(sections), name)

    sections = split_skills(sections, opts.job_skills)
    sections = move_summary_job_entries(sections)
    sections = _normalize_headings(sections)
    sections = prune_empty_sections(merge_duplicate_sections(sections))

    doc = ensure_required_sections(Document(name, tuple(sections)), opts)

    sections = _normalize_headings(doc.sections)
    sections = prune_empty_sections(merge_duplicate_sections(sections))
    LOG.debug("parsed %r into sections: %s", name, ", ".join(s.heading for s in sections))
    return Document(name, tuple(sections), doc.contact_tokens)
