"""Required-section reconciliation.

Merges experience, education and certification facts from the résumé,
LinkedIn and Credly into a parsed document, guarantees the Work Experience
and Education sections, and injects contact / profile links.
"""
from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from .contact import contains_contact_info, tokens_contact_text
from .facts import (
    CertificationEntry,
    ExperienceEntry,
    normalize_certifications,
    normalize_education,
    normalize_experience,
    parse_certification,
    parse_experience,
)
from .headings import CERTIFICATION, EDUCATION, PROJECTS, SUMMARY, WORK_EXPERIENCE, heading_key
from .model import BULLET, LINK, TEXT, Document, Line, Section, Token
from .options import ParseOptions
from .sections import merge_duplicate_sections, prune_empty_sections
from .tokenizer import normalize_url, parse_line, same_url

__all__ = [
    "CREDLY_PROFILE_LABEL",
    "LINKEDIN_PROFILE_LABEL",
    "MAX_CERTIFICATIONS",
    "PLACEHOLDER",
    "ensure_required_sections",
]

LOG = logging.getLogger(__name__)

PLACEHOLDER = "Information not provided"
CREDLY_PROFILE_LABEL = "Credly Profile"
LINKEDIN_PROFILE_LABEL = "LinkedIn Profile"
CONTACT_SEPARATOR = " | "
MAX_CERTIFICATIONS = 5
MAX_PROJECT_SENTENCES = 2

# Labels produced by the tokenizer or this module, never certification names
_AUTO_LABELS = {"linkedin", "github", "credly", CREDLY_PROFILE_LABEL.lower()}
_SENTENCE_RE = re.compile(r"[.!?]\s+")


def _find(sections: Sequence[Section], heading: str) -> Optional[int]:
    key = heading.lower()
    for i, section in enumerate(sections):
        if heading_key(section.heading) == key:
            return i
    return None


def _placeholder() -> Line:
    return parse_line(PLACEHOLDER)


# =============================================================================
# Contact block
# =============================================================================


def _append_link(tokens: List[Token], label: str, href: str) -> None:
    if tokens:
        tokens.append(Token.text_run(CONTACT_SEPARATOR))
    tokens.append(Token.link(label, href))


def _ensure_contact(
    sections: List[Section], opts: ParseOptions
) -> Optional[Tuple[Token, ...]]:
    """Build the contact line and place it first in Summary.

    Returns the contact tokens, or None when there is nothing to show.
    """
    idx = _find(sections, SUMMARY)
    tokens: Optional[List[Token]] = None
    first: Optional[Line] = None
    if idx is not None and sections[idx].lines:
        first = sections[idx].lines[0]
        if contains_contact_info(tokens_contact_text(first.tokens)):
            tokens = list(first.tokens)
        else:
            first = None

    credly = normalize_url(opts.credly_profile_url)
    if credly:
        tokens = tokens if tokens is not None else []
        if not any(t.kind == LINK and same_url(t.href, credly) for t in tokens):
            _append_link(tokens, CREDLY_PROFILE_LABEL, credly)

    linkedin = normalize_url(opts.linkedin_profile_url)
    if linkedin:
        tokens = tokens if tokens is not None else []
        if not any(t.kind == LINK and "linkedin.com" in normalize_url(t.href).lower() for t in tokens):
            _append_link(tokens, LINKEDIN_PROFILE_LABEL, linkedin)

    if not tokens:
        return None

    line = Line.of(tokens)
    if idx is None:
        sections.insert(0, Section(SUMMARY, (line,)))
    elif first is not None:
        summary = sections[idx]
        sections[idx] = summary.with_lines((line,) + summary.lines[1:])
    else:
        summary = sections[idx]
        sections[idx] = summary.with_lines((line,) + summary.lines)
    return line.tokens


# =============================================================================
# Work Experience
# =============================================================================


def _experience_line(entry: ExperienceEntry, tail: Tuple[Token, ...] = ()) -> Line:
    """Render an entry as a bulleted line; responsibilities nest below it."""
    tokens = list(parse_line(entry.render()).with_bullet().tokens)
    if tail:
        tokens.extend(tail)
    else:
        for duty in entry.responsibilities:
            tokens.extend([Token.newline(), Token.tab(), Token.bullet()])
            tokens.extend(t for t in parse_line(duty).tokens if t.kind != BULLET)
    return Line.of(tokens)


def _other_experience_has_lines(sections: Sequence[Section], skip: int) -> bool:
    return any(
        i != skip and "experience" in heading_key(s.heading) and s.lines
        for i, s in enumerate(sections)
    )


def _ensure_experience(sections: List[Section], opts: ParseOptions) -> None:
    idx = _find(sections, WORK_EXPERIENCE)
    if idx is None:
        sections.append(Section(WORK_EXPERIENCE))
        idx = len(sections) - 1
    section = sections[idx].with_heading(WORK_EXPERIENCE)

    parsed: List[Tuple[ExperienceEntry, Tuple[Token, ...]]] = []
    unparsed: List[Line] = []
    for line in section.lines:
        head = line.head_text()
        entry = parse_experience(head) if head else None
        if entry is None or not entry.has_anchor:
            unparsed.append(line)
            continue
        parsed.append((entry, line.tail()))

    seen = {entry.key for entry, _ in parsed}
    added = 0
    for entry in normalize_experience(opts.resume_experience) + normalize_experience(opts.linkedin_experience):
        if entry.key in seen:
            continue
        seen.add(entry.key)
        parsed.append((entry, ()))
        added += 1

    parsed.sort(key=lambda item: item[0].sort_value, reverse=True)
    if opts.job_title and parsed:
        entry, tail = parsed[0]
        parsed[0] = (entry.with_title(opts.job_title), tail)

    lines = [_experience_line(entry, tail) for entry, tail in parsed] + unparsed
    LOG.debug(
        "work experience: %d entries (%d added), %d kept verbatim",
        len(parsed), added, len(unparsed),
    )
    if not lines and not _other_experience_has_lines(sections, idx):
        lines = [_placeholder()]
    sections[idx] = section.with_lines(lines)


# =============================================================================
# Education and Projects
# =============================================================================


def _ensure_education(sections: List[Section], opts: ParseOptions) -> None:
    idx = _find(sections, EDUCATION)
    if idx is None:
        sections.append(Section(EDUCATION))
        idx = len(sections) - 1
    section = sections[idx].with_heading(EDUCATION)
    if not section.lines:
        entries = normalize_education(opts.resume_education) or normalize_education(
            opts.linkedin_education
        )
        lines = [parse_line(e.entry) for e in entries] or [_placeholder()]
        section = section.with_lines(lines)
    sections[idx] = section


def _ensure_projects(sections: List[Section], opts: ParseOptions) -> None:
    if not opts.project or _find(sections, PROJECTS) is not None:
        return
    text = re.sub(r"\s+", " ", opts.project).strip()
    sentences = [s.strip() for s in _SENTENCE_RE.split(text) if s.strip()]
    lines = [parse_line(s).with_bullet() for s in sentences[:MAX_PROJECT_SENTENCES]]
    if lines:
        sections.append(Section(PROJECTS, tuple(lines)))


# =============================================================================
# Certifications
# =============================================================================


def _certification_from_line(line: Line) -> CertificationEntry:
    parts: List[str] = []
    for tok in line.tokens:
        text = tok.text.strip()
        if not text or text.lower() in _AUTO_LABELS:
            continue
        if tok.kind in (TEXT, LINK):
            parts.append(text)
    cert = parse_certification(" ".join(parts))
    if not cert.url:
        href = next((normalize_url(t.href) for t in line.tokens if t.kind == LINK and t.href), "")
        cert = replace(cert, url=href)
    return cert


def _certification_line(cert: CertificationEntry) -> Line:
    label = cert.label()
    if cert.url:
        return Line.of([Token.bullet(), Token.link(label, cert.url)])
    return Line.of([Token.bullet(), Token.text_run(label)])


def _with_credly_profile(lines: List[Line], profile: str) -> List[Line]:
    """Normalize an existing profile link in place, or append one."""
    found = False
    out: List[Line] = []
    for line in lines:
        tokens = list(line.tokens)
        for i, tok in enumerate(tokens):
            href_match = tok.kind == LINK and same_url(tok.href, profile)
            text_match = tok.text.strip().lower() == CREDLY_PROFILE_LABEL.lower()
            if href_match or text_match:
                tokens[i] = Token.link(CREDLY_PROFILE_LABEL, profile)
                found = True
        out.append(Line.of(tokens))
    if not found:
        out.append(Line.of([Token.bullet(), Token.link(CREDLY_PROFILE_LABEL, profile)]))
    return out


def _ensure_certifications(sections: List[Section], opts: ParseOptions) -> None:
    idx = _find(sections, CERTIFICATION)
    existing = [_certification_from_line(line) for line in sections[idx].lines] if idx is not None else []
    pool = (
        normalize_certifications(opts.credly_certifications)
        + existing
        + normalize_certifications(opts.resume_certifications)
        + normalize_certifications(opts.linkedin_certifications)
    )

    unique: List[CertificationEntry] = []
    seen = set()
    for cert in pool:
        if not cert.is_named or cert.key in seen:
            continue
        seen.add(cert.key)
        unique.append(cert)
    unique.sort(key=lambda c: c.sort_value, reverse=True)
    if len(unique) > MAX_CERTIFICATIONS:
        LOG.debug("dropping %d older certification(s)", len(unique) - MAX_CERTIFICATIONS)
    lines = [_certification_line(c) for c in unique[:MAX_CERTIFICATIONS]]

    profile = normalize_url(opts.credly_profile_url)
    if profile and lines:
        lines = _with_credly_profile(lines, profile)

    if lines:
        if idx is None:
            sections.append(Section(CERTIFICATION, tuple(lines)))
        else:
            sections[idx] = Section(CERTIFICATION, tuple(lines))
    elif idx is not None:
        del sections[idx]


# =============================================================================
# Entry point
# =============================================================================


def ensure_required_sections(doc: Document, options=None) -> Document:
    """Return ``doc`` with required sections present and external facts merged.

    ``options`` is a :class:`ParseOptions` or a mapping accepted by
    :meth:`ParseOptions.from_mapping`. With ``skip_required_sections`` only
    the prune and merge passes run.
    """
    opts = ParseOptions.from_mapping(options)
    sections = list(doc.sections)
    if opts.skip_required_sections:
        sections = merge_duplicate_sections(prune_empty_sections(sections))
        return replace(doc, sections=tuple(sections))

    contact = _ensure_contact(sections, opts)
    _ensure_experience(sections, opts)
    _ensure_education(sections, opts)
    _ensure_projects(sections, opts)
    _ensure_certifications(sections, opts)

    sections = merge_duplicate_sections(prune_empty_sections(sections))
    if contact is None:
        return replace(doc, sections=tuple(sections))
    return replace(doc, sections=tuple(sections), contact_tokens=contact)
