"""Line tokenizer: one logical résumé line to an ordered token sequence.

Handles leading bullet markers, pipe-separated job headers, Markdown and bare
links, emphasis markers, and literal newline / tab characters.
"""
from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import urlsplit

from .emphasis import parse_emphasis
from .model import BOLD, BOLDITALIC, ITALIC, Line, Token

__all__ = [
    "DOMAIN_LABELS",
    "parse_line",
    "normalize_url",
    "same_url",
    "strip_markers",
    "strip_url_punctuation",
]

BULLET_RE = re.compile(r"^[-*–]\s+")
MARKERS_RE = re.compile(r"[*_]")

_LINK_RE = re.compile(
    r"\[([^\]]+)\]\((https?://\S+?)\)"
    r"|(https?://\S+"
    r"|(?<![\w@/.-])(?:www\.\S+|(?:[a-z0-9-]+\.)*(?:linkedin|credly)\.com\S*))",
    re.I,
)
_URL_TRAILING = ")>.,;:!"
_URL_LEADING_RE = re.compile(r"^[\[({<]+")
_SCHEME_RE = re.compile(r"^(?:https?|mailto|tel):", re.I)
_PROFILE_HOST_RE = re.compile(r"^(?:[a-z0-9.-]*\.)?(?:linkedin|credly)\.com", re.I)

DOMAIN_LABELS = {
    "linkedin.com": "LinkedIn",
    "github.com": "GitHub",
    "credly.com": "Credly",
}


def strip_markers(text: str) -> str:
    return MARKERS_RE.sub("", text or "")


def strip_url_punctuation(url: str) -> str:
    trimmed = _URL_LEADING_RE.sub("", (url or "").strip())
    return trimmed.rstrip(_URL_TRAILING)


def normalize_url(url: Optional[str]) -> str:
    """Return an absolute URL for ``url``, or ``""`` when nothing is left.

    Scheme-less ``www.`` and LinkedIn / Credly hosts get ``https://``;
    protocol-relative URLs resolve to https; bare paths resolve against
    credly.com (badge exports use them).
    """
    trimmed = strip_url_punctuation(url or "")
    if not trimmed:
        return ""
    if _SCHEME_RE.match(trimmed):
        return trimmed
    if trimmed.startswith("//"):
        return f"https:{trimmed}"
    if trimmed.startswith("/"):
        return f"https://www.credly.com{trimmed}"
    if trimmed.lower().startswith("www.") or _PROFILE_HOST_RE.match(trimmed):
        return f"https://{trimmed}"
    return trimmed


def same_url(a: Optional[str], b: Optional[str]) -> bool:
    """Compare two URLs ignoring case, wrapping punctuation and trailing slashes."""
    left = normalize_url(a).rstrip("/").lower()
    right = normalize_url(b).rstrip("/").lower()
    return bool(left) and left == right


def _domain_label(href: str) -> str:
    host = (urlsplit(href).hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    for domain, label in DOMAIN_LABELS.items():
        if host == domain or host.endswith("." + domain):
            return label
    return href


def _bolded(style: Optional[str]) -> str:
    if style == ITALIC:
        return BOLDITALIC
    if style in (BOLD, BOLDITALIC):
        return style
    return BOLD


class _LineBuilder:
    """Accumulates tokens for one line while scanning its runs."""

    def __init__(self, preserve_link_text: bool = False):
        self.tokens: List[Token] = []
        self.preserve_link_text = preserve_link_text

    def emphasis(self, segment: str, force_bold: bool) -> None:
        if not segment:
            return
        for tok in parse_emphasis(segment):
            self.tokens.append(tok.restyled(_bolded(tok.style)) if force_bold else tok)

    def link(self, text: str, href: str, force_bold: bool) -> None:
        self.tokens.append(Token.link(text, href, BOLD if force_bold else None))

    def run(self, part: str, force_bold: bool = False) -> None:
        for piece in re.split(r"(\n|\t)", part):
            if piece == "\n":
                self.tokens.append(Token.newline())
            elif piece == "\t":
                self.tokens.append(Token.tab())
            elif piece:
                self._links(piece, force_bold)

    def _links(self, piece: str, force_bold: bool) -> None:
        pos = 0
        while pos <= len(piece):
            match = _LINK_RE.search(piece, pos)
            if match is None:
                break
            before = piece[pos:match.start()]
            stripped = before.rstrip("(")
            open_parens = len(before) - len(stripped)
            self.emphasis(stripped, force_bold)
            end = match.end()

            if match.group(1) and match.group(2):
                href = normalize_url(match.group(2))
                if not href:
                    self.emphasis("(" * open_parens + match.group(0), force_bold)
                    pos = end
                    continue
                self.link(strip_markers(match.group(1)), href, force_bold)
            else:
                raw = match.group(3)
                trailing = ""
                while raw and raw[-1] in _URL_TRAILING:
                    trailing = raw[-1] + trailing
                    raw = raw[:-1]
                href = normalize_url(raw)
                if not href:
                    self.emphasis("(" * open_parens + match.group(0), force_bold)
                    pos = end
                    continue
                label = raw if self.preserve_link_text else _domain_label(href)
                self.link(label, href, force_bold)
                while open_parens and trailing.startswith(")"):
                    trailing = trailing[1:]
                    open_parens -= 1
                self.emphasis(trailing, force_bold)

            while open_parens and end < len(piece) and piece[end] == ")":
                end += 1
                open_parens -= 1
            pos = end
        self.emphasis(piece[pos:], force_bold)


def parse_line(text: str, preserve_link_text: bool = False) -> Line:
    """Tokenize one line of résumé text.

    The result is never empty: input that yields no tokens becomes a single
    plain run holding the text with emphasis markers stripped.
    """
    text = text or ""
    builder = _LineBuilder(preserve_link_text)
    body = text
    bullet = BULLET_RE.match(body)
    if bullet:
        builder.tokens.append(Token.bullet())
        body = body[bullet.end():]

    segments = body.split("|")
    if len(segments) > 1:
        leading = segments[0].strip()
        started = bool(leading)
        if leading:
            builder.run(leading, force_bold=True)
        for segment in segments[1:]:
            segment = segment.strip()
            if not segment:
                continue
            if not started:
                builder.run(segment, force_bold=True)
                started = True
                continue
            builder.tokens.append(Token.jobsep())
            builder.run(segment)
    else:
        builder.run(body)

    if not builder.tokens:
        return Line.of([Token.text_run(strip_markers(text))])
    return Line.of(builder.tokens)
