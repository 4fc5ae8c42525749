"""Immutable document model shared by every parsing stage.

A Document holds ordered Sections; a Section holds ordered Lines; a Line is
an ordered tuple of typed inline Tokens.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

__all__ = [
    "BULLET",
    "TAB",
    "NEWLINE",
    "LINK",
    "JOBSEP",
    "TEXT",
    "BOLD",
    "ITALIC",
    "BOLDITALIC",
    "Token",
    "Line",
    "Section",
    "Document",
    "render_text",
]

BULLET = "bullet"
TAB = "tab"
NEWLINE = "newline"
LINK = "link"
JOBSEP = "jobsep"
TEXT = "text"

BOLD = "bold"
ITALIC = "italic"
BOLDITALIC = "bolditalic"

JOBSEP_TEXT = " | "


@dataclass(frozen=True)
class Token:
    kind: str
    text: str = ""
    href: str = ""
    style: Optional[str] = None
    continued: bool = False

    @classmethod
    def bullet(cls) -> "Token":
        return cls(BULLET)

    @classmethod
    def tab(cls) -> "Token":
        return cls(TAB)

    @classmethod
    def newline(cls) -> "Token":
        return cls(NEWLINE)

    @classmethod
    def jobsep(cls) -> "Token":
        return cls(JOBSEP)

    @classmethod
    def link(cls, text: str, href: str, style: Optional[str] = None) -> "Token":
        return cls(LINK, text=text, href=href, style=style)

    @classmethod
    def text_run(cls, value: str, style: Optional[str] = None) -> "Token":
        return cls(TEXT, text=value, style=style)

    @property
    def has_text(self) -> bool:
        return self.kind in (TEXT, LINK)

    def restyled(self, style: Optional[str]) -> "Token":
        return replace(self, style=style)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.kind}
        if self.has_text:
            out["text"] = self.text
        if self.href:
            out["href"] = self.href
        if self.style:
            out["style"] = self.style
        out["continued"] = self.continued
        return out


@dataclass(frozen=True)
class Line:
    tokens: Tuple[Token, ...] = ()

    @classmethod
    def of(cls, tokens: Iterable[Token]) -> "Line":
        """Build a line, marking every token but the last as continued."""
        items = list(tokens)
        last = len(items) - 1
        return cls(tuple(replace(t, continued=i < last) for i, t in enumerate(items)))

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    @property
    def has_bullet(self) -> bool:
        return any(t.kind == BULLET for t in self.tokens)

    def with_bullet(self) -> "Line":
        """Return this line led by a bullet token.

        The first bullet found is moved to the front; without one a bullet
        is prepended.
        """
        if self.tokens and self.tokens[0].kind == BULLET:
            return self
        rest = list(self.tokens)
        for i, tok in enumerate(rest):
            if tok.kind == BULLET:
                del rest[i]
                break
        return Line.of([Token.bullet()] + rest)

    def head(self) -> Tuple[Token, ...]:
        """Tokens before the first newline."""
        for i, tok in enumerate(self.tokens):
            if tok.kind == NEWLINE:
                return self.tokens[:i]
        return self.tokens

    def tail(self) -> Tuple[Token, ...]:
        """Tokens from the first newline onward (nested continuation)."""
        for i, tok in enumerate(self.tokens):
            if tok.kind == NEWLINE:
                return self.tokens[i:]
        return ()

    def text(self) -> str:
        return render_text(self.tokens)

    def head_text(self) -> str:
        return render_text(self.head()).strip()

    def to_dict(self) -> List[Dict[str, Any]]:
        return [t.to_dict() for t in self.tokens]


def render_text(tokens: Iterable[Token]) -> str:
    parts: List[str] = []
    for tok in tokens:
        if tok.kind == JOBSEP:
            parts.append(JOBSEP_TEXT)
        elif tok.kind == NEWLINE:
            parts.append("\n")
        elif tok.kind == TAB:
            parts.append("\t")
        elif tok.has_text:
            parts.append(tok.text)
    return "".join(parts)


@dataclass(frozen=True)
class Section:
    heading: str
    lines: Tuple[Line, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def with_lines(self, lines: Iterable[Line]) -> "Section":
        return replace(self, lines=tuple(lines))

    def with_heading(self, heading: str) -> "Section":
        return replace(self, heading=heading)

    def to_dict(self) -> Dict[str, Any]:
        return {"heading": self.heading, "items": [line.to_dict() for line in self.lines]}


@dataclass(frozen=True)
class Document:
    name: str = "Resume"
    sections: Tuple[Section, ...] = ()
    contact_tokens: Optional[Tuple[Token, ...]] = field(default=None)

    def section(self, heading: str) -> Optional[Section]:
        """Find a section by exact heading (case-insensitive)."""
        key = heading.lower()
        for sec in self.sections:
            if sec.heading.lower() == key:
                return sec
        return None

    @property
    def headings(self) -> List[str]:
        return [s.heading for s in self.sections]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "sections": [s.to_dict() for s in self.sections],
        }
        if self.contact_tokens is not None:
            out["contactTokens"] = [t.to_dict() for t in self.contact_tokens]
        return out
