"""Inline emphasis scanning for Markdown-style ``*`` / ``_`` markers."""
from __future__ import annotations

from typing import List, Optional, Tuple

from .model import BOLD, BOLDITALIC, ITALIC, Token

__all__ = ["parse_emphasis", "combine_styles"]

MARKER_CHARS = "*_"
_MARKER_STYLES = {1: ITALIC, 2: BOLD, 3: BOLDITALIC}


def combine_styles(styles) -> Optional[str]:
    """Collapse a set of active styles into a single token style."""
    styles = set(styles)
    bold = any(s in (BOLD, BOLDITALIC) for s in styles)
    italic = any(s in (ITALIC, BOLDITALIC) for s in styles)
    if bold and italic:
        return BOLDITALIC
    if bold:
        return BOLD
    if italic:
        return ITALIC
    return None


def parse_emphasis(segment: str) -> List[Token]:
    """Split ``segment`` into styled text runs.

    Runs of one to three marker characters open italic, bold or bold-italic.
    A marker closes the innermost open style when character and length match,
    opens a new style when a matching closer appears later, and is otherwise
    kept as literal text. If any style is still open at the end, all styling
    is discarded and the whole segment comes back as one plain run with the
    consumed markers removed.
    """
    tokens: List[Token] = []
    stack: List[Tuple[str, int]] = []
    buf: List[str] = []

    def flush() -> None:
        if not buf:
            return
        style = combine_styles([_MARKER_STYLES[size] for _, size in stack])
        tokens.append(Token.text_run("".join(buf), style))
        buf.clear()

    i = 0
    n = len(segment)
    while i < n:
        ch = segment[i]
        if ch not in MARKER_CHARS:
            buf.append(ch)
            i += 1
            continue
        run = 1
        while i + run < n and segment[i + run] == ch:
            run += 1
        remaining = run
        while remaining > 0:
            size = min(remaining, 3)
            if stack and stack[-1] == (ch, size):
                flush()
                stack.pop()
            elif segment.find(ch * size, i + size) != -1:
                flush()
                stack.append((ch, size))
            else:
                buf.append(ch * size)
            i += size
            remaining -= size
    flush()

    if stack:
        plain = "".join(t.text for t in tokens)
        return [Token.text_run(plain)] if plain else []
    return tokens
