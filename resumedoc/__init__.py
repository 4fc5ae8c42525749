"""resumedoc package.

Parses free-form or AI-generated résumé text (and JSON-shaped section data)
into a normalized document of sections, lines and typed inline tokens, then
reconciles it with experience, education and certification facts taken from
the résumé itself, LinkedIn and Credly.

Public entrypoints: `parse_content()` and `python -m resumedoc`.
"""

__version__ = "0.1.0"

from .assembler import parse_content  # noqa: E402
from .headings import normalize_heading  # noqa: E402
from .model import Document, Line, Section, Token  # noqa: E402
from .options import ParseOptions  # noqa: E402
from .reconcile import ensure_required_sections  # noqa: E402
from .tokenizer import parse_line  # noqa: E402

__all__ = [
    "__version__",
    "Document",
    "Line",
    "ParseOptions",
    "Section",
    "Token",
    "ensure_required_sections",
    "normalize_heading",
    "parse_content",
    "parse_line",
]
