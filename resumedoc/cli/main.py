"""resumedoc CLI.

Commands:
  parse     - Parse résumé content (text or JSON) into the section model
  facts     - Extract experience, education, certification and language facts
  tokenize  - Show the tokens for one line
  heading   - Normalize a section heading
"""
from __future__ import annotations

import argparse
import json
from typing import Any, List, Optional

from .. import __version__
from ..assembler import parse_content
from ..errors import UsageError
from ..facts import extract_certifications, extract_education, extract_experience, extract_languages
from ..headings import normalize_heading
from ..io_utils import dump_yaml_or_json, read_text, write_text
from ..options import load_options
from ..tokenizer import parse_line
from .framework import CLIApp

app = CLIApp(
    "resumedoc",
    "Parse résumé text into normalized sections and merge LinkedIn / Credly facts.",
    version=__version__,
)

FORMATS = ("json", "yaml")


def _emit(data: Any, args: argparse.Namespace) -> None:
    fmt = getattr(args, "format", "json") or "json"
    if fmt not in FORMATS:
        raise UsageError(f"Unknown format: {fmt}", hint="Use json or yaml")
    text = dump_yaml_or_json(data, fmt)
    if getattr(args, "out", None):
        write_text(args.out, text)
    else:
        print(text, end="")


def _facts_from_text(text: str) -> dict:
    return {
        "experience": [e.to_dict() for e in extract_experience(text)],
        "education": [e.entry for e in extract_education(text)],
        "certifications": [c.to_dict() for c in extract_certifications(text)],
        "languages": [lang.to_dict() for lang in extract_languages(text)],
    }


# --- parse command ---
@app.command("parse", help="Parse résumé content into sections (JSON/YAML)")
@app.argument("--input", "-i", required=True, help="Résumé content: plain text or JSON")
@app.argument("--options", help="YAML/JSON options file (jobSkills, resumeExperience, ...)")
@app.argument("--resume", help="Raw résumé text to derive experience/education/certification facts from")
@app.argument("--job-title", help="Title to put on the most recent role")
@app.argument("--skip-required", action="store_true", help="Only prune and merge sections")
@app.argument("--format", "-f", choices=FORMATS, default="json", help="Output format (default: json)")
@app.argument("--out", help="Write output to this file instead of stdout")
def cmd_parse(args: argparse.Namespace) -> int:
    content = read_text(args.input)
    options = load_options(args.options)
    if args.resume:
        facts = _facts_from_text(read_text(args.resume))
        options = options.merged(
            resume_experience=options.resume_experience or facts["experience"],
            resume_education=options.resume_education or facts["education"],
            resume_certifications=options.resume_certifications or facts["certifications"],
        )
    options = options.merged(
        job_title=args.job_title,
        skip_required_sections=True if args.skip_required else None,
    )
    doc = parse_content(content, options)
    _emit(doc.to_dict(), args)
    return 0


# --- facts command ---
@app.command("facts", help="Extract fact records from raw résumé text")
@app.argument("--resume", required=True, help="Path to résumé text")
@app.argument("--format", "-f", choices=FORMATS, default="json", help="Output format (default: json)")
@app.argument("--out", help="Write output to this file instead of stdout")
def cmd_facts(args: argparse.Namespace) -> int:
    _emit(_facts_from_text(read_text(args.resume)), args)
    return 0


# --- tokenize command ---
@app.command("tokenize", help="Print the tokens for one line as JSON")
@app.argument("text", help="Line to tokenize (use $'..' for tabs/newlines)")
@app.argument("--preserve-link-text", action="store_true", help="Keep raw URLs as link labels")
def cmd_tokenize(args: argparse.Namespace) -> int:
    line = parse_line(args.text, preserve_link_text=args.preserve_link_text)
    print(json.dumps(line.to_dict(), indent=2, ensure_ascii=False))
    return 0


# --- heading command ---
@app.command("heading", help="Normalize a section heading")
@app.argument("text", help="Heading text")
def cmd_heading(args: argparse.Namespace) -> int:
    print(normalize_heading(args.text))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the resumedoc CLI."""
    return app.run(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
