"""Section heading normalization."""
from __future__ import annotations

import re

__all__ = [
    "BARE_HEADING_RE",
    "WORK_EXPERIENCE",
    "EDUCATION",
    "CERTIFICATION",
    "SUMMARY",
    "PROJECTS",
    "heading_key",
    "normalize_heading",
]

WORK_EXPERIENCE = "Work Experience"
EDUCATION = "Education"
CERTIFICATION = "Certification"
SUMMARY = "Summary"
PROJECTS = "Projects"

# Whole-line headings recognized in plain text without a leading '#'
BARE_HEADING_RE = re.compile(
    r"^((?:work|professional)\s*experience|education|skills|projects|certifications?|summary|languages)$",
    re.I,
)

_TRAILING_RE = re.compile(r"[\s\-–—:.;,!?]+$")
_SPACE_RE = re.compile(r"\s+")
_WORD_START_RE = re.compile(r"\b\w")


def normalize_heading(heading) -> str:
    """Map a free-text heading onto the canonical vocabulary.

    Examples:
        'experience:'           -> 'Work Experience'
        'LICENSES & TRAINING'   -> 'Certification'
        'technical   skills -'  -> 'Technical Skills'
    """
    base = _TRAILING_RE.sub("", str(heading or "").strip())
    base = _SPACE_RE.sub(" ", base)
    titled = _WORD_START_RE.sub(lambda m: m.group(0).upper(), base.lower())
    lower = titled.lower()
    if lower == "experience":
        return WORK_EXPERIENCE
    if "training" in lower or "certification" in lower:
        return CERTIFICATION
    return titled


def heading_key(heading) -> str:
    return normalize_heading(heading).lower()
