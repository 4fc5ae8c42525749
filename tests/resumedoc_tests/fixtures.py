"""Shared builders and sample data for resumedoc tests.

Structure:
    Builders (use defaults, override as needed):
        make_line(*tokens)        -> Line from tokens
        make_text_line(text)      -> Line parsed from text
        make_section(heading, *texts) -> Section of parsed lines
        make_document(*sections)  -> Document
        make_experience(**kw)     -> LinkedIn-shaped experience dict
        make_certification(**kw)  -> Credly-shaped certification dict

    Helpers:
        texts(section)       -> flattened text of every line
        kinds(line)          -> token kinds of a line
        TempDirMixin         -> per-test temporary directory
        capture_stdout()     -> context manager yielding a StringIO

    Sample data:
        SAMPLE_RESUME_TEXT   - raw résumé with experience, education, certs, languages
"""

from __future__ import annotations

import io
import shutil
import tempfile
from contextlib import contextmanager, redirect_stdout
from typing import Any, Dict, List, Optional

from resumedoc.model import Document, Line, Section, Token
from resumedoc.tokenizer import parse_line

# =============================================================================
# Builders
# =============================================================================


def make_line(*tokens: Token) -> Line:
    return Line.of(tokens)


def make_text_line(text: str) -> Line:
    return parse_line(text)


def make_section(heading: str, *texts: str) -> Section:
    return Section(heading, tuple(parse_line(t) for t in texts))


def make_document(*sections: Section, name: str = "Jane Doe") -> Document:
    return Document(name, tuple(sections))


def make_experience(
    company: str = "Acme",
    title: str = "Engineer",
    startDate: str = "2020",
    endDate: str = "2021",
    **extra: Any,
) -> Dict[str, Any]:
    data = {"company": company, "title": title, "startDate": startDate, "endDate": endDate}
    data.update(extra)
    return data


def make_certification(
    name: str = "AWS Certified Developer",
    provider: str = "Amazon",
    url: str = "",
    date: str = "",
) -> Dict[str, Any]:
    data = {"name": name, "provider": provider}
    if url:
        data["url"] = url
    if date:
        data["date"] = date
    return data


# =============================================================================
# Helpers
# =============================================================================


def texts(section: Optional[Section]) -> List[str]:
    return [line.text() for line in section.lines] if section else []


def kinds(line: Line) -> List[str]:
    return [t.kind for t in line.tokens]


class TempDirMixin:
    """Mixin providing a temporary directory that's cleaned up after each test."""

    tmpdir: str

    def setUp(self):
        super().setUp()
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)
        super().tearDown()


@contextmanager
def capture_stdout():
    """Context manager that captures stdout and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


# =============================================================================
# Sample data
# =============================================================================


SAMPLE_RESUME_TEXT = """Jane Doe
jane@example.com | (555) 123-4567

Summary
Backend engineer focused on data pipelines.

Work Experience
Senior Engineer at Globex (Jan 2021 - Present)
- Led the ingestion rewrite
- Cut batch latency in half
Engineer at Initech (2018 - 2020)
  Maintained billing services

Education
B.S. Computer Science, State University, 2017

Certifications
AWS Certified Developer (Amazon) https://www.credly.com/badges/abc
Certified Kubernetes Administrator - CNCF

Skills
Python, SQL, Kubernetes

Languages
- English (Native)
French - Professional
"""
