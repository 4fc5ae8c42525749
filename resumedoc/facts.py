"""Fact records merged into a document: experience, education, certifications.

Each record type has a normalizing constructor that accepts a plain string,
a LinkedIn / Credly shaped mapping, or an existing record. The ``extract_*``
helpers derive record lists from raw résumé text or from record lists.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .dates import parse_date_value
from .tokenizer import normalize_url

__all__ = [
    "ExperienceEntry",
    "EducationEntry",
    "CertificationEntry",
    "parse_experience",
    "parse_education",
    "parse_certification",
    "flatten_roles",
    "normalize_experience",
    "normalize_education",
    "normalize_certifications",
    "extract_experience",
    "extract_education",
    "extract_certifications",
    "LanguageEntry",
    "parse_language",
    "extract_languages",
]


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class ExperienceEntry:
    company: str = ""
    title: str = ""
    start_date: str = ""
    end_date: str = ""
    responsibilities: Tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return "|".join(s.lower() for s in (self.company, self.title, self.start_date, self.end_date))

    @property
    def sort_value(self) -> float:
        return parse_date_value(self.end_date or self.start_date)

    @property
    def has_anchor(self) -> bool:
        """True when the entry names a company or carries a date."""
        return bool(self.company or self.start_date or self.end_date)

    def with_title(self, title: str) -> "ExperienceEntry":
        return replace(self, title=title)

    def render(self) -> str:
        base = " at ".join(p for p in (self.title, self.company) if p)
        if self.start_date or self.end_date:
            base = f"{base} ({self.start_date} – {self.end_date})"
        return base.strip()

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "company": self.company,
            "title": self.title,
            "startDate": self.start_date,
            "endDate": self.end_date,
        }
        if self.responsibilities:
            out["responsibilities"] = list(self.responsibilities)
        return out


@dataclass(frozen=True)
class EducationEntry:
    entry: str

    def to_dict(self) -> Dict[str, Any]:
        return {"entry": self.entry}


@dataclass(frozen=True)
class CertificationEntry:
    name: str = ""
    provider: str = ""
    url: str = ""
    date: str = ""

    @property
    def key(self) -> str:
        return f"{self.name.lower()}|{self.provider.lower()}"

    @property
    def sort_value(self) -> float:
        return parse_date_value(self.date)

    @property
    def is_named(self) -> bool:
        return bool(self.name or self.provider)

    def label(self) -> str:
        return f"{self.name} - {self.provider}" if self.provider else self.name

    def to_dict(self) -> Dict[str, Any]:
        out = {"name": self.name, "provider": self.provider, "url": self.url}
        if self.date:
            out["date"] = self.date
        return out


@dataclass(frozen=True)
class LanguageEntry:
    language: str = ""
    proficiency: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"language": self.language, "proficiency": self.proficiency}


# =============================================================================
# Shared helpers
# =============================================================================


_PAREN_DATES_RE = re.compile(r"\(([^)]+)\)")
_DATE_SPLIT_RE = re.compile(r"\s*[-–—]\s*")
_AT_RE = re.compile(r"(.+?)\s+at\s+(.+)", re.I)
_LEADING_BULLET_RE = re.compile(r"^\s*[-*•]\s*")
_SPACE_RE = re.compile(r"\s+")


def _first(data: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = data.get(key)
        if value is None or isinstance(value, (list, dict)):
            continue
        value = str(value).strip()
        if value:
            return value
    return ""


def _clean_responsibilities(value) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.splitlines()
    out = []
    for item in value:
        if not isinstance(item, str):
            continue
        text = _SPACE_RE.sub(" ", _LEADING_BULLET_RE.sub("", item)).strip()
        if text:
            out.append(text)
    return tuple(out)


# =============================================================================
# Experience
# =============================================================================


def _parse_experience_text(text: str) -> ExperienceEntry:
    """Parse 'Title at Company (Start – End)' into an entry.

    Text without ' at ' becomes the title; a parenthesised span supplies the
    dates.
    """
    start = end = ""
    m = _PAREN_DATES_RE.search(text)
    if m:
        parts = _DATE_SPLIT_RE.split(m.group(1), maxsplit=1)
        start = parts[0].strip()
        end = parts[1].strip() if len(parts) > 1 else ""
        text = (text[:m.start()] + text[m.end():]).strip()
    at = _AT_RE.match(text)
    if at:
        return ExperienceEntry(at.group(2).strip(), at.group(1).strip(), start, end)
    return ExperienceEntry("", text.strip(), start, end)


def parse_experience(raw) -> Optional[ExperienceEntry]:
    """Normalize one experience record from any supported shape."""
    if isinstance(raw, ExperienceEntry):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        return _parse_experience_text(text) if text else None
    if not isinstance(raw, Mapping):
        return None
    title = _first(raw, "title", "position", "jobTitle")
    company = _first(raw, "company", "companyName", "organization")
    start = _first(raw, "startDate", "start_date", "start", "from")
    end = _first(raw, "endDate", "end_date", "end", "to")
    if title and not company:
        # A whole 'Title at Company (dates)' string stored under the title key
        base = _parse_experience_text(title)
        title, company = base.title, base.company
        start, end = start or base.start_date, end or base.end_date
    return ExperienceEntry(
        company=company,
        title=title,
        start_date=start,
        end_date=end,
        responsibilities=_clean_responsibilities(
            raw.get("responsibilities") or raw.get("description") or raw.get("bullets")
        ),
    )


def flatten_roles(records: Iterable) -> List[Any]:
    """Expand records with nested ``roles`` into one record per role.

    Each role inherits its parent's fields; the role's own company and
    responsibilities win when set.
    """
    out: List[Any] = []
    for record in records or []:
        roles = record.get("roles") if isinstance(record, Mapping) else None
        if not isinstance(roles, list) or not roles:
            out.append(record)
            continue
        base = {k: v for k, v in record.items() if k != "roles"}
        for role in roles:
            if not isinstance(role, Mapping):
                continue
            merged = {**base, **role}
            merged["company"] = role.get("company") or base.get("company") or base.get("companyName") or ""
            merged["responsibilities"] = role.get("responsibilities") or base.get("responsibilities") or []
            out.append(merged)
    return out


def normalize_experience(records: Iterable) -> List[ExperienceEntry]:
    """Flatten roles and normalize every record, dropping empty ones."""
    entries = (parse_experience(r) for r in flatten_roles(records))
    return [e for e in entries if e is not None and e.key.strip("|")]


# =============================================================================
# Education
# =============================================================================


def parse_education(raw) -> Optional[EducationEntry]:
    """Normalize one education record.

    Mappings render as 'Degree, Field - School (Start – End)'.
    """
    if isinstance(raw, EducationEntry):
        return raw
    if isinstance(raw, Mapping):
        degree = _first(raw, "degree", "degreeName")
        field_ = _first(raw, "fieldOfStudy", "field", "major")
        school = _first(raw, "school", "schoolName", "institution")
        start = _first(raw, "startDate", "start")
        end = _first(raw, "endDate", "end")
        dates = _first(raw, "dates", "year") or " – ".join(p for p in (start, end) if p)
        head = ", ".join(p for p in (degree, field_) if p)
        text = " - ".join(p for p in (head, school) if p)
        if dates:
            text = f"{text} ({dates})" if text else dates
        return EducationEntry(text) if text else None
    if raw is None:
        return None
    text = _BULLET_PREFIX_RE.sub("", str(raw).strip()).strip()
    return EducationEntry(text) if text else None


def normalize_education(records: Iterable) -> List[EducationEntry]:
    entries = (parse_education(r) for r in records or [])
    return [e for e in entries if e is not None]


# =============================================================================
# Certifications
# =============================================================================


_CERT_URL_RE = re.compile(
    r"(https?://\S+|www\.\S+|(?:[a-z0-9.-]*linkedin\.com|credly\.com)\S*)", re.I
)
_CERT_PAREN_RE = re.compile(r"^(.*?)\s*\((.*?)\)$")
_CERT_SPLIT_RE = re.compile(r"\s+-\s+|\s*[–—|]\s*")
_CREDLY_RE = re.compile(r"credly\.com", re.I)


def _parse_certification_text(text: str) -> CertificationEntry:
    url = ""
    m = _CERT_URL_RE.search(text)
    if m:
        url = normalize_url(m.group(0))
        text = (text[:m.start()] + text[m.end():]).strip()
    paren = _CERT_PAREN_RE.match(text)
    if paren:
        return CertificationEntry(paren.group(1).strip(), paren.group(2).strip(), url)
    parts = _CERT_SPLIT_RE.split(text, maxsplit=1)
    name = parts[0].strip()
    provider = parts[1].strip() if len(parts) > 1 else ""
    return CertificationEntry(name, provider, url)


def parse_certification(raw) -> CertificationEntry:
    """Normalize one certification record from a string or mapping.

    Mappings accept the LinkedIn and Credly key variants; when no URL key is
    present any value pointing at credly.com is used.
    """
    if isinstance(raw, CertificationEntry):
        return raw
    if isinstance(raw, str):
        return _parse_certification_text(raw.strip())
    if not isinstance(raw, Mapping):
        return CertificationEntry()
    name = _first(raw, "name", "title", "certificateName", "credentialName")
    provider = _first(raw, "provider", "authority", "issuingOrganization", "issuer", "organization")
    url = _first(raw, "url", "credentialUrl", "link", "certUrl")
    if not url:
        url = next(
            (v for v in raw.values() if isinstance(v, str) and _CREDLY_RE.search(v)), ""
        )
    date = _first(raw, "date", "issueDate", "issued", "startDate", "endDate")
    return CertificationEntry(name, provider, normalize_url(url), date)


def normalize_certifications(records: Iterable) -> List[CertificationEntry]:
    return [parse_certification(r) for r in records or []]


# =============================================================================
# Languages
# =============================================================================


_LANG_PAREN_RE = re.compile(r"^(.*?)\s*\((.*?)\)$")
_LANG_SPLIT_RE = re.compile(r"[-–:|]")


def parse_language(raw) -> LanguageEntry:
    """Normalize one language record.

    Text reads as 'Language (Proficiency)' or 'Language - Proficiency';
    mappings use ``language``/``name`` and ``proficiency``/``level``.
    """
    if isinstance(raw, LanguageEntry):
        return raw
    if isinstance(raw, Mapping):
        language = _first(raw, "language", "name")
        proficiency = _first(raw, "proficiency", "level")
        return LanguageEntry(language, proficiency)
    text = str(raw or "").strip()
    paren = _LANG_PAREN_RE.match(text)
    if paren:
        return LanguageEntry(paren.group(1).strip(), paren.group(2).strip())
    parts = _LANG_SPLIT_RE.split(text)
    return LanguageEntry(parts[0].strip(), "-".join(parts[1:]).strip())


# =============================================================================
# Raw résumé text extraction
# =============================================================================


_EXPERIENCE_START_RE = re.compile(r"^#*\s*(?:(?:work|professional)\s*)?experience\s*:?$", re.I)
_EXPERIENCE_END_RE = re.compile(
    r"^#*\s*(education|skills|projects|certifications?|summary|objective|awards|interests|languages)\b",
    re.I,
)
_EDUCATION_START_RE = re.compile(r"^#*\s*education\s*:?$", re.I)
_CERT_START_RE = re.compile(r"^#*\s*certifications?\s*:?$", re.I)
_BULLET_LINE_RE = re.compile(r"^\s*[-*•]\s+(.*)")
_BULLET_PREFIX_RE = re.compile(r"^[-*•]\s+")
_HEADER_HINT_RE = re.compile(
    r"\bat\b|\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\b\s+\d{4}\s*[–-]\s*", re.I
)
_DEEP_INDENT_RE = re.compile(r"^\s{2,}\S")
_CREDLY_URL_RE = re.compile(r"https?://\S*credly\.com/\S*", re.I)


def _is_list(source) -> bool:
    return isinstance(source, (list, tuple))


def extract_experience(source) -> List[ExperienceEntry]:
    """Experience entries from a record list or from raw résumé text.

    In text, entries are read from the experience block: a header line
    naming a role ('Title at Company (dates)') opens an entry and the
    bullets or deeply indented lines under it become responsibilities.
    """
    if not source:
        return []
    if _is_list(source):
        return [e for e in normalize_experience(source) if e.has_anchor]

    entries: List[ExperienceEntry] = []
    current: Optional[ExperienceEntry] = None
    duties: List[str] = []
    in_block = False

    def push() -> None:
        if current is not None:
            entries.append(replace(current, responsibilities=_clean_responsibilities(duties)))

    for line in str(source).splitlines():
        trimmed = line.strip()
        if _EXPERIENCE_START_RE.match(trimmed):
            in_block = True
            continue
        if not in_block:
            continue
        if _EXPERIENCE_END_RE.match(trimmed):
            break
        if not trimmed:
            continue
        bullet = _BULLET_LINE_RE.match(line)
        candidate = bullet.group(1).strip() if bullet else (trimmed if not line[:1].isspace() else "")
        if candidate and _HEADER_HINT_RE.search(candidate):
            entry = _parse_experience_text(candidate)
            if entry.has_anchor:
                push()
                current, duties = entry, []
                continue
        if current is None:
            continue
        if bullet:
            duties.append(bullet.group(1).strip())
        elif _DEEP_INDENT_RE.match(line):
            duties.append(trimmed)
    push()
    return entries


def _block_lines(text: str, start_re) -> List[str]:
    """Lines following a heading matched by ``start_re`` up to a blank line."""
    out: List[str] = []
    in_block = False
    for line in text.splitlines():
        trimmed = line.strip()
        if start_re.match(trimmed):
            in_block = True
            continue
        if not in_block:
            continue
        if not trimmed:
            in_block = False
            continue
        out.append(_BULLET_PREFIX_RE.sub("", trimmed).strip())
    return [ln for ln in out if ln]


def extract_education(source) -> List[EducationEntry]:
    if not source:
        return []
    if _is_list(source):
        return normalize_education(source)
    return [EducationEntry(ln) for ln in _block_lines(str(source), _EDUCATION_START_RE)]


def extract_certifications(source) -> List[CertificationEntry]:
    """Certifications from a record list or raw résumé text.

    In text, any line carrying a credly.com URL counts, plus the lines of
    the certification block.
    """
    if not source:
        return []
    if _is_list(source):
        return normalize_certifications(source)
    entries: List[CertificationEntry] = []
    in_block = False
    for line in str(source).splitlines():
        trimmed = line.strip()
        if _CREDLY_URL_RE.search(trimmed):
            entries.append(_parse_certification_text(_BULLET_PREFIX_RE.sub("", trimmed)))
            continue
        if _CERT_START_RE.match(trimmed):
            in_block = True
            continue
        if not in_block:
            continue
        if not trimmed:
            in_block = False
            continue
        entries.append(_parse_certification_text(_BULLET_PREFIX_RE.sub("", trimmed)))
    return entries


_LANGUAGES_START_RE = re.compile(r"^#*\s*languages?\s*:?$", re.I)


def extract_languages(source) -> List[LanguageEntry]:
    """Languages from a record list or the languages block of résumé text."""
    if not source:
        return []
    if _is_list(source):
        entries = [parse_language(r) for r in source]
        return [e for e in entries if e.language]
    return [parse_language(ln) for ln in _block_lines(str(source), _LANGUAGES_START_RE)]
