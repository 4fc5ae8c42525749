"""Options controlling a parse run."""
from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import Any, List, Mapping, Optional

from .errors import OptionsError
from .io_utils import read_yaml_or_json

__all__ = ["ParseOptions", "load_options"]

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_RE.sub("_", key).lower()


def _as_list(value) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


_FALSE_WORDS = {"", "0", "false", "no", "off"}


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_WORDS
    return bool(value)


@dataclass
class ParseOptions:
    skip_required_sections: bool = False
    resume_experience: List[Any] = field(default_factory=list)
    linkedin_experience: List[Any] = field(default_factory=list)
    resume_education: List[Any] = field(default_factory=list)
    linkedin_education: List[Any] = field(default_factory=list)
    resume_certifications: List[Any] = field(default_factory=list)
    linkedin_certifications: List[Any] = field(default_factory=list)
    credly_certifications: List[Any] = field(default_factory=list)
    credly_profile_url: str = ""
    linkedin_profile_url: str = ""
    job_title: str = ""
    project: str = ""
    job_skills: List[str] = field(default_factory=list)
    default_heading: str = "Summary"
    preserve_link_text: bool = False

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ParseOptions":
        """Build options from camelCase or snake_case keys.

        Unknown keys are ignored, ``None`` means "use the default", and a
        single record where a list is expected is wrapped into a list.
        """
        if data is None:
            return cls()
        if isinstance(data, ParseOptions):
            return data
        if not isinstance(data, Mapping):
            raise OptionsError(
                f"Options must be a mapping, got {type(data).__name__}",
                hint="Use a YAML/JSON object such as {jobTitle: Engineer}",
            )
        known = {f.name: f for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _snake(str(key))
            if name not in known or value is None:
                continue
            fld = known[name]
            if fld.default_factory is list:
                kwargs[name] = _as_list(value)
            elif isinstance(fld.default, bool):
                kwargs[name] = _as_bool(value)
            else:
                kwargs[name] = str(value)
        return cls(**kwargs)

    def merged(self, **overrides: Any) -> "ParseOptions":
        """Copy with ``overrides`` applied where they are set."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data.update({k: v for k, v in overrides.items() if v not in (None, "", [])})
        return ParseOptions(**data)


def load_options(path: Optional[str]) -> ParseOptions:
    """Load options from a YAML or JSON file; a missing or empty file gives defaults."""
    return ParseOptions.from_mapping(read_yaml_or_json(path))
