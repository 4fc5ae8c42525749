"""File helpers: plain text plus YAML / JSON documents via PyYAML."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from .errors import InputNotFoundError, OptionsError

__all__ = ["read_text", "read_yaml_or_json", "dump_yaml_or_json", "write_text"]


def _require_yaml():
    try:
        import yaml  # type: ignore

        return yaml
    except ImportError as exc:  # pragma: no cover - runtime guard
        raise RuntimeError("PyYAML not installed. Run: pip install pyyaml") from exc


def read_text(path: str) -> str:
    p = Path(path)
    if not p.exists():
        raise InputNotFoundError(f"File not found: {path}")
    return p.read_text(encoding="utf-8")


def read_yaml_or_json(path: Optional[str]) -> Any:
    """Load a YAML or JSON file; returns {} if no path, missing or empty.

    ``.json`` files go through the json module, anything else through
    PyYAML.
    """
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    if p.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise OptionsError(f"Could not parse {path}: {exc}") from exc
        return {} if data is None else data
    yaml = _require_yaml()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise OptionsError(f"Could not parse {path}: {exc}") from exc
    return {} if data is None else data


def dump_yaml_or_json(data: Any, fmt: str = "json") -> str:
    """Serialize ``data`` as JSON (indented) or YAML (stable key order)."""
    if fmt == "yaml":
        yaml = _require_yaml()
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_text(path: str, text: str) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")
