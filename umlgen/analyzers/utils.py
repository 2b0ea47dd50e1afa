"""Shared helpers for reading project files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from .base import SourceDecodeError
from ..logging import get_logger
from ..models import SourceFile

logger = get_logger("analyzers")


def read_source(path: Path, root: Path) -> SourceFile:
    """Read a source file as UTF-8; undecodable content raises SourceDecodeError."""
    raw = path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SourceDecodeError(f"{path} is not valid UTF-8 text: {exc.reason}") from exc
    return SourceFile(path=path, relative_path=path.relative_to(root).as_posix(), text=text)


def load_package_json(root: Path) -> Dict[str, object]:
    """Return the parsed package.json contents or an empty dict."""
    package_json = root / "package.json"
    if not package_json.exists():
        return {}
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.debug("Could not read %s: %s", package_json, exc)
        return {}
    if isinstance(data, dict):
        return data
    return {}


__all__ = ["load_package_json", "read_source"]
