"""Snapshot assembly and serialization."""

from __future__ import annotations

import json
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Optional

from .aggregator import AggregationResult
from .analyzers.utils import load_package_json
from .config import ProjectConfig
from .models import ProjectInfo, Snapshot

SNAPSHOT_VERSION = "6.0"


def load_project_info(
    root: Path,
    default_name: str,
    overrides: Optional[ProjectConfig] = None,
) -> ProjectInfo:
    """Resolve project metadata from package.json, then apply config overrides."""
    info = ProjectInfo(name=default_name)
    manifest = load_package_json(root)
    name = manifest.get("name")
    if isinstance(name, str) and name:
        info.name = name
    description = manifest.get("description")
    if isinstance(description, str) and description:
        info.description = description

    if overrides is not None:
        info.name = overrides.name or info.name
        info.description = overrides.description or info.description
        info.language = overrides.language or info.language
    return info


def _timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_snapshot(
    project: ProjectInfo,
    result: AggregationResult,
    generated_at: Optional[datetime] = None,
) -> Snapshot:
    return Snapshot(
        version=SNAPSHOT_VERSION,
        generated=_timestamp(generated_at or datetime.now(UTC)),
        project=project,
        packages=list(result.packages),
        classes=list(result.classes),
    )


def write_snapshot(snapshot: Snapshot, path: Path) -> Path:
    """Serialize the whole document, then replace ``path`` in one step."""
    target = Path(path)
    payload = json.dumps(snapshot.to_dict(), indent=2)
    target.parent.mkdir(parents=True, exist_ok=True)
    temp_path = target.with_name(f".{target.name}.tmp")
    try:
        temp_path.write_text(payload, encoding="utf-8")
        os.replace(temp_path, target)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
    return target


__all__ = ["SNAPSHOT_VERSION", "build_snapshot", "load_project_info", "write_snapshot"]
