"""Configuration loading for umlgen (.umlgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".umlgen.yml"

DEFAULT_INCLUDE_PATTERNS: tuple[str, ...] = (
    "src",
    "lib",
    "components",
    "pages",
    "utils",
    "hooks",
    "services",
)

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "node_modules",
    "dist",
    "build",
    ".git",
    "coverage",
    "test",
    "__tests__",
)

DEFAULT_GIT_TIMEOUT = 30.0


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ProjectConfig:
    """Project metadata overrides."""

    name: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None


@dataclass
class GitConfig:
    """Git history collection settings."""

    enabled: bool = True
    timeout: Optional[float] = DEFAULT_GIT_TIMEOUT


@dataclass
class UmlGenConfig:
    """Represents the settings defined in .umlgen.yml."""

    root: Path
    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS))
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    output: Optional[Path] = None
    project: ProjectConfig = field(default_factory=ProjectConfig)
    git: GitConfig = field(default_factory=GitConfig)


def load_config(config_path: Path) -> UmlGenConfig:
    """Load configuration from disk, returning defaults when no file exists."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return UmlGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = UmlGenConfig(root=root)
    if "include" in data:
        config.include = _as_str_list(data.get("include"))
    if "exclude" in data:
        config.exclude = _as_str_list(data.get("exclude"))

    output = _as_str(data.get("output"))
    config.output = root / output if output else None

    project_data = _as_dict(data.get("project"))
    if project_data:
        config.project = ProjectConfig(
            name=_as_str(project_data.get("name")),
            description=_as_str(project_data.get("description")),
            language=_as_str(project_data.get("language")),
        )

    git_data = _as_dict(data.get("git"))
    if git_data:
        enabled = _as_bool(git_data.get("enabled"))
        config.git = GitConfig(
            enabled=True if enabled is None else enabled,
            timeout=_as_float(git_data.get("timeout"), DEFAULT_GIT_TIMEOUT),
        )

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any, default: Optional[float]) -> Optional[float]:
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else None
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return default
        return parsed if parsed > 0 else None
    return default


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, Sequence):
        return [str(item).strip() for item in value if isinstance(item, (str, int, float)) and str(item).strip()]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_EXCLUDE_PATTERNS",
    "DEFAULT_INCLUDE_PATTERNS",
    "GitConfig",
    "ProjectConfig",
    "UmlGenConfig",
    "load_config",
]
