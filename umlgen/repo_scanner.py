"""Source file discovery for the analysis pipeline."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List, Sequence

from .logging import get_logger

SOURCE_EXTENSIONS = frozenset({".js", ".jsx", ".ts", ".tsx", ".mjs"})

_LANGUAGE_BY_SUFFIX = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
}

logger = get_logger("scanner")


def detect_syntax(path: Path) -> str | None:
    """Return the grammar key for a source path, or None when unsupported."""
    return _LANGUAGE_BY_SUFFIX.get(path.suffix.lower())


def _is_excluded(rel_path: str, excludes: Sequence[str]) -> bool:
    return any(pattern and pattern in rel_path for pattern in excludes)


def _is_included(rel_path: str, includes: Sequence[str]) -> bool:
    if not includes:
        return True
    return any(rel_path.startswith(pattern) for pattern in includes)


def _log_walk_error(error: OSError) -> None:
    logger.warning("Skipping unreadable directory %s: %s", error.filename, error.strerror or error)


def _iter_files(root: Path, includes: Sequence[str], excludes: Sequence[str]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        # Pruning in place keeps os.walk from descending into excluded trees.
        kept_dirs = []
        for name in dirnames:
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _is_excluded(rel_path, excludes):
                continue
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for filename in filenames:
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _is_excluded(rel_path, excludes):
                continue
            path = current_dir / filename
            if path.suffix not in SOURCE_EXTENSIONS or path.is_symlink():
                continue
            if not _is_included(rel_path, includes):
                continue
            yield path


class RepoScanner:
    """Walks a project tree to find analyzable source files."""

    def find_source_files(
        self,
        root: str | Path,
        includes: Sequence[str] = (),
        excludes: Sequence[str] = (),
    ) -> List[Path]:
        """Return source files under ``root`` honoring include/exclude substrings."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Path does not exist: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root}")

        files = list(_iter_files(root_path, list(includes), list(excludes)))
        logger.debug("Discovered %d source files under %s", len(files), root_path)
        return files


__all__ = ["RepoScanner", "SOURCE_EXTENSIONS", "detect_syntax"]
