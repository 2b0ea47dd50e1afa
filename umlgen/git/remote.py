"""Cloning remote repositories into a disposable workspace."""

from __future__ import annotations

import shutil
import subprocess
import time
from pathlib import Path
from typing import Callable, Iterable

from ..logging import get_logger

TEMP_DIRNAME = ".umlgen-temp"
_REMOTE_PREFIXES = ("http://", "https://", "git@")


def is_remote_reference(target: str) -> bool:
    """True for URLs that must be cloned before analysis."""
    return target.startswith(_REMOTE_PREFIXES)


class RepositoryCloner:
    """Shallow-clones a repository and removes the checkout afterwards."""

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        *,
        workspace: Path | None = None,
    ) -> None:
        self._runner = runner or self._default_runner
        self._workspace = workspace
        self.logger = get_logger("git")

    def clone(self, url: str) -> Path:
        """Clone ``url`` into a fresh temp directory and return its path."""
        base = (self._workspace or Path.cwd()) / TEMP_DIRNAME
        target = base / f"repo-{time.time_ns()}"
        target.mkdir(parents=True, exist_ok=True)
        self.logger.info("Cloning repository: %s", url)
        try:
            self._runner(["git", "clone", "--depth", "1", url, str(target)])
        except (OSError, subprocess.SubprocessError) as exc:
            self.cleanup(target)
            raise RuntimeError(f"Failed to clone repository {url}: {exc}") from exc
        self.logger.info("Cloned to: %s", target)
        return target

    def cleanup(self, path: Path) -> None:
        """Remove a clone created by :meth:`clone`; other paths are left alone."""
        if TEMP_DIRNAME not in Path(path).parts:
            return
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            return
        except OSError as exc:
            self.logger.warning("Could not clean up temp directory %s: %s", path, exc)
            return
        self.logger.debug("Cleaned up temp directory %s", path)

    @staticmethod
    def _default_runner(args: Iterable[str]) -> str:
        completed = subprocess.run(list(args), check=True, text=True, capture_output=True)
        return completed.stdout


__all__ = ["RepositoryCloner", "TEMP_DIRNAME", "is_remote_reference"]
