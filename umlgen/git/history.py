"""Per-file git history metrics."""

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, Iterable, Optional

from ..logging import get_logger
from ..models import GitCommit, GitMetrics

_FIELD_SEPARATOR = "\x1f"
_LAST_COMMIT_FORMAT = "%H%x1f%an%x1f%ae%x1f%aI%x1f%s"
_SECONDS_PER_DAY = 60 * 60 * 24


def _utc_stamp(moment: datetime) -> str:
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class GitHistory:
    """Queries ``git log`` for commit counts and the latest commit of a file."""

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        *,
        timeout: Optional[float] = 30.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._runner = runner or self._default_runner
        self._timeout = timeout
        self._clock = clock or (lambda: datetime.now(UTC))
        self.logger = get_logger("git")

    def metrics(self, file_path: Path, project_root: Path) -> GitMetrics:
        """Return history metrics, or empty metrics when git cannot answer."""
        try:
            relative = Path(file_path).relative_to(project_root).as_posix()
            log_output = self._run(
                ["git", "-C", str(project_root), "log", "--oneline", "--", relative]
            )
            last_output = self._run(
                [
                    "git",
                    "-C",
                    str(project_root),
                    "log",
                    "-1",
                    f"--format={_LAST_COMMIT_FORMAT}",
                    "--",
                    relative,
                ]
            )
            last_commit = self._parse_last_commit(last_output)
        except (OSError, subprocess.SubprocessError, ValueError) as exc:
            self.logger.debug("No git history for %s: %s", file_path, exc)
            return GitMetrics.empty()

        if last_commit is None:
            return GitMetrics.empty()
        commit_count = sum(1 for line in log_output.splitlines() if line.strip())
        return GitMetrics(commit_count=commit_count, last_commit=last_commit)

    def _parse_last_commit(self, output: str) -> Optional[GitCommit]:
        line = output.strip()
        if not line:
            return None
        parts = line.split(_FIELD_SEPARATOR)
        if len(parts) < 5:
            raise ValueError(f"Unexpected git log output: {line!r}")
        commit_hash, author, email, date_text, message = parts[:5]
        committed_at = datetime.fromisoformat(date_text)
        if committed_at.tzinfo is None:
            committed_at = committed_at.replace(tzinfo=UTC)
        elapsed = (self._clock() - committed_at).total_seconds()
        return GitCommit(
            hash=commit_hash[:7],
            author=author,
            email=email,
            date=_utc_stamp(committed_at),
            message=message or "",
            days_ago=int(elapsed // _SECONDS_PER_DAY),
        )

    def _run(self, args: Iterable[str]) -> str:
        return self._runner(args, timeout=self._timeout)

    @staticmethod
    def _default_runner(args: Iterable[str], *, timeout: Optional[float] = None) -> str:
        completed = subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=True,
            timeout=timeout,
        )
        return completed.stdout


class DisabledGitHistory(GitHistory):
    """Stand-in used when history collection is switched off."""

    def metrics(self, file_path: Path, project_root: Path) -> GitMetrics:
        return GitMetrics.empty()


__all__ = ["DisabledGitHistory", "GitHistory"]
