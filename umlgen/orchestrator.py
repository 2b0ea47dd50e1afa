"""Pipeline orchestration: discovery, per-file analysis, aggregation, assembly."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .aggregator import Aggregator
from .analyzers import (
    SourceAnalysisError,
    StructuralExtractor,
    build_extractors,
    extract_dependencies,
    extract_structure,
    is_react_like,
)
from .analyzers.complexity import compute_complexity, has_sibling_test
from .analyzers.utils import read_source
from .config import UmlGenConfig, load_config
from .git.history import DisabledGitHistory, GitHistory
from .logging import get_logger
from .models import ClassRecord, IdFactory, Snapshot
from .repo_scanner import RepoScanner
from .snapshot import build_snapshot, load_project_info, write_snapshot


@dataclass
class GenerationOutcome:
    """Snapshot plus bookkeeping about which files made it in."""

    snapshot: Snapshot
    analyzed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


@dataclass
class RunOutcome:
    """Result of a generate-and-write run."""

    snapshot: Snapshot
    output_path: Path
    skipped: List[str] = field(default_factory=list)


class UmlGenerator:
    """Coordinates the analysis pipeline for one project root."""

    def __init__(
        self,
        scanner: RepoScanner | None = None,
        extractors: Optional[Iterable[StructuralExtractor]] = None,
        git_history: GitHistory | None = None,
        id_factory_provider: Callable[[], IdFactory] = IdFactory,
        aggregator_factory: Callable[[IdFactory], Aggregator] = Aggregator,
    ) -> None:
        self.scanner = scanner or RepoScanner()
        self.extractors: List[StructuralExtractor] = (
            list(extractors) if extractors is not None else build_extractors()
        )
        self._git_history_override = git_history
        self._id_factory_provider = id_factory_provider
        self._aggregator_factory = aggregator_factory
        self.logger = get_logger("orchestrator")

    def analyze_file(
        self,
        file_path: Path,
        project_root: Path,
        *,
        id_factory: IdFactory | None = None,
        git_history: GitHistory | None = None,
    ) -> ClassRecord:
        """Build the class record for one file; raises on unreadable input."""
        ids = id_factory or IdFactory()
        history = git_history or self._git_history_override or GitHistory()
        source = read_source(Path(file_path), Path(project_root))

        summary = extract_structure(source, self.extractors)
        package_path = posixpath.dirname(source.relative_path) or "root"

        return ClassRecord(
            id=ids.new("component"),
            name=summary.class_name or source.base_name,
            package_path=package_path,
            file_path=source.relative_path,
            complexity=compute_complexity(source.text, len(summary.methods)),
            extends=list(summary.extends[:1]),
            implements=list(summary.implements),
            methods=list(summary.methods),
            dependencies=extract_dependencies(source.text),
            is_react_like=is_react_like(source.text),
            git_metrics=history.metrics(source.path, Path(project_root)),
            test_exists=has_sibling_test(source.path),
        )

    def generate(
        self,
        path: str | Path,
        *,
        include: Optional[Sequence[str]] = None,
        exclude: Optional[Sequence[str]] = None,
        project_name: Optional[str] = None,
        config: Optional[UmlGenConfig] = None,
    ) -> GenerationOutcome:
        """Analyze a project root and return the assembled snapshot."""
        root = Path(path).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Path does not exist: {root}")
        config = config or load_config(root)
        includes = list(include) if include is not None else list(config.include)
        excludes = list(exclude) if exclude is not None else list(config.exclude)

        self.logger.info("Analyzing project: %s", root)
        self.logger.info("Include patterns: %s", ", ".join(includes) or "(all)")
        self.logger.info("Exclude patterns: %s", ", ".join(excludes) or "(none)")

        files = self.scanner.find_source_files(root, includes, excludes)
        self.logger.info("Found %d source files", len(files))

        ids = self._id_factory_provider()
        history = self._resolve_git_history(config)
        records: List[ClassRecord] = []
        skipped: List[str] = []
        analyzed: List[str] = []
        for index, file_path in enumerate(files, start=1):
            relative = file_path.relative_to(root).as_posix()
            try:
                record = self.analyze_file(file_path, root, id_factory=ids, git_history=history)
            except (OSError, SourceAnalysisError) as exc:
                self.logger.warning("Error analyzing %s: %s", relative, exc)
                skipped.append(relative)
                continue
            records.append(record)
            analyzed.append(relative)
            if index % 10 == 0:
                self.logger.debug("Analyzed %d/%d files", index, len(files))

        result = self._aggregator_factory(ids).aggregate(records)
        project = load_project_info(root, project_name or root.name, config.project)
        snapshot = build_snapshot(project, result)
        return GenerationOutcome(snapshot=snapshot, analyzed=analyzed, skipped=skipped)

    def run(
        self,
        path: str | Path,
        output: str | Path | None = None,
        *,
        include: Optional[Sequence[str]] = None,
        exclude: Optional[Sequence[str]] = None,
        project_name: Optional[str] = None,
    ) -> RunOutcome:
        """Generate the snapshot for ``path`` and write it to disk."""
        root = Path(path).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Path does not exist: {root}")
        config = load_config(root)
        outcome = self.generate(
            root,
            include=include,
            exclude=exclude,
            project_name=project_name,
            config=config,
        )
        if output is not None:
            output_path = Path(output).expanduser()
        elif config.output is not None:
            output_path = config.output
        else:
            output_path = Path.cwd() / f"{project_name or root.name}-uml.json"
        written = write_snapshot(outcome.snapshot, output_path)
        self.logger.info("Output file: %s", written)
        return RunOutcome(snapshot=outcome.snapshot, output_path=written, skipped=outcome.skipped)

    def _resolve_git_history(self, config: UmlGenConfig) -> GitHistory:
        if self._git_history_override is not None:
            return self._git_history_override
        if not config.git.enabled:
            return DisabledGitHistory()
        return GitHistory(timeout=config.git.timeout)


__all__ = ["GenerationOutcome", "RunOutcome", "UmlGenerator"]
