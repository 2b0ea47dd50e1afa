"""Core data models shared across umlgen components."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set


@dataclass
class SourceFile:
    """Raw text of one discovered source file."""

    path: Path
    relative_path: str
    text: str

    @property
    def base_name(self) -> str:
        return self.path.stem


@dataclass
class MethodInfo:
    """A method-like member of a class record."""

    name: str
    visibility: str = "public"
    kind: str = "method"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "visibility": self.visibility, "type": self.kind}


@dataclass
class ComplexityMetrics:
    """Heuristic size and complexity figures for one file."""

    cyclomatic_complexity: int
    cognitive_complexity: int
    nesting_depth: int
    lines_of_code: int
    method_count: int
    threat_level: str
    threat_color: str
    label: str
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cyclomaticComplexity": self.cyclomatic_complexity,
            "cognitiveComplexity": self.cognitive_complexity,
            "nestingDepth": self.nesting_depth,
            "linesOfCode": self.lines_of_code,
            "methodCount": self.method_count,
            "threatLevel": self.threat_level,
            "threatColor": self.threat_color,
            "label": self.label,
            "suggestions": list(self.suggestions),
        }


@dataclass
class GitCommit:
    """Most recent commit touching a file."""

    hash: str
    author: str
    email: str
    date: str
    message: str
    days_ago: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hash": self.hash,
            "author": self.author,
            "email": self.email,
            "date": self.date,
            "message": self.message,
            "daysAgo": self.days_ago,
        }


@dataclass
class GitMetrics:
    """History figures for one file; empty when no VCS data is available."""

    commit_count: int = 0
    last_commit: Optional[GitCommit] = None

    @property
    def is_git_tracked(self) -> bool:
        return self.last_commit is not None

    @classmethod
    def empty(cls) -> "GitMetrics":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commitCount": self.commit_count,
            "lastCommit": self.last_commit.to_dict() if self.last_commit else None,
            "isGitTracked": self.is_git_tracked,
        }


@dataclass
class ClassRecord:
    """Per-file structural and metric summary, the atomic unit of a snapshot."""

    id: str
    name: str
    package_path: str
    file_path: str
    complexity: ComplexityMetrics
    extends: List[str] = field(default_factory=list)
    implements: List[str] = field(default_factory=list)
    methods: List[MethodInfo] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    is_react_like: bool = False
    git_metrics: GitMetrics = field(default_factory=GitMetrics)
    test_exists: bool = False
    is_external: bool = False

    @property
    def subtype(self) -> str:
        if self.is_external:
            return "external"
        return "react_component" if self.is_react_like else "utility"

    def to_dict(self) -> Dict[str, Any]:
        metrics = self.complexity
        return {
            "id": self.id,
            "name": self.name,
            "type": "class",
            "subtype": self.subtype,
            "package": self.package_path,
            "filePath": self.file_path,
            "methods": [method.to_dict() for method in self.methods],
            "fields": [],
            "dependencies": list(self.dependencies),
            "extends": list(self.extends),
            "implements": list(self.implements),
            "complexity": metrics.cyclomatic_complexity,
            "complexityMetrics": metrics.to_dict(),
            "coverageMetrics": {"hasCoverage": False, "overallCoverage": 0},
            "metrics": {
                "lines": metrics.lines_of_code,
                "complexity": metrics.cyclomatic_complexity,
                "methodCount": metrics.method_count,
                "coverage": 0,
            },
            "gitMetrics": self.git_metrics.to_dict(),
            "testMetrics": {"exists": self.test_exists, "coverage": 0},
            "isExternal": self.is_external,
        }


@dataclass
class PackageRecord:
    """Group of class records sharing a containing directory."""

    id: str
    name: str
    path: str
    class_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "classes": list(self.class_ids),
        }


@dataclass
class ProjectInfo:
    """Project metadata stamped onto a snapshot."""

    name: str
    description: str = "Codebase visualization"
    language: str = "JavaScript"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "language": self.language}


@dataclass
class Snapshot:
    """Complete output document for one analysis run."""

    version: str
    generated: str
    project: ProjectInfo
    packages: List[PackageRecord]
    classes: List[ClassRecord]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "generated": self.generated,
            "project": self.project.to_dict(),
            "packages": [package.to_dict() for package in self.packages],
            "classes": [record.to_dict() for record in self.classes],
        }


class IdFactory:
    """Issues identifiers that are unique within one document."""

    def __init__(self) -> None:
        self._issued: Set[str] = set()

    def new(self, prefix: str) -> str:
        while True:
            candidate = f"{prefix}_{self._token()}"
            if self.claim(candidate):
                return candidate

    def claim(self, candidate: str) -> bool:
        """Reserve a caller-chosen identifier; False when it is already taken."""
        if candidate in self._issued:
            return False
        self._issued.add(candidate)
        return True

    def _token(self) -> str:
        return uuid.uuid4().hex[:10]


class SequentialIdFactory(IdFactory):
    """Deterministic factory used where reproducible ids are required."""

    def __init__(self) -> None:
        super().__init__()
        self._counter = 0

    def _token(self) -> str:
        self._counter += 1
        return str(self._counter)


__all__ = [
    "ClassRecord",
    "ComplexityMetrics",
    "GitCommit",
    "GitMetrics",
    "IdFactory",
    "MethodInfo",
    "PackageRecord",
    "ProjectInfo",
    "SequentialIdFactory",
    "Snapshot",
    "SourceFile",
]
