"""Base classes for structural extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from ..models import MethodInfo, SourceFile


class SourceAnalysisError(RuntimeError):
    """Raised when a single source file cannot be analyzed."""


class SourceDecodeError(SourceAnalysisError):
    """Raised when a source file is not valid UTF-8 text."""


@dataclass
class StructuralSummary:
    """Class-level facts extracted from one file."""

    class_name: Optional[str] = None
    extends: List[str] = field(default_factory=list)
    implements: List[str] = field(default_factory=list)
    methods: List[MethodInfo] = field(default_factory=list)


class StructuralExtractor(ABC):
    """Contract for extractors tried in order until one yields a summary."""

    @abstractmethod
    def supports(self, source: SourceFile) -> bool:
        """Return True when this extractor can handle the file."""

    @abstractmethod
    def extract(self, source: SourceFile) -> Optional[StructuralSummary]:
        """Return a summary, or None to defer to the next extractor."""
