"""Structural extractors and the chain that selects between them."""

from __future__ import annotations

from typing import List, Sequence

from .base import (
    SourceAnalysisError,
    SourceDecodeError,
    StructuralExtractor,
    StructuralSummary,
)
from .patterns import PatternExtractor, extract_dependencies, is_react_like
from .tree_sitter import TreeSitterExtractor
from ..models import SourceFile


def build_extractors() -> List[StructuralExtractor]:
    """Return the default chain: syntax tree first, regex fallback last."""
    return [TreeSitterExtractor(), PatternExtractor()]


def extract_structure(
    source: SourceFile, extractors: Sequence[StructuralExtractor]
) -> StructuralSummary:
    """Return the first summary produced by the chain."""
    for extractor in extractors:
        if not extractor.supports(source):
            continue
        summary = extractor.extract(source)
        if summary is not None and summary.class_name:
            return summary
    return StructuralSummary(class_name=source.base_name)


__all__ = [
    "PatternExtractor",
    "SourceAnalysisError",
    "SourceDecodeError",
    "StructuralExtractor",
    "StructuralSummary",
    "TreeSitterExtractor",
    "build_extractors",
    "extract_dependencies",
    "extract_structure",
    "is_react_like",
]
