"""Regex based extraction used when no syntax-tree class is found."""

from __future__ import annotations

import posixpath
import re
from typing import List, Optional

from .base import StructuralExtractor, StructuralSummary
from ..models import MethodInfo, SourceFile

_EXPORT_PATTERN = re.compile(r"export\s+(?:default\s+)?(?:function|const|class)\s+(\w+)")
_EXTENDS_PATTERN = re.compile(r"class\s+\w+\s+extends\s+(\w+)")
_IMPLEMENTS_PATTERN = re.compile(r"class\s+\w+\s+implements\s+([\w,\s]+)")
_METHOD_PATTERN = re.compile(
    r"(?:function\s+\w+|const\s+\w+\s*=\s*(?:async\s+)?\([^)]*\)\s*=>|^\s*\w+\s*\([^)]*\)\s*{)",
    re.MULTILINE,
)
_DECLARED_NAME = re.compile(r"(?:function|const)\s+(\w+)")
_CALL_NAME = re.compile(r"(\w+)\s*\(")
_IMPORT_PATTERN = re.compile(
    r"import\s+(?:{[^}]+}|[\w]+|\*\s+as\s+\w+)?\s*(?:,\s*{[^}]+})?\s*from\s+['\"]([^'\"]+)['\"]"
)
_REACT_MARKERS = ("import React", "from 'react'", 'from "react"')
_CONTROL_KEYWORDS = {"if", "for", "while", "switch", "catch", "return", "function"}


def find_exported_name(text: str) -> Optional[str]:
    """Return the identifier of the first exported function/const/class."""
    match = _EXPORT_PATTERN.search(text)
    return match.group(1) if match else None


def is_react_like(text: str) -> bool:
    """Heuristic: an exported declaration plus a textual React import."""
    if _EXPORT_PATTERN.search(text) is None:
        return False
    return any(marker in text for marker in _REACT_MARKERS)


def extract_dependencies(text: str) -> List[str]:
    """Return base names of relative or root-anchored imports, first-seen order."""
    dependencies: List[str] = []
    for match in _IMPORT_PATTERN.finditer(text):
        specifier = match.group(1)
        if not specifier.startswith((".", "/")):
            continue
        base = posixpath.basename(specifier.rstrip("/")) or specifier
        name, _ = posixpath.splitext(base)
        if name and name not in dependencies:
            dependencies.append(name)
    return dependencies


def _method_name(matched: str, index: int) -> str:
    stripped = matched.strip()
    declared = _DECLARED_NAME.match(stripped)
    if declared:
        return declared.group(1)
    call = _CALL_NAME.match(stripped)
    if call and call.group(1) not in _CONTROL_KEYWORDS:
        return call.group(1)
    return f"method_{index}"


class PatternExtractor(StructuralExtractor):
    """Best-effort extractor that never fails."""

    def supports(self, source: SourceFile) -> bool:
        return True

    def extract(self, source: SourceFile) -> StructuralSummary:
        text = source.text
        summary = StructuralSummary(class_name=find_exported_name(text) or source.base_name)

        extends_match = _EXTENDS_PATTERN.search(text)
        if extends_match:
            summary.extends = [extends_match.group(1)]

        implements_match = _IMPLEMENTS_PATTERN.search(text)
        if implements_match:
            names = (part.strip() for part in implements_match.group(1).split(","))
            summary.implements = [name for name in names if name]

        summary.methods = [
            MethodInfo(name=_method_name(match.group(0), index))
            for index, match in enumerate(_METHOD_PATTERN.finditer(text))
        ]
        return summary


__all__ = [
    "PatternExtractor",
    "extract_dependencies",
    "find_exported_name",
    "is_react_like",
]
