"""Heuristic size and complexity metrics."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Tuple

from ..models import ComplexityMetrics

# Counted anywhere in the raw text, including strings and comments.
_BRANCH_KEYWORDS = re.compile(r"\b(if|else|for|while|switch|case|catch)\b")

_BANDS: Tuple[Tuple[int, str, str], ...] = (
    (15, "CRITICAL", "red"),
    (10, "HIGH", "orange"),
    (5, "MODERATE", "yellow"),
)

EXTERNAL_LINES_OF_CODE = 75


def count_lines(text: str) -> int:
    """Count newline-delimited segments; a trailing newline adds an empty final segment."""
    return len(text.split("\n"))


def cyclomatic_complexity(text: str) -> int:
    return len(_BRANCH_KEYWORDS.findall(text))


def threat_band(complexity: int) -> Tuple[str, str]:
    """Return ``(threat_level, threat_color)`` for a complexity score."""
    for threshold, level, color in _BANDS:
        if complexity > threshold:
            return level, color
    return "LOW", "green"


def compute_complexity(text: str, method_count: int) -> ComplexityMetrics:
    score = cyclomatic_complexity(text)
    level, color = threat_band(score)
    return ComplexityMetrics(
        cyclomatic_complexity=score,
        cognitive_complexity=score,
        nesting_depth=0,
        lines_of_code=count_lines(text),
        method_count=method_count,
        threat_level=level,
        threat_color=color,
        label=level,
    )


def external_complexity() -> ComplexityMetrics:
    """Fixed metrics for synthesized external stubs."""
    return ComplexityMetrics(
        cyclomatic_complexity=0,
        cognitive_complexity=0,
        nesting_depth=0,
        lines_of_code=EXTERNAL_LINES_OF_CODE,
        method_count=0,
        threat_level="EXTERNAL",
        threat_color="gray",
        label="External Library",
    )


def sibling_test_path(path: Path) -> Path:
    """``Button.tsx`` -> ``Button.test.tsx`` in the same directory."""
    return path.with_name(f"{path.stem}.test{path.suffix}")


def has_sibling_test(path: Path) -> bool:
    return sibling_test_path(path).is_file()


__all__ = [
    "EXTERNAL_LINES_OF_CODE",
    "compute_complexity",
    "count_lines",
    "cyclomatic_complexity",
    "external_complexity",
    "has_sibling_test",
    "sibling_test_path",
    "threat_band",
]
