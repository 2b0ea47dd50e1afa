from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.repo_builder import RepoBuilder
from umlgen.git.history import DisabledGitHistory
from umlgen.models import SequentialIdFactory
from umlgen.orchestrator import UmlGenerator


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def generator() -> UmlGenerator:
    """Generator with git history switched off and reproducible ids."""
    return UmlGenerator(
        git_history=DisabledGitHistory(),
        id_factory_provider=SequentialIdFactory,
    )
