from __future__ import annotations

import textwrap
from pathlib import Path
from typing import List

import pytest

from implindex.models import ImplementorFact, TypeKind


class FactsWorkspace:
    """Writes facts and config files into a throwaway documentation build root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "build"
        self.root.mkdir()

    def write(self, relative: str, content: str) -> Path:
        """Write dedented ``content`` to ``relative`` under the build root."""
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path


@pytest.fixture
def workspace(tmp_path: Path) -> FactsWorkspace:
    """Provide a build root rooted at the pytest tmp_path."""
    return FactsWorkspace(tmp_path)


@pytest.fixture
def hash_facts() -> List[ImplementorFact]:
    """Implementors of core::hash::Hash across three crates."""
    return [
        ImplementorFact("aho_corasick", "Match", "Hash", "core::hash"),
        ImplementorFact("log", "LogLevel", "Hash", "core::hash", TypeKind.ENUM),
        ImplementorFact("log", "LogMetadata", "Hash", "core::hash", generic_params=("'a",)),
        ImplementorFact("robots", "actors::actor_ref::ActorPath", "Hash", "core::hash", TypeKind.ENUM),
    ]
