"""Coordinates loading facts, building indexes, and writing data files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .builder import IndexKey, build_index, group_by_trait
from .config import ImplIndexConfig, load_config
from .loader import load_facts
from .logging import get_logger
from .models import ImplementorFact, ImplementorIndex
from .registry import ImplementorRegistry
from .render import DescriptionRenderer
from .writer import IndexWriter, trait_file_path


@dataclass
class BuildOutcome:
    """Index produced by a build and the files written for it."""

    index: ImplementorIndex
    files: List[Path] = field(default_factory=list)
    dry_run: bool = False


class Orchestrator:
    """Runs a single documentation build of the implementor index."""

    def __init__(self, *, writer: IndexWriter | None = None) -> None:
        self.writer = writer or IndexWriter()
        self.logger = get_logger("orchestrator")

    def run_build(
        self,
        facts_path: str | Path,
        out_dir: str | Path | None = None,
        *,
        fmt: str | None = None,
        registry: Optional[ImplementorRegistry] = None,
        dry_run: bool = False,
    ) -> BuildOutcome:
        """Build the index for ``facts_path`` and write its data files."""
        facts_path = Path(facts_path)
        if not facts_path.is_file():
            raise FileNotFoundError(f"Facts file not found: {facts_path}")

        config = load_config(facts_path.parent)
        self.logger.info("Starting build for %s", facts_path)
        facts = load_facts(facts_path)
        self.logger.debug("Loaded %d fact(s)", len(facts))
        return self.build(
            facts,
            config,
            out_dir=Path(out_dir) if out_dir else None,
            fmt=fmt,
            registry=registry,
            dry_run=dry_run,
        )

    def build(
        self,
        facts: List[ImplementorFact],
        config: ImplIndexConfig,
        *,
        out_dir: Path | None = None,
        fmt: str | None = None,
        registry: Optional[ImplementorRegistry] = None,
        dry_run: bool = False,
    ) -> BuildOutcome:
        renderer = DescriptionRenderer(config.links.extern_urls)
        fmt = fmt or config.output.format
        target = out_dir or config.output_dir

        # Every index is built before the first write so a bad fact leaves no files behind.
        index = build_index(facts, renderer=renderer)
        pending = [(target / f"implementors.{fmt}", index)]
        if config.output.per_trait:
            for trait, trait_facts in group_by_trait(facts).items():
                trait_index = build_index(
                    trait_facts, key=IndexKey.IMPLEMENTING_LIBRARY, renderer=renderer
                )
                pending.append((trait_file_path(target, trait, fmt), trait_index))

        outcome = BuildOutcome(index=index, dry_run=dry_run)
        if dry_run:
            self.logger.info("Dry-run completed; %d file(s) not written", len(pending))
        else:
            for path, data in pending:
                outcome.files.append(self.writer.write(data, path, fmt))
            self.logger.info(
                "Indexed %d implementor(s) across %d library key(s) into %s",
                index.total(),
                len(index),
                target,
            )

        if registry is not None:
            registry.submit(index)
        return outcome


__all__ = ["BuildOutcome", "Orchestrator"]
