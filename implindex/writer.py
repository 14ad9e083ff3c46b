"""Serialize implementor indexes into static data files for the doc viewer."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader

from .logging import get_logger
from .models import ImplementorIndex, TraitRef

FORMATS = ("js", "json")


class IndexWriter:
    """Renders an index with the bundled templates and writes it atomically."""

    TEMPLATE_NAME = "implementors.js.j2"

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)
        self.logger = get_logger("writer")

    def render(self, index: ImplementorIndex, fmt: str = "js") -> str:
        """Return the data file text for ``index`` in the requested format."""
        if fmt == "json":
            return json.dumps(index.to_dict(), indent=2, ensure_ascii=False) + "\n"
        if fmt != "js":
            raise ValueError(f"Unsupported output format '{fmt}' (expected one of {', '.join(FORMATS)})")
        template = self._env.get_template(self.TEMPLATE_NAME)
        return template.render(index=index).rstrip() + "\n"

    def write(self, index: ImplementorIndex, path: Path, fmt: str = "js") -> Path:
        """Write the rendered index to ``path``; readers never see a partial file."""
        text = self.render(index, fmt)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
        self.logger.debug("Wrote %d key(s) to %s", len(index), path)
        return path

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: list[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["js_string"] = _js_string
        return env


def trait_file_path(out_dir: Path, trait: TraitRef, fmt: str = "js") -> Path:
    """Return ``implementors/<owner path>/trait.<Name>.<fmt>`` under ``out_dir``."""
    segments: Sequence[str] = trait.owner.split("::")
    path = out_dir.joinpath("implementors", *segments, f"trait.{trait.name}.{fmt}")
    if not path.resolve().is_relative_to(out_dir.resolve()):
        raise ValueError(f"Trait {trait.path} maps outside the output directory {out_dir}")
    return path


def _js_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


__all__ = ["FORMATS", "IndexWriter", "trait_file_path"]
