"""Read implementor facts emitted by an upstream extraction stage."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from .builder import MalformedFact
from .logging import get_logger
from .models import ImplementorFact, TypeKind

logger = get_logger("loader")


class FactsFileError(RuntimeError):
    """Raised when a facts file cannot be read or decoded."""


def load_facts(path: Path) -> List[ImplementorFact]:
    """Load facts from a YAML or JSON document.

    The document is either a list of fact mappings or a mapping holding such a
    list under ``facts``.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FactsFileError(f"Unable to read facts file {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text) if text.strip() else []
    except yaml.YAMLError as exc:
        raise FactsFileError(f"Failed to parse {path.name}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("facts", [])
    if data is None:
        data = []
    if not isinstance(data, list):
        raise FactsFileError(f"{path.name} must contain a list of facts")

    facts = parse_facts(data)
    logger.debug("Loaded %d fact(s) from %s", len(facts), path)
    return facts


def parse_facts(entries: Sequence[Any]) -> List[ImplementorFact]:
    return [fact_from_dict(entry, position=position) for position, entry in enumerate(entries)]


def fact_from_dict(payload: Any, *, position: int | None = None) -> ImplementorFact:
    """Convert one decoded mapping into an ImplementorFact."""
    if not isinstance(payload, dict):
        raise MalformedFact("expected a mapping", position=position)

    values: Dict[str, str] = {}
    for name in ("implementing_library", "implemented_type", "trait_name", "trait_owner_library"):
        value = payload.get(name)
        if not isinstance(value, str) or not value.strip():
            raise MalformedFact(f"missing required field '{name}'", position=position)
        values[name] = value.strip()

    raw_kind = payload.get("type_kind", TypeKind.STRUCT.value)
    try:
        kind = TypeKind(str(raw_kind).lower())
    except ValueError:
        raise MalformedFact(f"unknown type kind {raw_kind!r}", position=position) from None

    raw_params = payload.get("generic_params") or []
    if isinstance(raw_params, str):
        raw_params = [raw_params]
    if not isinstance(raw_params, list) or not all(
        isinstance(param, str) and param.strip() for param in raw_params
    ):
        raise MalformedFact("generic_params must be a list of strings", position=position)

    return ImplementorFact(
        type_kind=kind,
        generic_params=tuple(param.strip() for param in raw_params),
        **values,
    )


__all__ = ["FactsFileError", "fact_from_dict", "load_facts", "parse_facts"]
