"""Builds library-keyed implementor indexes from extracted facts."""

from __future__ import annotations

import re
from collections import defaultdict
from enum import Enum
from typing import Callable, Dict, Iterable, List, Sequence

from .logging import get_logger
from .models import ImplementorFact, ImplementorIndex, TraitRef, TypeKind
from .render import DescriptionRenderer

_REQUIRED_FIELDS = (
    "implementing_library",
    "implemented_type",
    "trait_name",
    "trait_owner_library",
)

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

logger = get_logger("builder")


class MalformedFact(ValueError):
    """Raised when an implementor fact lacks a required field."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        if position is not None:
            message = f"fact #{position}: {message}"
        super().__init__(message)
        self.position = position


class IndexKey(str, Enum):
    """Selects which library a rendered description is filed under."""

    TRAIT_OWNER = "trait_owner_library"
    IMPLEMENTING_LIBRARY = "implementing_library"


def validate_fact(fact: ImplementorFact, *, position: int | None = None) -> None:
    """Raise MalformedFact unless every required field is a non-empty string.

    The trait owner and trait name also become output file path segments, so
    they must be plain ``::``-separated identifiers.
    """
    if not isinstance(fact, ImplementorFact):
        raise MalformedFact(f"expected ImplementorFact, got {type(fact).__name__}", position=position)
    for name in _REQUIRED_FIELDS:
        value = getattr(fact, name)
        if not isinstance(value, str) or not value.strip():
            raise MalformedFact(f"missing required field '{name}'", position=position)
    if not all(_IDENTIFIER.fullmatch(segment) for segment in fact.trait_owner_library.split("::")):
        raise MalformedFact(
            f"trait_owner_library {fact.trait_owner_library!r} is not a module path", position=position
        )
    if not _IDENTIFIER.fullmatch(fact.trait_name):
        raise MalformedFact(f"trait_name {fact.trait_name!r} is not an identifier", position=position)
    try:
        TypeKind(fact.type_kind)
    except ValueError:
        raise MalformedFact(f"unknown type kind {fact.type_kind!r}", position=position) from None
    if not isinstance(fact.generic_params, (tuple, list)):
        raise MalformedFact("generic_params must be a tuple of strings", position=position)
    for param in fact.generic_params:
        if not isinstance(param, str) or not param.strip():
            raise MalformedFact("generic parameters must be non-empty strings", position=position)


def build_index(
    facts: Sequence[ImplementorFact],
    *,
    key: IndexKey = IndexKey.TRAIT_OWNER,
    renderer: DescriptionRenderer | Callable[[ImplementorFact], str] | None = None,
) -> ImplementorIndex:
    """Return an index mapping each library to its rendered implementors.

    Facts are validated up front so a malformed entry aborts the build before
    any description is rendered. Entries keep input order and duplicates are
    preserved.
    """
    facts = list(facts)
    for position, fact in enumerate(facts):
        validate_fact(fact, position=position)

    render = _resolve_render(renderer)
    attr = IndexKey(key).value
    entries: Dict[str, List[str]] = {}
    for fact in facts:
        entries.setdefault(getattr(fact, attr), []).append(render(fact))

    logger.debug("Indexed %d fact(s) under %d key(s) by %s", len(facts), len(entries), attr)
    return ImplementorIndex(entries)


def group_by_trait(facts: Iterable[ImplementorFact]) -> Dict[TraitRef, List[ImplementorFact]]:
    """Partition facts per implemented trait, keeping first-seen order."""
    grouped: Dict[TraitRef, List[ImplementorFact]] = defaultdict(list)
    for fact in facts:
        grouped[TraitRef(owner=fact.trait_owner_library, name=fact.trait_name)].append(fact)
    return dict(grouped)


def _resolve_render(
    renderer: DescriptionRenderer | Callable[[ImplementorFact], str] | None,
) -> Callable[[ImplementorFact], str]:
    if renderer is None:
        return DescriptionRenderer().render
    if isinstance(renderer, DescriptionRenderer):
        return renderer.render
    return renderer


__all__ = ["IndexKey", "MalformedFact", "build_index", "group_by_trait", "validate_fact"]
