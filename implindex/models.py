"""Core data models shared across implindex components."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Tuple


class TypeKind(str, Enum):
    """Item kind of an implementing type, as used in rustdoc links."""

    STRUCT = "struct"
    ENUM = "enum"
    UNION = "union"
    TRAIT = "trait"
    TYPE = "type"
    PRIMITIVE = "primitive"


@dataclass(frozen=True)
class ImplementorFact:
    """A single `impl Trait for Type` relationship reported by fact extraction."""

    implementing_library: str
    implemented_type: str
    trait_name: str
    trait_owner_library: str
    type_kind: TypeKind = TypeKind.STRUCT
    generic_params: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TraitRef:
    """Identifies a trait by its owning module path and name."""

    owner: str
    name: str

    @property
    def path(self) -> str:
        return f"{self.owner}::{self.name}"


class ImplementorIndex(Mapping):
    """Read-only mapping of library key to rendered implementor descriptions."""

    def __init__(self, entries: Mapping[str, List[str]] | None = None) -> None:
        self._entries: Dict[str, Tuple[str, ...]] = {
            key: tuple(values) for key, values in (entries or {}).items()
        }

    def __getitem__(self, key: str) -> Tuple[str, ...]:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ImplementorIndex({self._entries!r})"

    def total(self) -> int:
        """Return the number of descriptions across all keys."""
        return sum(len(values) for values in self._entries.values())

    def to_dict(self) -> Dict[str, List[str]]:
        return {key: list(values) for key, values in self._entries.items()}


__all__ = ["ImplementorFact", "ImplementorIndex", "TraitRef", "TypeKind"]
