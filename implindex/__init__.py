"""Static trait implementor index builder for API documentation."""

from .builder import IndexKey, MalformedFact, build_index, group_by_trait
from .models import ImplementorFact, ImplementorIndex, TraitRef, TypeKind
from .registry import ImplementorRegistry, RegistrationError, RegistryState

__all__ = [
    "ImplementorFact",
    "ImplementorIndex",
    "ImplementorRegistry",
    "IndexKey",
    "MalformedFact",
    "RegistrationError",
    "RegistryState",
    "TraitRef",
    "TypeKind",
    "build_index",
    "group_by_trait",
]
