"""Render implementor facts into rustdoc-style HTML snippets."""

from __future__ import annotations

import html
from typing import Dict, Mapping, Sequence

from .models import ImplementorFact, TypeKind

DEFAULT_EXTERN_URLS: Dict[str, str] = {
    "core": "https://doc.rust-lang.org/nightly",
    "std": "https://doc.rust-lang.org/nightly",
    "alloc": "https://doc.rust-lang.org/nightly",
}


class DescriptionRenderer:
    """Formats `impl Trait for Type` lines with links into the generated docs."""

    LINK_FMT = '<a class="{cls}" href="{href}" title="{title}">{text}</a>'

    def __init__(self, extern_urls: Mapping[str, str] | None = None) -> None:
        urls = dict(DEFAULT_EXTERN_URLS)
        if extern_urls:
            urls.update(extern_urls)
        self.extern_urls = {crate: url.rstrip("/") for crate, url in urls.items()}

    def render(self, fact: ImplementorFact) -> str:
        """Return the HTML description for a single implementor fact."""
        generics = _format_generics(fact.generic_params)
        trait_link = self.LINK_FMT.format(
            cls="trait",
            href=self.trait_url(fact.trait_owner_library, fact.trait_name),
            title=_escape(f"trait {fact.trait_owner_library}::{fact.trait_name}"),
            text=_escape(fact.trait_name),
        )
        kind = TypeKind(fact.type_kind).value
        type_name = fact.implemented_type.split("::")[-1]
        type_link = self.LINK_FMT.format(
            cls=kind,
            href=self.type_url(fact.implementing_library, fact.implemented_type, kind),
            title=_escape(f"{kind} {fact.implementing_library}::{fact.implemented_type}"),
            text=_escape(type_name),
        )
        return f"impl{generics} {trait_link} for {type_link}{generics}"

    def trait_url(self, owner: str, trait_name: str) -> str:
        segments = owner.split("::")
        base = self.extern_urls.get(segments[0], "")
        relative = "/".join(segments + [f"trait.{trait_name}.html"])
        return f"{base}/{relative}" if base else relative

    @staticmethod
    def type_url(library: str, type_path: str, kind: str) -> str:
        *modules, name = type_path.split("::")
        return "/".join([library, *modules, f"{kind}.{name}.html"])


def _format_generics(params: Sequence[str]) -> str:
    if not params:
        return ""
    return _escape("<" + ", ".join(params) + ">")


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


__all__ = ["DEFAULT_EXTERN_URLS", "DescriptionRenderer"]
