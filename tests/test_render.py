"""Tests for implindex.render."""

from __future__ import annotations

from implindex.models import ImplementorFact, TypeKind
from implindex.render import DescriptionRenderer

HASH_LINK = (
    '<a class="trait" href="https://doc.rust-lang.org/nightly/core/hash/trait.Hash.html" '
    'title="trait core::hash::Hash">Hash</a>'
)


def test_render_plain_struct_implementor() -> None:
    fact = ImplementorFact("aho_corasick", "Match", "Hash", "core::hash")

    rendered = DescriptionRenderer().render(fact)

    assert rendered == (
        f"impl {HASH_LINK} for "
        '<a class="struct" href="aho_corasick/struct.Match.html" '
        'title="struct aho_corasick::Match">Match</a>'
    )


def test_render_escapes_generic_params_on_both_sides() -> None:
    fact = ImplementorFact("log", "LogMetadata", "Hash", "core::hash", generic_params=("'a",))

    rendered = DescriptionRenderer().render(fact)

    assert rendered.startswith(f"impl&lt;'a&gt; {HASH_LINK} for ")
    assert rendered.endswith(
        '<a class="struct" href="log/struct.LogMetadata.html" '
        'title="struct log::LogMetadata">LogMetadata</a>&lt;\'a&gt;'
    )


def test_render_nested_enum_path() -> None:
    fact = ImplementorFact(
        "robots", "actors::actor_ref::ActorPath", "Hash", "core::hash", TypeKind.ENUM
    )

    rendered = DescriptionRenderer().render(fact)

    assert (
        '<a class="enum" href="robots/actors/actor_ref/enum.ActorPath.html" '
        'title="enum robots::actors::actor_ref::ActorPath">ActorPath</a>'
    ) in rendered


def test_render_multiple_generics_joined() -> None:
    fact = ImplementorFact("demo", "Pair", "Clone", "core::clone", generic_params=("'a", "T"))

    rendered = DescriptionRenderer().render(fact)

    assert rendered.startswith("impl&lt;'a, T&gt; ")
    assert rendered.endswith("Pair</a>&lt;'a, T&gt;")


def test_local_trait_links_are_doc_root_relative() -> None:
    fact = ImplementorFact("robots", "Printer", "Actor", "robots::actors")

    rendered = DescriptionRenderer().render(fact)

    assert 'href="robots/actors/trait.Actor.html"' in rendered


def test_extern_urls_override_and_extend_defaults() -> None:
    renderer = DescriptionRenderer({"serde": "https://docs.rs/serde/1.0/", "core": "https://example.test/core-docs"})

    assert renderer.trait_url("serde::ser", "Serialize") == "https://docs.rs/serde/1.0/serde/ser/trait.Serialize.html"
    assert renderer.trait_url("core::hash", "Hash") == "https://example.test/core-docs/core/hash/trait.Hash.html"
    assert renderer.trait_url("std::fmt", "Debug") == "https://doc.rust-lang.org/nightly/std/fmt/trait.Debug.html"


def test_primitive_type_url() -> None:
    assert DescriptionRenderer.type_url("core", "u8", "primitive") == "core/primitive.u8.html"
