"""Tests for implindex.models."""

from __future__ import annotations

import dataclasses

import pytest

from implindex.models import ImplementorFact, ImplementorIndex, TypeKind


def test_fact_is_immutable() -> None:
    fact = ImplementorFact("log", "LogLevel", "Hash", "core::hash", TypeKind.ENUM)

    with pytest.raises(dataclasses.FrozenInstanceError):
        fact.trait_name = "Debug"  # type: ignore[misc]


def test_index_is_read_only_and_detached_from_input() -> None:
    source = {"core::hash": ["a"]}
    index = ImplementorIndex(source)
    source["core::hash"].append("b")

    assert index["core::hash"] == ("a",)
    with pytest.raises(TypeError):
        index["core::fmt"] = ("c",)  # type: ignore[index]


def test_index_to_dict_returns_copies() -> None:
    index = ImplementorIndex({"core::hash": ["a", "b"]})

    data = index.to_dict()
    data["core::hash"].append("c")

    assert index.total() == 2
    assert index == {"core::hash": ("a", "b")}
