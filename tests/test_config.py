"""Tests for implindex.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from implindex.config import ConfigError, ImplIndexConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("IMPLINDEX_OUTPUT_DIR", raising=False)

    config = load_config(tmp_path)

    assert isinstance(config, ImplIndexConfig)
    assert config.root == tmp_path.resolve()
    assert config.output.dir is None
    assert config.output.format == "js"
    assert config.output.per_trait is True
    assert config.output_dir == tmp_path.resolve() / "target" / "doc"
    assert config.links.extern_urls == {}


def test_load_config_parses_expected_fields(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("IMPLINDEX_OUTPUT_DIR", raising=False)
    config_file = tmp_path / ".implindex.yml"
    config_file.write_text(
        """
output:
  dir: "site/doc"
  format: json
  per_trait: no
links:
  extern_urls:
    serde: "https://docs.rs/serde/1.0"
    core: "https://doc.rust-lang.org/stable"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.output.dir == tmp_path.resolve() / "site" / "doc"
    assert config.output_dir == config.output.dir
    assert config.output.format == "json"
    assert config.output.per_trait is False
    assert config.links.extern_urls == {
        "serde": "https://docs.rs/serde/1.0",
        "core": "https://doc.rust-lang.org/stable",
    }


def test_load_config_from_sibling_file_path(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("IMPLINDEX_OUTPUT_DIR", raising=False)
    (tmp_path / ".implindex.yml").write_text("output:\n  format: json\n", encoding="utf-8")

    config = load_config(tmp_path / "facts.yml")

    assert config.output.format == "json"


def test_environment_overrides_output_dir(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / ".implindex.yml").write_text("output:\n  dir: ignored\n", encoding="utf-8")
    monkeypatch.setenv("IMPLINDEX_OUTPUT_DIR", str(tmp_path / "elsewhere"))

    config = load_config(tmp_path)

    assert config.output_dir == tmp_path / "elsewhere"


def test_unsupported_format_raises(tmp_path: Path) -> None:
    (tmp_path / ".implindex.yml").write_text("output:\n  format: xml\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    (tmp_path / ".implindex.yml").write_text("- one\n- two\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / ".implindex.yml").write_text("output: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
