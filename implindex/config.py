"""Configuration loading for implindex (.implindex.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".implindex.yml"
OUTPUT_DIR_ENV = "IMPLINDEX_OUTPUT_DIR"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class OutputConfig:
    """Where and how index data files are written."""

    dir: Optional[Path] = None
    format: str = "js"
    per_trait: bool = True


@dataclass
class LinkConfig:
    """Documentation base URLs for crates documented elsewhere."""

    extern_urls: Dict[str, str] = field(default_factory=dict)


@dataclass
class ImplIndexConfig:
    """Represents the settings defined in .implindex.yml."""

    root: Path
    output: OutputConfig = field(default_factory=OutputConfig)
    links: LinkConfig = field(default_factory=LinkConfig)

    @property
    def output_dir(self) -> Path:
        return self.output.dir or (self.root / "target" / "doc")


def load_config(config_path: Path) -> ImplIndexConfig:
    """Load configuration from disk, applying environment overrides."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    config = ImplIndexConfig(root=root)
    if config_file.exists():
        data = _read_config(config_file)
        if not isinstance(data, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

        output_data = _as_dict(data.get("output"))
        if output_data:
            dir_str = _as_str(output_data.get("dir"))
            fmt = (_as_str(output_data.get("format")) or "js").lower()
            if fmt not in {"js", "json"}:
                raise ConfigError(f"Unsupported output.format '{fmt}' in {CONFIG_FILENAME}")
            per_trait = _as_bool(output_data.get("per_trait"))
            config.output = OutputConfig(
                dir=root / dir_str if dir_str else None,
                format=fmt,
                per_trait=True if per_trait is None else per_trait,
            )

        links_data = _as_dict(data.get("links"))
        if links_data:
            extern = _as_dict(links_data.get("extern_urls"))
            config.links = LinkConfig(
                extern_urls={
                    str(crate): url
                    for crate, url in ((k, _as_str(v)) for k, v in extern.items())
                    if url
                }
            )

    env_dir = os.getenv(OUTPUT_DIR_ENV)
    if env_dir:
        config.output.dir = Path(env_dir).expanduser()

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None
