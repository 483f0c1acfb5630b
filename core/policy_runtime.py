"""Configuration loading and logging bootstrap."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from world_model.graph_schemas import GraphSettings

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_effective_config(root: Path, override_path: Path | None = None) -> dict[str, Any]:
    """Load ``config/default.yaml`` under root, then layer an optional user file."""
    merged = load_yaml(root / "config" / "default.yaml")
    if override_path is not None:
        merged = merge_dicts(merged, load_yaml(override_path))
    return merged


def graph_settings(config: dict[str, Any]) -> GraphSettings:
    """Validate the ``graph`` section."""
    return GraphSettings.model_validate(config.get("graph") or {})


def configure_logging(config: dict[str, Any]) -> None:
    """Apply the ``logging`` section to the root logger."""
    logging_cfg = config.get("logging") or {}
    level_name = str(logging_cfg.get("level", "WARNING")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    logging.basicConfig(
        level=level,
        format=str(logging_cfg.get("format", DEFAULT_LOG_FORMAT)),
    )
