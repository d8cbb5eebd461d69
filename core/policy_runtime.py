"""Configuration loading and runtime path bootstrapping."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "paths": {
        "data_dir": ".",
        "cities_file": "cities.txt",
        "roads_file": "roads.txt",
        "audit_log_path": "logs/audit.jsonl",
    },
    "logging": {"level": "WARNING"},
    "display": {"budget_unit": "billions RWF"},
    "audit": {"enabled": True},
    "storage": {"max_index": 1000},
}


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


def load_effective_config(root: Path) -> dict[str, Any]:
    """Built-in defaults overlaid with ``config/default.yaml`` under ``root``."""
    return merge_dicts(DEFAULT_CONFIG, load_yaml(root / "config" / "default.yaml"))


def ensure_runtime_dirs(root: Path, config: dict[str, Any]) -> dict[str, Path]:
    """Ensure data and log directories exist and return resolved paths."""
    paths_cfg = config.get("paths", {})
    data_dir = (root / paths_cfg.get("data_dir", ".")).resolve()
    cities_path = data_dir / paths_cfg.get("cities_file", "cities.txt")
    roads_path = data_dir / paths_cfg.get("roads_file", "roads.txt")
    audit_log_path = (root / paths_cfg.get("audit_log_path", "logs/audit.jsonl")).resolve()

    data_dir.mkdir(parents=True, exist_ok=True)
    audit_log_path.parent.mkdir(parents=True, exist_ok=True)

    return {
        "data_dir": data_dir,
        "cities_path": cities_path,
        "roads_path": roads_path,
        "audit_log_path": audit_log_path,
    }


def configure_logging(config: dict[str, Any]) -> None:
    """Apply the configured level to the ``cityroads`` logger tree."""
    level_name = str(config.get("logging", {}).get("level", "WARNING")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {level_name}")
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("cityroads").setLevel(level)
