"""YAML config loader with runtime get/set."""

import json
from pathlib import Path
from typing import Any

import yaml

from cepcast.config.schema import CepcastConfig


def load_config(path: str | Path) -> CepcastConfig:
    """Load and validate config from a YAML file.

    A missing or empty file yields the defaults.
    """
    path = Path(path)
    if not path.exists():
        return CepcastConfig()
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return CepcastConfig(**raw)


def save_config(config: CepcastConfig, path: str | Path) -> None:
    """Write config back as YAML, creating the directory if needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = json.loads(config.model_dump_json())
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)


def get_config_value(config: CepcastConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'services.timeout_seconds'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: CepcastConfig, dotted_key: str, value: Any) -> CepcastConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new CepcastConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        if not isinstance(target, dict) or part not in target:
            raise KeyError(f"Config key not found: {dotted_key}")
        target = target[part]
    if not isinstance(target, dict):
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target.get(parts[-1])
    if isinstance(value, str):
        if isinstance(old_value, bool):
            value = value.lower() in ("1", "true", "yes", "on")
        elif isinstance(old_value, int):
            value = int(value)
        elif isinstance(old_value, float):
            value = float(value)
    target[parts[-1]] = value
    return CepcastConfig(**data)
