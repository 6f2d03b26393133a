"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from census_batch.common.errors import ConfigError
from census_batch.common.fs import read_yaml
from census_batch.common.models import GeocoderConfig
from census_batch.common.schema import validate_geocoder_config

CONFIG_FILENAME = "geocoder.yml"


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    return _deep_merge(base, overlay)


def load_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> GeocoderConfig:
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / CONFIG_FILENAME
    raw = _load_yaml_with_overlay(config_dir / CONFIG_FILENAME, overlay_path)
    cfg = validate_geocoder_config(raw, allow_unknown=allow_unknown)
    return config_from_mapping(cfg["geocoder"])


def config_from_mapping(section: dict) -> GeocoderConfig:
    kwargs: dict[str, Any] = {
        "benchmark": str(section["benchmark"]),
        "geography": str(section["geography"]) if section.get("geography") is not None else None,
        "timeout_seconds": float(section["timeout_seconds"]),
        "batch_size": int(section["batch_size"]),
    }
    if "retries" in section:
        kwargs["retries"] = int(section["retries"])
    if section.get("base_url"):
        kwargs["base_url"] = str(section["base_url"])
    return GeocoderConfig(**kwargs)
