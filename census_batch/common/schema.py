"""Minimal strict schema for YAML config validation."""

from __future__ import annotations

from census_batch.common.constants import MAX_BATCH_SIZE
from census_batch.common.errors import ConfigError

GEOCODER_REQUIRED = {"benchmark", "timeout_seconds", "batch_size"}
GEOCODER_KNOWN = GEOCODER_REQUIRED | {"geography", "base_url", "retries"}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_number(value: object, ctx: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{ctx} must be a number, got {value!r}")
    return value


def validate_geocoder_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    if not isinstance(cfg, dict):
        raise ConfigError("geocoder config must be a mapping")
    _assert_required_keys(cfg, {"geocoder"}, "geocoder config")
    _assert_no_unknown_keys(cfg, {"geocoder"}, "geocoder config", allow_unknown)

    section = cfg["geocoder"]
    if not isinstance(section, dict):
        raise ConfigError("geocoder must be a mapping")
    _assert_required_keys(section, GEOCODER_REQUIRED, "geocoder")
    _assert_no_unknown_keys(section, GEOCODER_KNOWN, "geocoder", allow_unknown)

    batch_size = _assert_number(section["batch_size"], "geocoder.batch_size")
    if int(batch_size) != batch_size or not 1 <= batch_size <= MAX_BATCH_SIZE:
        raise ConfigError(f"geocoder.batch_size must be an integer in 1..{MAX_BATCH_SIZE}")

    if _assert_number(section["timeout_seconds"], "geocoder.timeout_seconds") <= 0:
        raise ConfigError("geocoder.timeout_seconds must be positive")

    if "retries" in section:
        retries = _assert_number(section["retries"], "geocoder.retries")
        if int(retries) != retries or retries < 0:
            raise ConfigError("geocoder.retries must be a non-negative integer")

    return cfg
