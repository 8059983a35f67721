import json
import math
import tomllib
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import urlsplit

import yaml

from .types import ConfigError, RunSettings, UnsupportedConfigFormatError

KEYS = {"endpoint", "settle_seconds", "timeout_seconds", "max_workers"}


def load_settings(path: str | Path) -> RunSettings:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    return build_settings(raw_file, source=str(pure_path))


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"{path}: cannot read config") from exc

    match fmt:
        case "yaml":
            try:
                raw_file = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ConfigError(f"{path}: invalid YAML") from exc
            # An empty YAML document means "all defaults".
            if raw_file is None:
                raw_file = {}
        case "toml":
            try:
                raw_file = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"{path}: invalid TOML") from exc
        case "json":
            try:
                raw_file = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"{path}: invalid JSON") from exc
        case _:
            raise AssertionError("Unreachable")

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: {fmt.upper()} parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def build_settings(
    raw: Mapping[str, Any],
    *,
    base: RunSettings | None = None,
    source: str = "<config>",
) -> RunSettings:
    for field in raw.keys():
        if field not in KEYS:
            raise ConfigError(f"{source}: Can't process: {field}")

    values: dict[str, Any] = {}

    if "endpoint" in raw:
        values["endpoint"] = _endpoint(source, raw["endpoint"])

    if "settle_seconds" in raw:
        values["settle_seconds"] = _seconds(
            source, "settle_seconds", raw["settle_seconds"], allow_zero=True
        )

    if "timeout_seconds" in raw:
        if raw["timeout_seconds"] is None:
            values["timeout_seconds"] = None
        else:
            values["timeout_seconds"] = _seconds(
                source, "timeout_seconds", raw["timeout_seconds"], allow_zero=False
            )

    if "max_workers" in raw:
        values["max_workers"] = _max_workers(source, raw["max_workers"])

    return replace(base or RunSettings(), **values)


def _endpoint(source: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{source}: endpoint should be a string")

    endpoint = value.strip()
    parts = urlsplit(endpoint)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"{source}: endpoint must be an http(s) URL, got {value!r}")

    return endpoint


def _seconds(source: str, key: str, value: Any, *, allow_zero: bool) -> float:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{source}: {key} should be a number")

    if not math.isfinite(value):
        raise ConfigError(f"{source}: {key} must be finite, got {value}")

    if value < 0 or (value == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise ConfigError(f"{source}: {key} must be {bound}, got {value}")

    return float(value)


def _max_workers(source: str, value: Any) -> int | None:
    if value is None:
        return None

    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{source}: max_workers should be an integer or null")

    if value < 1:
        raise ConfigError(f"{source}: max_workers must be at least 1, got {value}")

    return value
