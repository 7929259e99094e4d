"""Configuration loader for the Caltrain Finder app."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml

DEFAULT_BASE_URL = "https://api.511.org/transit"
DEFAULT_TIMEOUT_SECONDS = 10


@dataclass(frozen=True)
class TransitConfig:
    """511.org real-time API configuration."""

    api_key: str
    agency: str
    poll_interval_seconds: int
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class StationsConfig:
    """Where to load the static station tables from; None means the built-in tables."""

    path: str | None


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    transit: TransitConfig
    stations: StationsConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_mapping(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = _require_key(data, key, key)
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    api_key = os.environ.get("TRANSIT_API_KEY", "")
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    transit_section = _require_mapping(data, "transit")
    logging_section = _require_mapping(data, "logging")
    stations_section = data.get("stations") or {}
    if not isinstance(stations_section, dict):
        raise ValueError("'stations' config must be a mapping")

    poll_interval = _require_key(transit_section, "poll_interval_seconds", "transit")
    if not isinstance(poll_interval, int) or poll_interval <= 0:
        raise ValueError("'poll_interval_seconds' must be a positive integer")

    transit = TransitConfig(
        api_key=api_key,
        agency=_require_key(transit_section, "agency", "transit"),
        poll_interval_seconds=poll_interval,
        base_url=transit_section.get("base_url", DEFAULT_BASE_URL),
        timeout_seconds=transit_section.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
    )

    stations = StationsConfig(path=stations_section.get("path"))

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(transit=transit, stations=stations, log=logging)
