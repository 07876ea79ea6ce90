"""Runtime settings - loaded from config/settings.yaml.

All tunables are externalized:
- config/settings.yaml: HTTP client, pacing, summary budget, file locations
- config/sources.yaml: the feed table (see S1_aggregate.load_sources)

Environment variables override the file:
- ROBODAILY_OUTPUT: snapshot output path
- ROBODAILY_PACING_SECONDS: delay between sources
- ROBODAILY_USER_AGENT: client identifier sent with each request
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parents[1]
CONFIG_DIR = ROOT_DIR / "config"
SETTINGS_PATH = CONFIG_DIR / "settings.yaml"


@dataclass(frozen=True)
class Settings:
    """Aggregation and serving settings."""
    user_agent: str = "robotics-daily/0.1"
    timeout_seconds: float = 30.0
    pacing_seconds: float = 0.5
    summary_max_chars: int = 420
    arxiv_max_results: int = 35
    output_path: Path = Path("data/items.json")
    seed_path: Path = CONFIG_DIR / "seed_items.json"
    sources_path: Path = CONFIG_DIR / "sources.yaml"
    raw_dir: Path = Path("data/raw")
    log_dir: Path = Path("logs")


_PATH_FIELDS = {"output_path", "seed_path", "sources_path", "raw_dir", "log_dir"}
_ENV_OVERRIDES = {
    "ROBODAILY_OUTPUT": "output_path",
    "ROBODAILY_PACING_SECONDS": "pacing_seconds",
    "ROBODAILY_USER_AGENT": "user_agent",
}


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from yaml, then apply environment overrides.

    Unknown keys are ignored; values that fail to convert keep their default.
    """
    path = path or SETTINGS_PATH
    data: dict = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    for env_name, field_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[field_name] = value

    defaults = Settings()
    updates = {}
    for f in fields(Settings):
        if f.name not in data:
            continue
        converted = _convert(f.name, data[f.name], getattr(defaults, f.name))
        if converted is not None:
            updates[f.name] = converted

    return replace(defaults, **updates)


def _convert(name: str, value, default):
    if name in _PATH_FIELDS:
        p = Path(str(value))
        # Relative config paths resolve against config/, data paths against cwd
        if name in ("seed_path", "sources_path") and not p.is_absolute():
            p = CONFIG_DIR / p
        return p
    try:
        return type(default)(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid value for {name}: {value!r}, using {default!r}")
        return None


_settings: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, loaded on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
