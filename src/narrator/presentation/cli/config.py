"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

_DEFAULT_LOG_LEVEL = "INFO"
_LOG_LEVELS = ("DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR")
_DEBUG_ENV = "NARRATOR_DEBUG"


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Narrator"
        return Path.home() / "Narrator"
    return Path.home() / ".config" / "narrator"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def debug_enabled_from_env() -> bool:
    return os.environ.get(_DEBUG_ENV) == "1"


def _normalize_log_level(value: object) -> str:
    if isinstance(value, str) and value.upper() in _LOG_LEVELS:
        return value.upper()
    return _DEFAULT_LOG_LEVEL


def _defaults() -> Dict[str, Any]:
    return {"log_level": _DEFAULT_LOG_LEVEL, "debug": False}


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return _defaults()
    if not isinstance(raw, dict):
        return _defaults()
    return {
        "log_level": _normalize_log_level(raw.get("log_level")),
        "debug": raw.get("debug") is True,
    }


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "log_level": _normalize_log_level(config.get("log_level")),
        "debug": config.get("debug") is True,
    }
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
