"""In-memory cache for catalog settings."""

from __future__ import annotations

import os
import threading
from typing import Any

from utils.file_utils import load_json

DEFAULT_SETTINGS_PATH = "config/app_settings.json"

DEFAULT_SETTINGS: dict[str, Any] = {
    "log_level": "INFO",
    "log_command_debug": False,
    "osascript_path": "osascript",
    "osascript_timeout_secs": 30.0,
    "reject_unknown_parameters": True,
    "serialize_execution": True,
}

# env var -> (setting key, converter)
_ENV_OVERRIDES = {
    "SCRIPT_CONTROLLER_LOG_LEVEL": ("log_level", str),
    "SCRIPT_CONTROLLER_TIMEOUT_SECS": ("osascript_timeout_secs", float),
    "SCRIPT_CONTROLLER_OSASCRIPT": ("osascript_path", str),
}

_lock = threading.RLock()
_settings_cache: dict[str, Any] = {}


def settings_path() -> str:
    return os.getenv("SCRIPT_CONTROLLER_SETTINGS", DEFAULT_SETTINGS_PATH)


def refresh_settings() -> dict[str, Any]:
    """Reload settings from disk and the environment and replace the cache."""
    data = load_json(settings_path())
    merged = dict(DEFAULT_SETTINGS)
    merged.update(data)
    for env_name, (key, convert) in _ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is None or not raw.strip():
            continue
        try:
            merged[key] = convert(raw.strip())
        except ValueError:
            raise ValueError(f"{env_name} has an invalid value: {raw!r}")
    with _lock:
        _settings_cache.clear()
        _settings_cache.update(merged)
        return dict(_settings_cache)


def get_settings() -> dict[str, Any]:
    """Return a copy of the cached settings."""
    with _lock:
        if not _settings_cache:
            refresh_settings()
        return dict(_settings_cache)


def get_setting(key: str, default: Any = None) -> Any:
    return get_settings().get(key, default)


def is_deep_logging() -> bool:
    """Return True when log_level requests deep tracing."""
    level = str(get_settings().get("log_level", "")).upper()
    return level in {"DEEP"}


def deep_log(message: str) -> None:
    """Emit a DEEP trace line when deep logging is on."""
    if not is_deep_logging():
        return
    from utils.log_utils import tprint

    tprint(message)
