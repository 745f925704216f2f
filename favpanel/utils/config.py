"""2025-10-18 - module config en lien avec env."""

# config.py
from __future__ import annotations

from collections.abc import Callable
import os
from pathlib import Path
from typing import TypeVar

from dotenv import load_dotenv

# .env optionnel, surchargé par FAVPANEL_ENV_FILE
load_dotenv(os.getenv("FAVPANEL_ENV_FILE", ".env"))

T = TypeVar("T")
_TRUE = ("true", "1", "yes", "y", "on")


class ConfigError(Exception):
    """
    Erreur de configuration (.env / variables d'environnement).
    """


def get_required(key: str) -> str:
    value = os.getenv(key)
    if value is None:
        raise ConfigError(f"[CONFIG ERROR] The variable {key} is required but missing.")
    return value


def get_str(key: str, default: str = "") -> str:
    return os.getenv(key, default)


def get_bool(key: str, default: str = "false") -> bool:
    return os.getenv(key, default).strip().lower() in _TRUE


def _convert(key: str, default: T, cast: Callable[[str], T], label: str) -> T:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"[CONFIG ERROR] The variable {key} must be {label} (value: {raw!r}).") from exc


def get_int(key: str, default: int = 0) -> int:
    return _convert(key, default, int, "an integer")


def get_float(key: str, default: float = 0.0) -> float:
    return _convert(key, default, float, "a number")


def get_dir(key: str, default: str) -> str:
    """
    Absolute directory read from the env; raises ConfigError when set to a missing directory.
    """
    raw = os.getenv(key)
    if not raw:
        return os.path.abspath(default)
    path = Path(raw).expanduser()
    if not path.is_dir():
        raise ConfigError(f"[CONFIG ERROR] {key} does not point to a directory: {raw}")
    return str(path.resolve())


def default_settings_file(root: str) -> str:
    """
    `<root>/.favpanel/settings.json`
    """
    return (Path(root) / ".favpanel" / "settings.json").as_posix()


# --- Logs ---
LOG_FILE_PATH: str = get_str("LOG_FILE_PATH", "./logs")
LOG_ROTATION_DAYS: int = get_int("LOG_ROTATION_DAYS", 30)
LOG_LEVEL: str = get_str("LOG_LEVEL", "INFO").upper()

# --- Workspace ---
WORKSPACE_ROOT: str = get_dir("FAVPANEL_ROOT", os.getcwd())
SETTINGS_FILE: str = get_str("FAVPANEL_SETTINGS_FILE") or default_settings_file(WORKSPACE_ROOT)
SHOW_HIDDEN: bool = get_bool("FAVPANEL_SHOW_HIDDEN")

# --- Watcher ---
WATCHDOG_POLL_INTERVAL: float = get_float("WATCHDOG_POLL_INTERVAL", 1.0)
WATCHDOG_DEBOUNCE_WINDOW: float = get_float("WATCHDOG_DEBOUNCE_WINDOW", 0.5)
