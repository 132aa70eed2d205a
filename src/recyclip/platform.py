"""
Platform utilities for recyclip.

- XDG paths for config, cache (history files) and state (logs)
- Basic display/session detection helpers
"""

from __future__ import annotations

import os
from pathlib import Path


APP_NAME = "recyclip"
SETTINGS_FILENAME = "settings.ini"
LOG_FILENAME = "recyclip.log"


def xdg_config_dir() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def xdg_cache_dir() -> Path:
    base = os.environ.get("XDG_CACHE_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".cache" / APP_NAME


def xdg_state_dir() -> Path:
    base = os.environ.get("XDG_STATE_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".local" / "state" / APP_NAME


def settings_path() -> Path:
    override = os.environ.get("RECYCLIP_CONFIG")
    if override:
        return Path(override).expanduser()
    return xdg_config_dir() / SETTINGS_FILENAME


def log_path() -> Path:
    return xdg_state_dir() / LOG_FILENAME


def is_wayland_session() -> bool:
    if os.environ.get("XDG_SESSION_TYPE", "").lower() == "wayland":
        return True
    if os.environ.get("WAYLAND_DISPLAY"):
        return True
    return False


def display_available() -> bool:
    # Either an X display or a Wayland compositor socket must be advertised.
    return bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))


def active_env_summary() -> str:
    session = "wayland" if is_wayland_session() else os.environ.get("XDG_SESSION_TYPE", "unknown")
    display = os.environ.get("WAYLAND_DISPLAY") or os.environ.get("DISPLAY") or "none"
    return f"session={session}, display={display}"
