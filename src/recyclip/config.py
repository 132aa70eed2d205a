"""
Configuration loading for recyclip.

- settings.ini in XDG config dir (~/.config/recyclip/settings.ini),
  overridable with $RECYCLIP_CONFIG or the CLI --config option.

Provides:
- Settings (INI) as a lightweight dict-like wrapper.
- Config, the validated and immutable view the daemon runs with.
- load_config(), which writes the effective settings back so the user
  always finds a complete file to edit.
"""

from __future__ import annotations

import configparser
import io
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .errors import ConfigurationError
from .platform import settings_path, xdg_cache_dir

log = logging.getLogger(__name__)

SECTION = "general"


def default_settings() -> Dict[str, Dict[str, str]]:
    cache = xdg_cache_dir()
    return {
        SECTION: {
            "max_history_length": "25",
            "history_path": str(cache / "history.json"),
            "static_history_path": str(cache / "static_history.txt"),
            "use_primary_selection_as_input": "false",
        },
    }


@dataclass
class Settings:
    config: configparser.ConfigParser
    path: Path

    def get(self, section: str, key: str) -> str:
        return self.config.get(section, key)  # type: ignore[no-any-return]

    def getint(self, section: str, key: str) -> int:
        return self.config.getint(section, key)  # type: ignore[no-any-return]

    def getboolean(self, section: str, key: str) -> bool:
        return self.config.getboolean(section, key)  # type: ignore[no-any-return]

    def as_mapping(self) -> Dict[str, Dict[str, str]]:
        mapping: Dict[str, Dict[str, str]] = {}
        for section in self.config.sections():
            mapping[section] = {}
            for key, val in self.config.items(section):
                mapping[section][key] = val
        return mapping


@dataclass(frozen=True)
class Config:
    max_history_length: int
    history_path: Path
    static_history_path: Path
    use_primary_selection_as_input: bool


def load_settings(path: Optional[Path] = None) -> Settings:
    ini_path = Path(path) if path is not None else settings_path()

    parser = configparser.ConfigParser(interpolation=None)
    # preload defaults
    for section, kv in default_settings().items():
        parser.add_section(section)
        for k, v in kv.items():
            parser.set(section, k, v)

    if ini_path.exists():
        try:
            parser.read(ini_path, encoding="utf-8")
        except (configparser.Error, UnicodeDecodeError) as e:
            raise ConfigurationError(f"cannot parse {ini_path}", e) from e

    return Settings(parser, ini_path)


def config_from_settings(settings: Settings) -> Config:
    try:
        max_len = settings.getint(SECTION, "max_history_length")
    except ValueError as e:
        raise ConfigurationError("general.max_history_length must be an integer", e) from e
    if max_len <= 0:
        raise ConfigurationError("general.max_history_length must be > 0")

    try:
        use_primary = settings.getboolean(SECTION, "use_primary_selection_as_input")
    except ValueError as e:
        raise ConfigurationError("general.use_primary_selection_as_input must be a boolean", e) from e

    history_path = settings.get(SECTION, "history_path").strip()
    static_path = settings.get(SECTION, "static_history_path").strip()
    if not history_path:
        raise ConfigurationError("general.history_path must not be empty")
    if not static_path:
        raise ConfigurationError("general.static_history_path must not be empty")

    return Config(
        max_history_length=max_len,
        history_path=Path(history_path).expanduser(),
        static_history_path=Path(static_path).expanduser(),
        use_primary_selection_as_input=use_primary,
    )


def _write_text_atomic(text: str, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("w", encoding="utf-8", delete=False, dir=path.parent, prefix=path.name + ".") as tf:
        tf.write(text)
        tf.flush()
        os.fsync(tf.fileno())
        tmpname = tf.name
    os.replace(tmpname, path)


def write_settings(settings: Settings) -> None:
    buf = io.StringIO()
    settings.config.write(buf)
    _write_text_atomic(buf.getvalue(), settings.path)


def load_config(path: Optional[Path] = None, write_back: bool = True) -> Config:
    """
    Load, validate and (by default) persist the effective settings.

    Raises ConfigurationError for values that cannot be used. A failed
    write-back is logged and otherwise ignored.
    """
    settings = load_settings(path)
    cfg = config_from_settings(settings)
    if write_back:
        try:
            write_settings(settings)
        except OSError as e:
            log.warning("Could not write settings to %s: %s", settings.path, e)
    return cfg
