"""Application configuration management."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"

# WoW Chat Log relative path inside WoW install
_CHATLOG_RELATIVE = "_retail_/Logs/WoWChatLog.txt"

# Environment overrides (.env is loaded by main)
ENV_CONFIG = "WLH_CONFIG"
_ENV_OVERRIDES = {
    "WLH_CHATLOG": "chatlog_path",
    "WLH_WOW_PATH": "wow_path",
    "WLH_LOCALE": "locale",
    "WLH_PLAYER_NAME": "player_name",
    "WLH_PLAYER_CLASS": "player_class",
}


_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


def _coerce(value: object, default: object) -> object:
    """Convert a JSON value to the type of the field default. Raises ValueError."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS | _FALSE_STRINGS:
            return value.strip().lower() in _TRUE_STRINGS
        raise ValueError(f"expected true/false, got {value!r}")
    if isinstance(default, int):
        if isinstance(value, bool):
            raise ValueError(f"expected a number, got {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            return int(value.strip())
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(default, str):
        if isinstance(value, str):
            return value
        raise ValueError(f"expected text, got {value!r}")
    return value


@dataclass
class AppConfig:
    """Application settings."""

    # Client
    locale: str = "enUS"
    player_name: str = ""
    player_class: str = ""

    # Paths
    wow_path: str = ""
    chatlog_path: str = ""

    # History
    track_direct_loot: bool = True
    min_quality: int = 2  # uncommon
    auto_show: bool = False
    history_size: int = 500

    # Debug
    show_debug_console: bool = False

    def save(self, path: str = CONFIG_FILE) -> None:
        """Save config to JSON file."""
        Path(path).write_text(
            json.dumps(asdict(self), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    @classmethod
    def load(cls, path: str = CONFIG_FILE) -> AppConfig:
        """Load config from JSON file, using defaults for missing fields.

        Unknown keys are ignored; a value of the wrong type keeps the field default.
        An unreadable file gives the defaults.
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (FileNotFoundError, json.JSONDecodeError):
            return cls()
        if not isinstance(data, dict):
            logger.warning("Config %s is not a JSON object, using defaults", path)
            return cls()
        defaults = asdict(cls())
        for key, value in data.items():
            if key not in defaults:
                continue
            try:
                defaults[key] = _coerce(value, defaults[key])
            except ValueError as e:
                logger.warning("Config %s: bad %s (%s), using default", path, key, e)
        return cls(**defaults)

    def with_env_overrides(self, environ: dict[str, str] | None = None) -> AppConfig:
        """Return a copy with WLH_* environment variables applied."""
        env = os.environ if environ is None else environ
        data = asdict(self)
        for var, name in _ENV_OVERRIDES.items():
            value = env.get(var)
            if value:
                data[name] = value
        return AppConfig(**data)


def resolve_config_path(environ: dict[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    return env.get(ENV_CONFIG) or CONFIG_FILE


def resolve_chatlog_path(config: AppConfig) -> Path:
    """Resolve the WoW Chat Log file path from config."""
    if config.chatlog_path:
        return Path(config.chatlog_path)

    if config.wow_path:
        return Path(config.wow_path) / _CHATLOG_RELATIVE

    return Path("WoWChatLog.txt")
