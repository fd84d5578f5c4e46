"""User configuration persistence: load and save the JSON preferences file."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from tissuebox.models import CONFIG_APP_NAME, DEFAULT_STORE_FILENAME, UserConfig

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Persistence
# ============================================================================
#
# Validation contract: _dict_to_config() returns a usable UserConfig for any
# JSON object. Scalar fields are type-checked via _safe_get(); theme_name must
# name a known theme; command fields must be non-blank.
#
CONFIG_FILENAME = "config.json"
KNOWN_THEME_NAMES = ("monokai", "catppuccin-mocha", "solarized-dark")


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/tissuebox/config.json
    - macOS: ~/Library/Application Support/tissuebox/config.json
    - Windows: %APPDATA%/tissuebox/config.json
    """
    return Path(user_config_dir(CONFIG_APP_NAME)) / CONFIG_FILENAME


def _config_to_dict(config: UserConfig) -> dict[str, Any]:
    return {
        "version": config.version,
        "theme_name": config.theme_name,
        "default_input": config.default_input,
        "clipboard_enabled": config.clipboard_enabled,
        "git_command": config.git_command,
        "gh_command": config.gh_command,
    }


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if not isinstance(value, expected_type):
        return default
    return value


def _non_blank(data: dict, key: str, default: str) -> str:
    value = _safe_get(data, key, default, str)
    return value if value.strip() else default


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Deserialize a dictionary to UserConfig with type validation."""
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    theme_name = _safe_get(data, "theme_name", "monokai", str)
    if theme_name not in KNOWN_THEME_NAMES:
        logger.warning("Unknown theme %r in config, using monokai", theme_name)
        theme_name = "monokai"
    return UserConfig(
        theme_name=theme_name,
        default_input=_non_blank(data, "default_input", DEFAULT_STORE_FILENAME),
        clipboard_enabled=_safe_get(data, "clipboard_enabled", True, bool),
        git_command=_non_blank(data, "git_command", "git"),
        gh_command=_non_blank(data, "gh_command", "gh"),
        version=_safe_get(data, "version", 1, int),
    )


def load_config(config_path: Path | None = None) -> UserConfig:
    """Load configuration from disk.

    Returns default config if the file doesn't exist. A corrupt or unreadable
    file also yields defaults, flagged with ``config_defaulted`` so the session
    can tell the user.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        return _dict_to_config(data)
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
    except (KeyError, TypeError) as e:
        logger.warning("Config file has invalid structure, using defaults: %s", e)
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
    return UserConfig(config_defaulted=True)


def save_config(config: UserConfig, config_path: Path | None = None) -> bool:
    """Save configuration to disk atomically.

    Creates the config directory if it doesn't exist.
    Returns True on success, False on failure.
    """
    config_path = config_path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        json_str = json.dumps(_config_to_dict(config), indent=2, ensure_ascii=False)
        fd, tmp_path = tempfile.mkstemp(dir=config_path.parent, suffix=".tmp", prefix=".config-")
        closed = False
        try:
            os.write(fd, json_str.encode("utf-8"))
            os.close(fd)
            closed = True
            os.replace(tmp_path, config_path)
        except BaseException:
            if not closed:
                os.close(fd)
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        return True
    except OSError as e:
        logger.error("Failed to save config: %s", e)
        return False


__all__ = [
    "CONFIG_APP_NAME",
    "CONFIG_FILENAME",
    "KNOWN_THEME_NAMES",
    "get_config_path",
    "load_config",
    "save_config",
]
