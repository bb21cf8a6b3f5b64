"""
Configuration loader for vc_release_helper.

User preferences are stored in a JSON file named
``.version-control-config.json`` in the user's home directory. The only
setting today is ``language``, which selects the translation used for
terminal output.

A missing file is not an error: it simply means nothing has been
configured yet. An unreadable or malformed file, or an unsupported
language value, raises :class:`ConfigError`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where the root logger is not configured. The CLI configures logging.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILENAME = ".version-control-config.json"

SUPPORTED_LANGUAGES = ("en", "pt", "es", "fr")


class ConfigError(Exception):
    """Raised when the configuration file cannot be read, parsed or written."""

    pass


def _get_config_path() -> Path:
    """Return the location of the per-user configuration file."""
    return Path.home() / CONFIG_FILENAME


def load_config() -> Dict[str, Any]:
    """Load the user configuration.

    Returns
    -------
    Dict[str, Any]
        The parsed configuration, or an empty dictionary when the file
        does not exist.

    Raises
    ------
    ConfigError
        If the file is unreadable, not a JSON object, or holds an
        unsupported ``language``.
    """
    config_path = _get_config_path()
    if not config_path.exists():
        logger.debug("No configuration file at %s", config_path)
        return {}

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    language = data.get("language")
    if language is not None and language not in SUPPORTED_LANGUAGES:
        raise ConfigError(
            f"Unsupported language '{language}'. Available: {', '.join(SUPPORTED_LANGUAGES)}"
        )

    logger.debug("Loaded configuration from: %s", config_path)
    return data


def save_config(data: Dict[str, Any]) -> None:
    """Write ``data`` to the configuration file.

    Raises
    ------
    ConfigError
        If the file cannot be written.
    """
    config_path = _get_config_path()
    try:
        config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to write configuration file: %s", exc)
        raise ConfigError(f"Failed to write config file: {exc}") from exc
    logger.debug("Saved configuration to: %s", config_path)


def get_configured_language() -> Optional[str]:
    """Return the configured language code, or ``None`` when unset."""
    return load_config().get("language")


def set_language(language: str) -> None:
    if language not in SUPPORTED_LANGUAGES:
        raise ConfigError(
            f"Unsupported language '{language}'. Available: {', '.join(SUPPORTED_LANGUAGES)}"
        )
    data = load_config()
    data["language"] = language
    save_config(data)


def clear_language() -> None:
    """Remove the language setting so the system language is used again."""
    data = load_config()
    data.pop("language", None)
    save_config(data)
