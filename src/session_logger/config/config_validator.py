"""
Logger Configuration Validator.

Checks the structure of a ``logger-config.yml`` file before its values
are handed to ``SessionLogger.start``.
"""

from __future__ import annotations

from typing import Any

# Expected type of every known key
KNOWN_KEYS: dict[str, type] = {
    "name": str,
    "debug": bool,
    "directory": str,
    "force_ansi": bool,
}


def validate_logger_config(config: Any) -> list[str]:
    """
    Validate a loaded logger configuration.

    :param config: Whatever ``yaml.safe_load`` returned for the file.
    :return: List of error messages (empty if valid)

    Example:
        >>> validate_logger_config({"name": "Bot", "debug": True})
        []
        >>> validate_logger_config({"debug": "yes"})
        ["'debug' must be of type bool, got str"]
    """
    errors: list[str] = []
    if config is None:
        return errors

    if not isinstance(config, dict):
        errors.append("Config must be a dictionary")
        return errors

    for key, value in config.items():
        expected = KNOWN_KEYS.get(key)
        if expected is None:
            errors.append(f"Unknown key '{key}'")
            continue
        if not isinstance(value, expected):
            errors.append(
                f"'{key}' must be of type {expected.__name__}, got {type(value).__name__}"
            )

    if isinstance(config.get("name"), str) and not config["name"].strip():
        errors.append("'name' must not be empty")

    return errors
