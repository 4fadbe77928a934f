from __future__ import annotations

"""Shared helpers for configuration loading and validation.

``expect_*`` helpers check the raw YAML type while loading; ``require_*``
helpers check value constraints in the ``check_<domain>`` functions. All of
them name the full dotted key in their error message.
"""

from typing import Any, Mapping

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a top-level section of the config.

    Args:
        raw: Root configuration mapping.
        key: Section name.
        required: Whether a missing section is an error.

    Returns:
        The section, or an empty mapping for a missing optional section.

    Raises:
        ValueError: If a required section is missing.
        TypeError: If the section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field]


def expect_str(value: Any, config_key: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_optional_str(value: Any, config_key: str) -> str | None:
    """Validate a string that may be null; blank strings become None."""
    if value is None:
        return None
    return expect_str(value, config_key).strip() or None


def expect_bool(value: Any, config_key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    # bool is an int subclass; YAML `yes` must not pass as 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_float(value: Any, config_key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{config_key} must be a number")
    return float(value)


def require_non_blank(value: str, config_key: str) -> None:
    if not value.strip():
        raise ValueError(f"{config_key} must not be empty")


def require_positive(value: float, config_key: str) -> None:
    if value <= 0:
        raise ValueError(f"{config_key} must be positive")


def require_log_level(value: str, config_key: str) -> None:
    if value not in _LOG_LEVELS:
        raise ValueError(f"{config_key} must be one of {list(_LOG_LEVELS)}")
