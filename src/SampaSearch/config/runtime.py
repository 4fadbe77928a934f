"""Logging configuration (``log`` section)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SampaSearch.config.common import (
    expect_bool,
    expect_optional_str,
    expect_str,
    get_required_value,
    get_section,
    require_log_level,
    require_non_blank,
)


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Logging settings.

    Attributes:
        level: Level of the project logger and of the file mirror.
        to_file: Whether to mirror logs under ``dir``.
        dir: Base directory of log files.
        console_level: Terminal threshold; None lets each command choose.
    """

    level: str
    to_file: bool
    dir: str
    console_level: str | None = None


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    section = get_section(raw, "log", required=True)
    console_level = expect_optional_str(section.get("console_level"), "log.console_level")
    return RuntimeConfig(
        level=expect_str(get_required_value(section, "level", "log.level"), "log.level").upper(),
        to_file=expect_bool(get_required_value(section, "to_file", "log.to_file"), "log.to_file"),
        dir=expect_str(get_required_value(section, "dir", "log.dir"), "log.dir"),
        console_level=console_level.upper() if console_level else None,
    )


def check_runtime(config: RuntimeConfig) -> None:
    require_log_level(config.level, "log.level")
    if config.console_level is not None:
        require_log_level(config.console_level, "log.console_level")
    require_non_blank(config.dir, "log.dir")
