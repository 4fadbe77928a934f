"""Display domain configuration (highlight markers, paging limits)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SampaSearch.config.common import (
    expect_int,
    expect_str,
    get_section,
    require_non_blank,
    require_positive,
)
from SampaSearch.core.highlight import DEFAULT_CLOSE, DEFAULT_OPEN


@dataclass(frozen=True, slots=True)
class DisplayConfig:
    """Presentation settings."""

    highlight_open: str
    highlight_close: str
    max_pages: int


def load_display(raw: Mapping[str, Any]) -> DisplayConfig:
    """Load the optional ``display`` section."""
    section = get_section(raw, "display", required=False)
    return DisplayConfig(
        highlight_open=expect_str(section.get("highlight_open", DEFAULT_OPEN), "display.highlight_open"),
        highlight_close=expect_str(section.get("highlight_close", DEFAULT_CLOSE), "display.highlight_close"),
        max_pages=expect_int(section.get("max_pages", 1), "display.max_pages"),
    )


def check_display(config: DisplayConfig) -> None:
    require_non_blank(config.highlight_open, "display.highlight_open")
    require_non_blank(config.highlight_close, "display.highlight_close")
    require_positive(config.max_pages, "display.max_pages")
