"""Backend domain configuration (endpoints, timeouts, page size fallback)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from SampaSearch.config.common import (
    expect_float,
    expect_int,
    expect_optional_str,
    expect_str,
    get_required_value,
    get_section,
    require_non_blank,
    require_positive,
)


@dataclass(frozen=True, slots=True)
class BackendConfig:
    """Store validated backend connection settings.

    Attributes:
        base_url: Backend root URL, after the environment override.
        base_url_env: Environment variable that overrides ``base_url``.
        config_path: Path of the configuration endpoint.
        stream_path: Path of the streaming search endpoint.
        connect_timeout: Connect timeout in seconds.
        fallback_page_size: Page size used when the backend reports none.
    """

    base_url: str
    base_url_env: str | None
    config_path: str
    stream_path: str
    connect_timeout: float
    fallback_page_size: int


def load_backend(raw: Mapping[str, Any]) -> BackendConfig:
    """Load the ``backend`` section.

    When ``backend.base_url_env`` names a set environment variable, its
    value replaces ``backend.base_url``.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "backend", required=True)
    base_url_env = expect_optional_str(section.get("base_url_env"), "backend.base_url_env")
    base_url = expect_str(get_required_value(section, "base_url", "backend.base_url"), "backend.base_url")
    if base_url_env and os.getenv(base_url_env):
        base_url = os.environ[base_url_env]
    return BackendConfig(
        base_url=base_url.strip(),
        base_url_env=base_url_env,
        config_path=expect_str(section.get("config_path", "/api/config"), "backend.config_path"),
        stream_path=expect_str(section.get("stream_path", "/api/search/stream"), "backend.stream_path"),
        connect_timeout=expect_float(section.get("connect_timeout", 10), "backend.connect_timeout"),
        fallback_page_size=expect_int(section.get("fallback_page_size", 10), "backend.fallback_page_size"),
    )


def check_backend(config: BackendConfig) -> None:
    require_non_blank(config.base_url, "backend.base_url")
    if not config.base_url.startswith(("http://", "https://")):
        raise ValueError("backend.base_url must be an http(s) URL")
    require_non_blank(config.config_path, "backend.config_path")
    require_non_blank(config.stream_path, "backend.stream_path")
    require_positive(config.connect_timeout, "backend.connect_timeout")
    require_positive(config.fallback_page_size, "backend.fallback_page_size")
