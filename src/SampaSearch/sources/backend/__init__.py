"""HTTP adapter for the legislative-project search backend."""

from __future__ import annotations

from SampaSearch.sources.backend.client import BackendApiClient
from SampaSearch.sources.backend.parser import (
    build_stream_params,
    iter_sse_data,
    parse_batch,
    parse_config_payload,
)
from SampaSearch.sources.backend.transport import SseStreamHandle, SseTransport, load_remote_config


def create_backend_client(config) -> BackendApiClient:
    """Create a backend client from the ``backend`` config section."""
    backend = config.backend
    return BackendApiClient(
        backend.base_url,
        config_path=backend.config_path,
        stream_path=backend.stream_path,
        connect_timeout=backend.connect_timeout,
    )


__all__ = [
    "BackendApiClient",
    "SseStreamHandle",
    "SseTransport",
    "build_stream_params",
    "create_backend_client",
    "iter_sse_data",
    "load_remote_config",
    "parse_batch",
    "parse_config_payload",
]
