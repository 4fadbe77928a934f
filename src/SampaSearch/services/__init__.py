"""Search session services.

Provides the session controller, its collaborators, and a factory wiring
them to the HTTP backend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from SampaSearch.core.highlight import Highlighter
from SampaSearch.services.controller import SearchSessionController, SessionPhase, SessionState
from SampaSearch.services.filters import FilterExclusionStore
from SampaSearch.services.loop import EventLoop
from SampaSearch.services.stream import StreamSession, StreamTransport

if TYPE_CHECKING:
    from SampaSearch.config import AppConfig
    from SampaSearch.renderers.base import Presenter
    from SampaSearch.sources.backend.client import BackendApiClient


def create_controller(
    config: AppConfig,
    presenter: Presenter,
    loop: EventLoop,
    client: BackendApiClient,
) -> SearchSessionController:
    """Create a controller streaming from the configured backend.

    Args:
        config: Application configuration.
        presenter: Presentation boundary receiving display state.
        loop: Event loop the stream workers post to.
        client: Backend client shared with the config loader.

    Returns:
        Controller waiting for ``on_config_loaded``.
    """
    from SampaSearch.sources.backend.transport import SseTransport

    return SearchSessionController(
        transport=SseTransport(client, loop),
        presenter=presenter,
        highlighter=Highlighter(config.display.highlight_open, config.display.highlight_close),
        exclusions=FilterExclusionStore(),
        fallback_page_size=config.backend.fallback_page_size,
    )


__all__ = [
    "EventLoop",
    "FilterExclusionStore",
    "SearchSessionController",
    "SessionPhase",
    "SessionState",
    "StreamSession",
    "StreamTransport",
    "create_controller",
]
