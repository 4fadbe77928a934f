"""Threaded server-sent event transport and config loader.

Each open stream is read by a daemon worker thread; every event is posted
to the `EventLoop` so that stream callbacks only ever run on the loop's
thread.
"""

from __future__ import annotations

import threading
from typing import Callable

import requests

from SampaSearch.core.errors import ConfigUnavailable, TransportError
from SampaSearch.core.models import PageRequest
from SampaSearch.services.loop import EventLoop
from SampaSearch.sources.backend.client import BackendApiClient
from SampaSearch.sources.backend.parser import build_stream_params, iter_sse_data
from SampaSearch.utils.log import log


class SseStreamHandle:
    """Handle on one worker-read event stream."""

    def __init__(self) -> None:
        self._closed = threading.Event()
        self._lock = threading.Lock()
        self._response: requests.Response | None = None

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def attach(self, response: requests.Response) -> bool:
        """Attach the live response; returns False if already closed."""
        with self._lock:
            if self._closed.is_set():
                response.close()
                return False
            self._response = response
            return True

    def close(self) -> None:
        with self._lock:
            if self._closed.is_set():
                return
            self._closed.set()
            response, self._response = self._response, None
        if response is not None:
            response.close()


class SseTransport:
    """`StreamTransport` reading the backend event stream over HTTP."""

    def __init__(self, client: BackendApiClient, loop: EventLoop) -> None:
        self.client = client
        self.loop = loop

    def open(
        self,
        request: PageRequest,
        on_message: Callable[[str], None],
        on_error: Callable[[Exception], None],
    ) -> SseStreamHandle:
        handle = SseStreamHandle()
        worker = threading.Thread(
            target=self._read,
            args=(handle, build_stream_params(request), on_message, on_error),
            name=f"sse-{request.query[:16]}-{request.page_index}",
            daemon=True,
        )
        worker.start()
        return handle

    def _read(
        self,
        handle: SseStreamHandle,
        params: dict[str, str],
        on_message: Callable[[str], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        def deliver(callback: Callable, arg: object) -> None:
            if not handle.closed:
                callback(arg)

        try:
            response = self.client.open_stream(params)
            if not handle.attach(response):
                return
            response.encoding = response.encoding or "utf-8"
            for data in iter_sse_data(response.iter_lines(decode_unicode=True)):
                if handle.closed:
                    return
                self.loop.post(deliver, on_message, data)
        except (TransportError, requests.RequestException, OSError, ValueError) as error:
            if handle.closed:
                log.debug("Stream read stopped after close: %s", error)
                return
            self.loop.post(deliver, on_error, error)
            return

        if not handle.closed:
            self.loop.post(deliver, on_error, TransportError("Stream ended before a complete batch"))


def load_remote_config(
    client: BackendApiClient,
    loop: EventLoop,
    on_loaded: Callable[[int | None], None],
) -> threading.Thread:
    """Fetch the backend configuration in the background.

    Failure is tolerated: ``on_loaded(None)`` is posted so the caller falls
    back to its default page size.

    Returns:
        The started worker thread.
    """

    def _fetch() -> None:
        try:
            page_size = client.fetch_config()
        except ConfigUnavailable as error:
            log.warning("Backend config unavailable, using fallback page size: %s", error)
            page_size = None
        loop.post(on_loaded, page_size)

    worker = threading.Thread(target=_fetch, name="config-loader", daemon=True)
    worker.start()
    return worker
