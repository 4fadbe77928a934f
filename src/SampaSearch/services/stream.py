"""One streaming request/response cycle against the search backend."""

from __future__ import annotations

from typing import Callable, Protocol

from SampaSearch.core.errors import BackendError, MalformedPayload, SearchError, TransportError
from SampaSearch.core.models import BatchKind, PageRequest, ResultBatch
from SampaSearch.sources.backend.parser import parse_batch
from SampaSearch.utils.log import session_log

BatchCallback = Callable[[int, ResultBatch], None]
FailureCallback = Callable[[int, SearchError], None]


class StreamHandle(Protocol):
    """Cancellable handle on an open connection."""

    def close(self) -> None:
        """Close the connection; must be idempotent."""
        raise NotImplementedError


class StreamTransport(Protocol):
    """Opens event-stream connections.

    Implementations deliver ``on_message``/``on_error`` on the controller's
    thread, in order, and stop delivering once the handle is closed.
    """

    def open(
        self,
        request: PageRequest,
        on_message: Callable[[str], None],
        on_error: Callable[[Exception], None],
    ) -> StreamHandle:
        """Start the connection without blocking and return its handle."""
        raise NotImplementedError


class StreamSession:
    """Classify inbound events of one request and forward them.

    Exact batches are forwarded as provisional; Complete, Error, malformed
    payloads and transport failures are terminal and close the connection
    before the callback runs. After `cancel` nothing is forwarded.
    """

    def __init__(
        self,
        transport: StreamTransport,
        request: PageRequest,
        *,
        token: int,
        on_batch: BatchCallback,
        on_failure: FailureCallback,
    ) -> None:
        self.transport = transport
        self.request = request
        self.token = token
        self._on_batch = on_batch
        self._on_failure = on_failure
        self._handle: StreamHandle | None = None
        self._closed = False
        self._log = session_log(token)

    @property
    def closed(self) -> bool:
        return self._closed

    def open(self) -> StreamSession:
        """Open the connection; returns immediately."""
        if self._handle is not None:
            raise RuntimeError("StreamSession can only be opened once")
        self._log.debug(
            "Opening stream: q=%r page=%d size=%d excluded=%s",
            self.request.query,
            self.request.page_index,
            self.request.page_size,
            dict(self.request.excluded_filters),
        )
        self._handle = self.transport.open(self.request, self.handle_message, self.handle_transport_error)
        if self._closed:
            self._handle.close()
        return self

    def cancel(self) -> None:
        """Close the connection; safe to call repeatedly."""
        if self._closed:
            return
        self._log.debug("Stream canceled")
        self._close()

    def handle_message(self, data: str) -> None:
        """Classify one inbound event payload."""
        if self._closed:
            self._log.debug("Dropping message for closed stream")
            return
        try:
            batch = parse_batch(data)
        except MalformedPayload as error:
            self._log.warning("Malformed stream payload: %s", error)
            self._close()
            self._on_failure(self.token, error)
            return

        self._log.debug("Batch received: kind=%s items=%d has_more=%s", batch.kind.value, len(batch.items), batch.has_more)
        if batch.kind is BatchKind.EXACT:
            self._on_batch(self.token, batch)
        elif batch.kind is BatchKind.COMPLETE:
            self._close()
            self._on_batch(self.token, batch)
        else:
            self._close()
            self._on_failure(self.token, BackendError("Backend reported an error batch"))

    def handle_transport_error(self, error: Exception) -> None:
        """Treat a connection failure as a terminal error."""
        if self._closed:
            return
        self._log.warning("Stream transport error: %s", error)
        self._close()
        if not isinstance(error, TransportError):
            error = TransportError(str(error))
        self._on_failure(self.token, error)

    def _close(self) -> None:
        self._closed = True
        if self._handle is not None:
            self._handle.close()
