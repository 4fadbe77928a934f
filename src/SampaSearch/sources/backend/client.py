"""Search backend HTTP client.

Fetches the remote configuration (with retry/backoff) and opens the
server-sent event stream of a search request (never retried).
"""

from __future__ import annotations

import random
import time
from typing import Mapping

import requests

from SampaSearch.core.errors import ConfigUnavailable, TransportError
from SampaSearch.sources.backend.parser import parse_config_payload
from SampaSearch.utils.log import log

DEFAULT_CONNECT_TIMEOUT = 10.0
CONFIG_MAX_ATTEMPTS = 3
BASE_PAUSE = 0.5
MAX_SLEEP = 4.0
RETRYABLE_STATUS = {429, 500, 502, 503, 504}

HEADERS = {
    "User-Agent": "sampa-search/0.1",
}
STREAM_HEADERS = {
    **HEADERS,
    "Accept": "text/event-stream",
    "Cache-Control": "no-cache",
}


class BackendApiClient:
    """Low-level HTTP client for the search backend.

    Responsible only for network requests; event framing and payload parsing
    are handled by the parser module.
    """

    def __init__(
        self,
        base_url: str,
        *,
        config_path: str = "/api/config",
        stream_path: str = "/api/search/stream",
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client with a reusable HTTP session.

        Args:
            base_url: Backend root URL.
            config_path: Path of the configuration endpoint.
            stream_path: Path of the streaming search endpoint.
            connect_timeout: Connect timeout in seconds. Stream reads have no
                local timeout.
            session: Optional preconfigured session.
        """
        self.base_url = base_url.rstrip("/")
        self.config_url = self.base_url + "/" + config_path.lstrip("/")
        self.stream_url = self.base_url + "/" + stream_path.lstrip("/")
        self.connect_timeout = connect_timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        """Close the underlying HTTP session and release pooled connections."""
        self._session.close()

    def __enter__(self) -> BackendApiClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def fetch_config(self) -> int | None:
        """Fetch the backend configuration.

        Returns:
            ``defaultPageSize`` if the backend reported a usable one, else None.

        Raises:
            ConfigUnavailable: When the endpoint fails after retries or returns
                something other than JSON.
        """
        last_err: Exception | None = None
        for attempt in range(1, CONFIG_MAX_ATTEMPTS + 1):
            try:
                resp = self._session.get(self.config_url, headers=HEADERS, timeout=self.connect_timeout)
                if resp.status_code in RETRYABLE_STATUS:
                    raise requests.HTTPError(f"HTTP {resp.status_code}", response=resp)
                resp.raise_for_status()
                payload = resp.json()
                page_size = parse_config_payload(payload)
                log.debug("Backend config loaded: url=%s defaultPageSize=%s", self.config_url, page_size)
                return page_size
            except (requests.Timeout, requests.ConnectionError) as error:
                last_err = error
            except requests.HTTPError as error:
                last_err = error
                status_code = getattr(error.response, "status_code", None)
                if status_code not in RETRYABLE_STATUS:
                    break
            except ValueError as error:
                raise ConfigUnavailable(f"Config response is not JSON: {error}") from error
            except requests.RequestException as error:
                last_err = error
                break

            if attempt < CONFIG_MAX_ATTEMPTS:
                delay = min(BASE_PAUSE * (2 ** (attempt - 1)) + random.uniform(0, 0.3), MAX_SLEEP)
                log.debug("Config retry attempt=%d/%d delay=%.2fs error=%s", attempt, CONFIG_MAX_ATTEMPTS, delay, last_err)
                time.sleep(delay)

        raise ConfigUnavailable(f"Config request failed: {last_err}") from last_err

    def open_stream(self, params: Mapping[str, str]) -> requests.Response:
        """Open the event stream of one search request.

        Args:
            params: Query parameters built from the page request.

        Returns:
            Streaming response; the caller must close it.

        Raises:
            TransportError: If the connection fails or the status is not 2xx.
        """
        log.debug("Opening search stream: url=%s params=%s", self.stream_url, dict(params))
        try:
            resp = self._session.get(
                self.stream_url,
                params=dict(params),
                headers=STREAM_HEADERS,
                timeout=(self.connect_timeout, None),
                stream=True,
            )
        except requests.RequestException as error:
            raise TransportError(f"Stream connection failed: {error}") from error
        if resp.status_code >= 400:
            resp.close()
            raise TransportError(f"Stream request failed: HTTP {resp.status_code}")
        return resp
