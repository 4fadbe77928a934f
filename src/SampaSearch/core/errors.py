"""Error taxonomy for the search session.

None of these are fatal to the controller: stream failures are converted
into a user-facing message and the session returns to a stable state.
"""

from __future__ import annotations


class SearchError(RuntimeError):
    """Base class for search session failures."""

    user_message = "Ocorreu um erro ao realizar a busca."


class QueryValidationError(SearchError, ValueError):
    """Raised for a query that is empty after trimming."""


class ConfigUnavailable(SearchError):
    """Raised when the backend configuration endpoint cannot be used."""


class TransportError(SearchError):
    """Raised for connection-level failures of the event stream."""

    user_message = "Erro de conexão. Tente novamente."


class BackendError(SearchError):
    """Raised when the backend sends an explicit error batch."""


class MalformedPayload(SearchError):
    """Raised when an inbound stream message cannot be parsed."""

    user_message = "Ocorreu um erro ao processar os resultados."
