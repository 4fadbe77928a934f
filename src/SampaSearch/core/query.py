from __future__ import annotations

import re

from SampaSearch.core.errors import QueryValidationError

_WS_RE = re.compile(r"\s+")

MIN_TERM_LENGTH = 2


def normalize_query(text: str | None) -> str | None:
    """Return the trimmed query, or ``None`` when nothing is left."""
    if text is None:
        return None
    query = text.strip()
    return query or None


def require_query(text: str | None) -> str:
    """Return the trimmed query.

    Raises:
        QueryValidationError: If the query is empty after trimming. The
            backend treats blank queries as a no-op, so they are never sent.
    """
    query = normalize_query(text)
    if query is None:
        raise QueryValidationError("Query must not be empty")
    return query


def split_terms(query: str) -> list[str]:
    """Split a raw query into highlightable terms.

    Tokens are separated by whitespace; single-character tokens are dropped
    because they match almost everywhere.
    """
    return [token for token in _WS_RE.split(query) if len(token) >= MIN_TERM_LENGTH]
