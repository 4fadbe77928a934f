"""Accent-insensitive highlighting of search terms.

Matching runs on a diacritic-stripped copy of the text while the output is
assembled from the original text, so accents survive inside and outside the
markers.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Sequence

from SampaSearch.core.query import MIN_TERM_LENGTH, split_terms
from SampaSearch.utils.text import strip_diacritics, strip_with_offsets

Highlight = Callable[[str], str]

DEFAULT_OPEN = "<mark>"
DEFAULT_CLOSE = "</mark>"


def _identity(text: str) -> str:
    return text


class Highlighter:
    """Factory for highlight functions wrapping matches in a marker pair."""

    def __init__(self, open_marker: str = DEFAULT_OPEN, close_marker: str = DEFAULT_CLOSE) -> None:
        if not open_marker or not close_marker:
            raise ValueError("highlight markers must not be empty")
        self.open_marker = open_marker
        self.close_marker = close_marker

    def build(self, terms: Iterable[str]) -> Highlight:
        """Build a highlight function for explicit terms.

        Terms of length <= 1 are ignored. Alternation order follows ``terms``,
        so on a tie the earlier term wins.

        Args:
            terms: Terms to mark, typically chosen by the backend.

        Returns:
            Function mapping text to marked text, or the identity function when
            no usable term remains.
        """
        patterns: list[str] = []
        for term in terms:
            plain = strip_diacritics(term or "")
            if len(plain) >= MIN_TERM_LENGTH:
                patterns.append(re.escape(plain))
        if not patterns:
            return _identity

        regex = re.compile("|".join(patterns), re.IGNORECASE)
        return lambda text: self._mark(regex, text)

    def build_from_query(self, query: str) -> Highlight:
        """Build a highlight function from a raw user query."""
        return self.build(split_terms(strip_diacritics(query)))

    def for_batch(self, highlight_terms: Sequence[str], query: str) -> Highlight:
        """Prefer backend-chosen terms, falling back to the query."""
        if highlight_terms:
            return self.build(highlight_terms)
        return self.build_from_query(query)

    def unmark(self, text: str) -> str:
        """Remove every marker inserted by this highlighter."""
        return text.replace(self.open_marker, "").replace(self.close_marker, "")

    def _mark(self, regex: re.Pattern[str], text: str) -> str:
        if not text:
            return text
        plain, offsets = strip_with_offsets(text)
        parts: list[str] = []
        last = 0
        for match in regex.finditer(plain):
            if match.start() == match.end():
                continue
            start = offsets[match.start()]
            end = offsets[match.end()]
            parts.append(text[last:start])
            parts.append(self.open_marker)
            parts.append(text[start:end])
            parts.append(self.close_marker)
            last = end
        parts.append(text[last:])
        return "".join(parts)
