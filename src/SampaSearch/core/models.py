from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

AppliedFilters = Mapping[str, Sequence[str]]
"""Filter category -> ordered values reported by the backend."""

FILTER_CATEGORIES: tuple[str, ...] = ("Autor", "Ano", "Tipo", "Número")


@dataclass(frozen=True, slots=True)
class ResultLinks:
    """Outbound links for one legislative project.

    Attributes:
        splegis: URL of the project in SPLegis.
        portal: URL of the project in the council portal.
        pdf: URL of the initial proposition PDF.
    """

    splegis: Optional[str] = None
    portal: Optional[str] = None
    pdf: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ResultItem:
    """One legislative project as delivered by the stream.

    The controller does not inspect these fields; they only flow to the
    highlighter and the presentation boundary.

    Attributes:
        id: Backend identifier if provided.
        type: Proposition type (e.g. "PL", "PDL").
        number: Proposition number.
        year: Proposition year.
        author: Author names as one display string.
        summary: Summary text ("ementa").
        keywords: Keyword list.
        links: Outbound links.
    """

    id: Optional[int]
    type: Optional[str]
    number: Optional[int]
    year: Optional[int]
    author: Optional[str]
    summary: str = ""
    keywords: Sequence[str] = ()
    links: ResultLinks = ResultLinks()


class BatchKind(str, Enum):
    """Kind of a streamed result batch, matching ``resultType`` on the wire."""

    EXACT = "exact"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ResultBatch:
    """One message of the search stream.

    Attributes:
        kind: Exact (provisional), Complete (terminal) or Error.
        items: Result items in backend order.
        has_more: Whether further pages exist.
        applied_filters: Filters the backend derived for the query, if any.
        highlight_terms: Terms the backend chose for highlighting, if any.
    """

    kind: BatchKind
    items: Sequence[ResultItem] = ()
    has_more: bool = False
    applied_filters: Optional[AppliedFilters] = None
    highlight_terms: Sequence[str] = ()

    @property
    def is_terminal(self) -> bool:
        return self.kind is not BatchKind.EXACT


@dataclass(frozen=True, slots=True)
class PageRequest:
    """One (query, page) request against the streaming endpoint.

    Attributes:
        query: Trimmed, non-empty query.
        page_index: 0-based page index.
        page_size: Page size in effect for the session.
        excluded_filters: Snapshot of excluded filter values at request time.
    """

    query: str
    page_index: int
    page_size: int
    excluded_filters: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.page_index < 0:
            raise ValueError("page_index must be >= 0")
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")
        snapshot = {k: tuple(v) for k, v in self.excluded_filters.items() if v}
        object.__setattr__(self, "excluded_filters", MappingProxyType(snapshot))

    @property
    def has_exclusions(self) -> bool:
        return bool(self.excluded_filters)
