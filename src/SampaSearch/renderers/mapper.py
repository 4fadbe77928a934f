"""Map result items to highlighted view models."""

from __future__ import annotations

from typing import Sequence

from SampaSearch.core.highlight import Highlight
from SampaSearch.core.models import ResultItem
from SampaSearch.renderers.view_models import ResultView

DEFAULT_TYPE = "PROJETO"
UNKNOWN_AUTHOR = "Não informado"


def map_item_to_view(item: ResultItem, position: int, highlight: Highlight) -> ResultView:
    """Convert one item into a view with every text field highlighted.

    Args:
        item: Result item from the stream.
        position: 1-based position across loaded pages.
        highlight: Highlight function for the batch the item came from.

    Returns:
        Display-ready view.
    """
    number = "" if item.number is None else str(item.number)
    year = "" if item.year is None else str(item.year)
    heading = f"{position}. {item.type or DEFAULT_TYPE} {number}/{year}"
    return ResultView(
        position=position,
        heading=highlight(heading),
        author=highlight(item.author or UNKNOWN_AUTHOR),
        summary=highlight(item.summary),
        keywords=tuple(highlight(keyword.strip().lower()) for keyword in item.keywords),
        pdf_url=item.links.pdf,
        portal_url=item.links.portal,
        splegis_url=item.links.splegis,
    )


def map_items_to_views(
    items: Sequence[ResultItem],
    highlight: Highlight,
    *,
    start: int = 0,
) -> list[ResultView]:
    """Convert a batch, numbering from ``start + 1``."""
    return [map_item_to_view(item, start + idx, highlight) for idx, item in enumerate(items, start=1)]
