"""View models for the presentation boundary.

Display-ready structures with highlighting already applied, so presenters
never see raw query terms.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class ResultView:
    """One rendered result card.

    Attributes:
        position: 1-based position across all loaded pages.
        heading: Highlighted "N. TIPO numero/ano" line.
        author: Highlighted author line.
        summary: Highlighted summary.
        keywords: Highlighted, lowercased keywords.
        pdf_url: Initial proposition PDF.
        portal_url: Council portal page.
        splegis_url: SPLegis page.
    """

    position: int
    heading: str
    author: str
    summary: str
    keywords: Sequence[str]

    pdf_url: str | None
    portal_url: str | None
    splegis_url: str | None
