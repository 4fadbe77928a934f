"""Console presenter.

Writes result cards and status changes through the project logger.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from SampaSearch.renderers.base import Presenter
from SampaSearch.renderers.view_models import ResultView
from SampaSearch.utils.log import log


def render_text(views: Sequence[ResultView]) -> str:
    """Render result views into a human-readable text block.

    Args:
        views: Views to render, in display order.

    Returns:
        A formatted string ready to be printed, empty for no views.
    """
    lines: list[str] = []
    for view in views:
        lines.append(view.heading)
        lines.append(f"   Autor(es): {view.author}")
        if view.summary:
            lines.append(f"   {view.summary}")
        if view.keywords:
            lines.append(f"   Palavras-chave: {', '.join(view.keywords)}")
        if view.pdf_url:
            lines.append(f"   Proposição inicial: {view.pdf_url}")
        if view.portal_url:
            lines.append(f"   Portal: {view.portal_url}")
        if view.splegis_url:
            lines.append(f"   SPLegis: {view.splegis_url}")
        lines.append("")
    if not lines:
        return ""
    return "\n".join(lines).rstrip() + "\n"


def render_filters_text(filters: Mapping[str, Sequence[str]]) -> str:
    """Render filter chips as ``Category: a ou b`` lines."""
    return "\n".join(f"{category}: {' ou '.join(values)}" for category, values in filters.items())


class ConsolePresenter(Presenter):
    """Present search state on the console via logging."""

    def __init__(self) -> None:
        self._loading_message = ""
        self._printed = 0

    def render_results(self, views: Sequence[ResultView], *, first_new: int) -> None:
        if first_new == 0:
            if views:
                log.info("--- %d resultado(s) ---", len(views))
        elif first_new < min(self._printed, len(views)):
            # rows already on screen are printed again with their final content
            log.info("--- resultados atualizados ---")
        self._printed = len(views)
        for line in render_text(views[first_new:]).splitlines():
            log.info(line)

    def render_filters(self, filters: Mapping[str, Sequence[str]]) -> None:
        if not filters:
            return
        log.info("Filtros aplicados:")
        for line in render_filters_text(filters).splitlines():
            log.info("  %s", line)

    def show_loading(self, visible: bool, message: str = "") -> None:
        if visible and message and message != self._loading_message:
            log.info(message)
        self._loading_message = message if visible else ""

    def show_error(self, message: str | None) -> None:
        if message:
            log.error(message)

    def show_load_more(self, visible: bool) -> None:
        if visible:
            log.info("Mais resultados disponíveis (:more)")

    def show_end_of_results(self, visible: bool) -> None:
        if visible:
            log.info("Fim dos resultados.")
