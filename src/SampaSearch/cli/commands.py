"""Command implementations for the SampaSearch CLI.

Drive a `SearchSessionController` from the command line, separated from
click parameter handling and component wiring.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TextIO

from SampaSearch.services.controller import SearchSessionController
from SampaSearch.services.loop import EventLoop
from SampaSearch.utils.log import log


def _settled(controller: SearchSessionController) -> bool:
    state = controller.state
    return controller.config_loaded and state.pending_request is None and not state.is_loading


@dataclass(slots=True)
class SearchCommand:
    """Run one query and page through results until exhausted or capped."""

    controller: SearchSessionController
    loop: EventLoop
    max_pages: int = 1

    def execute(self, query: str) -> int:
        """Execute the query.

        Args:
            query: Raw user query.

        Returns:
            Number of results rendered.
        """
        if not self.controller.submit_manual_query(query):
            log.warning("Empty query, nothing to search")
            return 0

        pages = 1
        self.loop.run_until(lambda: _settled(self.controller))
        while pages < self.max_pages and self.controller.load_next_page():
            pages += 1
            self.loop.run_until(lambda: _settled(self.controller))

        log.debug("Search command finished: pages=%d rendered=%d", pages, self.controller.state.rendered_result_count)
        return self.controller.state.rendered_result_count


@dataclass(slots=True)
class InteractiveCommand:
    """Line-oriented session.

    Input lines are read on a worker thread and posted to the event loop, so
    ``:cancel`` can interrupt a stream that is still delivering.

    Commands:
        ``<text>``           new query
        ``:more``            load next page
        ``:rm CAT=VALUE``    remove a filter chip
        ``:cancel``          cancel the running search
        ``:quit``            leave
    """

    controller: SearchSessionController
    loop: EventLoop
    _stopped: bool = field(default=False, init=False)

    def execute(self, stream: TextIO) -> None:
        reader = threading.Thread(target=self._read, args=(stream,), name="stdin-reader", daemon=True)
        reader.start()
        self.loop.run_until(lambda: self._stopped)
        self.controller.cancel_active_search()

    def handle_line(self, line: str) -> None:
        text = line.strip()
        if not text:
            return
        if text in (":q", ":quit"):
            self.stop()
        elif text == ":more":
            if not self.controller.load_next_page():
                log.info("Nada mais para carregar agora.")
        elif text == ":cancel":
            self.controller.cancel_active_search()
        elif text.startswith(":rm "):
            category, sep, value = text[4:].partition("=")
            if not sep or not category.strip() or not value.strip():
                log.warning("Uso: :rm CATEGORIA=VALOR")
                return
            self.controller.remove_filter_value(category.strip(), value.strip())
        elif text.startswith(":"):
            log.warning("Comando desconhecido: %s", text)
        else:
            self.controller.submit_manual_query(text)

    def stop(self) -> None:
        self._stopped = True

    def _read(self, stream: TextIO) -> None:
        for line in stream:
            self.loop.post(self.handle_line, line)
        self.loop.post(self.stop)
