"""Presentation boundary of the search session.

The controller pushes display state through this interface; it never reads
anything back from the presenter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Sequence

from SampaSearch.renderers.view_models import ResultView


class Presenter(ABC):
    """Abstract base class for result presenters."""

    @abstractmethod
    def render_results(self, views: Sequence[ResultView], *, first_new: int) -> None:
        """Show the full ordered result set.

        Args:
            views: Every result currently rendered, highlighted.
            first_new: Index in ``views`` of the first entry not shown by the
                previous call; 0 means the set was replaced.
        """

    @abstractmethod
    def render_filters(self, filters: Mapping[str, Sequence[str]]) -> None:
        """Show applied filters (exclusions already removed) as chips."""

    @abstractmethod
    def show_loading(self, visible: bool, message: str = "") -> None:
        """Toggle the loading indicator."""

    @abstractmethod
    def show_error(self, message: str | None) -> None:
        """Show an error message, or hide it when ``message`` is None."""

    @abstractmethod
    def show_load_more(self, visible: bool) -> None:
        """Toggle the "load more" affordance."""

    @abstractmethod
    def show_end_of_results(self, visible: bool) -> None:
        """Toggle the end-of-results message."""
