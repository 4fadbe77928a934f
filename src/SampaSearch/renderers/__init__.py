"""Presentation layer for search session output.

Exports the Presenter boundary the controller talks to, the view model and
mapper that apply highlighting, and the console implementation.
"""

from __future__ import annotations

from SampaSearch.renderers.base import Presenter
from SampaSearch.renderers.console import ConsolePresenter, render_filters_text, render_text
from SampaSearch.renderers.mapper import map_item_to_view, map_items_to_views
from SampaSearch.renderers.view_models import ResultView

__all__ = [
    "Presenter",
    "ConsolePresenter",
    "ResultView",
    "map_item_to_view",
    "map_items_to_views",
    "render_filters_text",
    "render_text",
]
