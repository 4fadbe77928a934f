"""Per-category exclusion of filter values chosen by the user."""

from __future__ import annotations

from typing import Iterable

from SampaSearch.core.models import FILTER_CATEGORIES, AppliedFilters
from SampaSearch.utils.log import log


class FilterExclusionStore:
    """Set of filter values the user removed, grouped by category.

    Values keep insertion order so the request parameter is stable. Lives for
    one logical query: the controller clears it on a new manual query only.
    """

    def __init__(self, categories: Iterable[str] = FILTER_CATEGORIES) -> None:
        self._excluded: dict[str, list[str]] = {category: [] for category in categories}

    def exclude(self, category: str, value: str) -> bool:
        """Exclude one value; returns False when it was already excluded."""
        values = self._excluded.setdefault(category, [])
        if value in values:
            return False
        values.append(value)
        log.debug("Filter excluded: %s=%s", category, value)
        return True

    def is_excluded(self, category: str, value: str) -> bool:
        return value in self._excluded.get(category, ())

    def reset_all(self) -> None:
        for values in self._excluded.values():
            values.clear()
        log.debug("Excluded filters reset")

    def is_empty(self) -> bool:
        return not any(self._excluded.values())

    def snapshot(self) -> dict[str, list[str]]:
        """Return a copy of the non-empty categories."""
        return {category: list(values) for category, values in self._excluded.items() if values}

    def filter_visible(self, applied: AppliedFilters | None) -> dict[str, list[str]]:
        """Subtract exclusions from backend-reported filters.

        Categories left without values are dropped; category and value order
        follow ``applied``.
        """
        visible: dict[str, list[str]] = {}
        for category, values in (applied or {}).items():
            kept = [value for value in values if not self.is_excluded(category, value)]
            if kept:
                visible[category] = kept
        return visible
