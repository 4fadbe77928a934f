"""Tests for filter exclusion bookkeeping."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SampaSearch.services.filters import FilterExclusionStore


class TestFilterExclusionStore(unittest.TestCase):
    def test_excluded_value_is_hidden(self) -> None:
        store = FilterExclusionStore()
        store.exclude("Autor", "Maria")
        self.assertEqual(store.filter_visible({"Autor": ["Maria", "João"]}), {"Autor": ["João"]})

    def test_category_without_values_is_dropped(self) -> None:
        store = FilterExclusionStore()
        store.exclude("Ano", "2023")
        store.exclude("Ano", "2024")
        visible = store.filter_visible({"Ano": ["2023", "2024"], "Tipo": ["PL"]})
        self.assertEqual(visible, {"Tipo": ["PL"]})

    def test_exclude_is_idempotent(self) -> None:
        store = FilterExclusionStore()
        self.assertTrue(store.exclude("Autor", "Maria"))
        self.assertFalse(store.exclude("Autor", "Maria"))
        self.assertEqual(store.snapshot(), {"Autor": ["Maria"]})

    def test_membership_is_exact_string(self) -> None:
        store = FilterExclusionStore()
        store.exclude("Autor", "Maria")
        self.assertFalse(store.is_excluded("Autor", "maria"))
        self.assertFalse(store.is_excluded("Tipo", "Maria"))
        self.assertTrue(store.is_excluded("Autor", "Maria"))

    def test_reset_all_clears_every_category(self) -> None:
        store = FilterExclusionStore()
        store.exclude("Autor", "Maria")
        store.exclude("Extra", "x")
        store.reset_all()
        self.assertTrue(store.is_empty())
        self.assertEqual(store.snapshot(), {})

    def test_filter_visible_handles_missing_filters(self) -> None:
        self.assertEqual(FilterExclusionStore().filter_visible(None), {})


if __name__ == "__main__":
    unittest.main()
