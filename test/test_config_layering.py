"""Tests for layered config parsing and validation."""

import os
import sys
import tempfile
import unittest
from copy import deepcopy
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SampaSearch.config import load_config, load_config_with_defaults, parse_config_dict


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "backend": {
            "base_url": "http://localhost:8080",
            "base_url_env": "SAMPA_SEARCH_BASE_URL",
            "config_path": "/api/config",
            "stream_path": "/api/search/stream",
            "connect_timeout": 10,
            "fallback_page_size": 10,
        },
        "display": {"highlight_open": "**", "highlight_close": "**", "max_pages": 1},
    }


class TestConfigLayering(unittest.TestCase):
    def setUp(self) -> None:
        self.env = patch.dict(os.environ, {}, clear=False)
        self.env.start()
        os.environ.pop("SAMPA_SEARCH_BASE_URL", None)

    def tearDown(self) -> None:
        self.env.stop()

    def test_parse_full_config(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.backend.base_url, "http://localhost:8080")
        self.assertEqual(cfg.backend.connect_timeout, 10.0)
        self.assertEqual(cfg.backend.fallback_page_size, 10)
        self.assertEqual(cfg.display.highlight_open, "**")

    def test_display_section_is_optional(self) -> None:
        raw = _base_raw_config()
        del raw["display"]
        cfg = parse_config_dict(raw)
        self.assertEqual((cfg.display.highlight_open, cfg.display.highlight_close), ("<mark>", "</mark>"))
        self.assertEqual(cfg.display.max_pages, 1)

    def test_console_level_is_optional(self) -> None:
        self.assertIsNone(parse_config_dict(_base_raw_config()).runtime.console_level)
        raw = _base_raw_config()
        raw["log"]["console_level"] = "warning"
        self.assertEqual(parse_config_dict(raw).runtime.console_level, "WARNING")

    def test_backend_defaults(self) -> None:
        raw = _base_raw_config()
        raw["backend"] = {"base_url": "https://camara.example"}
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.backend.stream_path, "/api/search/stream")
        self.assertEqual(cfg.backend.config_path, "/api/config")
        self.assertIsNone(cfg.backend.base_url_env)

    def test_env_overrides_base_url(self) -> None:
        with patch.dict(os.environ, {"SAMPA_SEARCH_BASE_URL": "https://busca.example"}):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.backend.base_url, "https://busca.example")

    def test_missing_backend_section(self) -> None:
        raw = _base_raw_config()
        del raw["backend"]
        with self.assertRaisesRegex(ValueError, "backend"):
            parse_config_dict(raw)

    def test_missing_base_url(self) -> None:
        raw = _base_raw_config()
        del raw["backend"]["base_url"]
        with self.assertRaisesRegex(ValueError, "backend.base_url"):
            parse_config_dict(raw)

    def test_invalid_values_name_their_key(self) -> None:
        cases = [
            (("backend", "base_url"), "ftp://x", ValueError, "backend.base_url"),
            (("backend", "connect_timeout"), 0, ValueError, "backend.connect_timeout"),
            (("backend", "fallback_page_size"), -1, ValueError, "backend.fallback_page_size"),
            (("backend", "fallback_page_size"), "10", TypeError, "backend.fallback_page_size"),
            (("display", "max_pages"), 0, ValueError, "display.max_pages"),
            (("display", "highlight_open"), "", ValueError, "display.highlight_open"),
            (("log", "level"), "LOUD", ValueError, "log.level"),
            (("log", "to_file"), "yes", TypeError, "log.to_file"),
            (("log", "console_level"), "LOUD", ValueError, "log.console_level"),
            (("log", "dir"), "  ", ValueError, "log.dir"),
        ]
        for (section, key), value, exc, message in cases:
            with self.subTest(key=f"{section}.{key}"):
                raw = deepcopy(_base_raw_config())
                raw[section][key] = value
                with self.assertRaisesRegex(exc, message):
                    parse_config_dict(raw)

    def test_override_file_merges_with_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            override = Path(tmp) / "custom.yml"
            override.write_text("backend:\n  base_url: https://prod.example\ndisplay:\n  max_pages: 3\n", encoding="utf-8")
            cfg = load_config_with_defaults(override, default_path=REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg.backend.base_url, "https://prod.example")
        self.assertEqual(cfg.backend.stream_path, "/api/search/stream")
        self.assertEqual(cfg.display.max_pages, 3)
        self.assertEqual(cfg.display.highlight_open, "**")

    def test_default_file_loads(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg.backend.base_url_env, "SAMPA_SEARCH_BASE_URL")
        self.assertEqual(cfg.backend.fallback_page_size, 10)


if __name__ == "__main__":
    unittest.main()
