"""Tests for the backend wire format."""

import json
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SampaSearch.core.errors import MalformedPayload
from SampaSearch.core.models import BatchKind, PageRequest
from SampaSearch.sources.backend.parser import (
    build_stream_params,
    iter_sse_data,
    parse_batch,
    parse_config_payload,
)


class TestSseFraming(unittest.TestCase):
    def test_events_split_on_blank_lines(self) -> None:
        lines = [
            ": keep-alive",
            'data: {"a": 1}',
            "",
            "event: message",
            "id: 7",
            "data: first",
            "data:second",
            "",
            "",
        ]
        self.assertEqual(list(iter_sse_data(lines)), ['{"a": 1}', "first\nsecond"])

    def test_trailing_event_without_blank_line(self) -> None:
        self.assertEqual(list(iter_sse_data(["data: tail\r"])), ["tail"])

    def test_events_without_data_are_skipped(self) -> None:
        self.assertEqual(list(iter_sse_data(["event: ping", "", "retry: 100", ""])), [])


class TestParseBatch(unittest.TestCase):
    def test_complete_batch_with_items(self) -> None:
        data = json.dumps(
            {
                "resultType": "complete",
                "hasMore": True,
                "projetos": [
                    {
                        "id": 10,
                        "tipo": "PL",
                        "numero": "123",
                        "ano": 2023,
                        "autor": "Maria Silva",
                        "ementa": "Dispõe sobre a saúde",
                        "palavrasChave": "Saúde| Educação ||",
                        "linkPdf": "https://pdf.example/10.pdf",
                    }
                ],
                "appliedFilters": {"Autor": ["Maria Silva"], "Ano": [2023]},
                "highlightTerms": ["saude", ""],
            },
            ensure_ascii=False,
        )
        batch = parse_batch(data)
        self.assertIs(batch.kind, BatchKind.COMPLETE)
        self.assertTrue(batch.is_terminal)
        self.assertTrue(batch.has_more)
        item = batch.items[0]
        self.assertEqual(item.number, 123)
        self.assertEqual(item.keywords, ("Saúde", "Educação"))
        self.assertEqual(item.links.pdf, "https://pdf.example/10.pdf")
        self.assertIsNone(item.links.portal)
        self.assertEqual(batch.applied_filters, {"Autor": ["Maria Silva"], "Ano": ["2023"]})
        self.assertEqual(batch.highlight_terms, ("saude",))

    def test_exact_batch_defaults(self) -> None:
        batch = parse_batch('{"resultType": "exact"}')
        self.assertIs(batch.kind, BatchKind.EXACT)
        self.assertFalse(batch.is_terminal)
        self.assertEqual(tuple(batch.items), ())
        self.assertFalse(batch.has_more)
        self.assertIsNone(batch.applied_filters)

    def test_error_batch(self) -> None:
        self.assertIs(parse_batch('{"resultType": "error"}').kind, BatchKind.ERROR)

    def test_malformed_payloads(self) -> None:
        bad = [
            "not json",
            "[1, 2]",
            '{"resultType": "partial"}',
            '{"projetos": []}',
            '{"resultType": "complete", "projetos": {}}',
            '{"resultType": "complete", "hasMore": "yes"}',
            '{"resultType": "complete", "projetos": ["x"]}',
            '{"resultType": "complete", "projetos": [{"numero": "abc"}]}',
            '{"resultType": "complete", "appliedFilters": ["Autor"]}',
        ]
        for data in bad:
            with self.subTest(data=data):
                with self.assertRaises(MalformedPayload):
                    parse_batch(data)


class TestStreamParams(unittest.TestCase):
    def test_no_exclusions_omits_filter_param(self) -> None:
        params = build_stream_params(PageRequest("saúde", 2, 20, {"Autor": []}))
        self.assertEqual(params, {"q": "saúde", "page": "2", "size": "20"})

    def test_exclusions_are_json_encoded(self) -> None:
        params = build_stream_params(PageRequest("lei", 0, 10, {"Autor": ["João"], "Ano": []}))
        self.assertEqual(json.loads(params["excludedFilters"]), {"Autor": ["João"]})
        self.assertIn("João", params["excludedFilters"])


class TestConfigPayload(unittest.TestCase):
    def test_page_size(self) -> None:
        self.assertEqual(parse_config_payload({"defaultPageSize": 20}), 20)

    def test_unusable_page_size(self) -> None:
        for payload in ({}, {"defaultPageSize": 0}, {"defaultPageSize": "20"}, {"defaultPageSize": True}, [20]):
            with self.subTest(payload=payload):
                self.assertIsNone(parse_config_payload(payload))


if __name__ == "__main__":
    unittest.main()
