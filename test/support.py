"""Shared fakes for controller and command tests."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from SampaSearch.core.models import PageRequest
from SampaSearch.renderers.base import Presenter
from SampaSearch.renderers.view_models import ResultView


class FakeHandle:
    def __init__(self) -> None:
        self.closed = False
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1
        self.closed = True


@dataclass
class FakeConnection:
    request: PageRequest
    on_message: Callable[[str], None]
    on_error: Callable[[Exception], None]
    handle: FakeHandle = field(default_factory=FakeHandle)

    def send(self, payload: Mapping[str, Any]) -> None:
        # Delivered even after close, like a transport racing a cancel.
        self.on_message(json.dumps(payload, ensure_ascii=False))

    def send_raw(self, data: str) -> None:
        self.on_message(data)

    def fail(self, error: Exception) -> None:
        self.on_error(error)


class FakeTransport:
    """In-memory transport; tests push messages through `opened` connections."""

    def __init__(self, *, fail_on_open: Exception | None = None) -> None:
        self.opened: list[FakeConnection] = []
        self.fail_on_open = fail_on_open

    def open(self, request, on_message, on_error) -> FakeHandle:
        if self.fail_on_open is not None:
            raise self.fail_on_open
        conn = FakeConnection(request, on_message, on_error)
        self.opened.append(conn)
        return conn.handle

    @property
    def last(self) -> FakeConnection:
        return self.opened[-1]


class RecordingPresenter(Presenter):
    def __init__(self) -> None:
        self.views: tuple[ResultView, ...] = ()
        self.first_new_calls: list[int] = []
        self.filters: dict[str, list[str]] = {}
        self.loading = False
        self.loading_message = ""
        self.error: str | None = None
        self.errors: list[str] = []
        self.load_more = False
        self.end_of_results = False

    def render_results(self, views: Sequence[ResultView], *, first_new: int) -> None:
        self.views = tuple(views)
        self.first_new_calls.append(first_new)

    def render_filters(self, filters: Mapping[str, Sequence[str]]) -> None:
        self.filters = {k: list(v) for k, v in filters.items()}

    def show_loading(self, visible: bool, message: str = "") -> None:
        self.loading = visible
        self.loading_message = message if visible else ""

    def show_error(self, message: str | None) -> None:
        self.error = message
        if message:
            self.errors.append(message)

    def show_load_more(self, visible: bool) -> None:
        self.load_more = visible

    def show_end_of_results(self, visible: bool) -> None:
        self.end_of_results = visible


def make_item(number: int, summary: str = "Dispõe sobre a saúde pública", **overrides: Any) -> dict[str, Any]:
    item = {
        "id": number,
        "tipo": "PL",
        "numero": number,
        "ano": 2024,
        "autor": "Maria Silva",
        "ementa": summary,
        "palavrasChave": "Saúde|Educação",
        "linkSpLegis": f"https://splegis.example/{number}",
        "linkPortal": f"https://portal.example/{number}",
        "linkPdf": f"https://pdf.example/{number}.pdf",
    }
    item.update(overrides)
    return item


def make_batch(
    kind: str,
    items: Sequence[Mapping[str, Any]] = (),
    *,
    has_more: bool = False,
    applied_filters: Mapping[str, Sequence[str]] | None = None,
    highlight_terms: Sequence[str] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"resultType": kind, "projetos": list(items), "hasMore": has_more}
    if applied_filters is not None:
        payload["appliedFilters"] = {k: list(v) for k, v in applied_filters.items()}
    if highlight_terms is not None:
        payload["highlightTerms"] = list(highlight_terms)
    return payload
