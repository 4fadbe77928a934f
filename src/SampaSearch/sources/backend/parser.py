"""Wire format of the search backend.

Parses server-sent event framing, result batches and the configuration
payload, and builds the query parameters of the streaming endpoint.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Iterator, Mapping

from SampaSearch.core.errors import MalformedPayload
from SampaSearch.core.models import (
    AppliedFilters,
    BatchKind,
    PageRequest,
    ResultBatch,
    ResultItem,
    ResultLinks,
)

_KIND_BY_WIRE = {kind.value: kind for kind in BatchKind}


def iter_sse_data(lines: Iterable[str]) -> Iterator[str]:
    """Yield the data payload of each server-sent event.

    Multiple ``data:`` lines of one event are joined with newlines; comment
    lines and other fields (``event``, ``id``, ``retry``) are ignored. A
    trailing event without the closing blank line is still yielded.

    Args:
        lines: Decoded lines of the response body, without line terminators.

    Yields:
        One string per event that carried data.
    """
    buffer: list[str] = []
    for raw in lines:
        line = raw.rstrip("\r")
        if not line:
            if buffer:
                yield "\n".join(buffer)
                buffer = []
            continue
        if line.startswith(":"):
            continue
        name, _, value = line.partition(":")
        if name != "data":
            continue
        buffer.append(value[1:] if value.startswith(" ") else value)
    if buffer:
        yield "\n".join(buffer)


def parse_batch(data: str) -> ResultBatch:
    """Parse one event payload into a `ResultBatch`.

    Args:
        data: JSON text of a single event.

    Returns:
        Parsed batch.

    Raises:
        MalformedPayload: If the text is not a valid result batch.
    """
    try:
        payload = json.loads(data)
    except (TypeError, ValueError) as exc:
        raise MalformedPayload(f"Invalid JSON in stream event: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise MalformedPayload("Stream event must be a JSON object")

    kind = _KIND_BY_WIRE.get(str(payload.get("resultType", "")).lower())
    if kind is None:
        raise MalformedPayload(f"Unknown resultType: {payload.get('resultType')!r}")

    raw_items = payload.get("projetos") or []
    if not isinstance(raw_items, list):
        raise MalformedPayload("projetos must be a list")
    items = tuple(_parse_item(raw, idx) for idx, raw in enumerate(raw_items))

    has_more = payload.get("hasMore", False)
    if not isinstance(has_more, bool):
        raise MalformedPayload("hasMore must be a boolean")

    return ResultBatch(
        kind=kind,
        items=items,
        has_more=has_more,
        applied_filters=_parse_filters(payload.get("appliedFilters")),
        highlight_terms=_parse_terms(payload.get("highlightTerms")),
    )


def parse_config_payload(payload: Any) -> int | None:
    """Extract ``defaultPageSize`` from the configuration payload.

    Returns:
        The page size, or None when absent or not a positive integer.
    """
    if not isinstance(payload, Mapping):
        return None
    size = payload.get("defaultPageSize")
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        return None
    return size


def build_stream_params(request: PageRequest) -> dict[str, str]:
    """Build query parameters for the streaming endpoint.

    ``excludedFilters`` is only sent when at least one value is excluded.
    """
    params = {
        "q": request.query,
        "page": str(request.page_index),
        "size": str(request.page_size),
    }
    if request.has_exclusions:
        params["excludedFilters"] = json.dumps(
            {category: list(values) for category, values in request.excluded_filters.items()},
            ensure_ascii=False,
        )
    return params


def _parse_item(raw: Any, idx: int) -> ResultItem:
    if not isinstance(raw, Mapping):
        raise MalformedPayload(f"projetos[{idx}] must be an object")
    keywords_raw = raw.get("palavrasChave")
    if isinstance(keywords_raw, str):
        keywords = tuple(k.strip() for k in keywords_raw.split("|") if k.strip())
    elif isinstance(keywords_raw, list):
        keywords = tuple(str(k).strip() for k in keywords_raw if str(k).strip())
    else:
        keywords = ()
    return ResultItem(
        id=_opt_int(raw.get("id")),
        type=_opt_str(raw.get("tipo")),
        number=_opt_int(raw.get("numero")),
        year=_opt_int(raw.get("ano")),
        author=_opt_str(raw.get("autor")),
        summary=_opt_str(raw.get("ementa")) or "",
        keywords=keywords,
        links=ResultLinks(
            splegis=_opt_str(raw.get("linkSpLegis")),
            portal=_opt_str(raw.get("linkPortal")),
            pdf=_opt_str(raw.get("linkPdf")),
        ),
    )


def _parse_filters(raw: Any) -> AppliedFilters | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise MalformedPayload("appliedFilters must be an object")
    filters: dict[str, list[str]] = {}
    for category, values in raw.items():
        if values is None:
            continue
        if not isinstance(values, list):
            raise MalformedPayload(f"appliedFilters.{category} must be a list")
        filters[str(category)] = [str(value) for value in values if value is not None]
    return filters


def _parse_terms(raw: Any) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise MalformedPayload("highlightTerms must be a list")
    return tuple(term for term in raw if isinstance(term, str) and term)


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _opt_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise MalformedPayload(f"Expected integer, got {value!r}") from exc
