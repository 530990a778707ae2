"""Tests for adapters.stdio_bridge — JSON lines between host and backend."""
from __future__ import annotations

import asyncio
import io
import json

from adapters.stdio_bridge import serve
from core.domain.models import FetchErrorKind, FetchFailure, FetchSuccess
from core.services.commands import build_registry

PAYLOAD = '{"type":"FeatureCollection","features":[]}'


def _serve(registry, text: str) -> tuple[int, list[dict]]:
    reader = io.StringIO(text)
    writer = io.StringIO()
    handled = asyncio.run(serve(registry, reader, writer))
    lines = [json.loads(line) for line in writer.getvalue().splitlines()]
    return handled, lines


class TestStdioBridge:
    def test_answers_each_request_by_id(self, settings, static_fetcher) -> None:
        registry = build_registry(settings, fetcher=static_fetcher(FetchSuccess(payload=PAYLOAD)))
        text = '{"id": 1, "cmd": "test_connection"}\n{"id": "b", "cmd": "fetch_localities"}\n'
        handled, responses = _serve(registry, text)

        assert handled == 2
        by_id = {r["id"]: r for r in responses}
        assert by_id[1] == {"id": 1, "ok": True, "value": "Tauri fungerer!", "error": None}
        assert by_id["b"]["ok"] is True
        assert by_id["b"]["value"] == PAYLOAD

    def test_failure_response(self, settings, static_fetcher) -> None:
        failure = FetchFailure(kind=FetchErrorKind.TRANSPORT, detail="dns")
        registry = build_registry(settings, fetcher=static_fetcher(failure))
        _, responses = _serve(registry, '{"id": 3, "cmd": "fetch_localities"}\n')
        assert responses == [{"id": 3, "ok": False, "value": None, "error": "Nettverksfeil: dns"}]

    def test_blank_lines_are_skipped(self, settings, static_fetcher) -> None:
        registry = build_registry(settings, fetcher=static_fetcher(FetchSuccess(payload="")))
        handled, responses = _serve(registry, '\n   \n{"cmd": "test_connection"}\n')
        assert handled == 1
        assert len(responses) == 1

    def test_malformed_request(self, settings, static_fetcher) -> None:
        registry = build_registry(settings, fetcher=static_fetcher(FetchSuccess(payload="")))
        handled, responses = _serve(registry, "not json\n")
        assert handled == 1
        assert responses[0]["ok"] is False
        assert responses[0]["error"].startswith("Ugyldig forespørsel:")

    def test_rejected_request_keeps_its_id(self, settings, static_fetcher) -> None:
        registry = build_registry(settings, fetcher=static_fetcher(FetchSuccess(payload="")))
        handled, responses = _serve(registry, '{"id": 5, "cmd": ""}\n{"id": [1], "cmd": ""}\n')
        assert handled == 2
        assert [r["id"] for r in responses] == [5, None]
        assert all(r["ok"] is False for r in responses)
        assert responses[0]["error"].startswith("Ugyldig forespørsel:")

    def test_empty_input(self, settings, static_fetcher) -> None:
        registry = build_registry(settings, fetcher=static_fetcher(FetchSuccess(payload="")))
        assert _serve(registry, "") == (0, [])
