"""Shared test fixtures for the FjordVind backend.

HTTP is never hit for real: fetchers get an `httpx.MockTransport` through
their client factory, and command/CLI tests use a static fetcher.
"""
from __future__ import annotations

from typing import Callable

import httpx
import pytest

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import FetchOutcome


class StaticFetcher:
    """Fetcher stub that returns the same outcome on every call."""

    def __init__(self, outcome: FetchOutcome) -> None:
        self.outcome = outcome
        self.calls = 0

    async def fetch(self) -> FetchOutcome:
        self.calls += 1
        return self.outcome


@pytest.fixture()
def settings() -> AppSettings:
    """Settings isolated from any .env file on the machine."""
    return AppSettings(_env_file=None)


@pytest.fixture()
def mock_client_factory() -> Callable[[Callable], Callable[[AppSettings], httpx.AsyncClient]]:
    """Build a client factory whose requests are answered by `handler`."""

    def make(handler: Callable) -> Callable[[AppSettings], httpx.AsyncClient]:
        def factory(settings: AppSettings) -> httpx.AsyncClient:
            return build_async_client(settings, transport=httpx.MockTransport(handler))

        return factory

    return make


@pytest.fixture()
def static_fetcher() -> type[StaticFetcher]:
    return StaticFetcher


@pytest.fixture()
def isolated_cwd(tmp_path, monkeypatch):
    """Run from an empty directory so no project .env leaks into settings."""
    monkeypatch.chdir(tmp_path)
    for key in (
        "FJORDVIND_DEFAULT_LANGUAGE",
        "FJORDVIND_HTTP_TIMEOUT_SECONDS",
        "FJORDVIND_LOG_FILE",
        "FJORDVIND_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    return tmp_path
