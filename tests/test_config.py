"""Tests for core.config, adapters.http_client and adapters.json_exporter."""
from __future__ import annotations

import asyncio
import json

import pytest
from pydantic import ValidationError

from adapters.http_client import build_async_client
from adapters.json_exporter import export_payload
from core.config import FEATURE_SERVICE_URL, AppSettings, _parse_env_lines, write_user_env_vars
from core.domain.language import Language


class TestAppSettings:
    def test_defaults(self, settings) -> None:
        assert settings.http_timeout_seconds == 60.0
        assert settings.user_agent == "FjordVind/1.0.0"
        assert settings.feature_service_url == FEATURE_SERVICE_URL
        assert settings.result_record_count == 5000
        assert settings.default_language is Language.NORWEGIAN
        assert settings.log_file is None

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("FJORDVIND_HTTP_TIMEOUT_SECONDS", "5")
        monkeypatch.setenv("FJORDVIND_DEFAULT_LANGUAGE", "en")
        settings = AppSettings(_env_file=None)
        assert settings.http_timeout_seconds == 5.0
        assert settings.default_language is Language.ENGLISH

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, http_timeout_seconds=0)

    def test_log_level_is_normalised(self) -> None:
        assert AppSettings(_env_file=None, log_level=" debug ").log_level == "DEBUG"

    @pytest.mark.parametrize("level", ["VERBOSE", "", "info2"])
    def test_unknown_log_level_rejected(self, level) -> None:
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, log_level=level)

    def test_log_level_from_env_is_validated(self, monkeypatch) -> None:
        monkeypatch.setenv("FJORDVIND_LOG_LEVEL", "VERBOSE")
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None)


class TestUserEnvFile:
    def test_write_merges_existing_values(self, tmp_path) -> None:
        env_path = tmp_path / "cfg" / ".env"
        write_user_env_vars({"FJORDVIND_DEFAULT_LANGUAGE": "en"}, env_path)
        write_user_env_vars({"FJORDVIND_HTTP_TIMEOUT_SECONDS": "30"}, env_path)

        values = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        assert values == {
            "FJORDVIND_DEFAULT_LANGUAGE": "en",
            "FJORDVIND_HTTP_TIMEOUT_SECONDS": "30",
        }

    def test_parse_skips_comments_and_quotes(self) -> None:
        text = '# comment\nA="1"\nnot a pair\nB = two\n'
        assert _parse_env_lines(text) == {"A": "1", "B": "two"}


class TestHttpClient:
    def test_client_carries_timeout_and_headers(self, settings) -> None:
        async def build():
            async with build_async_client(settings) as client:
                return client.timeout, client.headers

        timeout, headers = asyncio.run(build())
        assert timeout.read == 60.0
        assert timeout.connect == 60.0
        assert headers["User-Agent"] == "FjordVind/1.0.0"
        assert headers["Accept"] == "application/json"

    def test_extra_headers_override(self, settings) -> None:
        async def build():
            async with build_async_client(settings, extra_headers={"Accept": "application/geo+json"}) as client:
                return client.headers

        assert asyncio.run(build())["Accept"] == "application/geo+json"


class TestExportPayload:
    def test_writes_verbatim(self, tmp_path) -> None:
        payload = '{"type":"FeatureCollection","features":[]}'
        path = export_payload(payload=payload, output_path=tmp_path / "out" / "lok.geojson")
        assert path.read_text(encoding="utf-8") == payload

    def test_pretty_reindents(self, tmp_path) -> None:
        payload = '{"type":"FeatureCollection","features":[{"properties":{"navn":"Sør"}}]}'
        path = export_payload(payload=payload, output_path=tmp_path / "lok.geojson", pretty=True)
        text = path.read_text(encoding="utf-8")
        assert "\n  " in text
        assert "Sør" in text
        assert json.loads(text) == json.loads(payload)
