"""Fetcher del registro de acuicultura (Fiskeridirektoratet, ArcGIS).

Implementación:
- Una única petición GET a la consulta fija del FeatureServer.
- El payload GeoJSON se devuelve tal cual; el parseo es cosa del llamador.
- Cada fallo se etiqueta con `FetchErrorKind`, se registra como ERROR y se
  devuelve (nunca se reintenta).

Etapas:
1) construir el cliente  -> CLIENT_BUILD
2) enviar la petición    -> TRANSPORT
3) status no-2xx         -> HTTP_STATUS (cuerpo leído best-effort)
4) leer el cuerpo        -> BODY_READ
5) todo el intercambio acotado por `asyncio.wait_for` -> TIMEOUT
"""

from __future__ import annotations

import asyncio
from typing import Callable

import httpx

from adapters.http_client import build_async_client, default_headers
from core.config import AppSettings
from core.domain.models import (
    FetchErrorKind,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    LocalityQuery,
    LocalityRequest,
)
from core.interfaces.fetcher import LocalityFetcher
from core.logging_setup import get_logger

ClientFactory = Callable[[AppSettings], httpx.AsyncClient]

log = get_logger("feature_service")


def build_locality_request(settings: AppSettings) -> LocalityRequest:
    query = LocalityQuery(result_record_count=settings.result_record_count)
    return LocalityRequest(
        url=query.to_url(settings.feature_service_url),
        timeout_seconds=settings.http_timeout_seconds,
        headers=default_headers(settings),
    )


async def _read_best_effort(response: httpx.Response) -> str:
    try:
        await response.aread()
    except httpx.HTTPError:
        return ""
    return response.text


class FeatureServiceFetcher(LocalityFetcher):
    """Descarga las localidades en una sola llamada (hasta 5000 registros).

    Sin estado entre llamadas: cada `fetch` crea y cierra su propio cliente,
    así que invocaciones concurrentes son independientes.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client_factory: ClientFactory = client_factory or build_async_client

    @property
    def request(self) -> LocalityRequest:
        return build_locality_request(self._settings)

    async def fetch(self) -> FetchOutcome:
        request = self.request
        log.info("Fetching localities from: %s", request.url)

        try:
            client = self._client_factory(self._settings)
        except Exception as exc:  # noqa: BLE001 - cualquier fallo de construcción es terminal
            log.error("Failed to create HTTP client: %s", exc)
            return FetchFailure(kind=FetchErrorKind.CLIENT_BUILD, detail=str(exc))

        async with client:
            try:
                return await asyncio.wait_for(
                    self._exchange(client, request),
                    timeout=request.timeout_seconds,
                )
            except asyncio.TimeoutError:
                log.error("HTTP request timed out after %ss", request.timeout_seconds)
                return FetchFailure(
                    kind=FetchErrorKind.TIMEOUT,
                    detail="timed out",
                    timeout_seconds=request.timeout_seconds,
                )

    async def _exchange(self, client: httpx.AsyncClient, request: LocalityRequest) -> FetchOutcome:
        http_request = client.build_request("GET", request.url, headers=request.headers)
        try:
            response = await client.send(http_request, stream=True)
        except httpx.TimeoutException as exc:
            log.error("HTTP request timed out: %s", exc)
            return FetchFailure(
                kind=FetchErrorKind.TIMEOUT,
                detail=str(exc),
                timeout_seconds=request.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            log.error("HTTP request failed: %s", exc)
            return FetchFailure(kind=FetchErrorKind.TRANSPORT, detail=str(exc) or type(exc).__name__)

        try:
            log.info("Response status: %s", response.status_code)

            if not response.is_success:
                error_text = await _read_best_effort(response)
                log.error("HTTP error %s: %s", response.status_code, error_text)
                return FetchFailure(
                    kind=FetchErrorKind.HTTP_STATUS,
                    status_code=response.status_code,
                    reason_phrase=response.reason_phrase or None,
                    detail=error_text,
                )

            try:
                await response.aread()
            except httpx.HTTPError as exc:
                log.error("Failed to read response body: %s", exc)
                return FetchFailure(kind=FetchErrorKind.BODY_READ, detail=str(exc) or type(exc).__name__)
            text = response.text
        finally:
            await response.aclose()

        log.info("Successfully fetched %d bytes of locality data", len(response.content))
        return FetchSuccess(payload=text)
