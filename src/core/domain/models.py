"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los modelos son inmutables: se crean una vez por invocación y se descartan.

Nota:
- Estos modelos describen *qué* se pide y *qué* se obtiene, no *cómo*.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal
from urllib.parse import urlencode

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class LocalityQuery(BaseModel):
    """Parámetros fijos de la consulta ArcGIS al registro de acuicultura."""

    model_config = ConfigDict(frozen=True)

    where: str = Field(default="1=1", description="Filtro SQL (todo el dataset).")
    out_fields: str = Field(default="*", description="Campos devueltos.")
    format: str = Field(default="geojson", description="Formato de salida.")
    out_sr: int = Field(default=4326, description="Sistema de referencia (WGS84).")
    result_record_count: int = Field(
        default=5000,
        ge=1,
        description="Máximo de registros en una sola respuesta.",
    )

    def to_params(self) -> dict[str, str]:
        # El orden coincide con la URL publicada por el servicio.
        return {
            "where": self.where,
            "outFields": self.out_fields,
            "f": self.format,
            "outSR": str(self.out_sr),
            "resultRecordCount": str(self.result_record_count),
        }

    def to_url(self, base_url: str) -> str:
        """Renderiza la URL completa; `*` se deja sin escapar como en el servicio."""

        return f"{base_url}?{urlencode(self.to_params(), safe='*')}"


class LocalityRequest(BaseModel):
    """Descriptor inmutable de una petición de localidades.

    Se construye una vez por invocación; no se persiste.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=8, description="URL final de la consulta.")
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout total de la operación (segundos).",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Cabeceras fijas (User-Agent, Accept).",
    )


class FetchErrorKind(str, Enum):
    """Taxonomía de fallos de la descarga.

    Todas son terminales para la invocación; ninguna se reintenta.
    """

    CLIENT_BUILD = "client_build"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    BODY_READ = "body_read"


class FetchSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    payload: str = Field(..., description="Cuerpo de la respuesta, sin tocar (GeoJSON).")


class FetchFailure(BaseModel):
    """Fallo tipado; el texto localizado se genera en el borde."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    kind: FetchErrorKind
    detail: str = Field(default="", description="Causa subyacente o cuerpo de error.")
    status_code: int | None = None
    reason_phrase: str | None = None
    timeout_seconds: float | None = None


FetchOutcome = FetchSuccess | FetchFailure


class InvokeRequest(BaseModel):
    """Petición del host (una línea JSON en el bridge stdio)."""

    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    cmd: str = Field(..., min_length=1)


class InvokeResponse(BaseModel):
    """Respuesta plana hacia el host: valor o error, nunca ambos."""

    id: int | str | None = None
    ok: bool
    value: str | None = None
    error: str | None = None
