"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/bridge) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

FEATURE_SERVICE_URL = (
    "https://gis.fiskeridir.no/server/rest/services/Yggdrasil/"
    "Akvakulturregisteret/FeatureServer/0/query"
)


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "fjordvind"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "fjordvind"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "fjordvind"
    return Path.home() / ".config" / "fjordvind"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# FjordVind user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="FJORDVIND_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout total de la descarga de localidades (segundos).",
    )
    user_agent: str = Field(
        default="FjordVind/1.0.0",
        min_length=1,
        description="User-Agent enviado al servicio de features.",
    )
    verify_tls: bool = Field(
        default=True,
        description="Verificar certificados TLS del servidor.",
    )

    feature_service_url: str = Field(
        default=FEATURE_SERVICE_URL,
        min_length=8,
        description="Endpoint ArcGIS `query` del registro de acuicultura.",
    )
    result_record_count: int = Field(
        default=5000,
        ge=1,
        le=100_000,
        description="Máximo de registros pedidos en una sola consulta.",
    )

    default_language: Language = Field(
        default=Language.NORWEGIAN,
        description="Idioma de los mensajes de error devueltos al host (nb/en).",
    )

    log_level: LogLevel = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )
    log_file: Path | None = Field(
        default=None,
        description="Fichero de log rotativo opcional.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value
