"""Contrato del fetcher de localidades.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que la capa de comandos reciba un fetcher falso en tests sin
  acoplar el Core a `httpx`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import FetchOutcome


@runtime_checkable
class LocalityFetcher(Protocol):
    """Contrato mínimo para descargar el registro de localidades.

    Reglas de diseño:
    - `fetch` es asíncrono porque hace I/O (HTTP).
    - No recibe parámetros: URL y consulta son fijas por configuración.
    - Nunca lanza por fallos de red/HTTP: devuelve `FetchFailure`.
    """

    async def fetch(self) -> FetchOutcome:
        """Descarga el payload crudo o devuelve un fallo tipado."""

        ...
