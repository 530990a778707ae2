"""Canal JSON-lines sobre stdin/stdout para el host gráfico.

Protocolo:
- Entrada: una línea por petición, `{"id": 1, "cmd": "fetch_localities"}`.
- Salida: una línea por respuesta, `{"id": 1, "ok": true, "value": "...", "error": null}`.

Cada petición corre como tarea asyncio independiente, así que las respuestas
pueden llegar en otro orden; el host empareja por `id`.
"""

from __future__ import annotations

import asyncio
import json
from typing import TextIO

from pydantic import ValidationError

from core.domain.messages import invalid_request
from core.domain.models import InvokeRequest, InvokeResponse
from core.logging_setup import get_logger
from core.services.commands import CommandRegistry

log = get_logger("stdio_bridge")


def _recover_id(line: str) -> int | str | None:
    """`id` de una línea rechazada por validación, si es int o str."""

    try:
        data = json.loads(line)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    request_id = data.get("id")
    if isinstance(request_id, bool) or not isinstance(request_id, (int, str)):
        return None
    return request_id


def _write_response(writer: TextIO, response: InvokeResponse) -> None:
    writer.write(response.model_dump_json() + "\n")
    writer.flush()


async def _handle(registry: CommandRegistry, request: InvokeRequest, writer: TextIO) -> None:
    response = await registry.invoke(request.cmd, request_id=request.id)
    _write_response(writer, response)


async def serve(registry: CommandRegistry, reader: TextIO, writer: TextIO) -> int:
    """Atiende peticiones hasta EOF y devuelve cuántas líneas se procesaron."""

    tasks: set[asyncio.Task[None]] = set()
    handled = 0
    log.info("Bridge ready, commands: %s", ", ".join(registry.names()))

    while True:
        line = await asyncio.to_thread(reader.readline)
        if line == "":
            break
        line = line.strip()
        if not line:
            continue

        handled += 1
        try:
            request = InvokeRequest.model_validate_json(line)
        except ValidationError as exc:
            log.warning("Rejected malformed request: %s", line)
            detail = exc.errors()[0].get("msg", "invalid") if exc.errors() else "invalid"
            _write_response(
                writer,
                InvokeResponse(
                    id=_recover_id(line),
                    ok=False,
                    error=invalid_request(detail, registry.language),
                ),
            )
            continue

        task = asyncio.create_task(_handle(registry, request, writer))
        tasks.add(task)
        task.add_done_callback(tasks.discard)

    if tasks:
        await asyncio.gather(*tasks)
    log.info("Bridge closed after %d request(s)", handled)
    return handled
