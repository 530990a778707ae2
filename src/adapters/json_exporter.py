"""Exportación del payload de localidades.

Por qué aquí:
- Persistir el GeoJSON crudo permite abrirlo en QGIS u otras herramientas
  sin volver a consultar el servicio.
- El payload se escribe tal cual salvo que se pida formato legible.
"""

from __future__ import annotations

import json
from pathlib import Path


def export_payload(*, payload: str, output_path: Path, pretty: bool = False) -> Path:
    """Escribe el payload en UTF-8; `pretty=True` lo re-indenta como JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    text = payload
    if pretty:
        text = json.dumps(json.loads(payload), ensure_ascii=False, indent=2) + "\n"
    output_path.write_text(text, encoding="utf-8")
    return output_path
