"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El resumen del GeoJSON vive aquí porque la CLI es quien consume el payload;
  el fetcher nunca lo parsea.
"""

from __future__ import annotations

import json
from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

_PREFERRED_COLUMNS: tuple[str, ...] = ("loknr", "lokalitet", "navn", "kommune", "status_lokalitet")


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("FjordVind", style="bold cyan")
    subtitle = Text("Akvakulturregisteret • lokaliteter", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _features(payload: str) -> list[dict[str, Any]]:
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        return []
    if not isinstance(data, dict):
        return []
    features = data.get("features")
    if not isinstance(features, list):
        return []
    return [f for f in features if isinstance(f, dict)]


def build_summary_line(payload: str) -> str:
    """Total de features y bytes del payload, en una sola línea."""

    return f"Lokaliteter: {len(_features(payload))} features, {len(payload)} bytes"


def build_localities_table(payload: str, *, limit: int = 10) -> Table:
    """Tabla con las primeras localidades."""

    features = _features(payload)
    table = Table()

    props = [f.get("properties") or {} for f in features[:limit]]
    columns = [c for c in _PREFERRED_COLUMNS if any(c in p for p in props)]
    if not columns and props:
        columns = list(props[0].keys())[:4]

    for column in columns:
        table.add_column(column, style="cyan" if column == "loknr" else "white")
    for p in props:
        table.add_row(*[str(p.get(c, "")) for c in columns])
    return table


def build_error_panel(message: str) -> Panel:
    return Panel(Text(message, style="red"), title="Feil", border_style="red")
