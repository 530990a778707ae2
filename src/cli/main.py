"""FjordVind command line entry point.

Exposes the same two operations the GUI host invokes, plus the stdio bridge
the host uses to run this backend as a sidecar process.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.feature_service import FeatureServiceFetcher
from adapters.json_exporter import export_payload
from adapters.stdio_bridge import serve as serve_stdio
from cli import doctor
from cli.ui_components import (
    build_error_panel,
    build_localities_table,
    build_summary_line,
    print_banner,
)
from core.config import AppSettings
from core.domain.messages import format_failure
from core.domain.models import FetchFailure
from core.logging_setup import configure_logging
from core.services.commands import build_registry, test_connection

app = typer.Typer(no_args_is_help=True, help="FjordVind locality backend.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Override FJORDVIND_LOG_LEVEL."),
) -> None:
    overrides = {"log_level": log_level} if log_level else {}
    try:
        settings = AppSettings(**overrides)
    except ValidationError as exc:
        raise typer.BadParameter(
            "must be one of DEBUG, INFO, WARNING, ERROR (also checked for FJORDVIND_LOG_LEVEL)",
            param_hint="--log-level",
        ) from exc
    configure_logging(settings)


@app.command()
def ping() -> None:
    """Connectivity check: prints a fixed string."""

    typer.echo(test_connection())


@app.command()
def fetch(
    output: Path = typer.Option(None, "--output", "-o", help="Write the GeoJSON payload to this file."),
    pretty: bool = typer.Option(False, "--pretty", help="Re-indent the payload when writing --output."),
    raw: bool = typer.Option(False, "--raw", help="Print the payload to stdout instead of a summary."),
) -> None:
    """Fetch all localities from the aquaculture register."""

    settings = AppSettings()
    outcome = asyncio.run(FeatureServiceFetcher(settings).fetch())

    if isinstance(outcome, FetchFailure):
        _err_console.print(build_error_panel(format_failure(outcome, settings.default_language)))
        raise typer.Exit(code=1)

    if output is not None:
        path = export_payload(payload=outcome.payload, output_path=output, pretty=pretty)
        _err_console.print(f"[green]Saved:[/green] {path}")

    if raw:
        typer.echo(outcome.payload)
        return

    print_banner(_console)
    _console.print(build_summary_line(outcome.payload))
    _console.print(build_localities_table(outcome.payload))


@app.command()
def invoke(name: str = typer.Argument(..., help="Command name, e.g. fetch_localities.")) -> None:
    """Run one host command and print its JSON response."""

    registry = build_registry(AppSettings())
    response = asyncio.run(registry.invoke(name))
    typer.echo(response.model_dump_json())
    if not response.ok:
        raise typer.Exit(code=1)


@app.command()
def serve() -> None:
    """Serve host commands as JSON lines over stdin/stdout."""

    registry = build_registry(AppSettings())
    asyncio.run(serve_stdio(registry, sys.stdin, sys.stdout))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
