"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from urllib.parse import urlsplit

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.language import Language

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.head(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:  # noqa: BLE001 - best-effort diagnostics
        return False, str(exc) or type(exc).__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="FjordVind Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Feature service", "OK", settings.feature_service_url)
    table.add_row("Record cap", "OK", str(settings.result_record_count))
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g} s")
    table.add_row("Language", "OK", settings.default_language.label())
    if settings.verify_tls:
        table.add_row("TLS verify", "OK", "enabled")
    else:
        table.add_row("TLS verify", "WARN", "disabled -> certificates are not checked")
    table.add_row("Log file", "OK" if settings.log_file else "OPTIONAL", str(settings.log_file or "console only"))

    # Connectivity (best-effort)
    parts = urlsplit(settings.feature_service_url)
    host_url = f"{parts.scheme}://{parts.netloc}/"
    ok_http, detail_http = asyncio.run(_check_http(host_url, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] `fetch` will fail with a network error until the host is reachable."
        )


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    language = typer.prompt(
        "Language (nb/en)",
        default=settings.default_language.value,
        show_default=True,
    ).strip().lower()
    try:
        Language(language)
    except ValueError as exc:
        raise typer.BadParameter("language must be 'nb' or 'en'") from exc

    timeout = typer.prompt("Timeout (seconds)", default=settings.http_timeout_seconds, type=float)
    if timeout <= 0:
        raise typer.BadParameter("timeout must be positive")

    record_count = typer.prompt("Record cap", default=settings.result_record_count, type=int)
    if record_count < 1:
        raise typer.BadParameter("record cap must be at least 1")

    env_path = write_user_env_vars(
        {
            "FJORDVIND_DEFAULT_LANGUAGE": language,
            "FJORDVIND_HTTP_TIMEOUT_SECONDS": f"{timeout:g}",
            "FJORDVIND_RESULT_RECORD_COUNT": str(record_count),
        },
        get_user_env_file(),
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
