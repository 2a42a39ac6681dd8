"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client, describe_http_error
from core.config import AppSettings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    """Any HTTP answer counts as reachable; only transport failures fail."""

    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, describe_http_error(exc)


async def _run_checks(settings: AppSettings) -> list[tuple[str, bool, str]]:
    targets = [
        ("ViaCEP", f"{settings.viacep_base_url.rstrip('/')}/ws/01001000/json/"),
        ("WeatherAPI", settings.weatherapi_base_url),
        ("Aggregator", f"{settings.aggregator_url.rstrip('/')}/healthz"),
    ]
    results: list[tuple[str, bool, str]] = []
    for name, url in targets:
        ok, detail = await _check_http(url, settings)
        results.append((name, ok, detail))
    return results


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="cep-weather Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    has_key = bool((settings.weather_api_key or "").strip())
    if has_key:
        table.add_row("WeatherAPI key", "OK", "Aggregator can start")
    else:
        table.add_row("WeatherAPI key", "MISSING", "Set CEP_WEATHER_WEATHER_API_KEY")
    table.add_row("Aggregator URL", "OK", settings.aggregator_url)

    # Connectivity (best-effort)
    for name, ok, detail in asyncio.run(_run_checks(settings)):
        table.add_row(f"{name} connectivity", "OK" if ok else "FAIL", detail)

    _console.print(table)

    if not has_key:
        _console.print(
            "\n[yellow]Note:[/yellow] `cep-weather aggregator` refuses to start without a WeatherAPI key."
        )
        raise typer.Exit(code=1)
