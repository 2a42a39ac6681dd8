"""CLI principal (Typer).

Comandos:
- `gateway` / `aggregator`: levantan cada servicio con uvicorn.
- `lookup <cep>`: ejecuta el pipeline de agregación en el propio proceso.
- `doctor run`: diagnósticos de configuración y conectividad.
"""

from __future__ import annotations

import asyncio
import json
from typing import NoReturn

import httpx
import typer
import uvicorn
from rich.console import Console

from adapters.http_client import build_async_client
from adapters.viacep import ViaCepLocationResolver
from adapters.weatherapi import WeatherApiResolver
from api.aggregator import create_aggregator_app
from api.gateway import create_gateway_app
from cli import doctor
from cli.ui_components import build_error_panel, build_weather_table, print_banner
from core.config import AppSettings
from core.domain.errors import ConfigurationError, LocationNotFound, LookupPipelineError
from core.domain.models import WeatherResult
from core.services.weather_pipeline import WeatherPipeline, location_not_found_envelope
from observability.logging_conf import setup_logging

app = typer.Typer(no_args_is_help=True, help="CEP -> city -> current temperature services.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _fail_on_missing_config(exc: ConfigurationError) -> NoReturn:
    _console.print(f"[red]Configuration error:[/red] {exc}")
    raise typer.Exit(code=2)


@app.command()
def gateway(
    host: str | None = typer.Option(None, help="Listen host (default: CEP_WEATHER_GATEWAY_HOST)."),
    port: int | None = typer.Option(None, help="Listen port (default: CEP_WEATHER_GATEWAY_PORT)."),
) -> None:
    """Run the gateway service (POST /query)."""

    settings = AppSettings()
    setup_logging(settings.log_level)
    uvicorn.run(
        create_gateway_app(settings),
        host=host or settings.gateway_host,
        port=port or settings.gateway_port,
        log_config=None,
    )


@app.command()
def aggregator(
    host: str | None = typer.Option(None, help="Listen host (default: CEP_WEATHER_AGGREGATOR_HOST)."),
    port: int | None = typer.Option(None, help="Listen port (default: CEP_WEATHER_AGGREGATOR_PORT)."),
) -> None:
    """Run the aggregation service (GET /weather?cep=...)."""

    settings = AppSettings()
    setup_logging(settings.log_level)
    try:
        application = create_aggregator_app(settings)
    except ConfigurationError as exc:
        _fail_on_missing_config(exc)
    uvicorn.run(
        application,
        host=host or settings.aggregator_host,
        port=port or settings.aggregator_port,
        log_config=None,
    )


async def run_lookup(
    code: str,
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WeatherResult:
    """Resolve one CEP in-process with a short-lived HTTP client."""

    api_key = settings.require_weather_api_key()
    async with build_async_client(settings, transport=transport) as client:
        pipeline = WeatherPipeline(
            locations=ViaCepLocationResolver(client, settings),
            weather=WeatherApiResolver(client, api_key=api_key, base_url=settings.weatherapi_base_url),
        )
        return await pipeline.resolve(code)


@app.command()
def lookup(
    cep: str = typer.Argument(..., help="CEP de 8 caracteres, p.ej. 01001000."),
    as_json: bool = typer.Option(False, "--json", help="Print the wire JSON instead of a table."),
) -> None:
    """Resolve a CEP without running the services."""

    settings = AppSettings()
    if not as_json:
        print_banner(_console)

    try:
        result = asyncio.run(run_lookup(cep, settings))
    except ConfigurationError as exc:
        _fail_on_missing_config(exc)
    except LookupPipelineError as exc:
        if isinstance(exc, LocationNotFound):
            payload: dict[str, object] = location_not_found_envelope().to_wire()
        else:
            payload = {"error": exc.message, "statuscode": exc.status_code}
        if as_json:
            typer.echo(json.dumps(payload, ensure_ascii=False))
        else:
            _console.print(build_error_panel(exc.message, exc.status_code))
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.to_wire(), ensure_ascii=False))
        return
    _console.print(build_weather_table(cep, result))


def run() -> None:
    app()
