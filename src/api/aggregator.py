"""Servicio de agregación: `GET /weather?cep=<code>`.

Respuestas:
- 200 `{"city": ..., "temp_C": ..., "temp_F": ..., "temp_K": ...}`
- 404 `{"error": "zip code not found", "statuscode": 404}`
- 422 / 500 mensaje de error en texto plano
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from adapters.http_client import build_async_client
from adapters.viacep import ViaCepLocationResolver
from adapters.weatherapi import WeatherApiResolver
from api.common import install_observability
from core.config import AppSettings
from core.domain.errors import LocationNotFound, LookupPipelineError
from core.services.weather_pipeline import WeatherPipeline, location_not_found_envelope

logger = logging.getLogger(__name__)

SERVICE_NAME = "aggregator"


def create_aggregator_app(
    settings: AppSettings | None = None,
    *,
    pipeline: WeatherPipeline | None = None,
) -> FastAPI:
    """Construye la app de agregación.

    Por qué la factory recibe `pipeline` opcional:
    - Sin él, la app es dueña de un `httpx.AsyncClient` durante su vida y
      conecta ViaCEP + WeatherAPI en el arranque.
    - Sin API key de WeatherAPI falla aquí, antes de aceptar requests.
    """

    settings = settings or AppSettings()
    api_key = settings.require_weather_api_key() if pipeline is None else None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if pipeline is not None:
            yield
            return

        client = build_async_client(settings)
        app.state.pipeline = WeatherPipeline(
            locations=ViaCepLocationResolver(client, settings),
            weather=WeatherApiResolver(
                client,
                api_key=api_key or "",
                base_url=settings.weatherapi_base_url,
            ),
        )
        logger.info("Aggregation service ready (ViaCEP: %s)", settings.viacep_base_url)
        try:
            yield
        finally:
            await client.aclose()
            logger.info("Aggregation service stopped")

    app = FastAPI(title="cep-weather aggregator", version="0.1.0", lifespan=lifespan)
    if pipeline is not None:
        app.state.pipeline = pipeline
    install_observability(app, service=SERVICE_NAME)

    @app.get("/weather")
    @app.get("/clima", include_in_schema=False)
    async def weather(request: Request, cep: str = Query(default="")) -> Response:
        weather_pipeline: WeatherPipeline = request.app.state.pipeline
        try:
            result = await weather_pipeline.resolve(cep)
        except LocationNotFound:
            return JSONResponse(status_code=404, content=location_not_found_envelope().to_wire())
        except LookupPipelineError as exc:
            return PlainTextResponse(exc.message, status_code=exc.status_code)
        return JSONResponse(content=result.to_wire())

    return app
