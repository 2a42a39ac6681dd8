"""Servicio gateway: `POST /query` con `{"cep": "<8 caracteres>"}`."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from adapters.aggregator_client import AggregatorClient
from adapters.http_client import build_async_client
from api.common import install_observability, request_id_of
from core.config import AppSettings
from core.domain.models import ErrorEnvelope
from core.services.gateway import GatewayService

logger = logging.getLogger(__name__)

SERVICE_NAME = "gateway"


def create_gateway_app(
    settings: AppSettings | None = None,
    *,
    service: GatewayService | None = None,
) -> FastAPI:
    settings = settings or AppSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if service is not None:
            yield
            return

        client = build_async_client(settings)
        app.state.gateway = GatewayService(upstream=AggregatorClient(client, settings))
        logger.info("Gateway ready (aggregator: %s)", settings.aggregator_url)
        try:
            yield
        finally:
            await client.aclose()
            logger.info("Gateway stopped")

    app = FastAPI(title="cep-weather gateway", version="0.1.0", lifespan=lifespan)
    if service is not None:
        app.state.gateway = service
    install_observability(app, service=SERVICE_NAME)

    @app.post("/query")
    @app.post("/consulta", include_in_schema=False)
    async def query(request: Request) -> JSONResponse:
        gateway: GatewayService = request.app.state.gateway
        raw_body = await request.body()
        outcome, status_code = await gateway.handle(raw_body, request_id=request_id_of(request))
        if isinstance(outcome, ErrorEnvelope):
            return JSONResponse(status_code=status_code, content=outcome.to_wire(include_status=False))
        return JSONResponse(status_code=status_code, content=outcome.to_wire())

    return app
