"""Middleware FastAPI de correlación de requests y métricas HTTP.

Por qué middleware:
- El request id y las métricas aplican igual a todas las rutas de ambos servicios.
- Las etiquetas `path` usan la plantilla de la ruta, nunca la URL del cliente.
"""
from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from observability.metrics import http_request_latency_seconds, http_requests_total

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

UNMATCHED_PATH = "unmatched"


def route_template(request: Request) -> str:
    """Plantilla de la ruta que atendió el request (`/weather`), no la URL cruda.

    Las URLs sin ruta comparten una sola etiqueta para acotar la cardinalidad.
    """

    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_PATH


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Lee o genera `X-Request-ID`, registra el request y devuelve el id en la respuesta."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        logger.info("Request started - %s %s [%s]", request.method, request.url.path, request_id)
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "Request failed - %s %s [%s] - Duration: %.3fs",
                request.method,
                request.url.path,
                request_id,
                time.perf_counter() - start_time,
                exc_info=True,
            )
            raise

        logger.info(
            "Request completed - %s %s [%s] - Status: %s - Duration: %.3fs",
            request.method,
            request.url.path,
            request_id,
            response.status_code,
            time.perf_counter() - start_time,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Cuenta requests por ruta, método y status, y mide la latencia por ruta y método."""

    def __init__(self, app: ASGIApp, *, service: str) -> None:
        super().__init__(app)
        self.service = service

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        latency = time.perf_counter() - start_time

        path = route_template(request)
        http_requests_total.labels(
            service=self.service,
            path=path,
            method=request.method,
            status=response.status_code,
        ).inc()
        http_request_latency_seconds.labels(
            service=self.service,
            path=path,
            method=request.method,
        ).observe(latency)
        return response
