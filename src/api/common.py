"""Rutas y middleware compartidos por el gateway y el agregador."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from observability.middleware import MetricsMiddleware, RequestContextMiddleware


def install_observability(app: FastAPI, *, service: str) -> None:
    """Instala correlación de requests, métricas HTTP, `/metrics` y `/healthz`."""

    app.add_middleware(MetricsMiddleware, service=service)
    app.add_middleware(RequestContextMiddleware)

    @app.get("/healthz", include_in_schema=False)
    async def healthz() -> dict[str, str]:
        return {"status": "ok", "service": service}

    @app.get("/metrics", include_in_schema=False)
    async def metrics_endpoint() -> Response:
        return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


def request_id_of(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)
