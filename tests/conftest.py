"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings

VIACEP_HOST = "viacep.test"
WEATHER_HOST = "weather.test"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        weather_api_key="test-key",
        viacep_base_url=f"https://{VIACEP_HOST}",
        weatherapi_base_url=f"https://{WEATHER_HOST}/v1",
        aggregator_url="http://aggregator.test",
        http_timeout_seconds=5.0,
    )


class UpstreamStub:
    """Routes outbound requests by host and records every call."""

    def __init__(self) -> None:
        self.viacep: dict[str, Any] = {}
        self.weather: dict[str, Any] = {}
        self.calls: list[httpx.Request] = []
        self.viacep_handler: Handler | None = None
        self.weather_handler: Handler | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if request.url.host == VIACEP_HOST:
            if self.viacep_handler is not None:
                return self.viacep_handler(request)
            code = request.url.path.split("/")[2]
            payload = self.viacep.get(code, {"erro": True})
            return httpx.Response(200, json=payload)
        if request.url.host == WEATHER_HOST:
            if self.weather_handler is not None:
                return self.weather_handler(request)
            location = request.url.params["q"]
            if location not in self.weather:
                return httpx.Response(
                    400,
                    json={"error": {"code": 1006, "message": "No matching location found."}},
                )
            celsius, fahrenheit = self.weather[location]
            return httpx.Response(200, json={"current": {"temp_c": celsius, "temp_f": fahrenheit}})
        return httpx.Response(599, text=f"unexpected host {request.url.host}")

    def hosts_called(self) -> list[str]:
        return [request.url.host for request in self.calls]


@pytest.fixture
def upstream() -> UpstreamStub:
    stub = UpstreamStub()
    stub.viacep["01001000"] = {"cep": "01001-000", "localidade": "São Paulo", "uf": "SP"}
    stub.weather["São Paulo"] = (25.3, 77.5)
    return stub


@pytest.fixture
async def http_client(upstream: UpstreamStub):
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler)) as client:
        yield client
