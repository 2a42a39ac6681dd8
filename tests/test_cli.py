from __future__ import annotations

import json
from typing import NoReturn, get_type_hints

import httpx
import pytest
import typer
from typer.testing import CliRunner

from cli import doctor
from cli import main as cli_main
from core.domain.errors import ConfigurationError
from core.domain.models import WeatherResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CEP_WEATHER_WEATHER_API_KEY", raising=False)


async def test_run_lookup_uses_configured_services(settings, upstream):
    result = await cli_main.run_lookup("01001000", settings, transport=httpx.MockTransport(upstream.handler))

    assert result.to_wire() == {"city": "São Paulo", "temp_C": 25.3, "temp_F": 77.5, "temp_K": 298.5}


def test_lookup_prints_wire_json(monkeypatch):
    async def fake_lookup(code, settings, **kwargs):
        return WeatherResult(city="São Paulo", temp_c=25.3, temp_f=77.5, temp_k=298.5)

    monkeypatch.setattr(cli_main, "run_lookup", fake_lookup)

    result = runner.invoke(cli_main.app, ["lookup", "01001000", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"city": "São Paulo", "temp_C": 25.3, "temp_F": 77.5, "temp_K": 298.5}


def test_lookup_renders_table(monkeypatch):
    async def fake_lookup(code, settings, **kwargs):
        return WeatherResult(city="Recife", temp_c=28.0, temp_f=82.4, temp_k=301.2)

    monkeypatch.setattr(cli_main, "run_lookup", fake_lookup)

    result = runner.invoke(cli_main.app, ["lookup", "50000000"])

    assert result.exit_code == 0
    assert "Recife" in result.stdout
    assert "301.2" in result.stdout


def test_lookup_wrong_length_fails_without_network(monkeypatch):
    monkeypatch.setenv("CEP_WEATHER_WEATHER_API_KEY", "k")

    result = runner.invoke(cli_main.app, ["lookup", "123", "--json"])

    assert result.exit_code == 1
    assert json.loads(result.stdout) == {"error": "invalid zipcode", "statuscode": 422}


def test_lookup_without_api_key_is_configuration_error():
    result = runner.invoke(cli_main.app, ["lookup", "01001000", "--json"])

    assert result.exit_code == 2
    assert "Configuration error" in result.stdout


def test_aggregator_refuses_to_start_without_key(monkeypatch):
    started = []
    monkeypatch.setattr(cli_main.uvicorn, "run", lambda *args, **kwargs: started.append(args))

    result = runner.invoke(cli_main.app, ["aggregator"])

    assert result.exit_code == 2
    assert started == []


def test_configuration_failure_helper_always_exits():
    assert get_type_hints(cli_main._fail_on_missing_config)["return"] is NoReturn

    with pytest.raises(typer.Exit) as excinfo:
        cli_main._fail_on_missing_config(ConfigurationError("CEP_WEATHER_WEATHER_API_KEY is not set"))

    assert excinfo.value.exit_code == 2


def test_gateway_runs_uvicorn_with_configured_port(monkeypatch):
    calls = []
    monkeypatch.setattr(cli_main.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))

    result = runner.invoke(cli_main.app, ["gateway", "--port", "9090"])

    assert result.exit_code == 0
    assert calls[0]["port"] == 9090
    assert calls[0]["host"] == "0.0.0.0"


@pytest.mark.parametrize(("api_key", "exit_code"), [("k", 0), (None, 1)])
def test_doctor_reports_key_and_connectivity(monkeypatch, api_key, exit_code):
    if api_key:
        monkeypatch.setenv("CEP_WEATHER_WEATHER_API_KEY", api_key)

    async def fake_check(url, settings):
        return True, "HTTP 200"

    monkeypatch.setattr(doctor, "_check_http", fake_check)

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == exit_code
    assert "ViaCEP connectivity" in result.stdout
