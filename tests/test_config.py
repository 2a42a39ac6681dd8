from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import AppSettings
from core.domain.errors import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("WEATHER_API_KEY", "AGGREGATOR_URL", "HTTP_TIMEOUT_SECONDS", "GATEWAY_PORT"):
        monkeypatch.delenv(f"CEP_WEATHER_{name}", raising=False)


def test_defaults_have_no_api_key():
    settings = AppSettings()

    assert settings.weather_api_key is None
    assert settings.viacep_base_url == "https://viacep.com.br"
    assert settings.gateway_port == 8080
    assert settings.aggregator_port == 8081


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("CEP_WEATHER_WEATHER_API_KEY", "from-env")
    monkeypatch.setenv("CEP_WEATHER_AGGREGATOR_URL", "http://servico-b:8081")

    settings = AppSettings()

    assert settings.require_weather_api_key() == "from-env"
    assert settings.aggregator_url == "http://servico-b:8081"


def test_reads_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("CEP_WEATHER_WEATHER_API_KEY=dotenv-key\n", encoding="utf-8")

    assert AppSettings().weather_api_key == "dotenv-key"


def test_missing_key_is_configuration_error():
    with pytest.raises(ConfigurationError):
        AppSettings().require_weather_api_key()


def test_timeout_must_be_positive(monkeypatch):
    monkeypatch.setenv("CEP_WEATHER_HTTP_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValidationError):
        AppSettings()
