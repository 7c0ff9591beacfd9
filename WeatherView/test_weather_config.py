"""Tests for configuration loading."""
import pytest
from unittest.mock import patch
from weather_config import DEFAULT_BASE_URL, WeatherConfig, load_config


def test_load_config_defaults():
    """Test defaults when only the key is set."""
    config = load_config({"WEATHER_API_KEY": "abc123"})

    assert config == WeatherConfig(api_key="abc123")
    assert config.base_url == DEFAULT_BASE_URL
    assert config.default_query == "london"
    assert config.lang == "en"
    assert config.timeout == 10.0
    assert config.error_clear_seconds == 2.0
    assert config.shake_seconds == 0.5


def test_load_config_overrides():
    config = load_config({
        "WEATHER_API_KEY": "abc123",
        "WEATHER_API_BASE": "http://localhost:9000",
        "WEATHER_DEFAULT_LOCATION": "tokyo,jp",
        "WEATHER_LANG": "de",
        "WEATHER_TIMEOUT": "3.5",
    })

    assert config.base_url == "http://localhost:9000"
    assert config.default_query == "tokyo,jp"
    assert config.lang == "de"
    assert config.timeout == 3.5


def test_load_config_missing_key_is_not_fatal(caplog):
    """A missing key is left for the API to reject."""
    config = load_config({})

    assert config.api_key == ""
    assert "WEATHER_API_KEY is not set" in caplog.text


def test_load_config_invalid_timeout():
    with pytest.raises(SystemExit) as exc_info:
        load_config({"WEATHER_API_KEY": "abc", "WEATHER_TIMEOUT": "soon"})

    assert "WEATHER_TIMEOUT" in str(exc_info.value)


def test_load_config_reads_dotenv(monkeypatch):
    """Without an explicit mapping the process environment is used."""
    monkeypatch.setenv("WEATHER_API_KEY", "from-env")
    monkeypatch.setenv("WEATHER_DEFAULT_LOCATION", "oslo")
    with patch("weather_config.load_dotenv") as mock_load_dotenv:
        config = load_config()

    mock_load_dotenv.assert_called_once()
    assert config.api_key == "from-env"
    assert config.default_query == "oslo"
