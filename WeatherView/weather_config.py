"""Configuration resolved once at startup from the environment / .env file."""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"


@dataclass(frozen=True)
class WeatherConfig:
    """Explicit configuration value handed to the provider and the view."""
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    default_query: str = "london"
    lang: str = "en"
    timeout: float = 10.0  # HTTP timeout in seconds
    error_clear_seconds: float = 2.0
    shake_seconds: float = 0.5


def load_config(env: Optional[Mapping[str, str]] = None) -> WeatherConfig:
    """
    Build a WeatherConfig from environment variables.

    Args:
        env: Mapping to read instead of os.environ (skips .env loading)

    Raises:
        SystemExit: If a numeric setting cannot be parsed
    """
    if env is None:
        load_dotenv()
        env = os.environ

    api_key = env.get("WEATHER_API_KEY", "")
    if not api_key:
        # Requests will fail with the API's own 401 message
        logging.warning("WEATHER_API_KEY is not set; lookups will be rejected")

    timeout = env.get("WEATHER_TIMEOUT", "10")
    try:
        timeout_val = float(timeout)
    except ValueError as exc:
        raise SystemExit(f"Invalid WEATHER_TIMEOUT: {exc}") from exc

    config = WeatherConfig(
        api_key=api_key,
        base_url=env.get("WEATHER_API_BASE") or DEFAULT_BASE_URL,
        default_query=env.get("WEATHER_DEFAULT_LOCATION") or "london",
        lang=env.get("WEATHER_LANG", "en"),
        timeout=timeout_val,
    )
    logging.info(
        "Configuration loaded: base_url=%s default=%s lang=%s timeout=%ss",
        config.base_url,
        config.default_query,
        config.lang,
        config.timeout,
    )
    return config
