"""OpenWeather Current Weather API provider implementation."""
import logging
import requests
from typing import Any, Dict
from weather_provider import (
    HttpError,
    NetworkError,
    ParseError,
    WeatherProviderBase,
)
from weather_data import WeatherSnapshot
from weather_config import WeatherConfig


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Looks locations up by name: https://openweathermap.org/current#name
    Units are always metric (Celsius, m/s).
    """

    UNITS = "metric"

    def __init__(self, config: WeatherConfig):
        """
        Initialize OpenWeather provider.

        Args:
            config: Resolved configuration holding the API key, base URL,
                language and HTTP timeout
        """
        self.api_key = config.api_key
        self.endpoint = f"{config.base_url.rstrip('/')}/weather"
        self.lang = config.lang
        self.timeout = config.timeout

    def get_current(self, query: str) -> WeatherSnapshot:
        """
        Fetch current weather for a place name.

        Returns:
            WeatherSnapshot: Current weather information

        Raises:
            NetworkError: No response was received
            HttpError: The API answered with a non-2xx status
            ParseError: The response body could not be understood
        """
        params = {
            "q": query,
            "appid": self.api_key,
            "units": self.UNITS,
            "lang": self.lang,
        }

        try:
            logging.info(f"Making OpenWeather API request: {self.endpoint} q={query!r}")
            logging.debug(f"Request parameters: units={self.UNITS}, lang={self.lang}")
            response = requests.get(self.endpoint, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise NetworkError(f"Network error: {e}") from e

        logging.info(f"API response status: {response.status_code}")

        if not response.ok:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response)

        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Response body is not JSON: {response.text[:200]}")
            raise ParseError(f"Failed to parse response: {e}") from e

        logging.debug(f"API response (truncated): {str(data)[:500]}...")
        snapshot = self._parse_snapshot(data)
        logging.info(
            f"Successfully parsed weather data: {snapshot.place} {snapshot.temp}°C, {snapshot.condition_main}"
        )
        return snapshot

    def _parse_snapshot(self, data: Any) -> WeatherSnapshot:
        """Map a Current Weather response document onto a WeatherSnapshot."""
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

        # Only the first condition is displayed
        weather_array = data.get("weather") or []
        if not isinstance(weather_array, list):
            raise ParseError(f"Expected 'weather' to be an array, got {type(weather_array).__name__}")
        if not weather_array:
            logging.error("Response missing 'weather' array")
            raise ParseError("Response missing 'weather' array")
        weather = weather_array[0]

        main_data = data.get("main") or {}
        if not main_data:
            raise ParseError("Response missing 'main' block")

        wind_data = data.get("wind") or {}
        sys_data = data.get("sys") or {}

        try:
            return WeatherSnapshot(
                location=data["name"],
                country=sys_data.get("country", ""),
                temp=float(main_data["temp"]),
                feels_like=float(main_data["feels_like"]),
                humidity=main_data["humidity"],
                wind_speed=float(wind_data["speed"]),
                condition_main=weather.get("main", ""),
                condition_description=weather.get("description", ""),
                condition_id=int(weather.get("id", 0)),
                visibility=data.get("visibility"),
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise ParseError(f"Failed to parse response: {e}") from e

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        try:
            error_data: Dict[str, Any] = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise HttpError(
                response.status_code,
                f"HTTP {response.status_code}: {response.text[:200]}",
            )

        logging.error(f"OpenWeather API error response: {error_data}")
        message = error_data.get("message") if isinstance(error_data, dict) else None
        cod = error_data.get("cod", response.status_code) if isinstance(error_data, dict) else response.status_code
        raise HttpError(
            response.status_code,
            f"OpenWeather API error {cod}: {message or 'Unknown error'}",
            server_message=message or None,
        )
