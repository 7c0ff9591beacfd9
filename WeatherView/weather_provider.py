"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from typing import Optional

from weather_data import WeatherSnapshot


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, query: str) -> WeatherSnapshot:
        """
        Fetch current weather data for a location.

        Args:
            query: Place name, e.g. "london" or "paris,fr"

        Returns:
            WeatherSnapshot: Current weather information

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""

    generic_message = "Something went wrong, please try again"

    def __init__(self, detail: str, server_message: Optional[str] = None):
        super().__init__(detail)
        self.server_message = server_message

    @property
    def user_message(self) -> str:
        """Text shown to the user: the server's message when it sent one."""
        return self.server_message or self.generic_message


class NetworkError(WeatherProviderError):
    """No response was received (connection failure, timeout)."""

    generic_message = "Unable to reach the weather service"


class HttpError(WeatherProviderError):
    """The service answered with a non-2xx status."""

    generic_message = "The weather service rejected the request"

    def __init__(self, status_code: int, detail: str, server_message: Optional[str] = None):
        super().__init__(detail, server_message)
        self.status_code = status_code


class ParseError(WeatherProviderError):
    """The response body was not the expected JSON document."""

    generic_message = "Unexpected response from the weather service"
