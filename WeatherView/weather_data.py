"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current weather for one location, as last fetched successfully."""
    location: str
    country: str
    temp: float  # Celsius
    feels_like: float  # Celsius
    humidity: float  # percentage
    wind_speed: float  # m/s
    condition_main: str  # e.g., "Clouds", "Rain", "Clear"
    condition_description: str  # e.g., "broken clouds", "light rain"
    condition_id: int = 0  # OpenWeather condition code
    visibility: Optional[int] = None  # meters

    @property
    def visibility_km(self) -> Optional[float]:
        """Visibility converted from meters to kilometers."""
        if self.visibility is None:
            return None
        return self.visibility / 1000

    @property
    def place(self) -> str:
        """Display name, e.g. "London, GB"."""
        if self.country:
            return f"{self.location}, {self.country}"
        return self.location
