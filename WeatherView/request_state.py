"""Request states of the weather view; exactly one holds at a time."""
from dataclasses import dataclass
from typing import Union

from weather_data import WeatherSnapshot


@dataclass(frozen=True)
class Idle:
    """Not activated yet; nothing requested."""


@dataclass(frozen=True)
class Loading:
    query: str


@dataclass(frozen=True)
class Loaded:
    snapshot: WeatherSnapshot


@dataclass(frozen=True)
class Failed:
    message: str


RequestState = Union[Idle, Loading, Loaded, Failed]
