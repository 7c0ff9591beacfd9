"""Layout logic for the weather view - pure functions for testability."""
from typing import Any, Dict, List, Optional

from request_state import Failed, Loading
from weather_data import WeatherSnapshot


class DrawOp:
    """Represents a drawing operation (for testing/layout calculation)."""
    def __init__(self, op_type: str, **kwargs):
        self.op_type = op_type
        self.kwargs = kwargs

    def __repr__(self) -> str:
        return f"DrawOp({self.op_type!r}, {self.kwargs!r})"


# OpenWeather condition group -> symbol. Groups not listed get no icon.
CONDITION_ICONS = {
    "Clouds": "☁",
    "Haze": "🌫",
    "Rain": "🌧",
    "Clear": "☀",
    "Drizzle": "🌦",
    "Snow": "❄",
    "Thunderstorm": "⛈",
}

SPINNER = "◌"


def get_condition_icon(condition_main: Optional[str]) -> Optional[str]:
    """
    Look up the icon for a weather condition group.

    Args:
        condition_main: OpenWeather "weather[0].main" value, e.g. "Rain"

    Returns:
        The symbol, or None for an unrecognized group
    """
    if not condition_main:
        return None
    return CONDITION_ICONS.get(condition_main)


def format_card(snapshot: WeatherSnapshot) -> Dict[str, Any]:
    """
    Numbers and labels shown on the result card.

    Temperatures are rounded to whole degrees; humidity and wind speed are
    shown as received, visibility in kilometers.
    """
    return {
        "place": snapshot.place,
        "icon": get_condition_icon(snapshot.condition_main),
        "temp": round(snapshot.temp),
        "feels_like": round(snapshot.feels_like),
        "humidity": snapshot.humidity,
        "visibility_km": snapshot.visibility_km,
        "wind_speed": snapshot.wind_speed,
        "description": snapshot.condition_description,
    }


def _format_number(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def card_lines(snapshot: WeatherSnapshot) -> List[str]:
    """Text lines of the result card, top to bottom."""
    card = format_card(snapshot)
    visibility = card["visibility_km"]
    return [
        card["place"],
        f"{card['icon'] or ' '}  {card['temp']}°C  {card['description']}",
        f"Visibility {_format_number(visibility) + ' km' if visibility is not None else 'N/A'}",
        f"Feels like {card['feels_like']}°C",
        f"Humidity {_format_number(card['humidity'])}%",
        f"Wind {_format_number(card['wind_speed'])} m/s",
    ]


def calculate_layout(view: Any) -> List[DrawOp]:
    """
    Calculate the drawing operations for the current view state.

    Shows one of: spinner (loading), the result card (last good snapshot,
    also kept under an error banner), or an empty placeholder. The input
    line and the error banner are drawn on top when present.

    Args:
        view: Object exposing query, shaking, state, snapshot, error_message

    Returns:
        List of DrawOp objects representing what to draw
    """
    ops = [DrawOp("input", text=view.query, shaking=view.shaking)]

    if view.error_message:
        ops.append(DrawOp("banner", text=view.error_message))

    if isinstance(view.state, Loading):
        ops.append(DrawOp("spinner", text=f"{SPINNER} Loading {view.state.query}..."))
    elif view.snapshot is not None:
        for line in card_lines(view.snapshot):
            ops.append(DrawOp("text", text=line))
    elif isinstance(view.state, Failed):
        ops.append(DrawOp("empty", text="No weather to show"))

    return ops
