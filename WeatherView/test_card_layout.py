"""Tests for layout logic."""
import pytest
from fakes import make_snapshot
from card_layout import calculate_layout, card_lines, format_card, get_condition_icon
from request_state import Failed, Idle, Loaded, Loading


class ViewStub:
    """Just the attributes calculate_layout reads."""

    def __init__(self, state, snapshot=None, error_message="", query="london", shaking=False):
        self.state = state
        self.snapshot = snapshot
        self.error_message = error_message
        self.query = query
        self.shaking = shaking


@pytest.mark.parametrize("condition, icon", [
    ("Clouds", "☁"),
    ("Haze", "🌫"),
    ("Rain", "🌧"),
    ("Clear", "☀"),
    ("Drizzle", "🌦"),
    ("Snow", "❄"),
    ("Thunderstorm", "⛈"),
])
def test_condition_icons(condition, icon):
    assert get_condition_icon(condition) == icon


@pytest.mark.parametrize("condition", ["Tornado", "Mist", "rain", "", None])
def test_unknown_condition_has_no_icon(condition):
    assert get_condition_icon(condition) is None


def test_format_card_numbers():
    """Rendered numbers come straight from the response fields."""
    snapshot = make_snapshot(temp=12.6, feels_like=-3.2, humidity=81, visibility=8500, wind_speed=4.12)

    card = format_card(snapshot)

    assert card["temp"] == 13
    assert card["feels_like"] == -3
    assert card["humidity"] == 81
    assert card["visibility_km"] == 8.5
    assert card["wind_speed"] == 4.12


def test_format_card_rain_icon():
    card = format_card(make_snapshot(condition_main="Rain"))
    assert card["icon"] == "🌧"


def test_format_card_unknown_condition():
    card = format_card(make_snapshot(condition_main="Squall"))
    assert card["icon"] is None


def test_card_lines():
    lines = card_lines(make_snapshot())
    assert lines == [
        "London, GB",
        "☁  13°C  broken clouds",
        "Visibility 10 km",
        "Feels like 11°C",
        "Humidity 81%",
        "Wind 4.12 m/s",
    ]


def test_card_lines_without_visibility():
    lines = card_lines(make_snapshot(visibility=None))
    assert "Visibility N/A" in lines


def test_layout_idle():
    ops = calculate_layout(ViewStub(Idle()))
    assert [op.op_type for op in ops] == ["input"]


def test_layout_loading_hides_card():
    ops = calculate_layout(ViewStub(Loading("paris"), snapshot=make_snapshot(), query="paris"))

    assert [op.op_type for op in ops] == ["input", "spinner"]
    assert "paris" in ops[1].kwargs["text"]


def test_layout_loaded():
    snapshot = make_snapshot()
    ops = calculate_layout(ViewStub(Loaded(snapshot), snapshot=snapshot))

    assert ops[0].op_type == "input"
    texts = [op.kwargs["text"] for op in ops if op.op_type == "text"]
    assert texts == card_lines(snapshot)


def test_layout_error_over_stale_snapshot():
    snapshot = make_snapshot()
    ops = calculate_layout(ViewStub(Failed("city not found"), snapshot=snapshot, error_message="city not found"))

    assert [op.op_type for op in ops[:2]] == ["input", "banner"]
    assert ops[1].kwargs["text"] == "city not found"
    assert any(op.kwargs["text"] == "London, GB" for op in ops[2:])


def test_layout_error_without_snapshot():
    ops = calculate_layout(ViewStub(Failed("down"), error_message="down"))
    assert [op.op_type for op in ops] == ["input", "banner", "empty"]


def test_layout_shaking_input():
    ops = calculate_layout(ViewStub(Idle(), shaking=True))
    assert ops[0].kwargs["shaking"] is True
