"""Test doubles: a deterministic event loop and a scripted provider."""
from concurrent.futures import Future
from typing import Any, Callable, Dict, List, Optional

from weather_data import WeatherSnapshot
from weather_provider import WeatherProviderBase


class FakeTimer:
    """Stands in for asyncio.TimerHandle."""

    def __init__(self, when: float, callback: Callable, args: tuple):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeRequest:
    """A run_in_executor call that the test resolves by hand."""

    def __init__(self, func: Callable, args: tuple):
        self.func = func
        self.args = args
        self.future: Future = Future()

    @property
    def query(self) -> str:
        return self.args[0]

    def resolve(self, snapshot: WeatherSnapshot) -> None:
        if not self.future.cancelled():
            self.future.set_result(snapshot)

    def fail(self, error: BaseException) -> None:
        if not self.future.cancelled():
            self.future.set_exception(error)

    def run(self) -> None:
        """Call the real function and complete the future with its outcome."""
        try:
            result = self.func(*self.args)
        except Exception as exc:  # noqa: BLE001 - forwarded to the future
            self.fail(exc)
        else:
            self.resolve(result)


class FakeLoop:
    """
    Minimal event loop double with a manual clock.

    Timers only fire from advance(); executor calls are recorded and
    completed by the test.
    """

    def __init__(self):
        self.now = 0.0
        self.timers: List[FakeTimer] = []
        self.requests: List[FakeRequest] = []

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback: Callable, *args: Any) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback, args)
        self.timers.append(timer)
        return timer

    def run_in_executor(self, executor: Any, func: Callable, *args: Any) -> Future:
        request = FakeRequest(func, args)
        self.requests.append(request)
        return request.future

    def pending_timers(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in order."""
        target = self.now + seconds
        while True:
            due = sorted(
                (t for t in self.pending_timers() if t.when <= target),
                key=lambda t: t.when,
            )
            if not due:
                break
            timer = due[0]
            self.now = timer.when
            timer.fired = True
            timer.callback(*timer.args)
        self.now = target


class ScriptedProvider(WeatherProviderBase):
    """Provider returning canned snapshots (or raising canned errors) per query."""

    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        self.responses = responses or {}
        self.calls: List[str] = []

    def get_current(self, query: str) -> WeatherSnapshot:
        self.calls.append(query)
        outcome = self.responses.get(query)
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome is None:
            return make_snapshot(location=query.title())
        return outcome


def make_snapshot(**overrides: Any) -> WeatherSnapshot:
    fields = dict(
        location="London",
        country="GB",
        temp=12.6,
        feels_like=11.4,
        humidity=81,
        wind_speed=4.12,
        condition_main="Clouds",
        condition_description="broken clouds",
        condition_id=803,
        visibility=10000,
    )
    fields.update(overrides)
    return WeatherSnapshot(**fields)
