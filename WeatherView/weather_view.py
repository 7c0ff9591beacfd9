"""WeatherView - the fetch/display state machine behind the lookup widget."""
import functools
import logging
from dataclasses import dataclass
from typing import Any, Optional

from card_layout import calculate_layout
from deferred import DeferredAction
from request_state import Failed, Idle, Loaded, Loading, RequestState
from weather_config import WeatherConfig
from weather_data import WeatherSnapshot
from weather_provider import WeatherProviderBase, WeatherProviderError


@dataclass(frozen=True)
class InFlightRequest:
    """The fetch the view is currently waiting on, tagged with its query."""
    seq: int
    query: str
    future: Any


class WeatherView:
    """
    Owns the search query and drives fetch -> render cycles.

    All mutation happens on the event loop thread: submit() and teardown()
    are called from loop callbacks, fetch completions arrive through
    future done-callbacks and timers through loop.call_later. Only the
    most recently issued fetch may update the state.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        screen: Any,
        config: WeatherConfig,
        loop: Any,
        executor: Any = None,
    ):
        """
        Args:
            provider: Source of WeatherSnapshots
            screen: Screen backend with a show(ops) method
            config: Default query and timer durations
            loop: asyncio event loop (or a test double with call_later and
                run_in_executor)
            executor: Executor for the blocking provider call (None = loop default)
        """
        self._provider = provider
        self._screen = screen
        self._loop = loop
        self._executor = executor

        self.query = config.default_query
        self.state: RequestState = Idle()
        self.snapshot: Optional[WeatherSnapshot] = None
        self.error_message = ""
        self.shaking = False

        self._seq = 0
        self._in_flight: Optional[InFlightRequest] = None
        self._active = False
        self._error_timer = DeferredAction(loop, config.error_clear_seconds, self._clear_error, "error-clear")
        self._shake_timer = DeferredAction(loop, config.shake_seconds, self._stop_shaking, "shake")

    def __enter__(self) -> "WeatherView":
        self.activate()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    @property
    def active(self) -> bool:
        return self._active

    @property
    def pending_query(self) -> Optional[str]:
        """Query of the authoritative in-flight fetch, if any."""
        return self._in_flight.query if self._in_flight else None

    def activate(self) -> None:
        """Start the view and fetch the default query."""
        if self._active:
            return
        self._active = True
        logging.info("WeatherView activated, default query %r", self.query)
        self._start_fetch(self.query)

    def submit(self, text: str) -> bool:
        """
        Handle an explicit submission from the input.

        Returns:
            True if a fetch was issued, False for an empty input
        """
        if not self._active:
            raise RuntimeError("WeatherView is not active")
        query = (text or "").strip()
        if not query:
            logging.debug("Empty submission ignored")
            self.shaking = True
            self._shake_timer.start()
            self._render()
            return False

        self.query = query
        self._set_error("")
        self._start_fetch(query)
        return True

    def teardown(self) -> None:
        """Stop the view; cancels timers and ignores any late completion."""
        if not self._active:
            return
        self._active = False
        self._error_timer.cancel()
        self._shake_timer.cancel()
        if self._in_flight is not None:
            self._in_flight.future.cancel()
            self._in_flight = None
        logging.info("WeatherView torn down")

    def _start_fetch(self, query: str) -> None:
        self._seq += 1
        if self._in_flight is not None:
            logging.info("Superseding in-flight request for %r", self._in_flight.query)
        self.state = Loading(query)
        future = self._loop.run_in_executor(self._executor, self._provider.get_current, query)
        request = InFlightRequest(self._seq, query, future)
        self._in_flight = request
        logging.info("Fetch #%s issued for %r", request.seq, query)
        self._render()
        future.add_done_callback(functools.partial(self._on_fetch_done, request))

    def _on_fetch_done(self, request: InFlightRequest, future: Any) -> None:
        if not self._active or self._in_flight is None or request.seq != self._in_flight.seq:
            logging.debug("Ignoring stale result of fetch #%s for %r", request.seq, request.query)
            return
        self._in_flight = None
        if future.cancelled():
            return

        try:
            snapshot = future.result()
        except WeatherProviderError as err:
            logging.warning("Weather fetch for %r failed: %s", request.query, err)
            self._fail(err.user_message)
        except Exception as exc:
            logging.exception("Unexpected error fetching %r: %s", request.query, exc)
            self._fail(WeatherProviderError.generic_message)
        else:
            logging.info(
                "Weather: %s temp=%s feels=%s humidity=%s wind=%.1f condition=%s",
                snapshot.place,
                snapshot.temp,
                snapshot.feels_like,
                snapshot.humidity,
                snapshot.wind_speed,
                snapshot.condition_main,
            )
            self.snapshot = snapshot
            self.state = Loaded(snapshot)
            self._set_error("")
        self._render()

    def _fail(self, message: str) -> None:
        # self.snapshot is kept so the last good result stays on screen
        self.state = Failed(message)
        self._set_error(message)

    def _set_error(self, message: str) -> None:
        self.error_message = message
        if message:
            self._error_timer.start()
        else:
            self._error_timer.cancel()

    def _clear_error(self) -> None:
        if not self._active:
            return
        self.error_message = ""
        self._render()

    def _stop_shaking(self) -> None:
        if not self._active:
            return
        self.shaking = False
        self._render()

    def _render(self) -> None:
        self._screen.show(calculate_layout(self))
