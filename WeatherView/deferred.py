"""Cancelable deferred actions bound to an event loop."""
import logging
from typing import Any, Callable, Optional


class DeferredAction:
    """
    A callback scheduled once on an event loop, restartable and cancelable.

    Only one pending call exists at a time: start() replaces any pending
    call, cancel() drops it. The owner cancels it on teardown so nothing
    fires afterwards.
    """

    def __init__(self, loop: Any, delay: float, callback: Callable[[], None], name: str = "deferred"):
        """
        Args:
            loop: Anything with asyncio's call_later(delay, callback) signature
            delay: Seconds between start() and the callback
            callback: Invoked with no arguments when the delay expires
            name: Label used in log messages
        """
        self._loop = loop
        self.delay = delay
        self._callback = callback
        self.name = name
        self._handle: Optional[Any] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """(Re)start the countdown from now."""
        self.cancel()
        logging.debug("%s: scheduled in %.3fs", self.name, self.delay)
        self._handle = self._loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            logging.debug("%s: cancelled", self.name)
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._callback()
