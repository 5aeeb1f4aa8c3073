"""Debouncing of rapidly repeated calls."""

import threading
from collections.abc import Callable
from typing import Any


# Quiescence window after the last call before the callback fires
DEFAULT_DEBOUNCE_SECONDS = 0.1


class Debouncer:
    """Delay a callback until calls have stopped for `delay` seconds.

    Each call cancels the pending invocation and schedules a new one with the
    latest arguments, so only the most recent call within the window runs.
    """

    def __init__(self, callback: Callable[..., Any], delay: float = DEFAULT_DEBOUNCE_SECONDS) -> None:
        self.callback = callback
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending_args: tuple[tuple, dict] | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending_args = (args, kwargs)
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.args = (self._timer,)
            self._timer.daemon = True
            self._timer.start()

    def _take_pending(self, timer: threading.Timer | None = None) -> tuple[tuple, dict] | None:
        with self._lock:
            # A timer superseded while waiting for the lock must not run the newer call.
            if timer is not None and timer is not self._timer:
                return None
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            pending, self._pending_args = self._pending_args, None
            return pending

    def _fire(self, timer: threading.Timer | None = None) -> None:
        pending = self._take_pending(timer)
        if pending is not None:
            args, kwargs = pending
            self.callback(*args, **kwargs)

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending_args is not None

    def flush(self) -> None:
        """Run the pending call immediately, if there is one."""
        self._fire()

    def cancel(self) -> None:
        """Drop the pending call without running it."""
        self._take_pending()
