"""Time-deferred search input handling.

Keystrokes are recorded immediately but the callback only runs once the input
has been quiet for the configured delay. Everything runs on the caller's
thread: the owner calls poll() from its event loop or render tick.
"""

import time
from typing import Callable, Generic, Optional, TypeVar

from ..config import get_settings

T = TypeVar("T")


class Debouncer(Generic[T]):
    def __init__(
        self,
        callback: Callable[[T], None],
        delay_ms: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if delay_ms is None:
            delay_ms = get_settings().SEARCH_DEBOUNCE_MS
        self.delay = delay_ms / 1000.0
        self.callback = callback
        self.clock = clock
        self.value: Optional[T] = None
        self._deadline: Optional[float] = None

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def push(self, value: T) -> None:
        """Record the latest input and restart the quiet period."""
        self.value = value
        self._deadline = self.clock() + self.delay

    def cancel(self) -> None:
        self._deadline = None

    def poll(self) -> bool:
        """Fires the callback with the latest value if the quiet period is over."""
        if self._deadline is None or self.clock() < self._deadline:
            return False
        self._deadline = None
        self.callback(self.value)
        return True

    def flush(self) -> bool:
        """Fires immediately if an input is pending, e.g. on Enter."""
        if self._deadline is None:
            return False
        self._deadline = None
        self.callback(self.value)
        return True
