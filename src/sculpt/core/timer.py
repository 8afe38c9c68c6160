"""
Elapsed-time ticker for the active session.

SessionTimer owns one background thread at a time. It only reads its own
start time and reports a formatted label; it never touches session data.
"""

import threading
import time
from typing import Callable

from .config import TICK_INTERVAL_SECONDS, TIMER_RESET_LABEL

TickCallback = Callable[[str], None]


def format_elapsed(seconds: float) -> str:
    """Format elapsed seconds as M:SS (minutes are not wrapped into hours)."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


class SessionTimer:
    """
    Start/stop ticker that calls ``on_tick(label)`` every interval.

    start() cancels a running ticker before starting a new one, so there is
    never more than one ticking thread per timer.
    """

    def __init__(
        self,
        interval: float = TICK_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interval = interval
        self._clock = clock
        self._lock = threading.Lock()
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None
        self._start_time: float | None = None

    @property
    def running(self) -> bool:
        return self._start_time is not None

    def elapsed_seconds(self) -> float:
        if self._start_time is None:
            return 0.0
        return self._clock() - self._start_time

    def label(self) -> str:
        if self._start_time is None:
            return TIMER_RESET_LABEL
        return format_elapsed(self.elapsed_seconds())

    def start(self, on_tick: TickCallback | None = None) -> None:
        """Restart the ticker from zero."""
        with self._lock:
            self._cancel_locked()
            self._start_time = self._clock()
            if on_tick is None:
                return
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(on_tick, stop_event),
                name="sculpt-session-timer",
                daemon=True,
            )
            self._stop_event = stop_event
            self._thread = thread
            thread.start()

    def stop(self) -> None:
        """Cancel the ticker and reset the label to 0:00."""
        with self._lock:
            self._cancel_locked()
            self._start_time = None

    def _cancel_locked(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=self.interval + 1.0)
        self._stop_event = None
        self._thread = None

    def _run(self, on_tick: TickCallback, stop_event: threading.Event) -> None:
        # First tick fires immediately, then once per interval until cancelled.
        while not stop_event.is_set():
            on_tick(self.label())
            if stop_event.wait(self.interval):
                break
