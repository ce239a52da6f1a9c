"""
Tick Scheduling

Periodic and one-shot callback scheduling with explicit cancel handles.

ThreadScheduler runs each timer on a daemon thread and uses threading.Event
for sleep/wake, so cancel() wakes the thread immediately - no polling.
ManualScheduler keeps a fake clock that only moves when advance() is called,
for deterministic tests and the instant --ticks mode of the CLI.

Callbacks of one timer never overlap: the next tick is scheduled only after
the previous callback returned.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

# Float slack when comparing accumulated due times against the fake clock
_EPSILON = 1e-9


class TimerHandle(ABC):
    """Cancel handle returned by every schedule call."""

    @abstractmethod
    def cancel(self) -> None:
        """Cancel the timer. Safe to call more than once."""

    @property
    @abstractmethod
    def active(self) -> bool:
        """True while the timer may still fire."""


class Scheduler(Protocol):
    """Tick source used by the detection session and the voice matcher."""

    def call_every(
        self, interval_s: float, callback: Callable[[], None]
    ) -> TimerHandle: ...

    def call_later(
        self, delay_s: float, callback: Callable[[], None]
    ) -> TimerHandle: ...

    def clock(self) -> float: ...


def _run_guarded(callback: Callable[[], None], name: str) -> None:
    """Run a timer callback; an exception is logged and never kills the timer."""
    try:
        callback()
    except Exception as e:
        logger.error(f"Error in {name} callback: {e}", exc_info=True)


class _ThreadTimer(TimerHandle):
    def __init__(
        self,
        delay_s: float,
        callback: Callable[[], None],
        repeat: bool,
        name: str,
    ):
        self._delay_s = delay_s
        self._callback = callback
        self._repeat = repeat
        self._name = name
        self._cancelled = threading.Event()
        self._finished = False
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        # wait() returns True when cancel() was called
        while not self._cancelled.wait(timeout=self._delay_s):
            _run_guarded(self._callback, self._name)
            if not self._repeat:
                break
        self._finished = True
        logger.debug(f"{self._name} timer exited")

    def cancel(self) -> None:
        if self._cancelled.is_set():
            return
        self._cancelled.set()
        if threading.current_thread() is not self._thread and self._thread.is_alive():
            self._thread.join(timeout=2.0)
            if self._thread.is_alive():
                logger.warning(f"{self._name} timer did not stop cleanly")

    @property
    def active(self) -> bool:
        return not self._cancelled.is_set() and not self._finished


class ThreadScheduler:
    """Wall-clock scheduler backed by daemon threads."""

    def call_every(
        self, interval_s: float, callback: Callable[[], None], name: str = "Ticker"
    ) -> TimerHandle:
        timer = _ThreadTimer(interval_s, callback, repeat=True, name=name)
        timer.start()
        return timer

    def call_later(
        self, delay_s: float, callback: Callable[[], None], name: str = "Timer"
    ) -> TimerHandle:
        timer = _ThreadTimer(delay_s, callback, repeat=False, name=name)
        timer.start()
        return timer

    def clock(self) -> float:
        return time.monotonic()


class _ManualTimer(TimerHandle):
    def __init__(
        self,
        due: float,
        interval_s: float | None,
        callback: Callable[[], None],
        seq: int,
    ):
        self.due = due
        self.interval_s = interval_s
        self.callback = callback
        self.seq = seq
        self._active = True

    def cancel(self) -> None:
        self._active = False

    def finish(self) -> None:
        self._active = False

    @property
    def active(self) -> bool:
        return self._active


class ManualScheduler:
    """
    Scheduler driven by a fake clock.

    Timers fire only inside advance(), in due-time order, with the clock set
    to each timer's due time while its callback runs.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._timers: list[_ManualTimer] = []
        self._seq = 0

    def clock(self) -> float:
        return self._now

    def call_every(
        self, interval_s: float, callback: Callable[[], None], name: str = "Ticker"
    ) -> TimerHandle:
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        return self._add(self._now + interval_s, interval_s, callback)

    def call_later(
        self, delay_s: float, callback: Callable[[], None], name: str = "Timer"
    ) -> TimerHandle:
        return self._add(self._now + max(0.0, delay_s), None, callback)

    def _add(
        self, due: float, interval_s: float | None, callback: Callable[[], None]
    ) -> TimerHandle:
        self._seq += 1
        timer = _ManualTimer(due, interval_s, callback, self._seq)
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> int:
        """Number of timers that may still fire."""
        return sum(1 for t in self._timers if t.active)

    def advance(self, seconds: float) -> None:
        """Move the fake clock forward, firing every timer that falls due."""
        target = self._now + seconds
        while True:
            due = [t for t in self._timers if t.active and t.due <= target + _EPSILON]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self._now = timer.due
            _run_guarded(timer.callback, "manual timer")
            if timer.interval_s is not None and timer.active:
                timer.due += timer.interval_s
            else:
                timer.finish()
        self._timers = [t for t in self._timers if t.active]
        self._now = target
