"""
Detection Session

Wires the simulator, the alert dispatcher and a tick source into one
start/stop-able session. A session owns its throttle state and stats; start()
returns the timer handle that stop() needs, and a stopped session produces no
further ticks, alerts or stat changes.
"""

import logging
import threading
from collections.abc import Callable

from ..core.severity import status_text, worst_severity
from ..core.simulator import DetectionFeedSimulator, clamp_sensitivity
from ..models import AlertOutcome, AlertThrottleState, Detection, SessionStats, Severity
from ..utils.constants import DEFAULT_TICK_INTERVAL_MS
from ..utils.scheduler import Scheduler, TimerHandle
from ..vocabulary import resolve_locale
from .alert_dispatcher import AlertDispatcher

logger = logging.getLogger(__name__)

UpdateListener = Callable[[list[Detection], AlertOutcome], None]


def _as_provider(value):
    """Wrap a constant setting so it can be read like a live one."""
    if callable(value):
        return value
    return lambda: value


class DetectionSession:
    """
    One run of the detection loop from start to stop.

    Args:
        simulator: Detection feed to advance each tick
        dispatcher: Alert dispatcher fed with each tick's list
        scheduler: Tick source (ThreadScheduler or ManualScheduler)
        sensitivity: Float or zero-arg callable read at start and every tick
        locale: Locale code or zero-arg callable read every tick
        tick_interval_ms: Tick cadence
        on_update: Optional listener called with (detections, outcome) per tick
    """

    def __init__(
        self,
        simulator: DetectionFeedSimulator,
        dispatcher: AlertDispatcher,
        scheduler: Scheduler,
        sensitivity: float | Callable[[], float] = 0.5,
        locale: str | Callable[[], str] = "en",
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        on_update: UpdateListener | None = None,
    ):
        self.simulator = simulator
        self.dispatcher = dispatcher
        self.scheduler = scheduler
        self._sensitivity = _as_provider(sensitivity)
        self._locale = _as_provider(locale)
        self.tick_interval_s = tick_interval_ms / 1000.0
        self.on_update = on_update

        self.throttle: AlertThrottleState | None = None
        self.last_outcome: AlertOutcome | None = None
        self._handle: TimerHandle | None = None
        # Reentrant: a listener may stop the session from inside a tick
        self._lock = threading.RLock()

    @property
    def running(self) -> bool:
        return self.simulator.running

    @property
    def detections(self) -> list[Detection]:
        return self.simulator.detections

    @property
    def stats(self) -> SessionStats:
        return self.simulator.stats

    @property
    def status(self) -> Severity | None:
        return worst_severity(self.detections)

    def status_text(self) -> str:
        return status_text(self.detections, self.locale)

    @property
    def sensitivity(self) -> float:
        return clamp_sensitivity(self._sensitivity())

    @property
    def locale(self) -> str:
        return resolve_locale(self._locale())

    def start(self) -> TimerHandle:
        """
        Start the session and begin ticking.

        Returns:
            Timer handle to pass to stop(). Starting a running session returns
            the existing handle.
        """
        with self._lock:
            if self.running and self._handle is not None:
                logger.warning("Detection session already running")
                return self._handle

            self.throttle = AlertThrottleState()
            self.last_outcome = None
            self.simulator.start()
            self._handle = self.scheduler.call_every(self.tick_interval_s, self._on_tick)

        logger.info(
            f"Detection session started (sensitivity {self.sensitivity:.2f}, "
            f"every {self.tick_interval_s * 1000:.0f} ms)"
        )
        return self._handle

    def stop(self, handle: TimerHandle | None = None) -> None:
        """
        Cancel ticking and clear session state. A second call is a no-op.

        Args:
            handle: Handle returned by start(); defaults to the current one
        """
        with self._lock:
            current = self._handle
            self._handle = None

        # Cancel outside the lock so an in-flight tick can finish.
        # A stale handle from an earlier start() never leaves the live timer running.
        for timer in (handle, current):
            if timer is not None:
                timer.cancel()

        with self._lock:
            if not self.running:
                return

            now = self.scheduler.clock()
            stats = self.stats
            elapsed = stats.elapsed_seconds(now)
            self.simulator.stop()
            self.throttle = None

        elapsed_str = (
            f"{elapsed / 60:.1f} minutes" if elapsed >= 60 else f"{elapsed:.0f} seconds"
        )
        logger.info("=" * 50)
        logger.info(
            f"Session: {elapsed_str}, {stats.ticks} ticks, "
            f"{stats.total_detections_emitted} detections, "
            f"{stats.danger_alert_count} in danger range"
        )
        logger.info("=" * 50)

    def _on_tick(self) -> None:
        with self._lock:
            if not self.running or self.throttle is None:
                return

            detections = self.simulator.tick(self._sensitivity())
            outcome = self.dispatcher.dispatch(detections, self.throttle, self.locale)
            self.last_outcome = outcome

            if self.on_update is not None:
                try:
                    self.on_update(detections, outcome)
                except Exception as e:
                    logger.warning(f"Update listener failed: {e}")
