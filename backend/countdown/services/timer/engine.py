import logging
import threading

from countdown.models import Command, Reset, SetTime, Snapshot, Start, Stop
from .clock import MonotonicClock

logger = logging.getLogger(__name__)


class TimerState:
    """The countdown record and its transitions.

    Pure computation: every transition takes the current monotonic instant
    as ``now`` so the state can be driven by a fake clock in tests.
    ``last_updated`` is moved to ``now`` by every transition; it anchors
    the next integration.
    """

    def __init__(self, now: float, max_catchup: float = 0.0):
        self.running = False
        self.time_left = 0.0
        self.last_updated = now
        self.max_catchup = max_catchup

    # ---- Commands ----

    def start(self, now: float) -> None:
        self.running = True
        self.last_updated = now

    def stop(self, now: float) -> None:
        self.running = False
        self.last_updated = now

    def reset(self, now: float) -> None:
        self.running = False
        self.time_left = 0.0
        self.last_updated = now

    def set_time(self, minutes: int, seconds: int, now: float) -> None:
        # Convert first so an unrepresentable total leaves the state untouched
        total = float(minutes * 60 + seconds)
        # A newly set timer waits for an explicit Start
        self.running = False
        self.time_left = total
        self.last_updated = now

    def apply(self, command: Command, now: float) -> None:
        if isinstance(command, Start):
            self.start(now)
        elif isinstance(command, Stop):
            self.stop(now)
        elif isinstance(command, Reset):
            self.reset(now)
        elif isinstance(command, SetTime):
            self.set_time(command.minutes, command.seconds, now)
        else:
            raise TypeError(f"not a timer command: {command!r}")

    # ---- Integration ----

    def integrate(self, now: float) -> bool:
        """Advance the countdown to ``now``.

        Returns True only for the integration that drives ``time_left`` to
        zero; that same call stops the timer, so later calls return False.
        """
        if not self.running:
            return False
        dt = max(0.0, now - self.last_updated)
        if self.max_catchup > 0:
            dt = min(dt, self.max_catchup)
        self.time_left = max(0.0, self.time_left - dt)
        self.last_updated = now
        if self.time_left == 0.0:
            self.running = False
            return True
        return False

    def project(self, now: float) -> float:
        """Remaining time as of ``now`` without mutating the state."""
        if not self.running:
            return self.time_left
        dt = max(0.0, now - self.last_updated)
        if self.max_catchup > 0:
            dt = min(dt, self.max_catchup)
        return max(0.0, self.time_left - dt)


class SharedTimer:
    """The one timer shared by every session.

    All access goes through a single lock, and the clock is read inside it,
    so concurrent integrations from different sessions never measure their
    delta against a stale ``last_updated``. Bind to an application with
    ``init_app`` like any Flask extension.
    """

    def __init__(self, clock=None, max_catchup: float = 0.0):
        self.clock = clock or MonotonicClock()
        self._lock = threading.Lock()
        self._state = TimerState(self.clock.now(), max_catchup)

    def init_app(self, app) -> None:
        max_catchup = float(app.config.get('MAX_CATCHUP_SEC', 0) or 0)
        with self._lock:
            self._state = TimerState(self.clock.now(), max_catchup)
        app.extensions['countdown_timer'] = self

    def apply(self, command: Command) -> None:
        with self._lock:
            self._state.apply(command, self.clock.now())
            running, time_left = self._state.running, self._state.time_left
        logger.info(f"[timer-cmd] cmd={command.name} running={running} time_left={time_left:.1f}")

    def tick(self) -> Snapshot:
        """Integrate elapsed time and return the resulting snapshot."""
        with self._lock:
            finished = self._state.integrate(self.clock.now())
            snapshot = Snapshot(
                running=self._state.running,
                time_left=self._state.time_left,
                finished=finished,
            )
        if finished:
            logger.info("[timer-finish] countdown reached zero")
        return snapshot

    def peek(self) -> Snapshot:
        with self._lock:
            time_left = self._state.project(self.clock.now())
            running = self._state.running and time_left > 0
        return Snapshot(running=running, time_left=time_left)

    @property
    def state(self) -> TimerState:
        """The underlying record. Callers must not mutate it outside ``apply``/``tick``."""
        return self._state
