"""Simulation clock: the single source of simulated time.

Each tick advances the time of day by a fixed increment, rolls the day
over at midnight, then calls every registered observer synchronously, in
registration order, with ``(current_time, current_day)``. ``current_time``
is expressed in seconds of day.

Ticks are driven either by a background timer thread paced by the update
rate (``start`` / ``pause``) or synchronously by the caller (``tick``,
``advance``, ``run_to_completion``). Either way a tick runs under the
clock lock, so pausing or reading state never observes a half-finished
tick.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from citylife.core.config import MINUTES_PER_DAY, SECONDS_PER_DAY, TIME_UPDATE_RATE_MS
from citylife.core.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

TimeObserver = Callable[[int, int], None]


class ClockStatus(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


def format_time(seconds_of_day: int) -> str:
    """Render seconds of day as HH:MM."""
    return f"{seconds_of_day // 3600:02d}:{seconds_of_day % 3600 // 60:02d}"


def reached(instant: int, current_time: int, tick_seconds: int = 60) -> bool:
    """True when the tick ending at *current_time* covers *instant*.

    A tick covers the half-open interval ``(current_time - tick_seconds,
    current_time]`` of the day, so with one-minute ticks and whole-minute
    instants this is an exact match, and coarser ticks fire on the first
    tick at or after the instant.
    """
    return (current_time - instant) % SECONDS_PER_DAY < tick_seconds


class Clock:
    """Tick emitter with a fixed simulation length in days.

    Day 1 at 00:00 is the initial state, not a tick: the first tick is
    delivered at ``tick_seconds`` past midnight of day 1. The tick that
    would roll day ``total_days`` over into the next day is never
    delivered; reaching it finishes the clock, which keeps its state at the
    last delivered tick. A full run therefore emits
    ``total_days * ticks_per_day - 1`` ticks.
    """

    def __init__(
        self,
        total_days: int,
        minutes_per_tick: int = 1,
        update_rate_ms: int = TIME_UPDATE_RATE_MS,
    ):
        if total_days <= 0:
            raise InvalidConfiguration(f"total_days must be > 0, got {total_days}")
        if minutes_per_tick <= 0 or MINUTES_PER_DAY % minutes_per_tick != 0:
            raise InvalidConfiguration(
                f"minutes_per_tick must divide a day, got {minutes_per_tick}"
            )
        _check_rate(update_rate_ms)

        self.total_days: int = total_days
        self.tick_seconds: int = minutes_per_tick * 60
        self.update_rate_ms: int = update_rate_ms
        self.current_time: int = 0
        self.current_day: int = 1
        self.ticks: int = 0
        self.status: ClockStatus = ClockStatus.STOPPED
        self.lock = threading.RLock()

        self._finished: bool = False
        self._observers: list[TimeObserver] = []
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

    @property
    def ticks_per_day(self) -> int:
        return SECONDS_PER_DAY // self.tick_seconds

    @property
    def is_paused(self) -> bool:
        return self.status == ClockStatus.PAUSED

    @property
    def is_running(self) -> bool:
        return self.status == ClockStatus.RUNNING

    @property
    def is_finished(self) -> bool:
        return self._finished

    def add_observer(self, observer: TimeObserver) -> None:
        self._observers.append(observer)

    # ------------------------------------------------------------------
    # Tick emission
    # ------------------------------------------------------------------

    def tick(self) -> bool:
        """Advance one tick and notify observers.

        Returns False, without notifying anyone, once the configured number
        of days has elapsed.
        """
        with self.lock:
            if self._finished:
                return False
            next_time = self.current_time + self.tick_seconds
            next_day = self.current_day
            if next_time >= SECONDS_PER_DAY:
                next_time -= SECONDS_PER_DAY
                next_day += 1
            if next_day > self.total_days:
                self._finish()
                return False

            self.current_time = next_time
            self.current_day = next_day
            self.ticks += 1
            for observer in self._observers:
                observer(self.current_time, self.current_day)
            return True

    def advance(self, ticks: int) -> int:
        """Run up to *ticks* ticks synchronously; return how many were emitted."""
        emitted = 0
        for _ in range(ticks):
            if not self.tick():
                break
            emitted += 1
        return emitted

    def run_to_completion(self) -> int:
        """Tick synchronously, without wall-clock pacing, until the last day ends."""
        emitted = 0
        while self.tick():
            emitted += 1
        return emitted

    def _finish(self) -> None:
        self._finished = True
        self.status = ClockStatus.STOPPED
        if self._stop_event is not None:
            self._stop_event.set()
        logger.info("Simulation finished after %d days (%d ticks)", self.total_days, self.ticks)

    # ------------------------------------------------------------------
    # Wall-clock driver
    # ------------------------------------------------------------------

    def start(self, update_rate_ms: Optional[int] = None) -> None:
        """Start (or resume, or restart at a new rate) periodic tick emission."""
        rate = self.update_rate_ms if update_rate_ms is None else update_rate_ms
        _check_rate(rate)
        self._stop_driver()
        self.update_rate_ms = rate
        if self._finished:
            return

        stop_event = threading.Event()
        self._stop_event = stop_event
        self._thread = threading.Thread(
            target=self._run_loop,
            args=(stop_event, rate / 1000.0),
            name="citylife-clock",
            daemon=True,
        )
        self.status = ClockStatus.RUNNING
        self._thread.start()
        logger.info("Clock running at %d ms per tick", rate)

    def resume(self) -> None:
        self.start(self.update_rate_ms)

    def set_update_rate(self, update_rate_ms: int) -> None:
        """Change pacing; a running driver restarts at the new rate."""
        _check_rate(update_rate_ms)
        if self.status == ClockStatus.RUNNING:
            self.start(update_rate_ms)
        else:
            self.update_rate_ms = update_rate_ms
            logger.info("Clock update rate set to %d ms", update_rate_ms)

    def pause(self) -> None:
        """Stop tick emission after any in-flight tick, keeping time and day."""
        if self.status != ClockStatus.RUNNING:
            return
        self._stop_driver()
        self.status = ClockStatus.PAUSED
        logger.info("Clock paused at day %d %s", self.current_day, format_time(self.current_time))

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the driver thread exits; return whether the run finished."""
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        return self._finished

    def _stop_driver(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        thread = self._thread
        if thread is not None and thread.is_alive() and thread is not threading.current_thread():
            thread.join()
        self._thread = None
        self._stop_event = None

    def _run_loop(self, stop_event: threading.Event, interval: float) -> None:
        while not stop_event.wait(interval):
            try:
                if not self.tick():
                    break
            except Exception:
                logger.exception("Clock tick failed; stopping the clock")
                self.status = ClockStatus.STOPPED
                break


def _check_rate(update_rate_ms: int) -> None:
    if update_rate_ms <= 0:
        raise InvalidConfiguration(f"update rate must be > 0 ms, got {update_rate_ms}")
