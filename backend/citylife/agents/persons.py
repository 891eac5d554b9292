"""Person agent and its commute state machine.

Each clock tick a person evaluates exactly one row of the transition table
for its current state:

    AT_HOME  at (opening - trip duration)  -> MOVING toward WORKING
    WORKING  at closing time               -> MOVING toward AT_HOME
    MOVING   at the scheduled arrival      -> remembered destination

A trigger fires on the first tick at or after its instant, so instants that
fall between ticks of a coarse clock are never lost. With one-minute ticks
this is an exact time-of-day match. An instant skipped by a driver that
jumps time is not retried; the person waits for it on the following day.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

import numpy as np

from citylife.core.clock import reached
from citylife.core.config import SECONDS_PER_DAY, WORK_POSITION_JITTER
from citylife.geography.zones import IN_TRANSIT, Known, Location, Position, Zone
from citylife.transport.lines import TransportLine
from citylife.transport.network import TransportNetwork
from citylife.transport.strategy import TransportStrategy

if TYPE_CHECKING:
    from citylife.business.business import Business


class PersonState(str, Enum):
    AT_HOME = "at_home"
    MOVING = "moving"
    WORKING = "working"


@dataclass(frozen=True)
class PersonData:
    """Stable identity of a person."""

    name: str
    age: int
    business: "Business"
    residence_zone: Zone


class Person:
    """A commuter alternating between home and an assigned business."""

    def __init__(
        self,
        data: PersonData,
        money: int,
        network: TransportNetwork,
        strategy: TransportStrategy,
        rng: np.random.Generator,
        congestion_delay_minutes: int = 0,
        tick_seconds: int = 60,
    ):
        self.data: PersonData = data
        self.money: int = money
        self.state: PersonState = PersonState.AT_HOME
        self._strategy = strategy
        self._rng = rng
        self._congestion_delay_seconds: int = congestion_delay_minutes * 60
        self._tick_seconds: int = tick_seconds

        self.home_position: Position = data.residence_zone.random_position(rng)
        self.location: Location = Known(self.home_position)

        # Route is resolved once; RouteNotFound aborts city construction
        self.transport_line: Optional[TransportLine] = network.line_for(
            data.residence_zone, data.business.zone
        )
        self.trip_duration: int = network.duration_minutes_for(
            data.residence_zone, data.business.zone
        )

        self.last_arriving_time: int = 0
        self.last_destination: PersonState = PersonState.WORKING

    @property
    def name(self) -> str:
        return self.data.name

    @property
    def business(self) -> "Business":
        return self.data.business

    @property
    def trip_duration_seconds(self) -> int:
        return self.trip_duration * 60

    @property
    def position(self) -> Optional[Position]:
        """Current coordinate, or None while travelling."""
        if isinstance(self.location, Known):
            return self.location.position
        return None

    @property
    def current_zone(self) -> Optional[Zone]:
        if self.state == PersonState.WORKING:
            return self.business.zone
        if self.state == PersonState.AT_HOME:
            return self.data.residence_zone
        return None

    def add_money(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        self.money += amount

    def check_state(self, current_time: int) -> None:
        """Evaluate one transition for the tick at *current_time* (seconds of day)."""
        if self.state == PersonState.MOVING:
            self._check_arriving_time(current_time)
        elif self.state == PersonState.WORKING:
            self._check_time_to_go_home(current_time)
        else:
            self._check_time_to_go_to_work(current_time)
        self._update_position()

    def _check_time_to_go_to_work(self, current_time: int) -> None:
        departure = (self.business.opening_time - self.trip_duration_seconds) % SECONDS_PER_DAY
        if reached(departure, current_time, self._tick_seconds):
            self._depart(current_time, PersonState.WORKING)

    def _check_time_to_go_home(self, current_time: int) -> None:
        if reached(self.business.closing_time, current_time, self._tick_seconds):
            self._depart(current_time, PersonState.AT_HOME)

    def _check_arriving_time(self, current_time: int) -> None:
        if reached(self.last_arriving_time, current_time, self._tick_seconds):
            if self.transport_line is not None:
                self._strategy.decrement_persons_in_line([self.transport_line])
            self.state = self.last_destination

    def _depart(self, current_time: int, destination: PersonState) -> None:
        self.last_destination = destination
        if self.transport_line is None or self.trip_duration == 0:
            # Same-zone commute: arrival collapses onto the departure tick
            self.last_arriving_time = current_time
            self.state = destination
            return

        lines = [self.transport_line]
        duration = self.trip_duration_seconds
        if self._strategy.is_congested(lines):
            duration += self._congestion_delay_seconds
        self.last_arriving_time = (
            self._strategy.calculate_arrival_time(current_time, duration) % SECONDS_PER_DAY
        )
        self._strategy.increment_persons_in_line(lines)
        self.state = PersonState.MOVING

    def _update_position(self) -> None:
        if self.state == PersonState.MOVING:
            self.location = IN_TRANSIT
        elif self.state == PersonState.WORKING:
            dx, dy = self._rng.integers(-WORK_POSITION_JITTER, WORK_POSITION_JITTER + 1, size=2)
            self.location = Known(self.business.position.offset(int(dx), int(dy)))
        else:
            self.location = Known(self.home_position)

    def __repr__(self) -> str:
        return f"Person({self.name!r}, {self.state.value}, money={self.money})"
