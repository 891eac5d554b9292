"""Congestion detection and arrival-time computation over transport lines."""

from typing import Iterable

from citylife.transport.lines import TransportLine


class TransportStrategy:
    """Stateless logic operating on live line occupancy."""

    def is_congested(self, lines: Iterable[TransportLine]) -> bool:
        """True iff every line in the set is at or above capacity.

        One under-capacity line is enough to report the route option set
        as free. An empty set is never congested.
        """
        lines = list(lines)
        return bool(lines) and all(line.person_in_line >= line.capacity for line in lines)

    def calculate_arrival_time(self, current_time_seconds: int, trip_duration_seconds: int) -> int:
        return current_time_seconds + trip_duration_seconds

    def increment_persons_in_line(self, lines: Iterable[TransportLine]) -> None:
        for line in lines:
            line.increment_person_in_line()

    def decrement_persons_in_line(self, lines: Iterable[TransportLine]) -> None:
        for line in lines:
            line.decrement_person_in_line()
