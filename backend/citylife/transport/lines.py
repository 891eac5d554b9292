"""Transport line between two zones, with live occupancy."""

from citylife.geography.zones import Zone


class TransportLine:
    """A line linking two zones.

    Capacity is a congestion threshold, not an admission limit: occupancy
    may exceed it.
    """

    def __init__(self, name: str, capacity: int, duration_minutes: int, zones: tuple[Zone, Zone]):
        if capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {capacity}")
        if duration_minutes < 0:
            raise ValueError(f"duration_minutes must be >= 0, got {duration_minutes}")
        self.name: str = name
        self.capacity: int = capacity
        self.duration_minutes: int = duration_minutes
        self.zones: tuple[Zone, Zone] = zones
        self.person_in_line: int = 0

    @property
    def duration_seconds(self) -> int:
        return self.duration_minutes * 60

    @property
    def congestion(self) -> float:
        """Occupancy as a percentage of capacity."""
        return self.person_in_line * 100.0 / self.capacity

    def scale_capacity(self, percent: int) -> None:
        self.capacity = max(1, self.capacity * percent // 100)

    def increment_person_in_line(self) -> None:
        self.person_in_line += 1

    def decrement_person_in_line(self) -> None:
        self.person_in_line = max(0, self.person_in_line - 1)

    def __repr__(self) -> str:
        a, b = self.zones
        return (
            f"TransportLine({self.name!r}, {a.name}<->{b.name}, "
            f"{self.person_in_line}/{self.capacity}, {self.duration_minutes}min)"
        )
