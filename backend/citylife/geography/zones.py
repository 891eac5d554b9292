"""Zone geometry and positions on the city map.

Zones are immutable rectangles; people and businesses hold references to
them and never copy them.
"""

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
from shapely.geometry import Point, box

from citylife.core.errors import NoZonesAvailable


@dataclass(frozen=True)
class Position:
    """Integer map coordinate."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Known:
    """Location of an agent standing at a known position."""

    position: Position


@dataclass(frozen=True)
class InTransit:
    """Location of an agent travelling between zones."""


IN_TRANSIT = InTransit()

Location = Union[Known, InTransit]


@dataclass(frozen=True)
class Boundary:
    """Axis-aligned rectangle, origin at the top-left corner."""

    x: int
    y: int
    width: int
    height: int

    @property
    def geometry(self):
        return box(self.x, self.y, self.x + self.width, self.y + self.height)

    def contains(self, position: Position) -> bool:
        """Inclusive containment: points on the edge belong to the zone."""
        return self.geometry.covers(Point(position.x, position.y))


@dataclass(frozen=True)
class Zone:
    """Named rectangular region of the city."""

    name: str
    boundary: Boundary
    business_percents: float  # 0-100, sums to 100 across all zones
    min_income: int
    max_income: int

    def random_position(self, rng: np.random.Generator) -> Position:
        """Draw a position uniformly inside the zone boundary."""
        b = self.boundary
        return Position(
            int(rng.integers(b.x, b.x + b.width + 1)),
            int(rng.integers(b.y, b.y + b.height + 1)),
        )

    def random_income(self, rng: np.random.Generator) -> int:
        """Draw an initial money balance from the zone's welfare income range."""
        return int(rng.integers(self.min_income, self.max_income + 1))


def random_zone(zones: list[Zone], rng: np.random.Generator) -> Zone:
    """Pick a zone uniformly at random."""
    if not zones:
        raise NoZonesAvailable()
    return zones[int(rng.integers(0, len(zones)))]


def zone_by_position(zones: list[Zone], position: Position) -> Optional[Zone]:
    """Return the first zone containing *position*, if any."""
    for zone in zones:
        if zone.boundary.contains(position):
            return zone
    return None
