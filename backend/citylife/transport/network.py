"""Zone-pair routing table.

Built once from the zones and transport lines, read-only afterwards, and
shared by reference with every person.
"""

import logging
from typing import Optional

from citylife.core.errors import RouteNotFound
from citylife.geography.zones import Zone
from citylife.transport.lines import TransportLine

logger = logging.getLogger(__name__)


def _pair_key(zone_a: Zone, zone_b: Zone) -> frozenset[str]:
    return frozenset((zone_a.name, zone_b.name))


class TransportNetwork:
    """Maps each unordered pair of distinct zones to (line, duration in minutes)."""

    def __init__(self, zones: list[Zone], lines: list[TransportLine]):
        known: set[str] = {z.name for z in zones}
        self._pairs: dict[frozenset[str], tuple[TransportLine, int]] = {}
        for line in lines:
            zone_a, zone_b = line.zones
            if zone_a.name == zone_b.name:
                logger.warning("Ignoring line %s: both ends in zone %s", line.name, zone_a.name)
                continue
            if zone_a.name not in known or zone_b.name not in known:
                logger.warning("Ignoring line %s: links an unknown zone", line.name)
                continue
            key = _pair_key(zone_a, zone_b)
            # First line declared for a pair wins
            if key not in self._pairs:
                self._pairs[key] = (line, line.duration_minutes)

    def __len__(self) -> int:
        return len(self._pairs)

    def line_for(self, zone_a: Zone, zone_b: Zone) -> Optional[TransportLine]:
        """Return the line connecting two zones; None when they are the same zone."""
        if zone_a.name == zone_b.name:
            return None
        try:
            return self._pairs[_pair_key(zone_a, zone_b)][0]
        except KeyError:
            raise RouteNotFound(zone_a.name, zone_b.name) from None

    def duration_minutes_for(self, zone_a: Zone, zone_b: Zone) -> int:
        """Trip duration between two zones; zero within a single zone."""
        if zone_a.name == zone_b.name:
            return 0
        try:
            return self._pairs[_pair_key(zone_a, zone_b)][1]
        except KeyError:
            raise RouteNotFound(zone_a.name, zone_b.name) from None
