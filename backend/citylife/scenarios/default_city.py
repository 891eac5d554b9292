"""Scenario: the default six-zone city.

Zones and transport lines as pre-parsed lists. Every pair of zones is
linked by exactly one line, so any residence/business assignment has a
route. Builders return fresh objects because lines carry live occupancy.
"""

from citylife.core.config import SimulationConfig
from citylife.geography.zones import Boundary, Zone
from citylife.transport.lines import TransportLine

# name, x, y, width, height, business %, min income, max income
ZONE_TABLE: list[tuple] = [
    ("Downtown", 0, 0, 400, 250, 30, 1500, 4000),
    ("Harbor", 400, 0, 300, 250, 15, 800, 2500),
    ("Old Town", 700, 0, 300, 250, 10, 1000, 3000),
    ("University", 0, 250, 350, 250, 20, 500, 1800),
    ("Industrial", 350, 250, 350, 250, 15, 700, 2200),
    ("Suburbs", 700, 250, 300, 250, 10, 1200, 3500),
]

# line name, zone a, zone b, capacity, duration in minutes
LINE_TABLE: list[tuple] = [
    ("Metro A", "Downtown", "Harbor", 60, 20),
    ("Metro B", "Downtown", "Old Town", 40, 30),
    ("Metro C", "Downtown", "University", 50, 25),
    ("Bus 1", "Downtown", "Industrial", 30, 35),
    ("Bus 2", "Downtown", "Suburbs", 25, 50),
    ("Tram 1", "Harbor", "Old Town", 30, 15),
    ("Bus 3", "Harbor", "University", 20, 40),
    ("Tram 2", "Harbor", "Industrial", 35, 20),
    ("Bus 4", "Harbor", "Suburbs", 20, 35),
    ("Bus 5", "Old Town", "University", 15, 55),
    ("Bus 6", "Old Town", "Industrial", 20, 30),
    ("Tram 3", "Old Town", "Suburbs", 30, 20),
    ("Tram 4", "University", "Industrial", 40, 15),
    ("Bus 7", "University", "Suburbs", 15, 60),
    ("Metro D", "Industrial", "Suburbs", 45, 25),
]


def build_zones() -> list[Zone]:
    return [
        Zone(
            name=name,
            boundary=Boundary(x, y, width, height),
            business_percents=share,
            min_income=min_income,
            max_income=max_income,
        )
        for name, x, y, width, height, share, min_income, max_income in ZONE_TABLE
    ]


def build_lines(zones: list[Zone]) -> list[TransportLine]:
    by_name: dict[str, Zone] = {z.name: z for z in zones}
    return [
        TransportLine(name, capacity, duration, (by_name[a], by_name[b]))
        for name, a, b, capacity, duration in LINE_TABLE
    ]


def build_default_city_config(num_people: int = 200, total_days: int = 7) -> SimulationConfig:
    """Build a SimulationConfig sized for the default city."""
    return SimulationConfig(num_people=num_people, total_days=total_days)
