"""Read accessors and chart datasets.

Both read under the clock lock, so they reflect the last completed tick
and never a tick in progress.
"""

from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from citylife.agents.persons import PersonState
from citylife.core.clock import format_time

if TYPE_CHECKING:
    from citylife.core.engine import CityModel


def _person_record(person) -> dict:
    position = person.position
    return {
        "name": person.name,
        "age": person.data.age,
        "state": person.state.value,
        "money": person.money,
        "residence_zone": person.data.residence_zone.name,
        "business": person.business.name,
        "trip_duration": person.trip_duration,
        "position": None if position is None else [position.x, position.y],
    }


def _business_record(business) -> dict:
    return {
        "name": business.name,
        "type": business.business_type.name,
        "zone": business.zone.name,
        "position": [business.position.x, business.position.y],
        "opening_time": format_time(business.opening_time),
        "closing_time": format_time(business.closing_time),
        "daily_revenue": business.daily_revenue,
        "revenue": business.revenue,
        "days_open": business.days_open,
        "employees": [
            {"name": e.name, "experience": e.experience, "delay_count": e.delay_count}
            for e in business.employees
        ],
    }


def snapshot(city: "CityModel") -> dict:
    """Capture current state as a dict for presentation layers."""
    clock = city.clock
    with clock.lock:
        return {
            "clock": {
                "day": clock.current_day,
                "time": format_time(clock.current_time),
                "status": clock.status.value,
                "finished": clock.is_finished,
                "update_rate_ms": clock.update_rate_ms,
            },
            "zones": [
                {
                    "name": z.name,
                    "boundary": [z.boundary.x, z.boundary.y, z.boundary.width, z.boundary.height],
                    "business_percents": z.business_percents,
                    "residents": city.people_in_zone(z.name),
                    "businesses": city.businesses_in_zone(z.name),
                }
                for z in city.zones
            ],
            "lines": [
                {
                    "name": line.name,
                    "zones": [line.zones[0].name, line.zones[1].name],
                    "capacity": line.capacity,
                    "person_in_line": line.person_in_line,
                    "congestion": line.congestion,
                }
                for line in city.transport_lines
            ],
            "businesses": [_business_record(b) for b in city.businesses],
            "people": [_person_record(p) for p in city.people],
            "unemployed": len(city.employment_office.unemployed),
        }


class DatasetRecorder:
    """Clock observer sampling aggregate series for charts."""

    def __init__(self, city: "CityModel", interval_minutes: int = 60):
        if interval_minutes <= 0:
            raise ValueError(f"interval_minutes must be > 0, got {interval_minutes}")
        self.city = city
        self.interval_seconds: int = interval_minutes * 60
        self.rows: list[dict] = []

    def clear(self) -> None:
        self.rows.clear()

    def on_time_update(self, current_time: int, current_day: int) -> None:
        if current_time % self.interval_seconds == 0:
            self.rows.append(self.sample(current_time, current_day))

    def sample(self, current_time: int, current_day: int) -> dict:
        people = self.city.people
        states = [p.state for p in people]
        row: dict = {
            "day": current_day,
            "time": format_time(current_time),
            "at_home": states.count(PersonState.AT_HOME),
            "moving": states.count(PersonState.MOVING),
            "working": states.count(PersonState.WORKING),
            "employed": self.city.employed_count(),
            "unemployed": len(self.city.employment_office.unemployed),
            "mean_money": float(np.mean([p.money for p in people])) if people else 0.0,
        }
        for line in self.city.transport_lines:
            row[f"line:{line.name}"] = line.congestion
        return row

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows)
