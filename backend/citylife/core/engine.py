"""Main simulation engine.

``CityModel`` is the simulation root: it owns the zones, transport lines,
routing table, businesses, people, employment office and clock, and wires
the per-tick passes onto the clock in a fixed order:

    1. Persons (commute state machine, transport occupancy)
    2. Businesses (delay checks, payroll, daily hiring)
"""

import logging
from typing import Callable, Optional

import numpy as np
import pandas as pd

from citylife.agents.persons import Person, PersonState
from citylife.agents.population import create_people
from citylife.business.business import Business
from citylife.business.employment import EmploymentOffice
from citylife.business.factory import calculate_total_businesses, create_businesses
from citylife.core.clock import Clock
from citylife.core.config import SimulationConfig
from citylife.core.errors import InvalidConfiguration
from citylife.core.observers import BusinessObserver, PersonObserver
from citylife.core.state import DatasetRecorder
from citylife.geography.zones import Position, Zone, random_zone, zone_by_position
from citylife.scenarios.default_city import build_lines, build_zones
from citylife.transport.lines import TransportLine
from citylife.transport.network import TransportNetwork
from citylife.transport.strategy import TransportStrategy

logger = logging.getLogger(__name__)

# Default dataset sampling interval (hourly)
DEFAULT_SAMPLE_INTERVAL_MINUTES: int = 60


def _check_zones(zones: list[Zone]) -> None:
    if not zones:
        raise InvalidConfiguration("At least one zone is required")
    names = [z.name for z in zones]
    if len(set(names)) != len(names):
        raise InvalidConfiguration(f"Zone names must be unique, got {names}")
    total_share = sum(z.business_percents for z in zones)
    if abs(total_share - 100.0) > 1e-6:
        raise InvalidConfiguration(f"Zone business percents must sum to 100, got {total_share}")
    for zone in zones:
        if zone.min_income > zone.max_income:
            raise InvalidConfiguration(f"Zone {zone.name} has min_income > max_income")


class CityModel:
    """Simulation root shared by the clock observers and the read accessors."""

    def __init__(
        self,
        zones: list[Zone],
        lines: list[TransportLine],
        config: Optional[SimulationConfig] = None,
    ):
        if config is None:
            config = SimulationConfig()
        errors = config.validate()
        if errors:
            raise InvalidConfiguration("; ".join(errors))
        _check_zones(zones)

        self.config: SimulationConfig = config
        self.rng: np.random.Generator = np.random.default_rng(config.random_seed)
        self.zones: list[Zone] = list(zones)

        capacity_percent: int = config.param("transport_capacity_percent")
        for line in lines:
            line.scale_capacity(capacity_percent)
        self.transport_lines: list[TransportLine] = list(lines)

        self.network = TransportNetwork(self.zones, self.transport_lines)
        self.strategy = TransportStrategy()
        self.clock = Clock(config.total_days, config.minutes_per_tick, config.update_rate_ms)

        total_businesses = calculate_total_businesses(
            config.num_people, config.param("people_per_business")
        )
        self.businesses: list[Business] = create_businesses(self.zones, total_businesses, self.rng)
        self.people: list[Person] = create_people(
            config.num_people,
            self.zones,
            self.businesses,
            self.network,
            self.strategy,
            self.rng,
            congestion_delay_minutes=config.param("congestion_delay_minutes"),
            tick_seconds=self.clock.tick_seconds,
        )

        self.employment_office = EmploymentOffice()
        self.employment_office.add_disoccupied_people(self.people)
        hires = self.employment_office.match(self.businesses)

        self.clock.add_observer(PersonObserver(self.people).on_time_update)
        self.clock.add_observer(BusinessObserver(
            self.businesses,
            self.employment_office,
            max_delays=config.param("max_delays"),
            hiring_time=config.param("hiring_time_minutes") * 60,
            pay_share=config.param("pay_share"),
            experience_bonus=config.param("experience_pay_bonus"),
            tick_seconds=self.clock.tick_seconds,
        ).on_time_update)

        logger.info(
            "City built: %d zones, %d lines, %d businesses, %d people (%d hired)",
            len(self.zones), len(self.transport_lines), len(self.businesses),
            len(self.people), hires,
        )

    def random_zone(self) -> Zone:
        return random_zone(self.zones, self.rng)

    def zone_by_position(self, position: Position) -> Optional[Zone]:
        return zone_by_position(self.zones, position)

    def people_in_zone(self, zone_name: str) -> int:
        """Number of people residing in a zone."""
        return sum(1 for p in self.people if p.data.residence_zone.name == zone_name)

    def businesses_in_zone(self, zone_name: str) -> int:
        return sum(1 for b in self.businesses if b.zone.name == zone_name)

    def employed_count(self) -> int:
        return sum(len(b.employees) for b in self.businesses)

    def in_transit_count(self) -> int:
        """People still travelling; at the end of a run their occupancy is implicitly released."""
        return sum(1 for p in self.people if p.state == PersonState.MOVING)


def build_city(
    config: Optional[SimulationConfig] = None,
    zones: Optional[list[Zone]] = None,
    lines: Optional[list[TransportLine]] = None,
) -> CityModel:
    """Build a city, defaulting to the six-zone scenario."""
    if zones is None:
        zones = build_zones()
    if lines is None:
        lines = build_lines(zones)
    return CityModel(zones, lines, config)


def run_simulation(
    config: Optional[SimulationConfig] = None,
    sample_interval_minutes: int = DEFAULT_SAMPLE_INTERVAL_MINUTES,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    city: Optional[CityModel] = None,
) -> pd.DataFrame:
    """Run a city to completion without wall-clock pacing.

    Parameters
    ----------
    config : SimulationConfig, optional
        Used to build the default city when *city* is not given.
    sample_interval_minutes : int
        Record a dataset row every N simulated minutes.
    progress_callback : callable, optional
        Called with (current_day, total_days) at each day rollover.
    city : CityModel, optional
        A prebuilt city to run instead of the default one.

    Returns
    -------
    pd.DataFrame
        One row per sample, as produced by DatasetRecorder.to_frame().
    """
    if city is None:
        city = build_city(config)

    recorder = DatasetRecorder(city, sample_interval_minutes)
    city.clock.add_observer(recorder.on_time_update)

    if progress_callback is not None:
        total_days = city.clock.total_days

        def _report(current_time: int, current_day: int) -> None:
            if current_time == 0:
                progress_callback(current_day - 1, total_days)

        city.clock.add_observer(_report)

    city.clock.run_to_completion()
    if progress_callback is not None:
        progress_callback(city.clock.total_days, city.clock.total_days)
    return recorder.to_frame()
