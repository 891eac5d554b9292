import numpy as np
import pandas as pd
import pytest

from citylife.agents.persons import PersonState
from citylife.core.config import SimulationConfig
from citylife.core.engine import build_city, run_simulation
from citylife.core.errors import InvalidConfiguration, NoZonesAvailable, RouteNotFound
from citylife.core.state import DatasetRecorder, snapshot
from citylife.geography.zones import IN_TRANSIT, Known, Position, random_zone
from citylife.scenarios.default_city import build_lines, build_zones

from conftest import make_zone


def small_config(**kwargs) -> SimulationConfig:
    defaults = dict(num_people=60, total_days=2)
    defaults.update(kwargs)
    return SimulationConfig(**defaults)


def test_city_construction():
    city = build_city(small_config(num_people=200))

    assert len(city.zones) == 6
    assert len(city.transport_lines) == 15
    assert len(city.network) == 15
    assert len(city.businesses) == 20
    assert city.businesses_in_zone("Downtown") == 6
    assert city.businesses_in_zone("University") == 4
    assert len(city.people) == 200
    assert sum(city.people_in_zone(z.name) for z in city.zones) == 200
    assert city.employed_count() + len(city.employment_office.unemployed) == 200
    assert city.clock.total_days == 2


def test_initial_money_within_zone_income_range():
    city = build_city(small_config())
    for person in city.people:
        zone = person.data.residence_zone
        assert zone.min_income <= person.money <= zone.max_income


def test_run_invariants_hold_every_tick():
    city = build_city(small_config(params={"transport_capacity_percent": 5}))
    money = {p.name: p.money for p in city.people}

    def check(current_time, current_day):
        rosters = [e.person.name for b in city.businesses for e in b.employees]
        assert len(rosters) == len(set(rosters))
        for person in city.people:
            assert person.state in (PersonState.AT_HOME, PersonState.MOVING, PersonState.WORKING)
            assert person.money >= money[person.name]
            money[person.name] = person.money
            if person.state == PersonState.MOVING:
                assert person.location is IN_TRANSIT
            else:
                assert isinstance(person.location, Known)
        for line in city.transport_lines:
            travelling = sum(
                1 for p in city.people
                if p.state == PersonState.MOVING and p.transport_line is line
            )
            assert line.person_in_line == travelling

    city.clock.add_observer(check)
    city.clock.run_to_completion()

    assert city.clock.is_finished
    assert any(p.money > 0 for p in city.people)


def test_people_get_paid_over_a_run():
    city = build_city(small_config())
    before = sum(p.money for p in city.people)
    city.clock.run_to_completion()
    assert sum(p.money for p in city.people) > before


def test_run_simulation_returns_hourly_datasets():
    days = []
    frame = run_simulation(small_config(), progress_callback=lambda d, total: days.append((d, total)))

    assert isinstance(frame, pd.DataFrame)
    # Day 1 from 01:00, day 2 from 00:00
    assert len(frame) == 23 + 24
    assert {"day", "time", "at_home", "moving", "working", "employed", "mean_money"} <= set(frame.columns)
    assert "line:Metro A" in frame.columns
    assert (frame[["at_home", "moving", "working"]].sum(axis=1) == 60).all()
    assert days == [(1, 2), (2, 2)]


def test_runs_are_deterministic_for_a_seed():
    first = run_simulation(small_config(random_seed=7))
    second = run_simulation(small_config(random_seed=7))
    pd.testing.assert_frame_equal(first, second)


def test_capacity_percent_scales_lines():
    city = build_city(small_config(params={"transport_capacity_percent": 50}))
    metro = next(line for line in city.transport_lines if line.name == "Metro A")
    assert metro.capacity == 30


@pytest.mark.parametrize("overrides", [
    {"update_rate_ms": 0},
    {"total_days": 0},
    {"minutes_per_tick": 7},
    {"num_people": -1},
    {"params": {"transport_capacity_percent": 0}},
])
def test_invalid_configuration_aborts_construction(overrides):
    with pytest.raises(InvalidConfiguration):
        build_city(small_config(**overrides))


def test_zone_data_is_validated():
    with pytest.raises(InvalidConfiguration):
        build_city(small_config(), zones=[], lines=[])

    zones = [make_zone("A", 0, 60), make_zone("B", 200, 60)]
    with pytest.raises(InvalidConfiguration):
        build_city(small_config(), zones=zones, lines=[])


def test_missing_route_aborts_construction():
    zones = [make_zone("A", 0, 40), make_zone("B", 200, 30), make_zone("C", 400, 30)]
    with pytest.raises(RouteNotFound):
        build_city(small_config(num_people=30), zones=zones, lines=[])


def test_random_zone_on_empty_set():
    with pytest.raises(NoZonesAvailable):
        random_zone([], np.random.default_rng(0))


def test_zone_by_position():
    city = build_city(small_config())
    assert city.zone_by_position(Position(10, 10)).name == "Downtown"
    # Shared edges belong to the first zone declared
    assert city.zone_by_position(Position(400, 10)).name == "Downtown"
    assert city.zone_by_position(Position(900, 400)).name == "Suburbs"
    assert city.zone_by_position(Position(5000, 5000)) is None
    assert city.random_zone() in city.zones


def test_snapshot_reflects_last_tick():
    city = build_city(small_config())
    city.clock.advance(9 * 60)

    snap = snapshot(city)

    assert snap["clock"] == {
        "day": 1,
        "time": "09:00",
        "status": "stopped",
        "finished": False,
        "update_rate_ms": city.config.update_rate_ms,
    }
    assert len(snap["people"]) == 60
    assert len(snap["lines"]) == 15
    assert sum(z["residents"] for z in snap["zones"]) == 60
    for record in snap["people"]:
        assert (record["position"] is None) == (record["state"] == "moving")


def test_dataset_recorder_clear():
    city = build_city(small_config())
    recorder = DatasetRecorder(city, interval_minutes=30)
    city.clock.add_observer(recorder.on_time_update)
    city.clock.advance(120)
    assert len(recorder.to_frame()) == 4
    recorder.clear()
    assert recorder.to_frame().empty


def test_default_scenario_links_every_pair():
    zones = build_zones()
    lines = build_lines(zones)
    assert sum(z.business_percents for z in zones) == 100
    pairs = {frozenset(z.name for z in line.zones) for line in lines}
    assert len(pairs) == len(zones) * (len(zones) - 1) // 2



@pytest.mark.parametrize("minutes_per_tick", [10, 30, 60])
def test_coarse_ticks_never_strand_commuters(minutes_per_tick):
    config = SimulationConfig(
        num_people=200,
        total_days=3,
        minutes_per_tick=minutes_per_tick,
        params={"transport_capacity_percent": 5},
    )
    city = build_city(config)
    noon = {}

    def at_noon(current_time, current_day):
        if current_time == 12 * 3600:
            noon[current_day] = (
                city.in_transit_count(),
                sum(line.person_in_line for line in city.transport_lines),
            )

    city.clock.add_observer(at_noon)
    city.clock.run_to_completion()

    assert noon == {1: (0, 0), 2: (0, 0), 3: (0, 0)}
    assert all(b.days_open == 3 for b in city.businesses)


def test_business_revenue_accumulates_over_a_run():
    city = build_city(small_config())
    city.clock.run_to_completion()

    for business in city.businesses:
        assert business.days_open == 2
        assert business.revenue == 2 * business.daily_revenue
    record = snapshot(city)["businesses"][0]
    assert record["revenue"] == 2 * record["daily_revenue"]
