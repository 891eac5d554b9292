import pytest

from citylife.agents.persons import Person, PersonData, PersonState
from citylife.business.business import Business, BusinessType, hours
from citylife.geography.zones import IN_TRANSIT, Known, Position
from citylife.transport.network import TransportNetwork

MINUTE = 60


def make_person(business, zone, network, strategy, rng, congestion_delay_minutes=0, tick_seconds=MINUTE):
    data = PersonData(name="Alice", age=30, business=business, residence_zone=zone)
    return Person(data, 100, network, strategy, rng, congestion_delay_minutes, tick_seconds)


def run_day(person, observe=None, step=MINUTE):
    for t in range(step, 86400, step):
        person.check_state(t)
        if observe is not None:
            observe(t, person)


def test_initial_state(business, home_zone, network, strategy, rng):
    person = make_person(business, home_zone, network, strategy, rng)
    assert person.state == PersonState.AT_HOME
    assert person.location == Known(person.home_position)
    assert home_zone.boundary.contains(person.home_position)
    assert person.trip_duration == 30
    assert person.current_zone is home_zone


def test_commute_to_work_and_back(business, home_zone, line, network, strategy, rng):
    person = make_person(business, home_zone, network, strategy, rng)

    person.check_state(hours(8, 29))
    assert person.state == PersonState.AT_HOME

    person.check_state(hours(8, 30))
    assert person.state == PersonState.MOVING
    assert person.location is IN_TRANSIT
    assert person.position is None
    assert person.current_zone is None
    assert line.person_in_line == 1

    person.check_state(hours(8, 59))
    assert person.state == PersonState.MOVING

    person.check_state(hours(9))
    assert person.state == PersonState.WORKING
    assert line.person_in_line == 0
    assert abs(person.position.x - business.position.x) <= 20
    assert abs(person.position.y - business.position.y) <= 20

    person.check_state(hours(17))
    assert person.state == PersonState.MOVING
    assert line.person_in_line == 1

    person.check_state(hours(17, 30))
    assert person.state == PersonState.AT_HOME
    assert person.location == Known(person.home_position)
    assert line.person_in_line == 0


def test_moving_lasts_exactly_the_trip(business, home_zone, network, strategy, rng):
    person = make_person(business, home_zone, network, strategy, rng)
    transitions = []
    previous = [person.state]

    def observe(t, p):
        if p.state != previous[0]:
            transitions.append((t, p.state))
            previous[0] = p.state

    run_day(person, observe)
    assert transitions == [
        (hours(8, 30), PersonState.MOVING),
        (hours(9), PersonState.WORKING),
        (hours(17), PersonState.MOVING),
        (hours(17, 30), PersonState.AT_HOME),
    ]


def test_working_position_jitters_within_bounds(business, home_zone, network, strategy, rng):
    person = make_person(business, home_zone, network, strategy, rng)
    seen = set()

    def observe(t, p):
        if p.state == PersonState.WORKING:
            seen.add(p.position)
            assert abs(p.position.x - business.position.x) <= 20
            assert abs(p.position.y - business.position.y) <= 20

    run_day(person, observe)
    assert len(seen) > 1


def test_same_zone_commute_is_instantaneous(business, work_zone, network, strategy, rng):
    person = make_person(business, work_zone, network, strategy, rng)
    assert person.trip_duration == 0
    assert person.transport_line is None
    states = []
    run_day(person, lambda t, p: states.append(p.state))

    assert PersonState.MOVING not in states
    assert person.state == PersonState.AT_HOME

    person.check_state(hours(9))
    assert person.state == PersonState.WORKING
    person.check_state(hours(17))
    assert person.state == PersonState.AT_HOME


def test_congested_route_lengthens_trip(business, home_zone, line, network, strategy, rng):
    for _ in range(line.capacity):
        line.increment_person_in_line()
    person = make_person(business, home_zone, network, strategy, rng, congestion_delay_minutes=15)

    person.check_state(hours(8, 30))
    assert person.state == PersonState.MOVING
    assert person.last_arriving_time == hours(9, 15)
    assert line.person_in_line == line.capacity + 1

    person.check_state(hours(9))
    assert person.state == PersonState.MOVING
    person.check_state(hours(9, 15))
    assert person.state == PersonState.WORKING
    assert line.person_in_line == line.capacity


def test_off_grid_arrival_lands_on_next_coarse_tick(business, home_zone, line, network, strategy, rng):
    for _ in range(line.capacity):
        line.increment_person_in_line()
    step = 10 * MINUTE
    person = make_person(
        business, home_zone, network, strategy, rng, congestion_delay_minutes=15, tick_seconds=step
    )
    transitions = []
    previous = [person.state]

    def observe(t, p):
        if p.state != previous[0]:
            transitions.append((t, p.state))
            previous[0] = p.state

    run_day(person, observe, step=step)

    # 09:15 and 17:45 fall between ticks
    assert transitions == [
        (hours(8, 30), PersonState.MOVING),
        (hours(9, 20), PersonState.WORKING),
        (hours(17), PersonState.MOVING),
        (hours(17, 50), PersonState.AT_HOME),
    ]
    assert line.person_in_line == line.capacity


def test_off_grid_departure_leaves_on_next_hourly_tick(business, home_zone, line, network, strategy, rng):
    person = make_person(business, home_zone, network, strategy, rng, tick_seconds=60 * MINUTE)

    person.check_state(hours(8))
    assert person.state == PersonState.AT_HOME
    person.check_state(hours(9))
    assert person.state == PersonState.MOVING
    person.check_state(hours(10))
    assert person.state == PersonState.WORKING
    assert line.person_in_line == 0


def test_missed_trigger_is_not_retried(business, home_zone, network, strategy, rng):
    person = make_person(business, home_zone, network, strategy, rng)
    person.check_state(hours(8, 29))
    person.check_state(hours(8, 31))
    assert person.state == PersonState.AT_HOME

    # Next day's departure instant works again
    person.check_state(hours(8, 30))
    assert person.state == PersonState.MOVING


def test_departure_wraps_around_midnight(home_zone, work_zone, line, strategy, rng):
    early = BusinessType("bakery", hours(0, 10), hours(6), 500.0, 1, 3, 18)
    bakery = Business(1, early, work_zone, Position(250, 50))
    network = TransportNetwork([home_zone, work_zone], [line])
    person = make_person(bakery, home_zone, network, strategy, rng)

    person.check_state(hours(23, 40))
    assert person.state == PersonState.MOVING
    assert person.last_arriving_time == hours(0, 10)
    person.check_state(hours(0, 10))
    assert person.state == PersonState.WORKING


def test_money_only_grows(business, home_zone, network, strategy, rng):
    person = make_person(business, home_zone, network, strategy, rng)
    person.add_money(50)
    assert person.money == 150
    with pytest.raises(ValueError):
        person.add_money(-1)
    assert person.money == 150
