import numpy as np
import pytest

from citylife.business.business import Business, BusinessType, hours
from citylife.geography.zones import Boundary, Position, Zone
from citylife.transport.lines import TransportLine
from citylife.transport.network import TransportNetwork
from citylife.transport.strategy import TransportStrategy


def make_zone(name: str, x: int = 0, share: float = 50) -> Zone:
    return Zone(name, Boundary(x, 0, 100, 100), share, 100, 200)


@pytest.fixture
def rng():
    return np.random.default_rng(0)


@pytest.fixture
def home_zone():
    return make_zone("Home", x=0)


@pytest.fixture
def work_zone():
    return make_zone("Work", x=200)


@pytest.fixture
def line(home_zone, work_zone):
    return TransportLine("Metro", capacity=10, duration_minutes=30, zones=(home_zone, work_zone))


@pytest.fixture
def network(home_zone, work_zone, line):
    return TransportNetwork([home_zone, work_zone], [line])


@pytest.fixture
def strategy():
    return TransportStrategy()


@pytest.fixture
def office_type():
    return BusinessType("office", hours(9), hours(17), 1000.0, 1, 2, 18)


@pytest.fixture
def business(work_zone, office_type):
    return Business(0, office_type, work_zone, Position(250, 50))
