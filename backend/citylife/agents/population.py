"""Person creation."""

import numpy as np

from citylife.agents.persons import Person, PersonData
from citylife.core.errors import InvalidConfiguration
from citylife.geography.zones import Zone, random_zone
from citylife.transport.network import TransportNetwork
from citylife.transport.strategy import TransportStrategy

MIN_AGE = 18
MAX_AGE = 65


def create_people(
    num_people: int,
    zones: list[Zone],
    businesses: list,
    network: TransportNetwork,
    strategy: TransportStrategy,
    rng: np.random.Generator,
    congestion_delay_minutes: int = 0,
    tick_seconds: int = 60,
) -> list[Person]:
    """Create *num_people* persons with random residence zone and business.

    Initial money is drawn from the residence zone's welfare income range.
    """
    if num_people > 0 and not businesses:
        raise InvalidConfiguration("Cannot place people in a city without businesses")

    people: list[Person] = []
    for i in range(num_people):
        residence: Zone = random_zone(zones, rng)
        business = businesses[int(rng.integers(0, len(businesses)))]
        data = PersonData(
            name=f"Person-{i}",
            age=int(rng.integers(MIN_AGE, MAX_AGE + 1)),
            business=business,
            residence_zone=residence,
        )
        people.append(Person(
            data,
            money=residence.random_income(rng),
            network=network,
            strategy=strategy,
            rng=rng,
            congestion_delay_minutes=congestion_delay_minutes,
            tick_seconds=tick_seconds,
        ))
    return people
