"""Business creation from zone business-share percentages."""

import numpy as np

from citylife.business.business import BUSINESS_TYPES, Business, BusinessType
from citylife.geography.zones import Zone


def calculate_total_businesses(num_people: int, people_per_business: int) -> int:
    """One business per *people_per_business* residents, at least one if anyone lives here."""
    if num_people <= 0:
        return 0
    return max(1, num_people // people_per_business)


def random_business(
    business_id: int,
    zone: Zone,
    rng: np.random.Generator,
    types: list[BusinessType] = BUSINESS_TYPES,
) -> Business:
    """Draw a business of a random type at a random position in *zone*."""
    business_type: BusinessType = types[int(rng.integers(0, len(types)))]
    return Business(business_id, business_type, zone, zone.random_position(rng))


def create_businesses(
    zones: list[Zone],
    total_businesses: int,
    rng: np.random.Generator,
) -> list[Business]:
    """Distribute *total_businesses* across zones by business share.

    Each zone gets the floor of its share; leftovers go one per zone in
    zone order.
    """
    businesses: list[Business] = []
    remaining: int = total_businesses

    for zone in zones:
        zone_count: int = int(total_businesses * zone.business_percents / 100.0)
        remaining -= zone_count
        for _ in range(zone_count):
            businesses.append(random_business(len(businesses), zone, rng))

    for zone in zones:
        if remaining <= 0:
            break
        businesses.append(random_business(len(businesses), zone, rng))
        remaining -= 1

    return businesses
