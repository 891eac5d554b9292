"""Setup-time integrity errors.

All of these indicate malformed input data and abort city construction.
"""


class CityLifeError(Exception):
    """Base class for simulation errors."""


class InvalidConfiguration(CityLifeError, ValueError):
    """Configuration or input data cannot produce a valid simulation."""


class RouteNotFound(CityLifeError, LookupError):
    """No transport line connects two distinct zones."""

    def __init__(self, zone_a: str, zone_b: str):
        self.zone_a = zone_a
        self.zone_b = zone_b
        super().__init__(f"No transport line connects '{zone_a}' and '{zone_b}'")


class NoZonesAvailable(CityLifeError, LookupError):
    """Random zone selection was attempted on an empty zone set."""

    def __init__(self):
        super().__init__("No zones available.")
