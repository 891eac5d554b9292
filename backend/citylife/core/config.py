"""Simulation configuration and policy parameters."""

import os
from dataclasses import dataclass, field


# Simulation constants
SECONDS_PER_DAY = 86400
MINUTES_PER_DAY = 1440
SIMULATION_TOTAL_DAYS = 7
MINUTES_PER_TICK = 1  # simulated minutes advanced by each tick
WORK_POSITION_JITTER = 20  # max offset on each axis around the business position

# Base wall-clock pacing between two ticks
TIME_UPDATE_RATE_MS = int(os.environ.get("CITYLIFE_UPDATE_RATE_MS", 100))

# Default policy parameters
DEFAULT_PARAMS = {
    "people_per_business": 10,
    "transport_capacity_percent": 100,  # scales every line capacity at setup
    "congestion_delay_minutes": 15,  # extra trip time when the route is congested
    "max_delays": 3,  # fire when the delay count exceeds this
    "hiring_time_minutes": 0,  # daily instant at which the employment office matches
    "pay_share": 0.3,  # share of daily revenue paid out to the roster
    "experience_pay_bonus": 0.1,  # pay multiplier added per experience level
}


@dataclass
class SimulationConfig:
    """Full simulation configuration."""

    num_people: int = 200
    total_days: int = SIMULATION_TOTAL_DAYS
    minutes_per_tick: int = MINUTES_PER_TICK
    update_rate_ms: int = TIME_UPDATE_RATE_MS
    random_seed: int = 42
    params: dict = field(default_factory=lambda: dict(DEFAULT_PARAMS))

    def param(self, name: str):
        """Return a policy parameter, falling back to its default."""
        return self.params.get(name, DEFAULT_PARAMS[name])

    def validate(self) -> list[str]:
        """Return list of validation errors, empty if valid."""
        errors = []
        if self.update_rate_ms <= 0:
            errors.append(f"update_rate_ms must be > 0, got {self.update_rate_ms}")
        if self.total_days <= 0:
            errors.append(f"total_days must be > 0, got {self.total_days}")
        if self.num_people < 0:
            errors.append(f"num_people must be >= 0, got {self.num_people}")
        if self.minutes_per_tick <= 0 or MINUTES_PER_DAY % self.minutes_per_tick != 0:
            errors.append(
                f"minutes_per_tick must divide a day ({MINUTES_PER_DAY} minutes), "
                f"got {self.minutes_per_tick}"
            )
        if self.param("people_per_business") <= 0:
            errors.append(f"people_per_business must be > 0, got {self.param('people_per_business')}")
        if self.param("transport_capacity_percent") <= 0:
            errors.append(
                f"transport_capacity_percent must be > 0, got {self.param('transport_capacity_percent')}"
            )
        for name in ("congestion_delay_minutes", "max_delays", "pay_share", "experience_pay_bonus"):
            if self.param(name) < 0:
                errors.append(f"{name} must be >= 0, got {self.param(name)}")
        hiring = self.param("hiring_time_minutes")
        if not 0 <= hiring < MINUTES_PER_DAY:
            errors.append(f"hiring_time_minutes must be 0-{MINUTES_PER_DAY - 1}, got {hiring}")
        return errors
