"""Pydantic models for API request/response schemas."""

from pydantic import BaseModel, Field

from citylife.core.config import SIMULATION_TOTAL_DAYS


class SimulationRunRequest(BaseModel):
    """Request to build a city and start its clock."""

    num_people: int = Field(default=200, ge=0, description="Number of people to create")
    total_days: int = Field(default=SIMULATION_TOTAL_DAYS, description="Simulation length in days")
    update_rate_ms: int | None = Field(
        default=None, description="Wall-clock milliseconds per tick; defaults to the base rate"
    )
    random_seed: int = Field(default=42, description="Seed for every random draw")
    params: dict = Field(default_factory=dict, description="Overrides for policy parameters")
    autostart: bool = Field(default=True, description="Start the clock immediately")
    name: str = Field(default="", description="Optional name for the simulation run")


class SpeedRequest(BaseModel):
    """Request to change the clock speed."""

    speed: int = Field(..., ge=1, description="Speed multiplier over the base update rate")


class SimulationStatus(BaseModel):
    """Clock status of a simulation run."""

    run_id: str = Field(..., description="Unique identifier for the simulation run")
    status: str = Field(..., description="Clock status: stopped, running, paused")
    finished: bool = Field(..., description="Whether every configured day has elapsed")
    current_day: int = Field(..., description="Current simulated day, starting at 1")
    current_time: str = Field(..., description="Current time of day as HH:MM")
    total_days: int = Field(..., description="Configured simulation length in days")
    update_rate_ms: int = Field(..., description="Wall-clock milliseconds per tick")
    progress: float = Field(..., description="Progress from 0.0 to 1.0", ge=0.0, le=1.0)
