"""Routes for starting, pacing and inspecting simulation runs."""

import logging
import time
import uuid

from fastapi import APIRouter, HTTPException

from api.models import SimulationRunRequest, SimulationStatus, SpeedRequest
from citylife.core.clock import format_time
from citylife.core.config import DEFAULT_PARAMS, TIME_UPDATE_RATE_MS, SimulationConfig
from citylife.core.engine import CityModel, build_city
from citylife.core.errors import CityLifeError
from citylife.core.state import snapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/simulations", tags=["simulations"])

# In-memory store for simulation runs
# Keys are run_id strings, values are dicts holding the city and metadata
simulation_runs: dict[str, dict] = {}


def _get_city(run_id: str) -> CityModel:
    if run_id not in simulation_runs:
        raise HTTPException(status_code=404, detail=f"Simulation run '{run_id}' not found")
    return simulation_runs[run_id]["city"]


def build_status(run_id: str) -> SimulationStatus:
    """Read the clock of a run into a status model."""
    clock = _get_city(run_id).clock
    with clock.lock:
        elapsed_ticks = clock.ticks
        total_ticks = clock.total_days * clock.ticks_per_day - 1
        progress = 1.0 if clock.is_finished else min(1.0, elapsed_ticks / max(total_ticks, 1))
        return SimulationStatus(
            run_id=run_id,
            status=clock.status.value,
            finished=clock.is_finished,
            current_day=clock.current_day,
            current_time=format_time(clock.current_time),
            total_days=clock.total_days,
            update_rate_ms=clock.update_rate_ms,
            progress=progress,
        )


@router.post("/run", response_model=SimulationStatus)
def start_simulation(request: SimulationRunRequest) -> SimulationStatus:
    """Build a city and start its wall-clock driven clock.

    Returns immediately with a run_id that can be used to poll for status.
    """
    unknown = set(request.params) - set(DEFAULT_PARAMS)
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown parameters: {sorted(unknown)}")

    config = SimulationConfig(
        num_people=request.num_people,
        total_days=request.total_days,
        update_rate_ms=TIME_UPDATE_RATE_MS if request.update_rate_ms is None else request.update_rate_ms,
        random_seed=request.random_seed,
        params={**DEFAULT_PARAMS, **request.params},
    )
    try:
        city = build_city(config)
    except CityLifeError as e:
        raise HTTPException(status_code=400, detail=f"Invalid simulation configuration: {e}")

    run_id = str(uuid.uuid4())
    simulation_runs[run_id] = {
        "run_id": run_id,
        "city": city,
        "name": request.name,
        "started_at": time.time(),
    }
    if request.autostart:
        city.clock.start()
    logger.info("Created simulation run %s (%d people)", run_id, request.num_people)
    return build_status(run_id)


@router.get("/status/{run_id}", response_model=SimulationStatus)
def get_simulation_status(run_id: str) -> SimulationStatus:
    """Get the current clock status of a simulation run."""
    return build_status(run_id)


@router.post("/{run_id}/pause", response_model=SimulationStatus)
def pause_simulation(run_id: str) -> SimulationStatus:
    _get_city(run_id).clock.pause()
    return build_status(run_id)


@router.post("/{run_id}/resume", response_model=SimulationStatus)
def resume_simulation(run_id: str) -> SimulationStatus:
    _get_city(run_id).clock.resume()
    return build_status(run_id)


@router.post("/{run_id}/speed", response_model=SimulationStatus)
def change_speed(run_id: str, request: SpeedRequest) -> SimulationStatus:
    """Set the update rate to the base rate divided by the speed multiplier."""
    rate = max(1, TIME_UPDATE_RATE_MS // request.speed)
    _get_city(run_id).clock.set_update_rate(rate)
    return build_status(run_id)


@router.get("/{run_id}/snapshot")
def get_snapshot(run_id: str) -> dict:
    """Full state of the city as of the last completed tick."""
    return snapshot(_get_city(run_id))


@router.delete("/{run_id}")
def delete_simulation(run_id: str) -> dict:
    """Stop a run's clock and forget it."""
    city = _get_city(run_id)
    city.clock.pause()
    del simulation_runs[run_id]
    return {"run_id": run_id, "deleted": True}
