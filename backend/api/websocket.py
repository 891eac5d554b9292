"""WebSocket endpoint for live simulation clock updates."""

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from api.routes.simulations import build_status, simulation_runs

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/simulation/{run_id}")
async def simulation_progress_ws(websocket: WebSocket, run_id: str) -> None:
    """WebSocket endpoint for streaming simulation clock status.

    Clients connect to /ws/simulation/{run_id} and receive JSON messages
    whenever the simulated time changes, until the run finishes.

    Message format:
    {
        "run_id": "...",
        "status": "running",
        "finished": false,
        "current_day": 2,
        "current_time": "08:30",
        "total_days": 7,
        "update_rate_ms": 100,
        "progress": 0.21
    }
    """
    await websocket.accept()

    if run_id not in simulation_runs:
        await websocket.send_json({
            "error": f"Simulation run '{run_id}' not found",
        })
        await websocket.close(code=4004)
        return

    loop = asyncio.get_running_loop()
    try:
        last_sent = None
        while True:
            if run_id not in simulation_runs:
                await websocket.send_json({
                    "error": f"Simulation run '{run_id}' was removed",
                })
                break

            # Status reads wait on the tick lock
            status = (await loop.run_in_executor(None, build_status, run_id)).model_dump()
            key = (status["current_day"], status["current_time"], status["status"])
            # Only send updates when the clock moved
            if key != last_sent:
                last_sent = key
                await websocket.send_json(status)

            if status["finished"]:
                break

            await asyncio.sleep(0.5)

        await websocket.close()
    except WebSocketDisconnect:
        logger.debug("Client left the stream of run %s", run_id)
