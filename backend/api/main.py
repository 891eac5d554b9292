"""FastAPI application for the CityLife simulator."""

import asyncio
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import simulations
from api import websocket


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: pause every running clock on shutdown."""
    yield

    loop = asyncio.get_running_loop()
    for run in list(simulations.simulation_runs.values()):
        # pause() joins the clock thread
        await loop.run_in_executor(None, run["city"].clock.pause)
    simulations.simulation_runs.clear()


app = FastAPI(
    title="CityLife Simulator",
    description=(
        "API for running a tick-driven simulation of a city's daily economic "
        "life: commuters travelling between zones over congestible transport "
        "lines while businesses hire, pay and fire them."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware - allow localhost origins for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include REST API routers
app.include_router(simulations.router, prefix="/api")

# Include WebSocket router
app.include_router(websocket.router)


@app.get("/api/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "ok",
        "runs": len(simulations.simulation_runs),
    }
