"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from survival.api.dependencies import set_engine_manager
from survival.api.engine_manager import EngineManager
from survival.api.routes import api_router
from survival.config import SimulationConfig
from survival.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: SimulationConfig | None = None, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = SimulationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started (seed=%d).", _config.world_seed)
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Survival Wave Simulation",
        description=(
            "Deterministic survival-wave combat simulation: control and observation API.\n\n"
            "## API Groups\n\n"
            "- **State**: live snapshot of the player, enemies, pickups and wave\n"
            "- **Control**: lifecycle (start, pause, resume, step, reset) and speed\n"
            "- **Upgrades**: the level-up menu (inspect, choose, dismiss)\n"
            "- **Input**: movement intent and dash\n"
            "- **Config**: read-only configuration\n"
            "- **Metadata**: enemy templates, upgrades, weapons and enums\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live simulation state polled by clients."},
            {"name": "Control", "description": "Simulation lifecycle controls and tick rate."},
            {"name": "Upgrades", "description": "Level-up upgrade menu. The simulation is paused while it is open."},
            {"name": "Input", "description": "Movement intent and dash trigger, applied between ticks."},
            {"name": "Config", "description": "Read-only simulation configuration."},
            {"name": "Metadata", "description": "Static definitions serialized straight from the engine's pydantic dataclasses."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
