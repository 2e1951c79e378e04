# grenadeflag/server/__init__.py
"""Grenade Flag harness - drive an in-memory arena over HTTP for play-testing."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

import numpy as np
from fastapi import FastAPI

from grenadeflag.config import BallisticsConfig
from grenadeflag.plugin import GrenadeFlag
from grenadeflag.sim.arena import ArenaHost

from .config import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("grenadeflag.server")

_server_start_time: float = 0.0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    global _server_start_time
    _server_start_time = time.time()
    logger.info(f"Grenade Flag harness starting on {settings.HOST}:{settings.PORT}")
    yield
    logger.info("Grenade Flag harness shutting down...")
    app.state.plugin.cleanup()


def default_host() -> ArenaHost:
    """Arena seeded from settings."""
    ballistics = BallisticsConfig(
        shot_speed=settings.SHOT_SPEED,
        shot_range=settings.SHOT_RANGE,
        muzzle_front=settings.MUZZLE_FRONT,
        muzzle_height=settings.MUZZLE_HEIGHT,
    )
    return ArenaHost(rng=np.random.default_rng(settings.SEED), ballistics=ballistics)


def create_app(*, host: ArenaHost | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        host: Optional arena to serve. A fresh one seeded from settings is used otherwise.
    """
    from .models import HealthResponse
    from .routes import arena as arena_routes

    if host is None:
        host = default_host()
    plugin = GrenadeFlag(host)
    plugin.init()

    app = FastAPI(lifespan=lifespan, title="Grenade Flag Harness")
    app.state.host = host
    app.state.plugin = plugin

    arena_routes.init_arena_routes(host, plugin)
    app.include_router(arena_routes.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="ok",
            players=len(host.players),
            armed=len(plugin.tracker.armed_players()),
            uptime_s=time.time() - _server_start_time,
        )

    return app


app = create_app()
