"""
Production FastAPI Application

Parking gate API: vehicle entry and exit.

Usage:
    granian src.main:app --interface asgi --host 0.0.0.0 --port 8100 --workers 1
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Parking Service] Starting up...')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Parking Service] Dependency injection wired')

    database = container.database()
    await database.create_db_and_tables()
    Logger.base.info('🗄️  [Parking Service] Database tables ready')

    Logger.base.info('✅ [Parking Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Parking Service] Shutting down...')

    await database.dispose()

    # Unwire DI
    container.unwire()
    container.reset_singletons()

    Logger.base.info('👋 [Parking Service] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Parking System - Allocates spots on entry, prices stays on exit',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
