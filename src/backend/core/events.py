"""
Application lifecycle event handlers.

Startup provisions emulator containers and starts the timetable alert
scheduler; shutdown stops the scheduler and closes the Cosmos DB client.
"""

from typing import Callable

import structlog
from fastapi import FastAPI

from core.config import settings
from db.cosmos_session import close_cosmos, ensure_containers
from services.background_scheduler import start_scheduler, stop_scheduler

logger = structlog.get_logger(__name__)


def create_start_app_handler(app: FastAPI) -> Callable:
    """Create startup event handler."""

    async def start_app() -> None:
        logger.info("app_starting", app=settings.APP_NAME, env=settings.APP_ENV)

        if settings.AZURE_COSMOS_CONNECTION_STRING:
            await ensure_containers()

        try:
            await start_scheduler()
        except Exception as e:
            # Reminders are optional; the API keeps serving
            logger.exception("scheduler_start_failed", error=str(e))

        logger.info("app_started", app=settings.APP_NAME)

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    """Create shutdown event handler."""

    async def stop_app() -> None:
        logger.info("app_stopping", app=settings.APP_NAME)

        await stop_scheduler()
        await close_cosmos()

        logger.info("app_stopped", app=settings.APP_NAME)

    return stop_app
