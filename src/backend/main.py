"""
StudySync Backend Application

Group sticky notes, polls, personal notes, a class timetable with
reminders, and a scientific calculator for university students.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from api.v1 import router as api_v1_router
from core.config import settings
from core.events import create_start_app_handler, create_stop_app_handler
from core.logging import configure_logging
from core.middleware import RequestIDMiddleware, SecurityHeadersMiddleware

configure_logging(is_development=settings.is_development, log_level=settings.LOG_LEVEL)

logger = structlog.get_logger(__name__)

API_VERSION = "1.0.0"
SERVICE_NAME = "studysync-api"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    await create_start_app_handler(app)()
    yield
    await create_stop_app_handler(app)()


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure with request context and answer with a generic 500."""
    logger.exception(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Something went wrong on our side. Please try again.",
            "error_type": type(exc).__name__ if settings.DEBUG else "InternalServerError",
        },
    )


def _add_middleware(application: FastAPI) -> None:
    # Starlette wraps in reverse: the last one added sees the request first
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    application.add_middleware(GZipMiddleware, minimum_size=1000)


def create_application() -> FastAPI:
    """Build the FastAPI app: middleware, /api/v1 routes and service endpoints."""
    docs_enabled = settings.DEBUG
    application = FastAPI(
        title=settings.APP_NAME,
        description="Study groups, notes, polls, timetable and calculator for students",
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    _add_middleware(application)
    application.add_exception_handler(Exception, unhandled_exception_handler)
    application.include_router(api_v1_router, prefix="/api/v1")

    @application.get("/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        """Liveness probe for the load balancer."""
        return {"status": "healthy", "service": SERVICE_NAME}

    @application.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        return {
            "name": settings.APP_NAME,
            "version": API_VERSION,
            "docs": "/docs" if docs_enabled else "disabled",
        }

    return application


app = create_application()
