"""
FastAPI application entry point.

Uses structured logging from freshness.logging module.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from freshness import __version__
from freshness.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .config import get_settings
from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .routers import badges as badges_router
from .schemas import GreetingResponse, HealthResponse

# Configure structured logging
settings = get_settings()
log_level = "DEBUG" if settings.debug else settings.log_level
configure_logging(level=log_level)
logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Report configuration problems without refusing to start."""
    current = get_settings()
    logger.info(
        "app_startup",
        app_name=current.app_name,
        github_api_base=current.github_api_base,
        authenticated=current.has_github_token,
    )
    for warning in current.validate_production_config():
        logger.warning("config_warning", message=warning)

    yield

    logger.info("app_shutdown")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Structured request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Request ID middleware (outermost, so request logs carry the ID)
    app.add_middleware(RequestIDMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    @app.get("/", response_model=GreetingResponse, tags=["health"])
    def root():
        """Sanity check endpoint."""
        return {"message": "hello there!"}

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health_check():
        """
        Health check endpoint (liveness probe).

        Does not touch GitHub; a badge request is the readiness check.
        """
        return {"status": "ok"}

    # Catch-all badge route goes last so the fixed routes above win
    app.include_router(badges_router.router)

    return app


app = create_app()
