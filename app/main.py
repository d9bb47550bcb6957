import logging
import sys
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import router
from app.config.settings import Settings, settings
from app.config.utils import get_config_summary, validate_configuration
from app.services.weather_service import create_weather_service
from app.utils.exceptions import WeatherAPIError


def setup_logging(settings_obj: Settings) -> None:
    """Configure structured logging for the application."""

    log_level = getattr(logging, settings_obj.log_level.upper())

    if settings_obj.log_format == "json" and not settings_obj.is_development:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifespan - startup and shutdown events.

    The weather service is created once with the process settings and its
    upstream HTTP client is closed on shutdown.
    """
    logger = structlog.get_logger(__name__)
    app_settings: Settings = app.state.settings

    logger.info("Starting Weather Proxy service", version=app_settings.app_version)

    validation = validate_configuration(app_settings)
    for warning in validation["warnings"]:
        logger.warning("Configuration warning", warning=warning)
    if not validation["valid"]:
        logger.error("Invalid configuration", errors=validation["errors"])
        raise RuntimeError(f"Invalid configuration: {validation['errors']}")

    logger.info("Configuration loaded", **get_config_summary(app_settings))

    app.state.weather_service = await create_weather_service(app_settings)
    logger.info("Weather service initialized successfully")

    yield  # Application is running

    logger.info("Shutting down Weather Proxy service")

    try:
        await app.state.weather_service.cleanup()
        logger.info("Weather service cleanup completed")
    except Exception as e:
        logger.error("Error during service cleanup", error=str(e))


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app_settings = app_settings or settings

    setup_logging(app_settings)

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="Current weather and reverse geocoding backed by OpenWeatherMap",
        docs_url="/docs" if app_settings.is_development else None,
        redoc_url="/redoc" if app_settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next) -> Response:
        """Log requests and add processing time headers."""
        logger = structlog.get_logger(__name__)

        start_time = time.time()
        request_id = f"req_{int(start_time * 1000000)}"

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        logger.info("Request started")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                process_time=time.time() - start_time,
            )
            raise

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "Request completed",
            status_code=response.status_code,
            process_time=process_time,
        )

        return response

    @app.exception_handler(WeatherAPIError)
    async def weather_api_error_handler(
        _request: Request, exc: WeatherAPIError
    ) -> JSONResponse:
        """Translate weather errors into their HTTP status and JSON body."""
        logger = structlog.get_logger(__name__)
        log = logger.error if exc.status_code >= 500 else logger.warning
        log("Weather API error", error=str(exc), error_type=type(exc).__name__)

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": exc.details or None,
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors gracefully."""
        logger = structlog.get_logger(__name__)
        logger.error(
            "Unhandled exception", error=str(exc), error_type=type(exc).__name__
        )

        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_SERVER_ERROR",
                "message": "An internal server error occurred",
                "details": str(exc) if app_settings.is_development else None,
            },
        )

    app.include_router(router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint providing basic service information."""
        return {
            "service": app_settings.app_name,
            "version": app_settings.app_version,
            "status": "running",
            "docs": "/docs" if app_settings.is_development else "disabled",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
