"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional, TextIO

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from .config import Settings, get_settings
from .routes.logs import router as logs_router
from .routes.alerts import router as alerts_router
from .routes.health import router as health_router
from .metrics.metrics import metrics_app
from .openobserve.client import OpenObserveClient
from .openobserve.errors import BackendUnavailableError
from .utils.log_format import ExtraFormatter


logger = logging.getLogger("logs_adapter")


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_HANDLER_NAME = "logs_adapter"


def configure_logging(level: str, stream: Optional[TextIO] = None) -> logging.Handler:
    """Install the service log handler on the root logger, replacing a previous one."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(ExtraFormatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
    return handler


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[OpenObserveClient] = None,
) -> FastAPI:
    settings = settings or get_settings()
    client = client or OpenObserveClient.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("openobserve.health.checking", extra={"url": settings.OPENOBSERVE_URL})
        try:
            await client.wait_until_healthy(
                settings.HEALTH_CHECK_ATTEMPTS, settings.HEALTH_CHECK_INTERVAL_SECONDS
            )
        except BackendUnavailableError:
            logger.error("openobserve.unreachable.shutting_down")
            await client.aclose()
            raise
        logger.info("openobserve.connected")
        yield
        logger.info("server.shutting_down")
        await client.aclose()

    app = FastAPI(title="openobserve-logs-adapter", version="0.1.0", lifespan=lifespan)
    app.state.openobserve = client

    app.include_router(health_router, tags=["health"])
    app.include_router(logs_router, prefix="/api/v1/logs", tags=["logs"])
    app.include_router(alerts_router, prefix="/api/v1/alerts", tags=["alerts"])

    if settings.METRICS_ENABLED:
        app.mount("/metrics", metrics_app)

    return app


def run() -> None:
    """Console entry point: load config, then serve until SIGINT/SIGTERM."""
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging("INFO")
        logger.error("config.load.failed", extra={"error": str(e)})
        sys.exit(1)

    configure_logging(settings.LOG_LEVEL)
    logger.info(
        "config.loaded",
        extra={
            "log_level": settings.LOG_LEVEL,
            "openobserve_url": settings.OPENOBSERVE_URL,
            "openobserve_org": settings.OPENOBSERVE_ORG,
            "openobserve_stream": settings.OPENOBSERVE_STREAM,
            "openobserve_user": settings.OPENOBSERVE_USER,
            "openobserve_password": settings.masked_password(),
            "server_port": settings.SERVER_PORT,
        },
    )
    # uvicorn exits non-zero when the lifespan startup fails
    uvicorn.run(
        create_app(settings),
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
