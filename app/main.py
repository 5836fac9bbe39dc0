from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api import router
from logging_config import configure_logging
from services.metrics import MetricRegistry
from services.pipeline import build_pipeline
from services.self_test import SelfTestPoster
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


def _describe_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


async def request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    detail = f"invalid request body: {_describe_errors(exc)}"
    logger.error("Request body rejected", extra={"error": detail})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": detail})


def create_app(
    settings: Optional[Settings] = None,
    metrics: Optional[MetricRegistry] = None,
) -> FastAPI:
    configure_logging()
    settings = settings or get_settings()
    metrics = metrics or MetricRegistry()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        poster: Optional[SelfTestPoster] = None
        if settings.self_test_enabled:
            poster = SelfTestPoster(
                url=settings.self_test_url,
                terminal=settings.self_test_terminal,
                interval=settings.self_test_interval,
            )
            poster.start()
            logger.info("Self-test poster started", extra={"url": settings.self_test_url})
        app.state.self_test = poster
        try:
            yield
        finally:
            if poster is not None:
                await poster.stop()

    app = FastAPI(
        title="Sensor Collector",
        description="Validates sensor readings and exposes them as Prometheus metrics.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.metrics = metrics
    app.state.pipeline = build_pipeline(metrics, tracing=settings.tracing_enabled)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    current = get_settings()
    logger.info("API running", extra={"url": f"http://{current.host}:{current.port}"})
    uvicorn.run(app, host=current.host, port=current.port, log_config=None)
