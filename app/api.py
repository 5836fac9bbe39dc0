"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, Request, Response, status

from app.schemas import ValueRequest, ValueResponse
from services.metrics import MetricRegistry
from services.pipeline import ReadingPipeline, Rejected, TracedPipeline

router = APIRouter()


def get_pipeline(request: Request) -> Union[ReadingPipeline, TracedPipeline]:
    return request.app.state.pipeline


def get_metrics(request: Request) -> MetricRegistry:
    return request.app.state.metrics


@router.post(
    "/value",
    response_model=ValueResponse,
    response_model_exclude_none=True,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ValueResponse}},
    summary="Submit a sensor reading.",
)
async def submit_value(
    payload: ValueRequest,
    response: Response,
    pipeline: Union[ReadingPipeline, TracedPipeline] = Depends(get_pipeline),
) -> ValueResponse:
    outcome = pipeline.handle(payload.to_reading())
    if isinstance(outcome, Rejected):
        response.status_code = status.HTTP_400_BAD_REQUEST
        return ValueResponse(error=outcome.error)
    return ValueResponse(message=outcome.message, value=outcome.value)


@router.get(
    "/metrics",
    summary="Prometheus scrape endpoint.",
    include_in_schema=False,
)
async def metrics(registry: MetricRegistry = Depends(get_metrics)) -> Response:
    return Response(content=registry.render(), media_type=registry.content_type)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
