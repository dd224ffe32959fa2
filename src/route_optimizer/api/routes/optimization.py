"""Route optimization endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from ...schemas.routing import ErrorResponse, RouteOptimizationResponse
from ...services.routing.optimizer import RouteOptimizationError, RouteOptimizer
from ...services.routing.service import RouteValidationError, optimize_route, validate_route_request

router = APIRouter(tags=["route-optimization"])

logger = logging.getLogger(__name__)


def get_route_optimizer() -> RouteOptimizer:
    return RouteOptimizer()


@router.post(
    "/route-optimization",
    response_model=RouteOptimizationResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def optimize(
    body: Any = Body(default=None),
    optimizer: RouteOptimizer = Depends(get_route_optimizer),
) -> RouteOptimizationResponse:
    """Order the given addresses into an approximate shortest route from ``start``."""
    try:
        payload = validate_route_request(body)
    except RouteValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    try:
        return optimize_route(payload, optimizer)
    except RouteOptimizationError as exc:
        logger.warning(f"Route optimization rejected: {exc}")
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Route optimization error: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc) or "Internal server error",
        ) from exc
