"""Route optimization request handling."""

from __future__ import annotations

import logging
from typing import Any

from ...config import settings
from ...schemas.routing import RouteOptimizationRequest, RouteOptimizationResponse, RouteStopModel
from .models import RouteResult
from .optimizer import RouteOptimizer

logger = logging.getLogger(__name__)


class RouteValidationError(ValueError):
    """Raised when an optimization request is rejected before any geocoding."""


def validate_route_request(body: Any, max_addresses: int | None = None) -> RouteOptimizationRequest:
    """Check the raw request body and return it with every address trimmed.

    Rules are applied in order and the first violation is reported.
    """
    limit = max_addresses if max_addresses is not None else settings.max_route_addresses
    if not isinstance(body, dict):
        raise RouteValidationError("Request body must be a JSON object.")

    start = body.get("start")
    if not isinstance(start, str) or not start.strip():
        raise RouteValidationError("Invalid or missing 'start' address.")

    addresses = body.get("addresses")
    if not isinstance(addresses, list) or not addresses:
        raise RouteValidationError("'addresses' must be a non-empty array.")
    if len(addresses) > limit:
        raise RouteValidationError(f"Maximum of {limit} addresses allowed.")
    if any(not isinstance(address, str) or not address.strip() for address in addresses):
        raise RouteValidationError("Each address must be a non-empty string.")

    return RouteOptimizationRequest(
        start=start.strip(),
        addresses=[address.strip() for address in addresses],
    )


def route_result_to_response(points: list[str], result: RouteResult) -> RouteOptimizationResponse:
    return RouteOptimizationResponse(
        route=[points[index] for index in result.order],
        total_distance=result.total_distance_m,
        total_duration=result.total_duration_s,
        stops=[
            RouteStopModel(
                index=stop.index,
                address=stop.address,
                sequence=stop.sequence,
                distance_from_previous=stop.distance_from_prev_m,
                arrival_offset=stop.arrival_offset_s,
            )
            for stop in result.stops
        ],
        unresolved=[points[index] for index in result.unresolved],
    )


def optimize_route(payload: RouteOptimizationRequest, optimizer: RouteOptimizer | None = None) -> RouteOptimizationResponse:
    points = [payload.start, *payload.addresses]
    logger.info(f"Optimizing route from '{payload.start}' through {len(payload.addresses)} address(es)")
    result = (optimizer or RouteOptimizer()).optimize(points)
    return route_result_to_response(points, result)
