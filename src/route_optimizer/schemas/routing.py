"""Route optimization request/response schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RouteOptimizationRequest(BaseModel):
    start: str = Field(..., description="Start address; always the first stop of the route.")
    addresses: List[str] = Field(..., description="Destination addresses (1-20) in any order.")


class RouteStopModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: int = Field(..., description="Position of the address in the request (0 = start).")
    address: str
    sequence: int
    distance_from_previous: float = Field(..., alias="distanceFromPrevious", description="Meters.")
    arrival_offset: float = Field(..., alias="arrivalOffset", description="Seconds after departure.")


class RouteOptimizationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    route: List[str] = Field(..., description="Addresses in visiting order, starting with the start address.")
    total_distance: float = Field(..., alias="totalDistance", description="Meters.")
    total_duration: float = Field(..., alias="totalDuration", description="Seconds.")
    stops: List[RouteStopModel] = Field(default_factory=list)
    unresolved: List[str] = Field(
        default_factory=list,
        description="Addresses that could not be geocoded and were left out of the route.",
    )


class ErrorResponse(BaseModel):
    error: str
