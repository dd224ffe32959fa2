"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional


class Coordinate(NamedTuple):
    latitude: float
    longitude: float


@dataclass(slots=True)
class GeocodeOutcome:
    """Result of geocoding one input address, tagged with the provider status."""

    index: int
    address: str
    coordinate: Optional[Coordinate]
    status: str

    @property
    def resolved(self) -> bool:
        return self.coordinate is not None


@dataclass(slots=True)
class RouteStop:
    index: int
    address: str
    sequence: int
    distance_from_prev_m: float
    arrival_offset_s: float


@dataclass(slots=True)
class RouteResult:
    order: List[int]
    stops: List[RouteStop]
    total_distance_m: float
    total_duration_s: float
    unresolved: List[int] = field(default_factory=list)
