"""Nearest-neighbor route construction over geocoded addresses.

Addresses are geocoded concurrently, the ones that resolve are placed in an
all-pairs haversine distance matrix, and a greedy tour is grown from the start
address by always moving to the closest unvisited point. The result is an
approximation of the shortest visiting order, good enough for a single vehicle
with a handful of stops.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ..geospatial import build_distance_matrix, is_valid_coordinate
from .geocoder import GeocoderClient
from .models import RouteResult, RouteStop

# Assumed travel speed: 1000 meters per 60 seconds (~60 km/h).
METERS_PER_SECOND = 1000.0 / 60.0

logger = logging.getLogger(__name__)


class RouteOptimizationError(Exception):
    """Raised when a route cannot be built from the supplied addresses."""


class StartAddressNotFoundError(RouteOptimizationError):
    pass


class NoGeocodedAddressesError(RouteOptimizationError):
    pass


def estimate_duration_seconds(distance_m: float) -> float:
    return distance_m / METERS_PER_SECOND


def nearest_neighbor_tour(matrix: Sequence[Sequence[float]], start: int = 0) -> tuple[list[int], float]:
    """Build a greedy tour through every point of ``matrix`` beginning at ``start``.

    Ties go to the lowest index. The walk stops early if no unvisited point is
    reachable (non-finite distance) instead of looping.

    Returns:
        Tuple of (visiting order as matrix indices, total distance).
    """
    size = len(matrix)
    if size == 0:
        return [], 0.0
    if not 0 <= start < size:
        raise ValueError(f"Start index {start} is outside a matrix of size {size}.")

    visited = [False] * size
    visited[start] = True
    tour = [start]
    total = 0.0
    current = start

    for _ in range(size - 1):
        best = math.inf
        next_index = -1
        row = matrix[current]
        for candidate in range(size):
            if not visited[candidate] and row[candidate] < best:
                best = row[candidate]
                next_index = candidate
        if next_index < 0:
            logger.warning(f"No reachable point left from index {current}; stopping tour after {len(tour)} points")
            break
        visited[next_index] = True
        tour.append(next_index)
        total += best
        current = next_index

    return tour, total


def _build_stops(
    order: Sequence[int],
    addresses: Sequence[str],
    matrix: Sequence[Sequence[float]],
    tour: Sequence[int],
) -> list[RouteStop]:
    stops: list[RouteStop] = []
    elapsed_m = 0.0
    for sequence, (original_index, point) in enumerate(zip(order, tour)):
        leg = matrix[tour[sequence - 1]][point] if sequence > 0 else 0.0
        elapsed_m += leg
        stops.append(
            RouteStop(
                index=original_index,
                address=addresses[original_index],
                sequence=sequence,
                distance_from_prev_m=leg,
                arrival_offset_s=estimate_duration_seconds(elapsed_m),
            )
        )
    return stops


class RouteOptimizer:
    """Orchestrates geocoding, distance matrix construction and tour building."""

    def __init__(self, geocoder: GeocoderClient | None = None) -> None:
        self.geocoder = geocoder or GeocoderClient()

    def optimize(self, addresses: Sequence[str]) -> RouteResult:
        """Compute a visiting order for ``addresses``; ``addresses[0]`` is the start.

        Raises:
            StartAddressNotFoundError: the start address could not be geocoded.
            NoGeocodedAddressesError: none of the addresses could be geocoded.
        """
        if not addresses:
            raise ValueError("At least one address is required.")

        outcomes = self.geocoder.geocode_many(addresses)

        usable = [outcome.coordinate is not None and is_valid_coordinate(outcome.coordinate) for outcome in outcomes]
        valid = [(outcome.coordinate, outcome.index) for outcome, ok in zip(outcomes, usable) if ok]
        unresolved = [outcome.index for outcome, ok in zip(outcomes, usable) if not ok]

        if not valid:
            raise NoGeocodedAddressesError("None of the addresses could be geocoded.")
        if valid[0][1] != 0:
            raise StartAddressNotFoundError(f"Start address could not be geocoded: '{addresses[0]}'.")
        if unresolved:
            dropped = ", ".join(f"'{addresses[index]}'" for index in unresolved)
            logger.warning(f"Dropping {len(unresolved)} address(es) that could not be geocoded: {dropped}")

        matrix = build_distance_matrix([coordinate for coordinate, _ in valid])
        tour, total_distance = nearest_neighbor_tour(matrix, start=0)
        order = [valid[point][1] for point in tour]
        unreached = sorted(set(index for _, index in valid) - set(order))
        if unreached:
            logger.warning(f"Route could not reach {len(unreached)} geocoded address(es): {unreached}")
            unresolved = sorted(unresolved + unreached)

        result = RouteResult(
            order=order,
            stops=_build_stops(order, addresses, matrix, tour),
            total_distance_m=total_distance,
            total_duration_s=estimate_duration_seconds(total_distance),
            unresolved=unresolved,
        )
        logger.info(
            f"Optimized route through {len(order)}/{len(addresses)} addresses: "
            f"{result.total_distance_m:.0f} m, {result.total_duration_s:.0f} s"
        )
        return result
