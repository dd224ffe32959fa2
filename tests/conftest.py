from typing import Mapping, Sequence

import pytest

from route_optimizer.services.routing.models import Coordinate, GeocodeOutcome

TEL_AVIV = Coordinate(32.08, 34.78)
HAIFA = Coordinate(32.79, 34.99)
JERUSALEM = Coordinate(31.78, 35.22)


class FakeGeocoder:
    """Geocoder stand-in answering from a fixed address -> coordinate table."""

    def __init__(self, table: Mapping[str, Coordinate]):
        self.table = dict(table)
        self.calls: list[list[str]] = []

    def geocode_many(self, addresses: Sequence[str]) -> list[GeocodeOutcome]:
        self.calls.append(list(addresses))
        outcomes = []
        for index, address in enumerate(addresses):
            coordinate = self.table.get(address)
            outcomes.append(
                GeocodeOutcome(
                    index=index,
                    address=address,
                    coordinate=coordinate,
                    status="OK" if coordinate else "ZERO_RESULTS",
                )
            )
        return outcomes


@pytest.fixture
def israel_geocoder() -> FakeGeocoder:
    return FakeGeocoder({"Tel Aviv": TEL_AVIV, "Haifa": HAIFA, "Jerusalem": JERUSALEM})


@pytest.fixture
def make_geocoder():
    return FakeGeocoder
