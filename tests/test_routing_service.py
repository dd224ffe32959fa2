import pytest

from route_optimizer.services.routing.models import RouteResult, RouteStop
from route_optimizer.services.routing.optimizer import RouteOptimizer
from route_optimizer.services.routing.service import (
    RouteValidationError,
    optimize_route,
    route_result_to_response,
    validate_route_request,
)


def test_validate_trims_everything():
    payload = validate_route_request({"start": " Depot ", "addresses": ["  A", "B  "]})

    assert payload.start == "Depot"
    assert payload.addresses == ["A", "B"]


def test_validate_honours_custom_limit():
    with pytest.raises(RouteValidationError, match="Maximum of 2 addresses allowed."):
        validate_route_request({"start": "Depot", "addresses": ["A", "B", "C"]}, max_addresses=2)


def test_validate_rejects_none_body():
    with pytest.raises(RouteValidationError, match="JSON object"):
        validate_route_request(None)


def test_route_result_to_response_maps_indices_to_addresses():
    points = ["Depot", "A", "B", "C"]
    result = RouteResult(
        order=[0, 3, 1],
        stops=[
            RouteStop(index=0, address="Depot", sequence=0, distance_from_prev_m=0.0, arrival_offset_s=0.0),
            RouteStop(index=3, address="C", sequence=1, distance_from_prev_m=500.0, arrival_offset_s=30.0),
            RouteStop(index=1, address="A", sequence=2, distance_from_prev_m=1000.0, arrival_offset_s=90.0),
        ],
        total_distance_m=1500.0,
        total_duration_s=90.0,
        unresolved=[2],
    )

    response = route_result_to_response(points, result)

    assert response.route == ["Depot", "C", "A"]
    assert response.unresolved == ["B"]
    dumped = response.model_dump(by_alias=True)
    assert dumped["totalDistance"] == 1500.0
    assert dumped["totalDuration"] == 90.0
    assert dumped["stops"][1]["arrivalOffset"] == 30.0


def test_optimize_route_prepends_start(israel_geocoder):
    payload = validate_route_request({"start": "Tel Aviv", "addresses": ["Haifa"]})

    response = optimize_route(payload, RouteOptimizer(geocoder=israel_geocoder))

    assert israel_geocoder.calls == [["Tel Aviv", "Haifa"]]
    assert response.route == ["Tel Aviv", "Haifa"]
