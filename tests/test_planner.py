from __future__ import annotations

import pytest

from fuel_stops.exceptions import ExternalServiceError, InvalidTripError, RouteUnavailableError
from fuel_stops.services.planner import TripPlannerService, validate_trip_parameters
from fuel_stops.services.types import (
    GeoPoint,
    PlannedStop,
    PlanningState,
    RouteSegment,
    StopRecord,
    TripParameters,
)


def _route(miles: float) -> list[RouteSegment]:
    return [
        RouteSegment(
            length_miles=miles,
            start=GeoPoint(latitude=34.05, longitude=-118.24),
            end=GeoPoint(latitude=40.76, longitude=-111.89),
        )
    ]


def _echo_records(planned_stops: list[PlannedStop], radius_meters: float) -> list[StopRecord]:
    return [
        StopRecord(
            index=index,
            distance_from_start_miles=stop.distance_from_start_miles,
            position=stop.point,
            name=f"Station {index}",
            address="I-15",
        )
        for index, stop in enumerate(planned_stops, start=1)
    ]


@pytest.fixture
def directions(mocker):
    client = mocker.Mock()
    client.route = mocker.AsyncMock(return_value=_route(620.0))
    return client


@pytest.fixture
def resolver(mocker):
    station_resolver = mocker.Mock()
    station_resolver.resolve = mocker.AsyncMock(side_effect=_echo_records)
    return station_resolver


@pytest.mark.asyncio
async def test_plan_places_stops_every_usable_range(directions, resolver) -> None:
    service = TripPlannerService(directions_client=directions, station_resolver=resolver)

    plan = await service.plan(
        TripParameters(
            origin="Los Angeles, CA",
            destination="Salt Lake City, UT",
            range_miles=300.0,
            reserve_miles=50.0,
        )
    )

    assert plan.total_distance_miles == pytest.approx(620.0)
    assert plan.usable_range_miles == 250.0
    assert [stop.distance_from_start_miles for stop in plan.stops] == [250.0, 500.0]
    assert [stop.index for stop in plan.stops] == [1, 2]
    directions.route.assert_awaited_once_with("Los Angeles, CA", "Salt Lake City, UT")
    planned, radius = resolver.resolve.await_args.args
    assert len(planned) == 2
    assert radius == 8000.0
    assert service.state is PlanningState.IDLE
    assert service.current_run.state is PlanningState.DONE


@pytest.mark.asyncio
async def test_short_trip_needs_no_stops(directions, resolver) -> None:
    directions.route.return_value = _route(180.0)
    service = TripPlannerService(directions_client=directions, station_resolver=resolver)

    plan = await service.plan(
        TripParameters(origin="Austin", destination="Houston", range_miles=300.0)
    )

    assert plan.total_distance_miles == pytest.approx(180.0)
    assert plan.stops == []
    assert plan.needs_stops is False
    resolver.resolve.assert_not_awaited()


@pytest.mark.asyncio
async def test_invalid_trip_makes_no_provider_calls(directions, resolver) -> None:
    service = TripPlannerService(directions_client=directions, station_resolver=resolver)

    with pytest.raises(InvalidTripError, match="Reserve buffer must be less"):
        await service.plan(
            TripParameters(origin="A", destination="B", range_miles=300.0, reserve_miles=300.0)
        )

    directions.route.assert_not_awaited()
    resolver.resolve.assert_not_awaited()
    assert service.state is PlanningState.IDLE
    assert service.current_run.state is PlanningState.FAILED
    assert service.current_run.error == "Reserve buffer must be less than the range per tank."


@pytest.mark.asyncio
async def test_route_failure_returns_to_idle(directions, resolver) -> None:
    directions.route.side_effect = RouteUnavailableError("Could not fetch route.")
    service = TripPlannerService(directions_client=directions, station_resolver=resolver)

    with pytest.raises(RouteUnavailableError):
        await service.plan(TripParameters(origin="A", destination="B", range_miles=300.0))

    assert service.state is PlanningState.IDLE
    assert service.current_run.state is PlanningState.FAILED
    resolver.resolve.assert_not_awaited()


@pytest.mark.asyncio
async def test_each_run_replaces_the_previous_one(directions, resolver) -> None:
    service = TripPlannerService(directions_client=directions, station_resolver=resolver)
    await service.plan(TripParameters(origin="A", destination="B", range_miles=300.0))
    first_run = service.current_run

    directions.route.return_value = _route(100.0)
    await service.plan(TripParameters(origin="C", destination="D", range_miles=300.0))

    assert service.current_run is not first_run
    assert service.current_run.parameters.origin == "C"
    assert service.current_run.stops == []
    assert len(first_run.stops) == 2


@pytest.mark.parametrize(
    "params, message",
    [
        (TripParameters("", "B", 300.0), "Please fill in origin"),
        (TripParameters("A", "  ", 300.0), "Please fill in origin"),
        (TripParameters("A", "B", 0.0), "Please fill in origin"),
        (TripParameters("A", "B", -10.0), "Please fill in origin"),
        (TripParameters("A", "B", 300.0, -1.0), "cannot be negative"),
        (TripParameters("A", "B", 300.0, 300.0), "must be less than the range"),
        (TripParameters("A", "B", 300.0, 400.0), "must be less than the range"),
        (TripParameters("A", "B", 60.0, 40.0), "Usable range is too small"),
    ],
)
def test_validation_rejects_bad_parameters(params: TripParameters, message: str) -> None:
    with pytest.raises(InvalidTripError, match=message):
        validate_trip_parameters(params)


def test_validation_returns_usable_range() -> None:
    assert validate_trip_parameters(TripParameters("A", "B", 300.0, 50.0)) == 250.0
    assert validate_trip_parameters(TripParameters("A", "B", 80.0, 50.0)) == 30.0


def test_minimum_usable_range_is_configurable(settings) -> None:
    settings.MIN_USABLE_RANGE_MILES = 100

    with pytest.raises(InvalidTripError):
        validate_trip_parameters(TripParameters("A", "B", 120.0, 30.0))


@pytest.mark.asyncio
async def test_unexpected_failure_is_reported_as_upstream_error(directions, resolver) -> None:
    resolver.resolve.side_effect = AttributeError("'str' object has no attribute 'get'")
    service = TripPlannerService(directions_client=directions, station_resolver=resolver)

    with pytest.raises(ExternalServiceError, match="Failed to plan trip"):
        await service.plan(TripParameters(origin="A", destination="B", range_miles=300.0))

    assert service.state is PlanningState.IDLE
    assert service.current_run.state is PlanningState.FAILED
    assert service.current_run.error == "Failed to plan trip. Try again."
