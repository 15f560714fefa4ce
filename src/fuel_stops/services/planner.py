from __future__ import annotations

import logging
import math

from django.conf import settings

from fuel_stops.exceptions import ExternalServiceError, FuelStopsError, InvalidTripError
from fuel_stops.services.directions import DirectionsClient
from fuel_stops.services.station_resolver import StationResolver
from fuel_stops.services.stop_points import plan_stop_points, total_distance_miles
from fuel_stops.services.types import PlanningState, TripParameters, TripPlan, TripRun

logger = logging.getLogger(__name__)


def validate_trip_parameters(params: TripParameters) -> float:
    """Check a trip before any provider call and return its usable range in miles."""
    if (
        not params.origin.strip()
        or not params.destination.strip()
        or not math.isfinite(params.range_miles)
        or params.range_miles <= 0
    ):
        raise InvalidTripError("Please fill in origin, destination, and a valid range.")

    if not math.isfinite(params.reserve_miles) or params.reserve_miles < 0:
        raise InvalidTripError("Reserve buffer cannot be negative.")

    if params.reserve_miles >= params.range_miles:
        raise InvalidTripError("Reserve buffer must be less than the range per tank.")

    usable_range_miles = params.usable_range_miles
    if usable_range_miles < float(settings.MIN_USABLE_RANGE_MILES):
        raise InvalidTripError("Usable range is too small. Increase range or decrease reserve.")

    return usable_range_miles


class TripPlannerService:
    def __init__(
        self,
        directions_client: DirectionsClient | None = None,
        station_resolver: StationResolver | None = None,
    ) -> None:
        self.directions_client = directions_client or DirectionsClient()
        self.station_resolver = station_resolver or StationResolver()
        self.state = PlanningState.IDLE
        self.current_run: TripRun | None = None

    async def plan(self, params: TripParameters) -> TripPlan:
        # Results of the previous run are dropped, never merged.
        run = TripRun(parameters=params)
        self.current_run = run

        try:
            self._transition(run, PlanningState.VALIDATING)
            usable_range_miles = validate_trip_parameters(params)

            self._transition(run, PlanningState.FETCHING_ROUTE)
            segments = await self.directions_client.route(
                params.origin.strip(), params.destination.strip()
            )

            self._transition(run, PlanningState.PLANNING)
            run.total_distance_miles = total_distance_miles(segments)
            run.planned_stops = list(plan_stop_points(segments, usable_range_miles))

            if run.planned_stops:
                self._transition(run, PlanningState.RESOLVING_STATIONS)
                run.stops = await self.station_resolver.resolve(
                    run.planned_stops, float(settings.STATION_SEARCH_RADIUS_METERS)
                )

            self._transition(run, PlanningState.DONE)
        except FuelStopsError as exc:
            run.error = str(exc)
            self._transition(run, PlanningState.FAILED)
            logger.warning(
                "Trip plan %s -> %s failed: %s", params.origin, params.destination, exc
            )
            raise
        except Exception as exc:
            run.error = "Failed to plan trip. Try again."
            self._transition(run, PlanningState.FAILED)
            logger.exception(
                "Trip plan %s -> %s failed unexpectedly", params.origin, params.destination
            )
            raise ExternalServiceError(run.error) from exc
        finally:
            self.state = PlanningState.IDLE

        logger.info(
            "Planned %s -> %s: %.1f mi, %s stop(s)",
            params.origin,
            params.destination,
            run.total_distance_miles,
            len(run.stops),
        )
        return TripPlan(
            total_distance_miles=run.total_distance_miles,
            range_miles=params.range_miles,
            usable_range_miles=usable_range_miles,
            stops=list(run.stops),
        )

    def _transition(self, run: TripRun, state: PlanningState) -> None:
        logger.debug("Trip run %s -> %s", run.state.value, state.value)
        run.state = state
        self.state = state
