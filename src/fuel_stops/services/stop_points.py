from __future__ import annotations

import math
from collections.abc import Iterator, Sequence

from fuel_stops.exceptions import MalformedRouteError
from fuel_stops.services.geo import interpolate
from fuel_stops.services.types import PlannedStop, RouteSegment


def total_distance_miles(segments: Sequence[RouteSegment]) -> float:
    total_miles = 0.0
    for segment in segments:
        total_miles += segment.length_miles
    return total_miles


def plan_stop_points(
    segments: Sequence[RouteSegment], usable_range_miles: float
) -> Iterator[PlannedStop]:
    """Walk the route and yield an ideal stop every ``usable_range_miles``.

    Distance left over at the end of a segment carries into the next one, so
    stops are evenly spaced along the whole route rather than per segment. A
    segment can hold several stops. A stop that lands exactly on a segment end
    is placed at that end coordinate.

    Raises ``MalformedRouteError`` before yielding anything when the route
    cannot be walked.
    """
    _check_route(segments, usable_range_miles)
    return _walk(segments, usable_range_miles)


def _check_route(segments: Sequence[RouteSegment], usable_range_miles: float) -> None:
    if not math.isfinite(usable_range_miles) or usable_range_miles <= 0:
        raise MalformedRouteError("Usable range must be a positive distance")
    if not segments:
        raise MalformedRouteError("Route has no segments")
    for segment in segments:
        if not math.isfinite(segment.length_miles) or segment.length_miles < 0:
            raise MalformedRouteError("Route segment has an invalid length")
    if total_distance_miles(segments) <= 0:
        raise MalformedRouteError("Route has zero length")


def _walk(segments: Sequence[RouteSegment], usable_range_miles: float) -> Iterator[PlannedStop]:
    distance_since_last_stop = 0.0
    segment_end_miles = 0.0

    for segment in segments:
        segment_miles = segment.length_miles
        segment_start_miles = segment_end_miles
        # Accumulated in the same order as total_distance_miles, so no stop
        # can be reported past the end of the route.
        segment_end_miles += segment_miles
        # Nothing to interpolate along, and dividing by the length would fail.
        if segment_miles == 0:
            continue

        offset_miles = 0.0
        remaining_miles = segment_miles
        while remaining_miles > 0:
            distance_to_next_stop = usable_range_miles - distance_since_last_stop

            if distance_to_next_stop <= remaining_miles:
                offset_miles += distance_to_next_stop
                remaining_miles -= distance_to_next_stop
                distance_since_last_stop = 0.0

                if remaining_miles == 0:
                    point = segment.end
                    distance_miles = segment_end_miles
                else:
                    point = interpolate(segment.start, segment.end, offset_miles / segment_miles)
                    distance_miles = min(segment_start_miles + offset_miles, segment_end_miles)
                yield PlannedStop(point=point, distance_from_start_miles=distance_miles)
            else:
                distance_since_last_stop += remaining_miles
                remaining_miles = 0.0
