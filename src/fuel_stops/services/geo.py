from __future__ import annotations

from fuel_stops.services.types import GeoPoint

METERS_PER_MILE = 1609.344


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE


def interpolate(start: GeoPoint, end: GeoPoint, fraction: float) -> GeoPoint:
    """Linear interpolation in latitude/longitude space, no great-circle correction."""
    return GeoPoint(
        latitude=start.latitude + (end.latitude - start.latitude) * fraction,
        longitude=start.longitude + (end.longitude - start.longitude) * fraction,
    )
