from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from fuel_stops.services.places import PlacesClient
from fuel_stops.services.types import GeoPoint, PlannedStop, StopRecord

logger = logging.getLogger(__name__)

NOT_FOUND_NAME = "Gas station not found nearby"
NOT_FOUND_ADDRESS = "Try expanding search radius or stopping earlier."


class StationResolver:
    def __init__(self, places_client: PlacesClient | None = None) -> None:
        self.places_client = places_client or PlacesClient()

    async def resolve(
        self, planned_stops: Sequence[PlannedStop], radius_meters: float
    ) -> list[StopRecord]:
        """Look up a fuel station for every planned stop at once.

        Records come back in the order of ``planned_stops`` with 1-based
        indexes, whatever order the lookups finish in.
        """
        return list(
            await asyncio.gather(
                *(
                    self._resolve_one(index, stop, radius_meters)
                    for index, stop in enumerate(planned_stops, start=1)
                )
            )
        )

    async def _resolve_one(
        self, index: int, stop: PlannedStop, radius_meters: float
    ) -> StopRecord:
        candidates = await self.places_client.nearby_fuel_stations(stop.point, radius_meters)
        if not candidates:
            logger.info(
                "No fuel station within %sm of stop %s (%.1f mi)",
                radius_meters,
                index,
                stop.distance_from_start_miles,
            )
            return StopRecord(
                index=index,
                distance_from_start_miles=stop.distance_from_start_miles,
                position=stop.point,
                name=NOT_FOUND_NAME,
                address=NOT_FOUND_ADDRESS,
                found=False,
            )

        return _record_from_candidate(index, stop, candidates[0])


def _record_from_candidate(index: int, stop: PlannedStop, candidate: dict[str, Any]) -> StopRecord:
    try:
        location = candidate["geometry"]["location"]
        position = GeoPoint(latitude=float(location["lat"]), longitude=float(location["lng"]))
    except (KeyError, TypeError, ValueError):
        position = stop.point

    rating, review_count = _rating(candidate)

    return StopRecord(
        index=index,
        distance_from_start_miles=stop.distance_from_start_miles,
        position=position,
        name=str(candidate.get("name") or ""),
        address=str(candidate.get("vicinity") or candidate.get("formatted_address") or ""),
        rating=rating,
        review_count=review_count,
    )


def _rating(candidate: dict[str, Any]) -> tuple[float | None, int | None]:
    """Rating and review count, both set or both ``None``."""
    rating = candidate.get("rating")
    if rating is None:
        return None, None
    try:
        return float(rating), int(candidate.get("user_ratings_total") or 0)
    except (OverflowError, TypeError, ValueError):
        return None, None
