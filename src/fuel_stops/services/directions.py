from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from django.conf import settings

from fuel_stops.exceptions import ExternalServiceError, RouteUnavailableError
from fuel_stops.services.geo import meters_to_miles
from fuel_stops.services.types import GeoPoint, RouteSegment

logger = logging.getLogger(__name__)

ROUTE_UNAVAILABLE_MESSAGE = "Could not fetch route. Check locations and try again."


class DirectionsClient:
    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.base_url = settings.DIRECTIONS_BASE_URL.rstrip("/")
        self.api_key = settings.GOOGLE_MAPS_API_KEY
        self.timeout = settings.ROUTE_TIMEOUT_SECONDS
        self.retry_count = max(0, settings.ROUTE_RETRY_COUNT)
        self.transport = transport

    async def route(self, origin: str, destination: str) -> list[RouteSegment]:
        params = {
            "origin": origin,
            "destination": destination,
            "mode": "driving",
            "alternatives": "false",
            "key": self.api_key,
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            for attempt in range(self.retry_count + 1):
                try:
                    response = await client.get(f"{self.base_url}/json", params=params)
                    response.raise_for_status()
                    return self._parse_response(response.json())
                except RouteUnavailableError:
                    raise
                except ValueError as exc:
                    raise ExternalServiceError("Directions response was not valid JSON") from exc
                except httpx.HTTPError as exc:
                    if attempt >= self.retry_count:
                        raise ExternalServiceError("Directions request failed") from exc
                    logger.warning(
                        "Directions request failed (attempt %s): %s", attempt + 1, exc
                    )
                    await asyncio.sleep(0.3 * (attempt + 1))

    @staticmethod
    def _parse_response(payload: Any) -> list[RouteSegment]:
        if not isinstance(payload, dict):
            raise RouteUnavailableError(ROUTE_UNAVAILABLE_MESSAGE)

        status = payload.get("status")
        routes = payload.get("routes") or []
        if status != "OK" or not routes:
            logger.info("Directions provider returned status %s", status)
            raise RouteUnavailableError(ROUTE_UNAVAILABLE_MESSAGE)

        segments: list[RouteSegment] = []
        try:
            for leg in routes[0].get("legs", []):
                for step in leg.get("steps", []):
                    segments.append(
                        RouteSegment(
                            length_miles=meters_to_miles(float(step["distance"]["value"])),
                            start=_geo_point(step["start_location"]),
                            end=_geo_point(step["end_location"]),
                        )
                    )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise RouteUnavailableError("Route geometry unavailable") from exc

        if not segments:
            raise RouteUnavailableError("Route geometry unavailable")
        return segments


def _geo_point(location: dict[str, Any]) -> GeoPoint:
    return GeoPoint(latitude=float(location["lat"]), longitude=float(location["lng"]))
