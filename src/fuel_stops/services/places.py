from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from django.conf import settings

from fuel_stops.exceptions import ExternalServiceError
from fuel_stops.services.types import GeoPoint

logger = logging.getLogger(__name__)

FUEL_STATION_TYPE = "gas_station"


class PlacesClient:
    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.base_url = settings.PLACES_BASE_URL.rstrip("/")
        self.api_key = settings.GOOGLE_MAPS_API_KEY
        self.timeout = settings.PLACES_TIMEOUT_SECONDS
        self.retry_count = max(0, settings.PLACES_RETRY_COUNT)
        self.transport = transport

    async def nearby_fuel_stations(
        self, point: GeoPoint, radius_meters: float
    ) -> list[dict[str, Any]]:
        """Return ranked fuel station candidates around ``point``.

        Any status other than ``OK`` (``ZERO_RESULTS`` included) is an empty
        result, not an error. Transport failures and unreadable responses raise
        ``ExternalServiceError``.
        """
        params = {
            "location": f"{point.latitude},{point.longitude}",
            "radius": f"{radius_meters:g}",
            "type": FUEL_STATION_TYPE,
            "key": self.api_key,
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            for attempt in range(self.retry_count + 1):
                try:
                    response = await client.get(f"{self.base_url}/nearbysearch/json", params=params)
                    response.raise_for_status()
                    return self._parse_response(response.json())
                except ValueError as exc:
                    raise ExternalServiceError("Places response was not valid JSON") from exc
                except httpx.HTTPError as exc:
                    if attempt >= self.retry_count:
                        raise ExternalServiceError("Places request failed") from exc
                    logger.warning("Places request failed (attempt %s): %s", attempt + 1, exc)
                    await asyncio.sleep(0.3 * (attempt + 1))

    @staticmethod
    def _parse_response(payload: Any) -> list[dict[str, Any]]:
        if not isinstance(payload, dict):
            return []

        status = payload.get("status")
        if status != "OK":
            if status != "ZERO_RESULTS":
                logger.info("Places provider returned status %s", status)
            return []

        results = payload.get("results") or []
        return [result for result in results if isinstance(result, dict)]
