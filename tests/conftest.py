from __future__ import annotations

import pytest
from django.test import Client


@pytest.fixture
def api_client() -> Client:
    return Client()


@pytest.fixture
def fast_providers(settings) -> None:
    settings.GOOGLE_MAPS_API_KEY = "test-key"
    settings.DIRECTIONS_BASE_URL = "https://directions.test/maps/api/directions"
    settings.PLACES_BASE_URL = "https://places.test/maps/api/place"
    settings.ROUTE_RETRY_COUNT = 0
    settings.PLACES_RETRY_COUNT = 0
