from __future__ import annotations

import json
from typing import Any

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from pydantic import ValidationError

from fuel_stops.exceptions import ExternalServiceError, InvalidTripError, RouteUnavailableError
from fuel_stops.schemas import TripPlanRequest, TripPlanResponse
from fuel_stops.services.planner import TripPlannerService


def get_trip_planner() -> TripPlannerService:
    return TripPlannerService()


@require_GET
def trip_planner_view(request: HttpRequest) -> HttpResponse:
    return render(
        request,
        "fuel_stops/trip_planner.html",
        {
            "defaults": {
                "range_miles": float(settings.DEFAULT_RANGE_MILES),
                "reserve_miles": float(settings.DEFAULT_RESERVE_MILES),
                "min_usable_range_miles": float(settings.MIN_USABLE_RANGE_MILES),
            }
        },
    )


@require_GET
def health_view(_: HttpRequest) -> HttpResponse:
    return JsonResponse({"status": "ok"})


@csrf_exempt
@require_POST
async def trip_plan_view(request: HttpRequest) -> HttpResponse:
    payload = _parse_json_payload(request)
    if isinstance(payload, JsonResponse):
        return payload

    try:
        trip_request = TripPlanRequest.model_validate(payload)
    except ValidationError as exc:
        return JsonResponse(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Invalid request payload",
                    "details": exc.errors(include_url=False, include_context=False),
                }
            },
            status=400,
        )

    planner = get_trip_planner()
    try:
        plan = await planner.plan(trip_request.to_parameters())
    except InvalidTripError as exc:
        return _error_response("invalid_trip", str(exc), status=400)
    except RouteUnavailableError as exc:
        return _error_response("route_unavailable", str(exc), status=502)
    except ExternalServiceError as exc:
        return _error_response("upstream_error", str(exc), status=502)

    response = TripPlanResponse.from_plan(plan)
    return JsonResponse(response.model_dump(mode="json"), status=200)


def _parse_json_payload(request: HttpRequest) -> dict[str, Any] | JsonResponse:
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except json.JSONDecodeError:
        return _error_response("invalid_json", "Request body must be valid JSON", status=400)

    if not isinstance(payload, dict):
        return _error_response("invalid_json", "JSON body must be an object", status=400)

    return payload


def _error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)
