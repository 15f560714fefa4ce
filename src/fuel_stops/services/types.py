from __future__ import annotations

import enum
from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class RouteSegment:
    length_miles: float
    start: GeoPoint
    end: GeoPoint


@dataclass(slots=True, frozen=True)
class PlannedStop:
    point: GeoPoint
    distance_from_start_miles: float


@dataclass(slots=True, frozen=True)
class StopRecord:
    index: int
    distance_from_start_miles: float
    position: GeoPoint
    name: str
    address: str
    rating: float | None = None
    review_count: int | None = None
    found: bool = True


@dataclass(slots=True, frozen=True)
class TripParameters:
    origin: str
    destination: str
    range_miles: float
    reserve_miles: float = 0.0

    @property
    def usable_range_miles(self) -> float:
        return self.range_miles - self.reserve_miles


@dataclass(slots=True, frozen=True)
class TripPlan:
    total_distance_miles: float
    range_miles: float
    usable_range_miles: float
    stops: list[StopRecord]

    @property
    def needs_stops(self) -> bool:
        return bool(self.stops)


class PlanningState(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    FETCHING_ROUTE = "fetching_route"
    PLANNING = "planning"
    RESOLVING_STATIONS = "resolving_stations"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class TripRun:
    """Everything one planning run produced; replaced wholesale by the next run."""

    parameters: TripParameters
    state: PlanningState = PlanningState.IDLE
    total_distance_miles: float | None = None
    planned_stops: list[PlannedStop] = field(default_factory=list)
    stops: list[StopRecord] = field(default_factory=list)
    error: str | None = None
