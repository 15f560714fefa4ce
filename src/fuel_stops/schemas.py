from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from fuel_stops.services.types import StopRecord, TripParameters, TripPlan

NO_STOPS_MESSAGE = "No fuel stops needed on this route."


class TripPlanRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    # Missing trip fields are reported by validate_trip_parameters.
    origin: str = Field(default="", max_length=300)
    destination: str = Field(default="", max_length=300)
    range_miles: float = Field(default=0.0, allow_inf_nan=False)
    reserve_miles: float = Field(default=0.0, allow_inf_nan=False)

    def to_parameters(self) -> TripParameters:
        return TripParameters(
            origin=self.origin,
            destination=self.destination,
            range_miles=self.range_miles,
            reserve_miles=self.reserve_miles,
        )


class Coordinate(BaseModel):
    latitude: float
    longitude: float


class StopRecordResponse(BaseModel):
    index: int
    distance_from_start_miles: float
    position: Coordinate
    name: str
    address: str
    rating: float | None
    review_count: int | None
    found: bool

    @classmethod
    def from_record(cls, record: StopRecord) -> StopRecordResponse:
        return cls(
            index=record.index,
            distance_from_start_miles=round(record.distance_from_start_miles, 3),
            position=Coordinate(
                latitude=round(record.position.latitude, 6),
                longitude=round(record.position.longitude, 6),
            ),
            name=record.name,
            address=record.address,
            rating=record.rating,
            review_count=record.review_count,
            found=record.found,
        )


class TripPlanResponse(BaseModel):
    total_distance_miles: float
    range_miles: float
    usable_range_miles: float
    stop_count: int
    message: str | None
    stops: list[StopRecordResponse]

    @classmethod
    def from_plan(cls, plan: TripPlan) -> TripPlanResponse:
        return cls(
            total_distance_miles=round(plan.total_distance_miles, 3),
            range_miles=plan.range_miles,
            usable_range_miles=plan.usable_range_miles,
            stop_count=len(plan.stops),
            message=None if plan.needs_stops else NO_STOPS_MESSAGE,
            stops=[StopRecordResponse.from_record(record) for record in plan.stops],
        )
