from __future__ import annotations

import asyncio
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from fuel_stops.exceptions import FuelStopsError
from fuel_stops.schemas import NO_STOPS_MESSAGE
from fuel_stops.services.planner import TripPlannerService
from fuel_stops.services.types import TripParameters


class Command(BaseCommand):
    help = "Plan fuel stops between two locations."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument("origin", help="Trip origin, as accepted by the directions API")
        parser.add_argument("destination", help="Trip destination")
        parser.add_argument(
            "--range-miles",
            type=float,
            default=float(settings.DEFAULT_RANGE_MILES),
            help="Driving range on a full tank",
        )
        parser.add_argument(
            "--reserve-miles",
            type=float,
            default=float(settings.DEFAULT_RESERVE_MILES),
            help="Safety buffer kept in the tank",
        )

    def handle(self, *_: Any, **options: Any) -> None:
        params = TripParameters(
            origin=options["origin"],
            destination=options["destination"],
            range_miles=options["range_miles"],
            reserve_miles=options["reserve_miles"],
        )

        try:
            plan = asyncio.run(TripPlannerService().plan(params))
        except FuelStopsError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(f"Total trip distance: {plan.total_distance_miles:.1f} miles")
        if not plan.needs_stops:
            self.stdout.write(self.style.SUCCESS(NO_STOPS_MESSAGE))
            return

        self.stdout.write(
            f"Estimated fuel stops needed: {len(plan.stops)} (range ~{plan.range_miles:.0f} mi)"
        )
        for stop in plan.stops:
            line = (
                f"#{stop.index} ~{stop.distance_from_start_miles:.1f} mi: "
                f"{stop.name}, {stop.address}"
            )
            if stop.rating is not None:
                line += f" (rating {stop.rating:.1f}, {stop.review_count} reviews)"
            if stop.found:
                self.stdout.write(line)
            else:
                self.stdout.write(self.style.WARNING(line))
