class FuelStopsError(Exception):
    """Base exception for trip planning errors."""


class InvalidTripError(FuelStopsError):
    """Raised when trip parameters are rejected before any provider call."""


class RouteUnavailableError(FuelStopsError):
    """Raised when the directions provider cannot produce a driving route."""


class MalformedRouteError(RouteUnavailableError):
    """Raised when route geometry cannot be walked to place stops."""


class ExternalServiceError(FuelStopsError):
    """Raised when an upstream API call fails."""
