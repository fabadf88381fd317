"""Exceptions raised while finding POIs along a route."""


class RoutePOIError(Exception):
    """Base class for all Route POI Finder errors."""


class RouteError(RoutePOIError, ValueError):
    """Missing, malformed or empty route input."""


class ConditionError(RoutePOIError, ValueError):
    """A tag condition with zero or several active modes."""


class OverpassError(RoutePOIError, RuntimeError):
    """Connection failure or non-success status from the Overpass API."""

    def __init__(self, message: str, status_code=None, body: str = ""):
        if body:
            message = f"{message}: {body}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ResponseError(RoutePOIError, ValueError):
    """An Overpass response that is malformed or internally inconsistent."""


class ClassificationError(RoutePOIError, ValueError):
    """No usable tag to derive a POI name from."""
