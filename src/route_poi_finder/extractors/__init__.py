"""POI extraction along routes."""

from .route import RouteExtractor

__all__ = ["RouteExtractor"]
