"""POI exporters."""

from .garmin import GarminExporter

__all__ = ["GarminExporter"]
