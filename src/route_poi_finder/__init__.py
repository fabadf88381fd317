"""Route POI Finder - Find POIs along routes and export to Garmin."""

__version__ = "0.1.0"

# Expose main classes for programmatic use
from .core import Config, QueryCache, Classifier, compile_query
from .extractors import RouteExtractor
from .exporters import GarminExporter

__all__ = [
    "__version__",
    "Config",
    "QueryCache",
    "Classifier",
    "compile_query",
    "RouteExtractor",
    "GarminExporter",
]
