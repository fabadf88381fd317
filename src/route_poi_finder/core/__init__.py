"""Core utilities for Route POI Finder."""

from .utils import (
    haversine_distance,
    load_gpx_route,
    split_route,
    calculate_route_length,
)
from .config import Config
from .cache import QueryCache
from .query import compile_query
from .decoder import decode_response
from .aggregate import node_elements, resolve
from .classify import Classifier, ClassificationStats, sort_pois
from .models import POI, Coordinate, Rule, ValueMatch, ValueExclusion, TagExists
from .errors import (
    RoutePOIError,
    RouteError,
    ConditionError,
    OverpassError,
    ResponseError,
    ClassificationError,
)

__all__ = [
    "haversine_distance",
    "load_gpx_route",
    "split_route",
    "calculate_route_length",
    "Config",
    "QueryCache",
    "compile_query",
    "decode_response",
    "node_elements",
    "resolve",
    "Classifier",
    "ClassificationStats",
    "sort_pois",
    "POI",
    "Coordinate",
    "Rule",
    "ValueMatch",
    "ValueExclusion",
    "TagExists",
    "RoutePOIError",
    "RouteError",
    "ConditionError",
    "OverpassError",
    "ResponseError",
    "ClassificationError",
]
