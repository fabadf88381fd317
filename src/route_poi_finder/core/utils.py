"""Route loading and splitting helpers."""

import math
import gpxpy
import gpxpy.gpx
from math import radians, sin, cos, sqrt, atan2
from pathlib import Path
from typing import List, Sequence

from .errors import RouteError
from .models import Coordinate


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Calculate distance between two points in meters using Haversine formula.

    Args:
        lat1, lon1: Coordinates of first point
        lat2, lon2: Coordinates of second point

    Returns:
        Distance in meters
    """
    R = 6371000  # Earth radius in meters

    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat/2)**2 + cos(lat1) * cos(lat2) * sin(dlon/2)**2
    c = 2 * atan2(sqrt(a), sqrt(1-a))

    return R * c


def load_gpx_route(gpx_file) -> List[Coordinate]:
    """
    Load the single track segment of a GPX route file.

    Args:
        gpx_file: Path to GPX file

    Returns:
        List of Coordinate tuples in track order

    Raises:
        RouteError: If the file is missing, cannot be parsed, does not hold
            exactly one track with exactly one segment, or has no points
    """
    gpx_file = Path(gpx_file)
    if not gpx_file.exists():
        raise RouteError(f"GPX file not found: {gpx_file}")

    try:
        with open(gpx_file, encoding="utf-8") as f:
            gpx = gpxpy.parse(f)
    except (gpxpy.gpx.GPXException, UnicodeDecodeError) as e:
        raise RouteError(f"Could not parse GPX file {gpx_file}: {e}") from e

    if len(gpx.tracks) != 1:
        raise RouteError(
            f"Expected GPX file to contain exactly one track but found {len(gpx.tracks)}: {gpx_file}"
        )
    segments = gpx.tracks[0].segments
    if len(segments) != 1:
        raise RouteError(
            f"Expected GPX track to contain exactly one segment but found {len(segments)}: {gpx_file}"
        )

    points = []
    for point in segments[0].points:
        if not (math.isfinite(point.latitude) and math.isfinite(point.longitude)):
            raise RouteError(f"Non-finite route point in {gpx_file}: {point}")
        points.append(Coordinate(point.latitude, point.longitude))

    if not points:
        raise RouteError(f"No points found in GPX file: {gpx_file}")

    return points


def split_route(points: Sequence[Coordinate], split: int) -> List[List[Coordinate]]:
    """
    Split a route into contiguous chunks to keep each query small.

    Every chunk holds ceil(len(points) / split) points except possibly the
    last one. Fewer points than ``split`` gives one point per chunk.

    Raises:
        RouteError: If there are no route points
        ValueError: If split is less than 1
    """
    if split < 1:
        raise ValueError(f"Split count must be at least 1, got {split}")
    if not points:
        raise RouteError("No route points provided")

    chunk_size = max(1, math.ceil(len(points) / split))
    return [list(points[i:i + chunk_size]) for i in range(0, len(points), chunk_size)]


def calculate_route_length(points):
    """
    Calculate total route length in kilometers.

    Args:
        points: List of (lat, lon) tuples

    Returns:
        Total length in kilometers
    """
    total = 0
    for i in range(len(points) - 1):
        total += haversine_distance(
            points[i][0], points[i][1],
            points[i+1][0], points[i+1][1]
        )
    return total / 1000  # Convert to km
