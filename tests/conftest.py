"""Shared fixtures for Route POI Finder tests."""

import json

import gpxpy.gpx
import pytest


def overpass_body(*elements, **extra):
    """Build an Overpass JSON response body."""
    payload = {"version": 0.6, "generator": "Overpass API", "elements": list(elements)}
    payload.update(extra)
    return json.dumps(payload).encode("utf-8")


def node(node_id, lat, lon, **tags):
    return {"type": "node", "id": node_id, "lat": lat, "lon": lon, "tags": tags}


def way(way_id, nodes, **tags):
    return {"type": "way", "id": way_id, "nodes": list(nodes), "tags": tags}


@pytest.fixture
def write_gpx(tmp_path):
    """Write a GPX file with the given track segments and return its path."""

    def _write(*segments, name="route.gpx"):
        gpx = gpxpy.gpx.GPX()
        track = gpxpy.gpx.GPXTrack()
        gpx.tracks.append(track)
        for points in segments:
            segment = gpxpy.gpx.GPXTrackSegment()
            for lat, lon in points:
                segment.points.append(gpxpy.gpx.GPXTrackPoint(lat, lon))
            track.segments.append(segment)
        path = tmp_path / name
        path.write_text(gpx.to_xml(), encoding="utf-8")
        return path

    return _write
