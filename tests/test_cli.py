"""Tests for the command-line interface."""

import json

import gpxpy
import pytest
import requests

from route_poi_finder.cli import main
from route_poi_finder.core import cache as cache_module
from route_poi_finder.core.cache import QueryCache
from route_poi_finder.core.config import Config
from route_poi_finder.core.query import compile_query
from route_poi_finder.core.utils import split_route
from route_poi_finder.core.models import Coordinate

from .conftest import node, overpass_body


@pytest.fixture
def cached_run(tmp_path, write_gpx, monkeypatch):
    """A one-point route, a one-rule config and a cache answering every query."""
    def offline(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(cache_module.requests, "post", offline)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "rules:\n  - conditions: [{key: natural, values: [peak]}]\n", encoding="utf-8"
    )
    route = write_gpx([(46.5, 8.0)])
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()

    config = Config(str(config_path))
    rule = config.get_rules()[0]
    chunk = split_route([Coordinate(46.5, 8.0)], config.split)[0]
    cache = QueryCache(str(cache_dir))
    cache.path(compile_query("node", rule, chunk)).write_bytes(
        overpass_body(node(1, 46.51, 8.01, name="Piz", natural="peak"))
    )
    cache.path(compile_query("way", rule, chunk)).write_bytes(overpass_body())
    return route, config_path, cache_dir


def test_extract_and_export(tmp_path, cached_run):
    route, config_path, cache_dir = cached_run
    output = tmp_path / "pois.json"
    gpx_output = tmp_path / "pois.gpx"

    main(["extract", "--gpx", str(route), "--config", str(config_path),
          "--cache-dir", str(cache_dir), "--output", str(output)])
    main(["export", "--input", str(output), "--output", str(gpx_output)])

    assert json.loads(output.read_text(encoding="utf-8")) == [{
        "name": "Piz", "lat": 46.51, "lon": 8.01,
        "desc": '{"name":"Piz","natural":"peak"}', "sym": "Summit",
    }]
    with open(gpx_output, encoding="utf-8") as f:
        waypoints = gpxpy.parse(f).waypoints
    assert [(w.name, w.symbol) for w in waypoints] == [("Piz", "Summit")]


def test_extract_missing_gpx(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["extract", "--gpx", str(tmp_path / "missing.gpx")])

    assert excinfo.value.code == 1
    assert "GPX file not found" in capsys.readouterr().out


def test_extract_error_writes_no_output(tmp_path, cached_run, capsys):
    route, config_path, _ = cached_run
    output = tmp_path / "pois.csv"

    with pytest.raises(SystemExit) as excinfo:
        main(["extract", "--gpx", str(route), "--config", str(config_path),
              "--cache-dir", str(tmp_path / "empty-cache"), "--output", str(output)])

    assert excinfo.value.code == 1
    assert "Error during extraction" in capsys.readouterr().out
    assert not output.exists()


def test_no_command_prints_help():
    with pytest.raises(SystemExit) as excinfo:
        main([])

    assert excinfo.value.code == 1


def test_extract_invalid_split_in_config(tmp_path, cached_run, capsys):
    route, _, cache_dir = cached_run
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("split: 0\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["extract", "--gpx", str(route), "--config", str(config_path),
              "--cache-dir", str(cache_dir), "--output", str(tmp_path / "pois.csv")])

    assert excinfo.value.code == 1
    assert "Error loading config" in capsys.readouterr().out


def test_extract_undecodable_gpx(tmp_path, capsys):
    route = tmp_path / "latin1.gpx"
    route.write_bytes(
        b'<?xml version="1.0" encoding="ISO-8859-1"?>'
        b'<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">'
        b'<trk><name>Caf\xe9</name><trkseg><trkpt lat="45.1" lon="7.1"></trkpt></trkseg></trk>'
        b'</gpx>'
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["extract", "--gpx", str(route), "--cache-dir", str(tmp_path / "cache")])

    assert excinfo.value.code == 1
    assert "Could not parse GPX file" in capsys.readouterr().out
