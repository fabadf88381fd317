"""Tests for POI name and symbol classification."""

import json

import pytest

from route_poi_finder.core.classify import (
    ClassificationStats,
    Classifier,
    describe_tags,
    sort_pois,
    symbol_counts,
)
from route_poi_finder.core.config import Config
from route_poi_finder.core.errors import ClassificationError
from route_poi_finder.core.models import POI, Coordinate


@pytest.fixture
def classifier():
    return Classifier(Config.DEFAULT_NAME_KEYS, Config.DEFAULT_SYMBOL_RULES)


def test_default_symbol_rule_order():
    symbols = [symbol for _, symbol in Config.DEFAULT_SYMBOL_RULES]
    tags = [tags for tags, _ in Config.DEFAULT_SYMBOL_RULES]

    assert tags.index({"amenity": "restaurant", "cuisine": "pizza"}) == 11
    assert tags.index({"amenity": "restaurant"}) == 12
    assert symbols[:4] == ["Park", "Restroom", "Drinking Water", "Summit"]


def test_name_falls_back_to_amenity(classifier):
    assert classifier.resolve_name({"amenity": "cafe"}) == "cafe"


def test_name_prefers_display_name(classifier):
    assert classifier.resolve_name({"name": "Joe's", "amenity": "cafe"}) == "Joe's"


def test_name_priority_order(classifier):
    tags = {"leisure": "park", "tourism": "viewpoint", "natural": "peak"}

    assert classifier.resolve_name(tags) == "viewpoint"


def test_name_skips_non_string_values(classifier):
    assert classifier.resolve_name({"name": 42, "amenity": "toilets"}) == "toilets"


def test_name_missing(classifier):
    with pytest.raises(ClassificationError, match="No suitable tag for name"):
        classifier.resolve_name({"highway": "bus_stop"})


def test_pizza_rule_precedes_restaurant(classifier):
    assert classifier.resolve_symbol({"amenity": "restaurant", "cuisine": "pizza"}) == "Pizza"
    assert classifier.resolve_symbol({"amenity": "restaurant", "cuisine": "thai"}) == "Restaurant"


def test_earlier_rule_wins_over_narrower_match():
    classifier = Classifier(["name"], [
        ({"amenity": "restaurant"}, "Restaurant"),
        ({"amenity": "restaurant", "cuisine": "pizza"}, "Pizza"),
    ])

    assert classifier.resolve_symbol({"amenity": "restaurant", "cuisine": "pizza"}) == "Restaurant"


def test_symbol_requires_exact_value(classifier):
    assert classifier.resolve_symbol({"amenity": "toilets;shower"}) == ""
    assert classifier.resolve_symbol({}) == ""


def test_classify_updates_stats(classifier):
    stats = ClassificationStats()

    assert classifier.classify({"amenity": "cafe"}, stats) == ("cafe", "Restaurant")
    assert classifier.classify({"name": "Summit", "natural": "peak"}, stats) == ("Summit", "Summit")
    assert classifier.classify({"name": "Hut", "tourism": "alpine_hut"}, stats) == ("Hut", "")

    assert stats.total == 3
    assert stats.name_keys == {"amenity": 1, "name": 2}
    assert stats.unmatched == 1
    assert symbol_counts(stats)["(none)"] == 1


def test_classify_without_stats_leaves_no_state(classifier):
    classifier.classify({"amenity": "cafe"})
    stats = ClassificationStats()

    assert stats.total == 0


def test_make_poi(classifier):
    poi = classifier.make_poi({"name": "Joe's", "amenity": "cafe"}, Coordinate(45.5, 7.25))

    assert poi == POI(
        name="Joe's",
        description='{"amenity":"cafe","name":"Joe\'s"}',
        symbol="Restaurant",
        lat=45.5,
        lon=7.25,
    )


def test_describe_tags_is_sorted_compact_json():
    description = describe_tags({"z": "1", "a": "ä"})

    assert description == '{"a":"ä","z":"1"}'
    assert json.loads(description) == {"a": "ä", "z": "1"}


def test_sort_pois_by_name():
    pois = [POI("B", "{}", "", 0.0, 0.0), POI("A", "{}", "", 0.0, 0.0)]

    assert [p.name for p in sort_pois(pois)] == ["A", "B"]


def test_sort_pois_tie_breaks():
    pois = [
        POI("A", "{}", "", 2.0, 1.0),
        POI("A", "{}", "", 1.0, 2.0),
        POI("A", "{}", "", 1.0, 1.0),
        POI("A", "{}", "Summit", 0.0, 0.0),
        POI("A", '{"a":"b"}', "", 0.0, 0.0),
        POI("A", "{}", "", 1.0, 1.0),
    ]

    ordered = sort_pois(pois)

    assert ordered == [
        POI("A", '{"a":"b"}', "", 0.0, 0.0),
        POI("A", "{}", "", 1.0, 1.0),
        POI("A", "{}", "", 1.0, 1.0),
        POI("A", "{}", "", 1.0, 2.0),
        POI("A", "{}", "", 2.0, 1.0),
        POI("A", "{}", "Summit", 0.0, 0.0),
    ]
    assert sort_pois(list(reversed(pois))) == ordered
