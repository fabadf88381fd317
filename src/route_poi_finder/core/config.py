"""Configuration management for Route POI Finder."""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .cache import DEFAULT_OVERPASS_URL
from .errors import ConditionError
from .models import DEFAULT_RADIUS, Condition, Rule, TagExists, ValueExclusion, ValueMatch


CONDITION_MODES = ("values", "exclude", "exists")


def parse_condition(raw: Mapping[str, Any]) -> Condition:
    """
    Build a condition from a mapping with a 'key' and exactly one mode.

    Examples:
        {'key': 'amenity', 'values': ['cafe', 'pub']}
        {'key': 'drinking_water', 'exclude': ['no']}
        {'key': 'drinking_water', 'exists': True}

    Raises:
        ConditionError: If the key is missing or not exactly one mode is set
    """
    if not isinstance(raw, Mapping) or not isinstance(raw.get("key"), str):
        raise ConditionError(f"Condition must be a mapping with a 'key': {raw!r}")

    modes = [m for m in CONDITION_MODES if m in raw]
    if len(modes) != 1:
        raise ConditionError(
            f"Condition must set exactly one of {', '.join(CONDITION_MODES)}, "
            f"found {len(modes)}: {dict(raw)}"
        )
    unknown = set(raw) - {"key", *CONDITION_MODES}
    if unknown:
        raise ConditionError(f"Unknown condition fields {sorted(unknown)}: {dict(raw)}")

    key = raw["key"]
    mode = modes[0]
    if mode == "exists":
        if not isinstance(raw["exists"], bool):
            raise ConditionError(f"'exists' must be true or false: {dict(raw)}")
        return TagExists(key, raw["exists"])

    values = raw[mode]
    if isinstance(values, str):
        values = [values]
    if not isinstance(values, list):
        raise ConditionError(f"'{mode}' must be a list of values: {dict(raw)}")
    # YAML reads unquoted yes/no as booleans
    if any(isinstance(v, bool) for v in values):
        raise ConditionError(f"Boolean in '{mode}', quote yes/no values: {dict(raw)}")
    values = tuple(str(v) for v in values)
    if mode == "values":
        return ValueMatch(key, values)
    return ValueExclusion(key, values)


def parse_rule(raw: Mapping[str, Any], default_radius: int = DEFAULT_RADIUS) -> Rule:
    """Build a rule from a mapping with 'conditions' and an optional 'radius'."""
    if not isinstance(raw, Mapping) or not isinstance(raw.get("conditions"), list):
        raise ConditionError(f"Rule must be a mapping with a 'conditions' list: {raw!r}")
    radius = raw.get("radius", default_radius)
    if not isinstance(radius, int) or isinstance(radius, bool):
        raise ValueError(f"Rule radius must be an integer number of meters: {raw!r}")
    conditions = tuple(parse_condition(c) for c in raw["conditions"])
    return Rule(conditions=conditions, radius=radius)


class Config:
    """Parse and manage Route POI Finder configuration."""

    # Default search rules (used if no config file provided)
    DEFAULT_RULES = [
        {"conditions": [
            {"key": "amenity", "values": [
                "bar", "biergarten", "cafe", "fast_food", "food_court", "fuel",
                "ice_cream", "pub", "restaurant", "bicycle_repair_station",
                "compressed_air", "drinking_water", "shelter", "toilets",
                "water_point", "marketplace", "place_of_worship",
            ]},
        ]},
        {"conditions": [
            {"key": "tourism", "values": [
                "alpine_hut", "camp_pitch", "camp_site", "guest_house", "hostel",
                "picnic_site", "viewpoint", "wilderness_hut",
            ]},
        ]},
        {"conditions": [
            {"key": "amenity", "values": ["fountain"]},
            {"key": "drinking_water", "exclude": ["no"]},
            {"key": "drinking_water", "exists": True},
        ]},
        {"conditions": [
            {"key": "leisure", "values": ["nature_reserve", "park", "picnic_table", "wildlife_hide"]},
        ]},
        {"conditions": [
            {"key": "natural", "values": ["spring", "peak"]},
        ]},
        {"conditions": [
            {"key": "man_made", "values": ["spring_box", "water_well", "water_tap"]},
        ]},
    ]

    # Display name first, then category tags in priority order
    DEFAULT_NAME_KEYS = ["name", "amenity", "tourism", "leisure", "natural", "man_made"]

    # Garmin symbols; first full match wins
    DEFAULT_SYMBOL_RULES = [
        ({"leisure": "park"}, "Park"),
        ({"amenity": "toilets"}, "Restroom"),
        ({"amenity": "drinking_water"}, "Drinking Water"),
        ({"natural": "peak"}, "Summit"),
        ({"tourism": "viewpoint"}, "Scenic Area"),
        ({"amenity": "bicycle_repair_station"}, "Mine"),
        ({"amenity": "fast_food"}, "Fast Food"),
        ({"amenity": "fuel"}, "Gas Station"),
        ({"amenity": "pub"}, "Bar"),
        ({"amenity": "cafe"}, "Restaurant"),
        ({"tourism": "picnic_site"}, "Picnic Area"),
        ({"amenity": "restaurant", "cuisine": "pizza"}, "Pizza"),
        ({"amenity": "restaurant"}, "Restaurant"),
        ({"amenity": "ice_cream"}, "Fast Food"),
        ({"tourism": "camp_pitch"}, "Campground"),
        ({"leisure": "nature_reserve"}, "Park"),
        ({"amenity": "shelter"}, "Building"),
        ({"amenity": "place_of_worship"}, "Church"),
    ]

    DEFAULT_SPLIT = 10
    DEFAULT_CACHE_DIR = "data/query_cache"
    DEFAULT_TIMEOUT = 180

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file. If None, uses defaults.
        """
        self.radius = DEFAULT_RADIUS
        self.split = self.DEFAULT_SPLIT
        self.cache_dir = self.DEFAULT_CACHE_DIR
        self.overpass_url = DEFAULT_OVERPASS_URL
        self.timeout = self.DEFAULT_TIMEOUT
        self.name_keys = list(self.DEFAULT_NAME_KEYS)
        self.symbol_rules = [(dict(tags), symbol) for tags, symbol in self.DEFAULT_SYMBOL_RULES]
        self._raw_rules = self.DEFAULT_RULES

        if config_file:
            self._load_config(config_file)

        self.rules = [parse_rule(r, self.radius) for r in self._raw_rules]

    def _load_config(self, config_file: str):
        """Load configuration from YAML file."""
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        try:
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

        if not isinstance(config, dict):
            raise ValueError(f"Config file must contain a mapping: {config_file}")

        if 'radius' in config:
            self.radius = self._positive_int(config, 'radius')
        if 'split' in config:
            self.split = self._positive_int(config, 'split')
        if 'cache_dir' in config:
            self.cache_dir = str(config['cache_dir'])
        if 'overpass_url' in config:
            self.overpass_url = str(config['overpass_url'])
        if 'timeout' in config:
            self.timeout = self._positive_int(config, 'timeout')

        if 'rules' in config:
            if not isinstance(config['rules'], list) or not config['rules']:
                raise ValueError("'rules' must be a non-empty list")
            self._raw_rules = config['rules']

        if 'name_keys' in config:
            if not isinstance(config['name_keys'], list) or not config['name_keys']:
                raise ValueError("'name_keys' must be a non-empty list")
            self.name_keys = [str(k) for k in config['name_keys']]

        if 'symbols' in config:
            self.symbol_rules = self._parse_symbols(config['symbols'])

    @staticmethod
    def _positive_int(config: Dict[str, Any], key: str) -> int:
        value = config[key]
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError(f"'{key}' must be a positive integer, got {value!r}")
        return value

    @staticmethod
    def _parse_symbols(raw_symbols: List[Dict[str, Any]]) -> List[Tuple[Dict[str, str], str]]:
        if not isinstance(raw_symbols, list):
            raise ValueError(f"'symbols' must be a list: {raw_symbols!r}")
        symbol_rules = []
        for entry in raw_symbols:
            if not isinstance(entry, dict) or not isinstance(entry.get('tags'), dict) \
                    or not entry['tags'] or 'symbol' not in entry:
                raise ValueError(f"Symbol rule must have non-empty 'tags' and a 'symbol': {entry!r}")
            tags = {str(k): str(v) for k, v in entry['tags'].items()}
            symbol_rules.append((tags, str(entry['symbol'])))
        return symbol_rules

    def override(self, radius: Optional[int] = None, split: Optional[int] = None,
                 cache_dir: Optional[str] = None):
        """
        Apply command-line overrides.

        A new radius applies to every rule that does not set its own.
        """
        if radius is not None:
            self.radius = self._positive_int({'radius': radius}, 'radius')
            self.rules = [parse_rule(r, self.radius) for r in self._raw_rules]
        if split is not None:
            self.split = self._positive_int({'split': split}, 'split')
        if cache_dir is not None:
            self.cache_dir = cache_dir

    def get_rules(self) -> List[Rule]:
        """Get all search rules."""
        return self.rules

    def get_name_keys(self) -> List[str]:
        """Get the ordered name tag keys."""
        return self.name_keys

    def get_symbol_rules(self) -> List[Tuple[Dict[str, str], str]]:
        """Get the ordered symbol rules."""
        return self.symbol_rules
