"""Derive POI names and Garmin symbols from OSM tags."""

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import ClassificationError
from .models import Coordinate, POI


# (tags that must all match exactly, symbol)
SymbolRule = Tuple[Mapping[str, str], str]


@dataclass
class ClassificationStats:
    """Running counts of how elements were named and which symbols they got."""

    name_keys: Counter = field(default_factory=Counter)
    symbols: Counter = field(default_factory=Counter)

    @property
    def total(self) -> int:
        return sum(self.name_keys.values())

    @property
    def unmatched(self) -> int:
        """Number of elements with no symbol."""
        return self.symbols.get("", 0)


def describe_tags(tags: Mapping[str, Any]) -> str:
    """Serialize tags as compact JSON with sorted keys."""
    return json.dumps(tags, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


class Classifier:
    """
    Name and symbol resolution driven by ordered rule lists.

    The first name key holding a string value wins, and the first symbol rule
    whose tags all match wins, so list order decides the result.
    """

    def __init__(self, name_keys: Sequence[str], symbol_rules: Sequence[SymbolRule]):
        self.name_keys = tuple(name_keys)
        self.symbol_rules = tuple((dict(tags), symbol) for tags, symbol in symbol_rules)

    def _name_key(self, tags: Mapping[str, Any]) -> str:
        for key in self.name_keys:
            if isinstance(tags.get(key), str):
                return key
        raise ClassificationError(f"No suitable tag for name in tags {dict(tags)}")

    def resolve_name(self, tags: Mapping[str, Any]) -> str:
        """Return the value of the first name key present as a string."""
        return tags[self._name_key(tags)]

    def resolve_symbol(self, tags: Mapping[str, Any]) -> str:
        """Return the symbol of the first fully matching rule, or ''."""
        for rule_tags, symbol in self.symbol_rules:
            if all(k in tags and tags[k] == v for k, v in rule_tags.items()):
                return symbol
        return ""

    def classify(self, tags: Mapping[str, Any],
                 stats: Optional[ClassificationStats] = None) -> Tuple[str, str]:
        """
        Resolve (name, symbol) for an element's tags.

        Args:
            tags: Element tags
            stats: Accumulator updated with the name key and symbol used

        Raises:
            ClassificationError: If no name key holds a string value
        """
        key = self._name_key(tags)
        symbol = self.resolve_symbol(tags)
        if stats is not None:
            stats.name_keys[key] += 1
            stats.symbols[symbol] += 1
        return tags[key], symbol

    def make_poi(self, tags: Mapping[str, Any], coordinate: Coordinate,
                 stats: Optional[ClassificationStats] = None) -> POI:
        """Build the POI for an element at ``coordinate``."""
        name, symbol = self.classify(tags, stats)
        return POI(
            name=name,
            description=describe_tags(tags),
            symbol=symbol,
            lat=coordinate.lat,
            lon=coordinate.lon,
        )


def sort_pois(pois: List[POI]) -> List[POI]:
    """Sort POIs by name, description, symbol, latitude, longitude."""
    return sorted(pois)


def symbol_counts(stats: ClassificationStats) -> Dict[str, int]:
    """Symbol counts with unmatched elements reported as '(none)'."""
    return {(symbol or "(none)"): count for symbol, count in stats.symbols.most_common()}
