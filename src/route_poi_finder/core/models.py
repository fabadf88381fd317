"""Data models for route POI extraction."""

from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Optional, Tuple, Union

from .errors import ConditionError


DEFAULT_RADIUS = 80  # meters


class Coordinate(NamedTuple):
    """A (latitude, longitude) pair in degrees."""

    lat: float
    lon: float


@dataclass(frozen=True)
class ValueMatch:
    """Tag value must be one of ``values``."""

    key: str
    values: Tuple[str, ...]

    def __post_init__(self):
        if not self.values:
            raise ConditionError(f"Condition on '{self.key}' has an empty value list")


@dataclass(frozen=True)
class ValueExclusion:
    """Tag value must differ from every entry in ``values``."""

    key: str
    values: Tuple[str, ...]

    def __post_init__(self):
        if not self.values:
            raise ConditionError(f"Condition on '{self.key}' has an empty exclusion list")


@dataclass(frozen=True)
class TagExists:
    """Tag must be present (or absent when ``present`` is False)."""

    key: str
    present: bool = True


Condition = Union[ValueMatch, ValueExclusion, TagExists]


@dataclass(frozen=True)
class Rule:
    """A search radius plus conditions that must all hold."""

    conditions: Tuple[Condition, ...]
    radius: int = DEFAULT_RADIUS

    def __post_init__(self):
        if not self.conditions:
            raise ConditionError("Rule must have at least one condition")
        if self.radius <= 0:
            raise ValueError(f"Rule radius must be positive, got {self.radius}")


@dataclass(frozen=True)
class Element:
    """A node or way decoded from an Overpass response."""

    type: str
    id: int
    lat: Optional[float] = None
    lon: Optional[float] = None
    nodes: Tuple[int, ...] = ()
    tags: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.lat, self.lon)


@dataclass(frozen=True)
class WayCentre:
    """A way reduced to the mean position of its nodes."""

    id: int
    centre: Coordinate
    tags: Dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True, order=True)
class POI:
    """
    A point of interest ready for output.

    Field order defines the output sort order: name, description, symbol,
    latitude, longitude.
    """

    name: str
    description: str
    symbol: str
    lat: float
    lon: float

    def to_dict(self) -> Dict[str, Any]:
        """Return the POI with GPX-style keys."""
        return {
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "desc": self.description,
            "sym": self.symbol,
        }
