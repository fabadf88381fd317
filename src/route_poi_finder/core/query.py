"""Overpass QL query compilation."""

import re
from typing import Sequence

from .errors import ConditionError, RouteError
from .models import Coordinate, Rule, TagExists, ValueExclusion, ValueMatch


ELEMENT_KINDS = ("node", "way")

# Recurse down to way nodes and return full metadata
QUERY_TAIL = ";\n(._;>;);\nout meta;"


def _quote(text: str) -> str:
    """Quote a key or value as an Overpass string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_condition(condition) -> str:
    """
    Render one tag condition as Overpass filter text.

    ``ValueExclusion`` produces one clause per excluded value since each
    inequality must hold on its own.

    Raises:
        ConditionError: If the condition is not a ValueMatch, ValueExclusion
            or TagExists
    """
    if isinstance(condition, ValueMatch):
        alternation = "|".join(re.escape(str(v)) for v in condition.values)
        return f"[{_quote(condition.key)}~{_quote(f'^({alternation})$')}]"
    if isinstance(condition, ValueExclusion):
        return "".join(
            f"[{_quote(condition.key)}!={_quote(str(v))}]" for v in condition.values
        )
    if isinstance(condition, TagExists):
        if condition.present:
            return f"[{_quote(condition.key)}]"
        return f"[!{_quote(condition.key)}]"
    raise ConditionError(f"Invalid condition, expected exactly one mode: {condition!r}")


def render_around(radius: int, chunk: Sequence[Coordinate]) -> str:
    """Render the spatial clause for elements within ``radius`` meters of the chunk."""
    if not chunk:
        raise RouteError("No route points provided for query")
    coords = ",".join(f"{lat:.6f},{lon:.6f}" for lat, lon in chunk)
    return f"(around:{int(radius)},{coords})"


def compile_query(kind: str, rule: Rule, chunk: Sequence[Coordinate]) -> str:
    """
    Compile a rule and a route chunk into Overpass QL.

    Args:
        kind: Element kind to query, 'node' or 'way'
        rule: Rule with the radius and tag conditions
        chunk: Ordered route coordinates defining the search polyline

    Returns:
        Query text; identical arguments always give identical text
    """
    if kind not in ELEMENT_KINDS:
        raise ValueError(f"Unknown element kind: {kind}. Valid options: node, way")

    filters = "".join(render_condition(c) for c in rule.conditions)
    return f"[out:json];{kind}{filters}{render_around(rule.radius, chunk)}{QUERY_TAIL}"
