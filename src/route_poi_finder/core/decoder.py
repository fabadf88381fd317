"""Decode Overpass JSON responses into elements."""

import json
import math
from typing import List

from .errors import ResponseError
from .models import Element


ELEMENT_TYPES = ("node", "way")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def decode_element(raw) -> Element:
    """Decode one raw element dict."""
    if not isinstance(raw, dict):
        raise ResponseError(f"Element is not an object: {raw!r}")

    element_type = raw.get("type")
    if element_type not in ELEMENT_TYPES:
        raise ResponseError(f"Unknown element type: {element_type}: {raw!r}")

    element_id = raw.get("id")
    if not _is_int(element_id):
        raise ResponseError(f"Element id is not an integer: {raw!r}")

    tags = raw.get("tags", {})
    if not isinstance(tags, dict):
        raise ResponseError(f"Element tags are not an object: {raw!r}")

    if element_type == "node":
        lat, lon = raw.get("lat"), raw.get("lon")
        if not (_is_number(lat) and _is_number(lon)
                and math.isfinite(lat) and math.isfinite(lon)):
            raise ResponseError(f"Node {element_id} has no valid coordinates: {raw!r}")
        return Element(type="node", id=element_id, lat=float(lat), lon=float(lon), tags=tags)

    nodes = raw.get("nodes", [])
    if not isinstance(nodes, list) or not all(_is_int(n) for n in nodes):
        raise ResponseError(f"Way {element_id} has invalid node references: {raw!r}")
    return Element(type="way", id=element_id, nodes=tuple(nodes), tags=tags)


def decode_response(body: bytes) -> List[Element]:
    """
    Parse an Overpass response body into elements.

    Every element is returned; nothing is filtered.

    Raises:
        ResponseError: If the body is not valid JSON or an element is malformed
    """
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise ResponseError(f"Could not decode response body: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("elements"), list):
        raise ResponseError("Response has no 'elements' list")

    if data.get("remark"):
        print(f"  ⚠ Overpass remark: {data['remark']}")

    return [decode_element(raw) for raw in data["elements"]]
