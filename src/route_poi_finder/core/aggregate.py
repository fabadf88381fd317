"""Reduce decoded elements to single positions."""

from typing import Dict, List, Tuple

from .errors import ResponseError
from .models import Coordinate, Element, WayCentre


def node_elements(elements: List[Element]) -> List[Element]:
    """
    Return the elements of a node query sorted by id.

    Raises:
        ResponseError: If the response holds anything other than nodes
    """
    for e in elements:
        if e.type != "node":
            raise ResponseError(f"Node query response returned non-node element: {e}")
    return sorted(elements, key=lambda e: e.id)


def way_centre(way: Element, nodes: Dict[int, Element]) -> Coordinate:
    """Mean latitude and longitude of the nodes a way references."""
    if not way.nodes:
        raise ResponseError(f"No nodes for way {way.id}")

    lat_total = 0.0
    lon_total = 0.0
    for node_id in way.nodes:
        node = nodes.get(node_id)
        if node is None:
            raise ResponseError(f"Node {node_id} of way {way.id} not found in response")
        lat_total += node.lat
        lon_total += node.lon

    count = len(way.nodes)
    return Coordinate(lat_total / count, lon_total / count)


def resolve(elements: List[Element]) -> Tuple[Dict[int, Element], List[WayCentre]]:
    """
    Partition a way query response and compute one centre per way.

    Args:
        elements: Decoded elements holding ways and their nodes

    Returns:
        Tuple of (nodes by id, way centres sorted by way id). Each centre
        carries the tags of the way, not of its nodes.

    Raises:
        ResponseError: If a way has no nodes or references a node missing
            from the response
    """
    nodes = {}
    ways = {}
    for e in elements:
        if e.type == "node":
            nodes[e.id] = e
        elif e.type == "way":
            ways[e.id] = e
        else:
            raise ResponseError(f"Unknown element type: {e.type}: {e}")

    centres = [
        WayCentre(id=way.id, centre=way_centre(way, nodes), tags=way.tags)
        for way in ways.values()
    ]
    centres.sort(key=lambda c: c.id)
    return nodes, centres
