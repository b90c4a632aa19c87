"""Lookup of map shapes by name.

Currently implemented:
- "Ring": hexagon of rings (HexRingTopology)
- "Grid": rectangle of square cells (SquareGridTopology)
"""

from __future__ import annotations

from .grid import SquareGridTopology
from .hex import HexRingTopology
from .topology import Topology

TOPOLOGIES: dict[str, type[Topology]] = {
    HexRingTopology.shape: HexRingTopology,
    SquareGridTopology.shape: SquareGridTopology,
}


def create_topology(shape: str) -> Topology:
    """Create the topology registered under ``shape``.

    Raises:
        ValueError: If the shape is not recognized.
    """
    try:
        topology_cls = TOPOLOGIES[shape]
    except KeyError:
        raise ValueError(
            f"Unknown map shape: {shape!r} (known: {', '.join(sorted(TOPOLOGIES))})"
        ) from None
    return topology_cls()
