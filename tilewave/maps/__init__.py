"""Map shapes and the map that owns the node graph.

- TileMap: node graph, compatibility table, and preset placements
- Topology: strategy interface for shapes
- HexRingTopology: hexagon of rings ("Ring")
- SquareGridTopology: rectangle of square cells ("Grid")
"""

from .factory import TOPOLOGIES, create_topology
from .grid import GRID_DIRECTIONS, SquareGridTopology
from .hex import HEX_DIRECTIONS, HexRingTopology
from .tile_map import TileMap
from .topology import TileSource, Topology

__all__ = [
    "GRID_DIRECTIONS",
    "HEX_DIRECTIONS",
    "TOPOLOGIES",
    "HexRingTopology",
    "SquareGridTopology",
    "TileMap",
    "TileSource",
    "Topology",
    "create_topology",
]
