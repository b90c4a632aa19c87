"""Hexagonal ring topology.

Pointy-top hexes in cube coordinates (q, r, s) with q + r + s = 0, shifted by
the ring count on the first two axes so they index straight into the node
grid. A map of R rings has 3R(R+1) + 1 nodes; the grid corners outside the
hexagon stay empty.

Side order (matches every hex tile's connection list):

    0 NE (1, -1, 0)    3 SW (-1, 1, 0)
    1 E  (1, 0, -1)    4 W  (-1, 0, 1)
    2 SE (0, 1, -1)    5 NW (0, -1, 1)

Rotating a tile by one step turns it 60 degrees.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np

from tilewave.graph.node import MapNode
from tilewave.maps.topology import TileSource, Topology

if TYPE_CHECKING:
    from tilewave.maps.tile_map import TileMap
    from tilewave.types import Coordinate

HEX_DIRECTIONS = ["NE", "E", "SE", "SW", "W", "NW"]


class HexRingTopology(Topology):
    """Hexagon of ``primary_size`` rings around a centre node."""

    shape: ClassVar[str] = "Ring"
    neighbor_offsets: ClassVar[tuple[Coordinate, ...]] = (
        (1, -1, 0),  # NE
        (1, 0, -1),  # E
        (0, 1, -1),  # SE
        (-1, 1, 0),  # SW
        (-1, 0, 1),  # W
        (0, -1, 1),  # NW
    )

    def build_nodes(
        self,
        tile_map: TileMap,
        tile_source: TileSource,
        primary_size: int,
        secondary_size: int,
    ) -> np.ndarray:
        """Create the rings. ``secondary_size`` is unused."""
        if primary_size < 0:
            raise ValueError(f"Ring count must be non-negative, got {primary_size}")

        rings = primary_size
        nodes = self.empty_grid(rings * 2 + 1, rings * 2 + 1)

        for q in range(-rings, rings + 1):
            r1 = max(-rings, -q - rings)
            r2 = min(rings, -q + rings)
            for r in range(r1, r2 + 1):
                x, y = q + rings, r + rings
                nodes[x, y] = MapNode((x, y, -x - y), tile_map, tile_source())

        return nodes

    @staticmethod
    def node_count_for(rings: int) -> int:
        return 3 * rings * (rings + 1) + 1
