"""Rectangular grid topology.

Square cells at (x, y, 0). Side order is N, E, S, W, so a 4-sided tile turns
90 degrees per rotation step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np

from tilewave.graph.node import MapNode
from tilewave.maps.topology import TileSource, Topology

if TYPE_CHECKING:
    from tilewave.maps.tile_map import TileMap
    from tilewave.types import Coordinate

GRID_DIRECTIONS = ["N", "E", "S", "W"]


class SquareGridTopology(Topology):
    """``primary_size`` wide by ``secondary_size`` tall.

    A secondary size of 0 makes the grid square.
    """

    shape: ClassVar[str] = "Grid"
    neighbor_offsets: ClassVar[tuple[Coordinate, ...]] = (
        (0, -1, 0),  # N
        (1, 0, 0),  # E
        (0, 1, 0),  # S
        (-1, 0, 0),  # W
    )

    def build_nodes(
        self,
        tile_map: TileMap,
        tile_source: TileSource,
        primary_size: int,
        secondary_size: int,
    ) -> np.ndarray:
        width = primary_size
        height = secondary_size or primary_size
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")

        nodes = self.empty_grid(width, height)
        for x in range(width):
            for y in range(height):
                nodes[x, y] = MapNode((x, y, 0), tile_map, tile_source())
        return nodes
