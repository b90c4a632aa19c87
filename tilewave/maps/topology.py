"""Strategy interface for map shapes.

A Topology decides which coordinates exist, which of them are adjacent, and in
which order a node's edges line up with a tile's sides. The engine itself never
assumes a particular shape; everything shape-specific goes through here.

Nodes are stored in a 2D numpy object array indexed by the first two
coordinate components. Slots the shape leaves empty hold None.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, ClassVar, TypeAlias

import numpy as np

if TYPE_CHECKING:
    from tilewave.graph.node import MapNode
    from tilewave.maps.tile_map import TileMap
    from tilewave.tiles import PossibleTile
    from tilewave.types import Coordinate, SideIndex

# Produces a fresh candidate list for one node.
TileSource: TypeAlias = "Callable[[], list[PossibleTile]]"


class Topology(ABC):
    """Abstract base class for map shapes.

    Subclasses set ``shape`` (the registry key) and ``neighbor_offsets`` (one
    direction vector per tile side, in side order) and implement
    build_nodes().
    """

    shape: ClassVar[str]
    neighbor_offsets: ClassVar[tuple[Coordinate, ...]]

    @property
    def side_count(self) -> int:
        return len(self.neighbor_offsets)

    @abstractmethod
    def build_nodes(
        self,
        tile_map: TileMap,
        tile_source: TileSource,
        primary_size: int,
        secondary_size: int,
    ) -> np.ndarray:
        """Create every node of the shape.

        Nodes are created without edges; the map links neighbours afterwards.

        Args:
            tile_map: Map the nodes belong to.
            tile_source: Called once per node for its candidate tiles.
            primary_size: Main size parameter, meaning depends on the shape.
            secondary_size: Second size parameter, may be unused.

        Returns:
            2D object array of MapNode or None.
        """
        raise NotImplementedError

    def node_at(self, nodes: np.ndarray, coordinate: Coordinate) -> MapNode | None:
        """Look up the node at ``coordinate``, or None if there isn't one."""
        x, y = coordinate[0], coordinate[1]
        if not (0 <= x < nodes.shape[0] and 0 <= y < nodes.shape[1]):
            return None
        node = nodes[x, y]
        if node is None or tuple(node.coordinate) != tuple(coordinate):
            return None
        return node

    def iter_nodes(self, nodes: np.ndarray) -> Iterator[MapNode]:
        """Yield existing nodes in grid order (first axis outermost)."""
        for node in nodes.flat:
            if node is not None:
                yield node

    def neighbor_coordinate(
        self, coordinate: Coordinate, side: SideIndex
    ) -> Coordinate:
        dx, dy, dz = self.neighbor_offsets[side]
        x, y, z = coordinate
        return (x + dx, y + dy, z + dz)

    @staticmethod
    def empty_grid(width: int, height: int) -> np.ndarray:
        return np.full((width, height), None, dtype=object)
