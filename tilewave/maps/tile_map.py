"""The map: node graph, compatibility table, and preset placements."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

import numpy as np

from tilewave import config
from tilewave.maps.factory import create_topology
from tilewave.tiles import PresetTile, TileDefinition, TileFactory

if TYPE_CHECKING:
    from tilewave.data.records import MapData, PresetTileData
    from tilewave.graph.node import MapNode
    from tilewave.maps.topology import Topology
    from tilewave.tiles import PlacedTile
    from tilewave.types import (
        CompatibilityTable,
        ConnectionLabel,
        Coordinate,
        OrderedEdges,
    )

logger = logging.getLogger(__name__)


class TileMap:
    """Owns the node graph of one generation run.

    The topology decides the shape; the tile factory supplies every node with
    its own candidates; the compatibility table and the preset list are fixed
    for the whole run.

    Example:
        tile_map = TileMap(
            topology=HexRingTopology(),
            tile_factory=TileFactory.from_definitions(definitions),
            compatibility={"grass": {"grass", "road"}, "road": {"grass", "road"}},
            primary_size=3,
        )
        generate_map(tile_map, random.Random(42))
    """

    def __init__(
        self,
        topology: Topology,
        tile_factory: TileFactory,
        compatibility: Mapping[ConnectionLabel, Iterable[ConnectionLabel]],
        presets: Iterable[PresetTile] = (),
        primary_size: int = 1,
        secondary_size: int = 0,
    ) -> None:
        """Initialize the map. Nodes are not built until create_nodes().

        Args:
            topology: Shape of the map.
            tile_factory: Source of candidate and preset tiles.
            compatibility: Label -> labels it may face across an edge.
            presets: Fixed placements applied before random collapse.
            primary_size: Main size parameter passed to the topology.
            secondary_size: Second size parameter passed to the topology.

        Raises:
            ValueError: If a tile's side count doesn't match the topology.
        """
        self.topology = topology
        self.tile_factory = tile_factory
        self.compatibility: CompatibilityTable = {
            label: frozenset(targets) for label, targets in compatibility.items()
        }
        self.presets: list[PresetTile] = list(presets)
        self.primary_size = primary_size
        self.secondary_size = secondary_size
        self._nodes: np.ndarray | None = None
        self._node_count = 0

        self._check_side_counts()

    @classmethod
    def from_data(
        cls,
        map_data: MapData,
        tile_definitions: Mapping[str, TileDefinition],
        connections: Mapping[ConnectionLabel, Iterable[ConnectionLabel]],
        preset_data: Iterable[PresetTileData] = (),
        topology: Topology | None = None,
    ) -> TileMap:
        """Build a map from already-deserialized definitions.

        Args:
            map_data: Shape and size of the map.
            tile_definitions: Tile name -> definition.
            connections: Label -> compatible labels.
            preset_data: Fixed placements, by tile name.
            topology: Overrides the topology named by ``map_data.map_shape``.
        """
        factory = TileFactory(tile_definitions)
        presets = [
            factory.create_preset_tile(p.name, p.coordinate, p.rotation)
            for p in preset_data
        ]
        return cls(
            topology=topology or create_topology(map_data.map_shape),
            tile_factory=factory,
            compatibility=connections,
            presets=presets,
            primary_size=map_data.primary_size,
            secondary_size=map_data.secondary_size,
        )

    def _check_side_counts(self) -> None:
        sides = self.topology.side_count
        tiles: list[TileDefinition | PresetTile] = [
            *self.tile_factory.definitions.values(),
            *self.presets,
        ]
        for tile in tiles:
            if len(tile.connections) != sides:
                raise ValueError(
                    f"Tile {tile.name!r} has {len(tile.connections)} sides but "
                    f"{self.topology.shape!r} maps need {sides}"
                )

    # -------------------------------------------------------------------------
    # Graph construction
    # -------------------------------------------------------------------------

    def create_nodes(self) -> None:
        """Build every node and link each one to its neighbours."""
        self._nodes = self.topology.build_nodes(
            self,
            self.tile_factory.create_all_possible_tiles,
            self.primary_size,
            self.secondary_size,
        )
        self._node_count = sum(1 for _ in self.topology.iter_nodes(self._nodes))
        self._link_neighbours()

        logger.info(
            "Created %d %s nodes (sizes %d, %d)",
            self._node_count,
            self.topology.shape,
            self.primary_size,
            self.secondary_size,
        )

    def _link_neighbours(self) -> None:
        for node in self.nodes():
            for side in range(self.topology.side_count):
                neighbour = self.node_at(
                    self.topology.neighbor_coordinate(node.coordinate, side)
                )
                if neighbour is not None:
                    node.create_edge_to(neighbour)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def node_grid(self) -> np.ndarray:
        if self._nodes is None:
            raise RuntimeError("Nodes not created - call create_nodes() first")
        return self._nodes

    @property
    def node_count(self) -> int:
        return self._node_count

    def nodes(self) -> Iterator[MapNode]:
        """Existing nodes in the topology's iteration order."""
        return self.topology.iter_nodes(self.node_grid)

    def node_at(self, coordinate: Coordinate) -> MapNode | None:
        return self.topology.node_at(self.node_grid, coordinate)

    def order_edges_for(self, node: MapNode) -> OrderedEdges:
        """The node's edges in side order, None where there is no neighbour."""
        ordered: OrderedEdges = []
        for side in range(self.topology.side_count):
            neighbour = self.node_at(
                self.topology.neighbor_coordinate(node.coordinate, side)
            )
            ordered.append(node.edge_to(neighbour) if neighbour is not None else None)
        return ordered

    def next_node_to_collapse(self) -> MapNode | None:
        """The uncollapsed node with the lowest entropy.

        Ties go to the first node in iteration order. Returns None once every
        node is collapsed.
        """
        best: MapNode | None = None
        best_entropy = float("inf")
        for node in self.nodes():
            if node.collapsed:
                continue
            entropy = node.entropy()
            if entropy < best_entropy:
                best = node
                best_entropy = entropy
        return best

    def propagation_limit(self) -> int:
        return max(1, self._node_count) * config.PROPAGATION_ITERATION_FACTOR

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def resolved_tiles(self) -> dict[Coordinate, PlacedTile | None]:
        """Coordinate -> resolved tile for every node (None if uncollapsed)."""
        return {node.coordinate: node.tile for node in self.nodes()}

    def tile_names(self) -> np.ndarray:
        """Grid of resolved tile names, None for empty or uncollapsed slots."""
        grid = self.node_grid
        names = np.full(grid.shape, None, dtype=object)
        for node in self.nodes():
            if node.tile is not None:
                names[node.coordinate[0], node.coordinate[1]] = node.tile.name
        return names

    def tile_rotations(self) -> np.ndarray:
        """Grid of resolved rotations, -1 for empty or uncollapsed slots."""
        rotations = np.full(self.node_grid.shape, -1, dtype=np.int8)
        for node in self.nodes():
            if node.tile is not None:
                rotations[node.coordinate[0], node.coordinate[1]] = node.tile.rotation
        return rotations
