"""Map nodes, collapse, and constraint propagation.

A node starts with one PossibleTile per tile definition. Generation resolves
nodes one at a time:

1. The map picks the uncollapsed node with the lowest entropy
2. ``collapse()`` draws a tile by weight and a rotation uniformly, and locks it
3. The node pushes its resolved side labels onto its edges
4. Every neighbour whose incoming labels changed re-checks its candidates,
   drops the ones with no fitting rotation, and pushes its own narrowed labels
   outward in turn

Step 4 runs as an explicit worklist rather than recursion. A node is queued at
most once at a time; if its edges change again after it has been processed it
is queued again. This reaches the same fixed point as eager depth-first
recursion without deep call stacks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, TypeAlias

from tilewave.errors import GenerationFailure
from tilewave.graph.edge import MapEdge
from tilewave.util.selection import choose_uniform, choose_weighted

if TYPE_CHECKING:
    from tilewave.maps.tile_map import TileMap
    from tilewave.tiles import PlacedTile, PossibleTile, PresetTile
    from tilewave.types import ConnectionLabel, Coordinate, OrderedEdges
    from tilewave.util.rng import RNG

logger = logging.getLogger(__name__)

EdgeOrdering: TypeAlias = "Callable[[MapNode], OrderedEdges]"


class MapNode:
    """A coordinate-addressed vertex of the map graph.

    Attributes:
        coordinate: Unique position of the node; also its identity key.
        collapsed: True once a tile has been resolved. Terminal.
        tile: The resolved tile, None until collapsed.
    """

    def __init__(
        self,
        coordinate: Coordinate,
        tile_map: TileMap,
        possible_tiles: Iterable[PossibleTile],
        order_edges: EdgeOrdering | None = None,
    ) -> None:
        self.coordinate = coordinate
        self.collapsed = False
        self.tile: PlacedTile | None = None
        self._map = tile_map
        self._order_edges: EdgeOrdering = order_edges or tile_map.order_edges_for
        self._possible_tiles: list[PossibleTile] = list(possible_tiles)
        self._edges: set[MapEdge] = set()
        self._ordered_edges: OrderedEdges | None = None
        self._ordered_edge_count = -1

    # -------------------------------------------------------------------------
    # Graph structure
    # -------------------------------------------------------------------------

    @property
    def edges(self) -> frozenset[MapEdge]:
        return frozenset(self._edges)

    def edge_to(self, node: MapNode) -> MapEdge | None:
        """Return the edge joining this node and ``node``, if any."""
        for edge in self._edges:
            if edge.other_node(self) is node:
                return edge
        return None

    def create_edge_to(self, node: MapNode) -> MapEdge:
        """Link this node to ``node``, reusing the existing edge if there is one."""
        edge = self.edge_to(node)
        if edge is None:
            edge = MapEdge(self, node)
            self.add_edge(edge)
            node.add_edge(edge)
        return edge

    def add_edge(self, edge: MapEdge) -> bool:
        """Attach ``edge`` to this node.

        This endpoint starts out offering every label in the compatibility
        table, i.e. no constraint yet.

        Returns:
            False if the edge doesn't touch this node or is already attached.
        """
        if not edge.has_node(self) or edge in self._edges:
            return False

        edge.set_connections_for(self, self._map.compatibility.keys())
        self._edges.add(edge)
        return True

    def remove_edge(self, edge: MapEdge) -> bool:
        if edge not in self._edges:
            return False
        self._edges.remove(edge)
        return True

    def remove_edge_to(self, node: MapNode) -> bool:
        edge = self.edge_to(node)
        if edge is None:
            return False
        return self.remove_edge(edge)

    def connected_nodes(self) -> set[MapNode]:
        return {edge.other_node(self) for edge in self._edges}

    def ordered_edges(self) -> OrderedEdges:
        """Edges in side order, with None for sides that have no neighbour.

        The ordering is cached and only recomputed when the number of attached
        edges changes. Removing one edge and adding another between calls
        leaves the cache stale.
        """
        if self._ordered_edges is None or self._ordered_edge_count != len(
            self._edges
        ):
            self._ordered_edges = self._order_edges(self)
            self._ordered_edge_count = len(self._edges)
        return self._ordered_edges

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def possible_tiles(self) -> Sequence[PossibleTile]:
        return tuple(self._possible_tiles)

    def entropy(self) -> int:
        """Total valid rotations across all remaining candidates."""
        return sum(tile.entropy for tile in self._possible_tiles)

    def collapse(self, rng: RNG) -> PlacedTile:
        """Resolve this node to one weighted-random tile and rotation.

        Raises:
            GenerationFailure: If no candidate has a positive probability, or
                if propagation afterwards leaves some node without candidates.
            RuntimeError: If the node is already collapsed.
        """
        if self.collapsed:
            raise RuntimeError(f"MapNode at {self.coordinate} is already collapsed")

        candidates = self._possible_tiles
        chosen = choose_weighted(candidates, [t.probability for t in candidates], rng)
        if chosen is None:
            raise GenerationFailure(
                f"Failed to choose a tile for MapNode at {self.coordinate}. "
                "Likely due to probabilities of all possible tiles being nonpositive.",
                self.coordinate,
            )

        rotation = choose_uniform(sorted(chosen.valid_rotations), rng)
        if rotation is None:
            # Propagation removes candidates without rotations, so only a
            # candidate set built by hand can get here.
            raise GenerationFailure(
                f"Tile {chosen.name!r} at {self.coordinate} has no valid rotation",
                self.coordinate,
            )
        chosen.rotate_to_and_lock(rotation)

        logger.debug(
            "Collapsed %s to %s (rotation %d)", self.coordinate, chosen.name, rotation
        )
        self._resolve(chosen)
        return chosen

    def force_set(self, preset: PresetTile) -> None:
        """Resolve this node to ``preset`` without any random choice.

        Raises:
            GenerationFailure: If propagation leaves some node without candidates.
            RuntimeError: If the node is already collapsed.
        """
        if self.collapsed:
            raise RuntimeError(f"MapNode at {self.coordinate} is already collapsed")

        logger.debug("Force-set %s to preset %s", self.coordinate, preset.name)
        self._resolve(preset)

    # -------------------------------------------------------------------------
    # Propagation
    # -------------------------------------------------------------------------

    def _resolve(self, tile: PlacedTile) -> None:
        self.collapsed = True
        self.tile = tile
        self._possible_tiles = []

        for neighbour in self.connected_nodes():
            neighbour._apply_probability_modifiers(tile.probability_modifiers)

        dirty = self._push_connections([{label} for label in tile.connections])
        propagate(dirty, self._map.propagation_limit())

    def _apply_probability_modifiers(self, modifiers: Mapping[str, int]) -> None:
        for tile in self._possible_tiles:
            delta = modifiers.get(tile.name)
            if delta is not None:
                tile.modify_probability(delta)

    def _push_connections(
        self, connections: Sequence[set[ConnectionLabel]]
    ) -> list[MapNode]:
        """Write per-side labels onto the edges; return neighbours that changed."""
        ordered = self.ordered_edges()
        if len(ordered) != len(connections):
            raise ValueError(
                f"MapNode at {self.coordinate}: {len(ordered)} ordered edges but "
                f"{len(connections)} connection sets. Does the edge ordering "
                "return None for missing neighbours?"
            )

        changed: list[MapNode] = []
        for edge, labels in zip(ordered, connections, strict=True):
            if edge is None:
                continue
            if edge.set_connections_for(self, labels):
                changed.append(edge.other_node(self))
        return changed

    def _refresh_candidates(self) -> list[MapNode]:
        """Re-check every candidate against the current edges.

        Returns:
            Neighbours whose incoming labels changed as a result.

        Raises:
            GenerationFailure: If no candidate has a valid rotation left.
        """
        if self.collapsed:
            return []

        ordered = self.ordered_edges()
        compatibility = self._map.compatibility
        offers: list[set[ConnectionLabel]] = [set() for _ in ordered]
        survivors: list[PossibleTile] = []

        for tile in self._possible_tiles:
            tile_offers = tile.find_valid_rotations(self, ordered, compatibility)
            if not tile.valid_rotations:
                logger.debug("Removed %s from %s", tile.name, self.coordinate)
                continue
            survivors.append(tile)
            for side, labels in enumerate(tile_offers):
                offers[side] |= labels

        self._possible_tiles = survivors
        if not survivors:
            raise GenerationFailure(
                f"MapNode at {self.coordinate} has no possible valid tiles.",
                self.coordinate,
            )

        return self._push_connections(offers)

    def __repr__(self) -> str:
        state = self.tile.name if self.tile is not None else "uncollapsed"
        return f"MapNode({self.coordinate}, {state})"


def propagate(start: Iterable[MapNode], max_iterations: int) -> int:
    """Run constraint propagation until no node's edges change.

    Args:
        start: Nodes whose incoming labels just changed.
        max_iterations: Upper bound on processed nodes.

    Returns:
        Number of nodes processed.

    Raises:
        GenerationFailure: If a node runs out of candidates or the bound is hit.
    """
    stack: list[MapNode] = []
    pending: set[MapNode] = set()
    for node in start:
        if node not in pending:
            stack.append(node)
            pending.add(node)

    iterations = 0

    while stack:
        iterations += 1
        node = stack.pop()
        if iterations > max_iterations:
            raise GenerationFailure(
                f"Propagation exceeded maximum iterations at {node.coordinate}",
                node.coordinate,
            )
        pending.discard(node)

        for neighbour in node._refresh_candidates():
            if neighbour not in pending:
                stack.append(neighbour)
                pending.add(neighbour)

    return iterations
