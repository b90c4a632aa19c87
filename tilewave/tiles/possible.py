"""Candidate tiles on uncollapsed nodes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from tilewave.tiles.base import TileDefinition

if TYPE_CHECKING:
    from tilewave.graph.node import MapNode
    from tilewave.types import (
        CompatibilityTable,
        ConnectionLabel,
        OrderedEdges,
        RotationIndex,
    )


class PossibleTile:
    """One tile a node could still become, together with its viable rotations.

    Each uncollapsed node owns its own PossibleTile instances. Propagation
    narrows ``valid_rotations``; neighbours' probability modifiers shift
    ``probability``. When the node collapses, the chosen tile is rotated into
    place and locked, after which its rotation and connections never change.
    """

    def __init__(
        self,
        name: str,
        connections: tuple[ConnectionLabel, ...],
        probability: int = 1,
        tags: frozenset[str] = frozenset(),
        probability_modifiers: Mapping[str, int] | None = None,
    ) -> None:
        if not connections:
            raise ValueError(f"Tile {name!r} has no connections")
        self._name = name
        self._tags = frozenset(tags)
        self._connections = tuple(connections)
        self._probability_modifiers = dict(probability_modifiers or {})
        self._rotation: RotationIndex = 0
        self.probability = probability
        self.valid_rotations: set[RotationIndex] = set(range(len(connections)))
        self._rotation_locked = False

    @classmethod
    def from_definition(cls, definition: TileDefinition) -> PossibleTile:
        return cls(
            name=definition.name,
            connections=definition.connections,
            probability=definition.probability,
            tags=definition.tags,
            probability_modifiers=definition.probability_modifiers,
        )

    # -------------------------------------------------------------------------
    # PlacedTile capability
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def tags(self) -> frozenset[str]:
        return self._tags

    @property
    def connections(self) -> tuple[ConnectionLabel, ...]:
        return self._connections

    @property
    def rotation(self) -> RotationIndex:
        return self._rotation

    @property
    def probability_modifiers(self) -> Mapping[str, int]:
        return self._probability_modifiers

    # -------------------------------------------------------------------------
    # Rotation
    # -------------------------------------------------------------------------

    @property
    def side_count(self) -> int:
        return len(self._connections)

    @property
    def rotation_locked(self) -> bool:
        return self._rotation_locked

    def rotate(self) -> bool:
        """Turn the tile one step. Returns False if the rotation is locked."""
        if self._rotation_locked:
            return False

        self._connections = self._connections[1:] + self._connections[:1]
        self._rotation = (self._rotation + 1) % self.side_count
        return True

    def rotate_to(self, target: RotationIndex) -> bool:
        """Turn the tile until its rotation equals ``target``.

        Raises:
            IndexError: If target is outside [0, side_count).
        """
        if self._rotation_locked:
            return False

        if not 0 <= target < self.side_count:
            raise IndexError(
                f"Trying to rotate to rotation {target} when only rotations "
                f"0 - {self.side_count - 1} are valid"
            )

        while self._rotation != target:
            if not self.rotate():
                return False
        return True

    def rotate_to_and_lock(self, target: RotationIndex) -> bool:
        """Rotate to ``target`` and make it permanent."""
        if self._rotation_locked:
            return False

        if not self.rotate_to(target):
            return False

        self._rotation_locked = True
        return True

    # -------------------------------------------------------------------------
    # Constraint checks
    # -------------------------------------------------------------------------

    def find_valid_rotations(
        self,
        node: MapNode,
        ordered_edges: OrderedEdges,
        compatibility: CompatibilityTable,
    ) -> list[set[ConnectionLabel]]:
        """Recompute which rotations fit against what the neighbours offer.

        Every rotation is tried. A rotation is valid when, for each side with
        an edge, the labels this tile's side may face overlap the labels the
        neighbour currently offers back across that edge. ``valid_rotations``
        is replaced with the rotations that pass and the tile ends at the
        rotation it started from.

        Args:
            node: Node this tile is a candidate on.
            ordered_edges: Node's edges in side order, None where no neighbour.
            compatibility: Label -> labels it may face.

        Returns:
            For each side, the labels this tile could present there across all
            valid rotations. Empty sets everywhere if no rotation is valid.
        """
        if self._rotation_locked:
            raise RuntimeError(
                f"Cannot search rotations of locked tile {self._name!r}"
            )

        offers: list[set[ConnectionLabel]] = [set() for _ in range(self.side_count)]
        self.valid_rotations.clear()

        for _ in range(self.side_count):
            if self._fits(node, ordered_edges, compatibility):
                self.valid_rotations.add(self._rotation)
                for side, label in enumerate(self._connections):
                    offers[side].add(label)
            self.rotate()

        return offers

    def _fits(
        self,
        node: MapNode,
        ordered_edges: OrderedEdges,
        compatibility: CompatibilityTable,
    ) -> bool:
        for side, label in enumerate(self._connections):
            edge = ordered_edges[side]
            if edge is None:
                continue
            offered = edge.connections_for_other(node)
            if offered is None or compatibility.get(label, frozenset()).isdisjoint(
                offered
            ):
                return False
        return True

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    @property
    def entropy(self) -> int:
        """Number of rotations still considered valid."""
        return len(self.valid_rotations)

    def modify_probability(self, delta: int) -> None:
        """Shift the selection weight. May drive it to zero or below."""
        self.probability += delta

    def __repr__(self) -> str:
        return (
            f"PossibleTile(name={self._name!r}, rotation={self._rotation}, "
            f"probability={self.probability}, valid={sorted(self.valid_rotations)})"
        )
