"""Shared tile capability and tile definitions.

A map is built from two kinds of tile:

- PresetTile: placed by the map author at a fixed coordinate and rotation.
- PossibleTile: a candidate on an uncollapsed node, negotiating its rotation
  with the neighbours until the node collapses and locks it.

Both satisfy the read-only PlacedTile capability, which is all a resolved node
(and anything rendering the result) needs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from tilewave.types import ConnectionLabel, RotationIndex


@runtime_checkable
class PlacedTile(Protocol):
    """Read-only view of a tile sitting on a node.

    Attributes:
        name: Lookup name of the tile definition. Not unique across instances.
        tags: Descriptive tags; the engine never reads them.
        connections: One connection label per side, already rotated.
        rotation: Number of one-step turns applied, in [0, len(connections)).
        probability_modifiers: Tile name -> probability delta applied to the
            neighbours' candidates when this tile is placed.
    """

    @property
    def name(self) -> str: ...

    @property
    def tags(self) -> frozenset[str]: ...

    @property
    def connections(self) -> tuple[ConnectionLabel, ...]: ...

    @property
    def rotation(self) -> RotationIndex: ...

    @property
    def probability_modifiers(self) -> Mapping[str, int]: ...


def rotate_connections(
    connections: Sequence[ConnectionLabel], steps: int
) -> tuple[ConnectionLabel, ...]:
    """Shift a label sequence left by ``steps`` sides.

    One step moves the label on side i+1 onto side i, matching
    PossibleTile.rotate().
    """
    if not connections:
        return ()
    steps %= len(connections)
    return tuple(connections[steps:]) + tuple(connections[:steps])


@dataclass(frozen=True)
class TileDefinition:
    """Already-deserialized description of one tile.

    Attributes:
        name: Lookup name.
        connections: Connection label for each side at rotation 0.
        probability: Base weight for random selection.
        tags: Descriptive tags.
        probability_modifiers: Tile name -> delta applied to neighbouring
            candidates once this tile is placed.
    """

    name: str
    connections: tuple[ConnectionLabel, ...]
    probability: int = 1
    tags: frozenset[str] = frozenset()
    probability_modifiers: Mapping[str, int] = field(
        default_factory=dict, hash=False
    )

    def __post_init__(self) -> None:
        if not self.connections:
            raise ValueError(f"Tile {self.name!r} has no connections")
        # Accept lists and sets from loaders
        object.__setattr__(self, "connections", tuple(self.connections))
        object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(
            self, "probability_modifiers", dict(self.probability_modifiers)
        )

    @property
    def side_count(self) -> int:
        return len(self.connections)
