"""Tiles placed by the map author before generation starts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from tilewave.tiles.base import TileDefinition, rotate_connections
from tilewave.types import ConnectionLabel, Coordinate, RotationIndex


@dataclass(frozen=True)
class PresetTile:
    """A tile with a fixed coordinate and rotation.

    Preset tiles bypass random selection and are never entered into the
    rotation search. ``connections`` already reflects ``rotation``.
    """

    name: str
    connections: tuple[ConnectionLabel, ...]
    coordinate: Coordinate
    rotation: RotationIndex = 0
    tags: frozenset[str] = frozenset()
    probability_modifiers: Mapping[str, int] = field(
        default_factory=dict, hash=False
    )

    @classmethod
    def from_definition(
        cls,
        definition: TileDefinition,
        coordinate: Coordinate,
        rotation: RotationIndex = 0,
    ) -> PresetTile:
        """Place ``definition`` at ``coordinate`` turned ``rotation`` steps.

        Raises:
            ValueError: If rotation is outside [0, side_count).
        """
        if not 0 <= rotation < definition.side_count:
            raise ValueError(
                f"Preset {definition.name!r} rotation {rotation} outside "
                f"0 - {definition.side_count - 1}"
            )
        return cls(
            name=definition.name,
            connections=rotate_connections(definition.connections, rotation),
            coordinate=tuple(coordinate),
            rotation=rotation,
            tags=definition.tags,
            probability_modifiers=dict(definition.probability_modifiers),
        )
