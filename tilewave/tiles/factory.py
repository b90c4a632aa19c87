"""Turns tile definitions into tile instances on demand."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from tilewave.tiles.base import TileDefinition
from tilewave.tiles.possible import PossibleTile
from tilewave.tiles.preset import PresetTile
from tilewave.types import Coordinate, RotationIndex


class TileFactory:
    """Creates fresh PossibleTile and PresetTile instances by name.

    Every node needs its own PossibleTile objects, so ``create_all_possible_tiles``
    is handed to topology builders as the per-node candidate factory.
    """

    def __init__(self, definitions: Mapping[str, TileDefinition] | None = None) -> None:
        self._definitions: dict[str, TileDefinition] = dict(definitions or {})

    @classmethod
    def from_definitions(cls, definitions: Iterable[TileDefinition]) -> TileFactory:
        return cls({d.name: d for d in definitions})

    @property
    def definitions(self) -> Mapping[str, TileDefinition]:
        return self._definitions

    def initialize(self, definitions: Mapping[str, TileDefinition]) -> None:
        """Replace the known definitions."""
        self._definitions = dict(definitions)

    def definition(self, name: str) -> TileDefinition:
        try:
            return self._definitions[name]
        except KeyError:
            raise KeyError(f"Unknown tile {name!r}") from None

    def create_possible_tile(self, name: str) -> PossibleTile:
        return PossibleTile.from_definition(self.definition(name))

    def create_preset_tile(
        self, name: str, coordinate: Coordinate, rotation: RotationIndex = 0
    ) -> PresetTile:
        return PresetTile.from_definition(self.definition(name), coordinate, rotation)

    def create_all_possible_tiles(self) -> list[PossibleTile]:
        """One new candidate per known definition, in definition order."""
        return [PossibleTile.from_definition(d) for d in self._definitions.values()]
