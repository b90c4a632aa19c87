"""Plain records describing a map before it is built."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from tilewave import config
from tilewave.tiles import TileDefinition
from tilewave.types import Coordinate, RotationIndex


@dataclass(frozen=True)
class MapData:
    """Which data files a map uses and what shape to build.

    Attributes:
        tile_list_name: Name of the list of tiles the map may use.
        tile_connections_name: Name of the compatibility table.
        preset_tiles_name: Name of the preset placements.
        map_shape: Topology key, e.g. "Ring".
        primary_size: Main size parameter (ring count for "Ring").
        secondary_size: Second size parameter; unused by "Ring".
    """

    tile_list_name: str
    tile_connections_name: str
    preset_tiles_name: str
    map_shape: str = config.DEFAULT_MAP_SHAPE
    primary_size: int = 1
    secondary_size: int = 0

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> MapData:
        return cls(
            tile_list_name=_require(raw, "TileListName", str),
            tile_connections_name=_require(raw, "TileConnectionsName", str),
            preset_tiles_name=_require(raw, "PresetTilesName", str),
            map_shape=raw.get("MapShape", config.DEFAULT_MAP_SHAPE),
            primary_size=int(raw.get("PrimarySize", 1)),
            secondary_size=int(raw.get("SecondarySize", 0)),
        )


@dataclass(frozen=True)
class PresetTileData:
    """A tile the map author pins to one coordinate."""

    name: str
    coordinate: Coordinate
    rotation: RotationIndex = 0

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> PresetTileData:
        return cls(
            name=_require(raw, "Name", str),
            coordinate=_coordinate(_require(raw, "Coordinate", (list, dict))),
            rotation=int(raw.get("Rotation", 0)),
        )


def tile_definition_from_json(raw: Mapping[str, Any]) -> TileDefinition:
    """Build a TileDefinition from one tile data file."""
    connections = _require(raw, "Connections", list)
    modifiers = raw.get("ProbabilityModifiers") or {}
    if not isinstance(modifiers, Mapping):
        raise ValueError(f"ProbabilityModifiers must be an object, got {modifiers!r}")

    return TileDefinition(
        name=_require(raw, "Name", str),
        connections=tuple(str(c) for c in connections),
        probability=int(raw.get("Probability", 1)),
        tags=frozenset(raw.get("Tags") or ()),
        probability_modifiers={str(k): int(v) for k, v in modifiers.items()},
    )


def _require(raw: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    if key not in raw:
        raise ValueError(f"Missing required field {key!r}")
    value = raw[key]
    if not isinstance(value, kind):
        raise ValueError(f"Field {key!r} has unexpected type {type(value).__name__}")
    return value


def _coordinate(value: Sequence[Any] | Mapping[str, Any]) -> Coordinate:
    """Accept [x, y, z] or {"x": .., "y": .., "z": ..} in any key case."""
    if isinstance(value, Mapping):
        lowered = {str(k).lower(): v for k, v in value.items()}
        try:
            parts = [lowered["x"], lowered["y"], lowered["z"]]
        except KeyError as exc:
            raise ValueError(f"Coordinate {value!r} is missing {exc}") from exc
    else:
        parts = list(value)

    if len(parts) != 3:
        raise ValueError(f"Coordinate must have 3 components, got {value!r}")
    return (_component(parts[0]), _component(parts[1]), _component(parts[2]))


def _component(part: Any) -> int:
    # bool is an int subclass; JSON true/false is never a coordinate
    if isinstance(part, bool) or not isinstance(part, (int, float)):
        raise ValueError(f"Coordinate component {part!r} is not a number")
    if isinstance(part, float) and not part.is_integer():
        raise ValueError(f"Coordinate component {part!r} is not an integer")
    return int(part)
