from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from tilewave import config
from tilewave.maps import HexRingTopology, SquareGridTopology, TileMap
from tilewave.tiles import PresetTile, TileDefinition, TileFactory


def tile(
    name: str,
    connections: Iterable[str],
    probability: int = 1,
    modifiers: Mapping[str, int] | None = None,
) -> TileDefinition:
    return TileDefinition(
        name=name,
        connections=tuple(connections),
        probability=probability,
        probability_modifiers=dict(modifiers or {}),
    )


def hex_map(
    definitions: Iterable[TileDefinition],
    compatibility: Mapping[str, Iterable[str]],
    rings: int = 1,
    presets: Iterable[PresetTile] = (),
) -> TileMap:
    return TileMap(
        topology=HexRingTopology(),
        tile_factory=TileFactory.from_definitions(definitions),
        compatibility=compatibility,
        presets=presets,
        primary_size=rings,
    )


def grid_map(
    definitions: Iterable[TileDefinition],
    compatibility: Mapping[str, Iterable[str]],
    width: int,
    height: int = 0,
    presets: Iterable[PresetTile] = (),
) -> TileMap:
    return TileMap(
        topology=SquareGridTopology(),
        tile_factory=TileFactory.from_definitions(definitions),
        compatibility=compatibility,
        presets=presets,
        primary_size=width,
        secondary_size=height,
    )


# Grass and water never touch; shore touches everything, so a node can always
# fall back to shore and generation never fails.
TERRAIN_COMPATIBILITY = {
    "G": {"G", "S"},
    "S": {"G", "S", "W"},
    "W": {"S", "W"},
}


def terrain_hex_tiles() -> list[TileDefinition]:
    return [
        tile("grass", "GGGGGG", probability=4),
        tile("shore", "SSSSSS", probability=1),
        tile("water", "WWWWWW", probability=4),
    ]


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload))


def write_pond_data(root: Path, pond_label: str = "m") -> Path:
    """A 3x2 grid map under ``root``: meadow everywhere, one preset pond.

    The pond discourages neighbouring ponds. With a ``pond_label`` other than
    "m" the pond's neighbours can only be ponds, so every run fails.
    """
    write_json(
        root / config.MAP_DATA_DIR / "pond.json",
        {
            "TileListName": "pond_tiles",
            "TileConnectionsName": "pond_rules",
            "PresetTilesName": "pond_presets",
            "MapShape": "Grid",
            "PrimarySize": 3,
            "SecondarySize": 2,
        },
    )
    write_json(
        root / config.TILE_LISTS_DIR / "pond_tiles.json",
        {"Names": ["meadow", "pond"]},
    )
    write_json(
        root / config.TILE_DATA_DIR / "meadow.json",
        {
            "Name": "meadow",
            "Tags": ["open"],
            "Connections": ["m", "m", "m", "m"],
            "Probability": 3,
        },
    )
    write_json(
        root / config.TILE_DATA_DIR / "pond.json",
        {
            "Name": "pond",
            "Connections": [pond_label] * 4,
            "Probability": 1,
            "ProbabilityModifiers": {"pond": -1},
        },
    )
    write_json(
        root / config.TILE_CONNECTIONS_DIR / "pond_rules.json",
        {"Connections": {"m": ["m"], pond_label: [pond_label]}},
    )
    write_json(
        root / config.PRESET_TILES_DIR / "pond_presets.json",
        {"PresetTiles": [{"Name": "pond", "Coordinate": {"X": 1, "Y": 1, "Z": 0}}]},
    )
    return root
