"""Loads map, tile, connection and preset definitions from JSON files.

Each kind of definition lives in its own directory and is addressed by name;
``<directory>/<name>.json`` is read. File layouts:

    maps/<map>.json
        {"TileListName": "...", "TileConnectionsName": "...",
         "PresetTilesName": "...", "MapShape": "Ring",
         "PrimarySize": 3, "SecondarySize": 0}

    tile_lists/<list>.json            {"Names": ["grass", "road"]}
    tile_data/<tile>.json
        {"Name": "road", "Tags": ["path"],
         "Connections": ["road", "grass", "grass", "road", "grass", "grass"],
         "Probability": 2, "ProbabilityModifiers": {"road": 1}}
    tile_connections/<table>.json     {"Connections": {"road": ["road"], ...}}
    preset_tiles/<presets>.json
        {"PresetTiles": [{"Name": "road", "Coordinate": [3, 3, -6],
                          "Rotation": 0}]}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from tilewave import config
from tilewave.data.records import MapData, PresetTileData, tile_definition_from_json
from tilewave.maps.tile_map import TileMap
from tilewave.maps.topology import Topology
from tilewave.tiles import TileDefinition

logger = logging.getLogger(__name__)


class JsonDataLoader:
    """Reads definitions from a set of directories.

    Attributes:
        map_dir: Directory of map files.
        preset_dir: Directory of preset placement files.
        tile_list_dir: Directory of tile list files.
        tile_data_dir: Directory of per-tile files.
        connections_dir: Directory of compatibility tables.
    """

    def __init__(
        self,
        map_dir: Path | str,
        preset_dir: Path | str,
        tile_list_dir: Path | str,
        tile_data_dir: Path | str,
        connections_dir: Path | str,
    ) -> None:
        self.map_dir = Path(map_dir)
        self.preset_dir = Path(preset_dir)
        self.tile_list_dir = Path(tile_list_dir)
        self.tile_data_dir = Path(tile_data_dir)
        self.connections_dir = Path(connections_dir)

    @classmethod
    def from_root(cls, root: Path | str = config.DATA_ROOT_PATH) -> JsonDataLoader:
        """Use the default directory layout under ``root``."""
        root = Path(root)
        return cls(
            map_dir=root / config.MAP_DATA_DIR,
            preset_dir=root / config.PRESET_TILES_DIR,
            tile_list_dir=root / config.TILE_LISTS_DIR,
            tile_data_dir=root / config.TILE_DATA_DIR,
            connections_dir=root / config.TILE_CONNECTIONS_DIR,
        )

    def load_map_data(self, map_name: str) -> MapData:
        return MapData.from_json(self._read(self.map_dir, map_name))

    def load_tile_names(self, tile_list_name: str) -> list[str]:
        raw = self._read(self.tile_list_dir, tile_list_name)
        names = raw.get("Names")
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise ValueError(f"Tile list {tile_list_name!r} needs a list of Names")
        return names

    def load_tile_definitions(self, tile_list_name: str) -> dict[str, TileDefinition]:
        """Load every tile named in the tile list, keyed by name."""
        definitions: dict[str, TileDefinition] = {}
        for name in self.load_tile_names(tile_list_name):
            definitions[name] = tile_definition_from_json(
                self._read(self.tile_data_dir, name)
            )
        return definitions

    def load_tile_connections(self, connections_name: str) -> dict[str, set[str]]:
        raw = self._read(self.connections_dir, connections_name)
        connections = raw.get("Connections")
        if not isinstance(connections, dict):
            raise ValueError(
                f"Tile connections {connections_name!r} needs a Connections object"
            )
        return {
            str(label): {str(t) for t in targets}
            for label, targets in connections.items()
        }

    def load_preset_tiles(self, preset_tiles_name: str) -> list[PresetTileData]:
        raw = self._read(self.preset_dir, preset_tiles_name)
        presets = raw.get("PresetTiles") or []
        if not isinstance(presets, list):
            raise ValueError(f"Preset tiles {preset_tiles_name!r} must be a list")
        return [PresetTileData.from_json(p) for p in presets]

    def load_map(self, map_name: str, topology: Topology | None = None) -> TileMap:
        """Load everything ``map_name`` refers to and build its TileMap.

        Args:
            map_name: Name of the map file.
            topology: Overrides the topology named in the map file.
        """
        map_data = self.load_map_data(map_name)
        tile_map = TileMap.from_data(
            map_data,
            self.load_tile_definitions(map_data.tile_list_name),
            self.load_tile_connections(map_data.tile_connections_name),
            self.load_preset_tiles(map_data.preset_tiles_name),
            topology=topology,
        )
        logger.info(
            "Loaded map %r: %d tiles, %d presets",
            map_name,
            len(tile_map.tile_factory.definitions),
            len(tile_map.presets),
        )
        return tile_map

    @staticmethod
    def _read(directory: Path, name: str) -> dict[str, Any]:
        path = directory / f"{name}.json"
        with path.open() as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"{path} must contain a JSON object")
        return raw
