"""Map definitions as plain records, and a JSON loader for them."""

from .loader import JsonDataLoader
from .records import MapData, PresetTileData, tile_definition_from_json

__all__ = [
    "JsonDataLoader",
    "MapData",
    "PresetTileData",
    "tile_definition_from_json",
]
