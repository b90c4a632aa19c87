"""Graph-based Wave Function Collapse map generation.

Nodes start with every tile as a candidate. The generator forces preset
tiles, then collapses the lowest-entropy node again and again; each collapse
narrows the neighbours' candidates by edge compatibility until the map is
resolved or a GenerationFailure is raised.

Example:
    from tilewave import JsonDataLoader, MapGenerator

    tile_map = JsonDataLoader.from_root("data").load_map("testMap")
    result = MapGenerator(tile_map, random.Random(7)).generate()
"""

from .data import JsonDataLoader, MapData, PresetTileData
from .errors import GenerationFailure
from .generator import GenerationResult, MapGenerator, generate_map
from .graph import MapEdge, MapNode
from .maps import (
    HexRingTopology,
    SquareGridTopology,
    TileMap,
    Topology,
    create_topology,
)
from .tiles import PlacedTile, PossibleTile, PresetTile, TileDefinition, TileFactory

__all__ = [
    "GenerationFailure",
    "GenerationResult",
    "HexRingTopology",
    "JsonDataLoader",
    "MapData",
    "MapEdge",
    "MapGenerator",
    "MapNode",
    "PlacedTile",
    "PossibleTile",
    "PresetTile",
    "PresetTileData",
    "SquareGridTopology",
    "TileDefinition",
    "TileFactory",
    "TileMap",
    "Topology",
    "create_topology",
    "generate_map",
]
