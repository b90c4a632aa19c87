"""Tile variants used by the generation engine.

- PlacedTile: read-only capability shared by every tile on a node
- TileDefinition: already-deserialized tile description
- PresetTile: fixed placement made before generation
- PossibleTile: candidate negotiating its rotation on an uncollapsed node
- TileFactory: builds both variants from definitions
"""

from .base import PlacedTile, TileDefinition, rotate_connections
from .factory import TileFactory
from .possible import PossibleTile
from .preset import PresetTile

__all__ = [
    "PlacedTile",
    "PossibleTile",
    "PresetTile",
    "TileDefinition",
    "TileFactory",
    "rotate_connections",
]
