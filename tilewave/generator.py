"""Top-level map generation.

The generator drives a TileMap from empty to fully resolved:

1. Build the node graph (TileMap.create_nodes)
2. Force every preset tile onto its node, propagating each one
3. Repeatedly collapse the lowest-entropy uncollapsed node until none remain

A GenerationFailure anywhere aborts the run. The engine keeps no state
between runs, so recovering means building a fresh TileMap and trying again,
typically with a different seed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tilewave import config
from tilewave.util import rng as rng_streams

if TYPE_CHECKING:
    from tilewave.maps.tile_map import TileMap
    from tilewave.tiles import PlacedTile
    from tilewave.types import Coordinate
    from tilewave.util.rng import RNG

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """What a finished run produced.

    Attributes:
        tiles: Coordinate -> resolved tile for every node of the map.
        presets_applied: Number of preset tiles forced onto nodes.
        collapses: Number of nodes resolved by random collapse.
    """

    tiles: dict[Coordinate, PlacedTile | None]
    presets_applied: int = 0
    collapses: int = 0


class MapGenerator:
    """Runs one generation over a TileMap.

    Example:
        generator = MapGenerator(tile_map, random.Random(1234))
        result = generator.generate()
        for coordinate, tile in result.tiles.items():
            print(coordinate, tile.name, tile.rotation)
    """

    def __init__(self, tile_map: TileMap, rng: RNG | None = None) -> None:
        """Initialize the generator.

        Args:
            tile_map: Map to generate. Its nodes are (re)built by generate().
            rng: Source of randomness. Defaults to the shared "map.wfc" stream.
        """
        self.tile_map = tile_map
        self.rng = rng if rng is not None else rng_streams.get(config.WFC_RNG_DOMAIN)

    def generate(self) -> GenerationResult:
        """Build and fully resolve the map.

        Raises:
            GenerationFailure: If a contradiction is reached.
        """
        tile_map = self.tile_map
        tile_map.create_nodes()

        presets_applied = self._apply_presets()

        collapses = 0
        node = tile_map.next_node_to_collapse()
        while node is not None:
            node.collapse(self.rng)
            collapses += 1
            node = tile_map.next_node_to_collapse()

        logger.info(
            "Generated %d nodes: %d presets, %d collapses",
            tile_map.node_count,
            presets_applied,
            collapses,
        )
        return GenerationResult(
            tiles=tile_map.resolved_tiles(),
            presets_applied=presets_applied,
            collapses=collapses,
        )

    def _apply_presets(self) -> int:
        applied = 0
        for preset in self.tile_map.presets:
            node = self.tile_map.node_at(preset.coordinate)
            if node is None:
                logger.warning(
                    "Preset %s at %s is outside the map; skipped",
                    preset.name,
                    preset.coordinate,
                )
                continue
            if node.collapsed:
                logger.warning(
                    "Preset %s at %s: node already set to %s; skipped",
                    preset.name,
                    preset.coordinate,
                    node.tile.name if node.tile is not None else None,
                )
                continue
            node.force_set(preset)
            applied += 1
        return applied


def generate_map(
    tile_map: TileMap, rng: RNG | None = None
) -> dict[Coordinate, PlacedTile | None]:
    """Generate ``tile_map`` and return coordinate -> resolved tile."""
    return MapGenerator(tile_map, rng).generate().tiles
