#!/usr/bin/env python3
"""Generate a map from JSON definitions and print the result.

Generation has no backtracking, so a run can end in a GenerationFailure. This
script regenerates from scratch with the next seed, up to --attempts times.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tilewave import config
from tilewave.data import JsonDataLoader
from tilewave.errors import GenerationFailure
from tilewave.generator import GenerationResult, MapGenerator
from tilewave.types import RandomSeed
from tilewave.util.rng import RNGProvider

logger = logging.getLogger("generate_hex_map")


def generate_with_retries(
    loader: JsonDataLoader, map_name: str, seed: RandomSeed, attempts: int
) -> tuple[RandomSeed, GenerationResult]:
    """Return (seed used, result) of the first successful attempt."""
    provider = RNGProvider(seed)
    for attempt in range(attempts):
        attempt_seed = seed if attempt == 0 else f"{seed}:{attempt}"
        provider.reset(attempt_seed)
        tile_map = loader.load_map(map_name)
        try:
            stream = provider.get(config.WFC_RNG_DOMAIN)
            result = MapGenerator(tile_map, stream).generate()
        except GenerationFailure as exc:
            logger.info("Seed %r failed at %s: %s", attempt_seed, exc.coordinate, exc)
            continue
        return attempt_seed, result
    raise GenerationFailure(f"No successful generation in {attempts} attempts")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a tile map")
    parser.add_argument("map", nargs="?", default="testMap", help="Map file name")
    parser.add_argument(
        "--data-root",
        type=Path,
        default=config.DATA_ROOT_PATH,
        help="Root of the JSON map definitions",
    )
    parser.add_argument(
        "--seed", default=config.RANDOM_SEED, help="Master seed of the first attempt"
    )
    parser.add_argument(
        "--attempts", type=int, default=20, help="Seeds to try before giving up"
    )
    parser.add_argument("--verbose", action="store_true", help="Log generation info")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    loader = JsonDataLoader.from_root(args.data_root)
    try:
        seed, result = generate_with_retries(loader, args.map, args.seed, args.attempts)
    except GenerationFailure as exc:
        print(f"Generation failed: {exc}", file=sys.stderr)
        return 1

    print(
        f"Seed {seed!r}: {result.presets_applied} presets, "
        f"{result.collapses} collapses"
    )
    for coordinate, tile in sorted(result.tiles.items()):
        if tile is not None:
            print(f"{coordinate!s:>16}  {tile.name:<16} rotation {tile.rotation}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
