"""
Configuration constants.

Centralizes the tunable values used by the generation engine and its scripts.
Organized by functional area for easy maintenance.
"""

from pathlib import Path

from tilewave.types import RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

PROJECT_ROOT_PATH = Path(__file__).resolve().parent.parent

# RANDOM_SEED = None
RANDOM_SEED: RandomSeed = "burrito1"

# =============================================================================
# RANDOM STREAMS
# =============================================================================

# Domains handed to rng.get(). Tile choice and rotation choice draw from the
# same stream so a single seed reproduces a whole run.
WFC_RNG_DOMAIN = "map.wfc"

# =============================================================================
# MAP GENERATION
# =============================================================================

# Shape key used when map data does not name one.
DEFAULT_MAP_SHAPE = "Ring"

# Propagation gives up after node_count * factor worklist pops. Each node can
# only lose possibilities a bounded number of times, so hitting this means a
# bug rather than a hard map.
PROPAGATION_ITERATION_FACTOR = 64

# =============================================================================
# DATA FILES
# =============================================================================

# Default layout for JSON map definitions, relative to the data root.
DATA_ROOT_PATH = PROJECT_ROOT_PATH / "data"
MAP_DATA_DIR = "maps"
PRESET_TILES_DIR = "tiles/preset_tiles"
TILE_LISTS_DIR = "tiles/tile_lists"
TILE_DATA_DIR = "tiles/tile_data"
TILE_CONNECTIONS_DIR = "tiles/tile_connections"
