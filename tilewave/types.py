from __future__ import annotations

from collections.abc import Mapping, Set
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from tilewave.graph.edge import MapEdge

# =============================================================================
# SPATIAL TYPES
# =============================================================================

# Node coordinates - three components, unique per node, doubling as identity.
# The hex topology uses cube coordinates shifted so that the first two
# components index straight into its node grid.
Coordinate: TypeAlias = tuple[int, int, int]  # Example: (1, 1, -2) = centre of a 1-ring map

# Index of a tile side. Side i of a tile faces along the topology's i-th
# neighbour direction.
SideIndex: TypeAlias = int

# Number of one-step clockwise turns applied to a tile, in [0, side_count).
RotationIndex: TypeAlias = int

# Ordered edges around a node, one slot per side. Missing neighbours (map
# border, holes in the topology) are None.
OrderedEdges: TypeAlias = "list[MapEdge | None]"

# =============================================================================
# CONNECTION TYPES
# =============================================================================

# Symbolic tag on one side of a tile (e.g. "grass", "road").
ConnectionLabel: TypeAlias = str

# Label -> labels it may legally face across an edge. Stored directed; map
# authors normally keep it symmetric.
CompatibilityTable: TypeAlias = Mapping[ConnectionLabel, Set[ConnectionLabel]]

# =============================================================================
# GENERATION TYPES
# =============================================================================

# Random seed for deterministic generation.
# Can be an int for numeric seeds or a descriptive string like "burrito1".
RandomSeed: TypeAlias = int | str | None
