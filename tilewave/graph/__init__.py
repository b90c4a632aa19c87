"""Node/edge graph the generation engine runs on."""

from .edge import MapEdge
from .node import MapNode, propagate

__all__ = [
    "MapEdge",
    "MapNode",
    "propagate",
]
