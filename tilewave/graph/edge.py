"""Undirected edge between two map nodes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tilewave.graph.node import MapNode
    from tilewave.types import ConnectionLabel


class MapEdge:
    """Connects two nodes and tracks what each end may present across it.

    For each endpoint the edge stores the set of connection labels that
    endpoint can still offer on this side. A collapsed node offers exactly one
    label; an uncollapsed node offers the union over its remaining tiles and
    rotations. Candidates on the other end are checked against that set.

    Edges are undirected: (a, b) and (b, a) compare and hash equal.
    """

    directed = False

    def __init__(self, node_a: MapNode, node_b: MapNode) -> None:
        self._node_a = node_a
        self._node_b = node_b
        self._connections_a: frozenset[ConnectionLabel] = frozenset()
        self._connections_b: frozenset[ConnectionLabel] = frozenset()

    @property
    def node_a(self) -> MapNode:
        return self._node_a

    @property
    def node_b(self) -> MapNode:
        return self._node_b

    def has_node(self, node: MapNode) -> bool:
        return node is self._node_a or node is self._node_b

    def other_node(self, node: MapNode) -> MapNode | None:
        """Return the endpoint opposite ``node``, or None if it is not on this edge."""
        if node is self._node_a:
            return self._node_b
        if node is self._node_b:
            return self._node_a
        return None

    def connections_for(self, node: MapNode) -> frozenset[ConnectionLabel] | None:
        """Labels ``node`` currently offers across this edge."""
        if node is self._node_a:
            return self._connections_a
        if node is self._node_b:
            return self._connections_b
        return None

    def connections_for_other(
        self, node: MapNode
    ) -> frozenset[ConnectionLabel] | None:
        """Labels the endpoint opposite ``node`` currently offers."""
        if node is self._node_a:
            return self._connections_b
        if node is self._node_b:
            return self._connections_a
        return None

    def set_connections_for(
        self, node: MapNode, connections: Iterable[ConnectionLabel]
    ) -> bool:
        """Replace the labels ``node`` offers across this edge.

        Returns:
            True if the stored set changed. False if it was equal, or if
            ``node`` is not an endpoint.
        """
        new = frozenset(connections)
        if node is self._node_a:
            changed = new != self._connections_a
            self._connections_a = new
            return changed
        if node is self._node_b:
            changed = new != self._connections_b
            self._connections_b = new
            return changed
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapEdge):
            return NotImplemented
        return (self._node_a is other._node_a and self._node_b is other._node_b) or (
            self._node_a is other._node_b and self._node_b is other._node_a
        )

    def __hash__(self) -> int:
        return hash(frozenset((id(self._node_a), id(self._node_b))))

    def __repr__(self) -> str:
        return f"MapEdge({self._node_a.coordinate}, {self._node_b.coordinate})"
