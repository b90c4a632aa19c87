"""Tests for the rectangular grid topology."""

from __future__ import annotations

import random

import pytest

from tests.helpers import grid_map, tile
from tilewave.generator import generate_map
from tilewave.maps import GRID_DIRECTIONS, SquareGridTopology

AB_COMPATIBILITY = {"a": {"a"}, "b": {"b"}}


class TestSquareGrid:
    def test_rectangle_node_count_and_coordinates(self) -> None:
        tile_map = grid_map([tile("plain", "aaaa")], AB_COMPATIBILITY, 3, 2)
        tile_map.create_nodes()

        assert tile_map.node_count == 6
        assert tile_map.node_grid.shape == (3, 2)
        assert {n.coordinate for n in tile_map.nodes()} == {
            (x, y, 0) for x in range(3) for y in range(2)
        }

    def test_zero_height_makes_a_square(self) -> None:
        tile_map = grid_map([tile("plain", "aaaa")], AB_COMPATIBILITY, 4)
        tile_map.create_nodes()
        assert tile_map.node_grid.shape == (4, 4)

    @pytest.mark.parametrize(("width", "height"), [(0, 3), (-1, 2), (2, -1)])
    def test_non_positive_size_rejected(self, width: int, height: int) -> None:
        tile_map = grid_map([tile("plain", "aaaa")], AB_COMPATIBILITY, width, height)
        with pytest.raises(ValueError):
            tile_map.create_nodes()

    def test_edge_counts(self) -> None:
        tile_map = grid_map([tile("plain", "aaaa")], AB_COMPATIBILITY, 3, 3)
        tile_map.create_nodes()

        assert len(tile_map.node_at((0, 0, 0)).edges) == 2
        assert len(tile_map.node_at((1, 0, 0)).edges) == 3
        assert len(tile_map.node_at((1, 1, 0)).edges) == 4

    def test_side_order_is_north_east_south_west(self) -> None:
        assert GRID_DIRECTIONS == ["N", "E", "S", "W"]
        topology = SquareGridTopology()
        assert [
            topology.neighbor_coordinate((5, 5, 0), side) for side in range(4)
        ] == [(5, 4, 0), (6, 5, 0), (5, 6, 0), (4, 5, 0)]

    def test_hex_tiles_rejected_on_square_grid(self) -> None:
        with pytest.raises(ValueError, match="sides"):
            grid_map([tile("hex", "aaaaaa")], AB_COMPATIBILITY, 2)

    def test_disjoint_labels_fill_the_grid_with_one_tile(self) -> None:
        """With "a" and "b" unable to touch, one collapse decides the map."""
        definitions = [tile("a", "aaaa"), tile("b", "bbbb")]
        for seed in range(5):
            tile_map = grid_map(definitions, AB_COMPATIBILITY, 4, 3)
            tiles = generate_map(tile_map, random.Random(seed))

            assert len(tiles) == 12
            assert len({t.name for t in tiles.values()}) == 1

    def test_road_pieces_line_up(self) -> None:
        """Every road-count pattern has a tile, so any seed resolves the grid."""
        definitions = [
            tile("field", "gggg", probability=3),
            tile("road", "rgrg"),
            tile("bend", "rrgg"),
            tile("end", "rggg"),
            tile("tee", "rrrg"),
            tile("cross", "rrrr"),
        ]
        compatibility = {"g": {"g"}, "r": {"r"}}
        tile_map = grid_map(definitions, compatibility, 5, 5)
        generate_map(tile_map, random.Random(3))

        for node in tile_map.nodes():
            for side, edge in enumerate(node.ordered_edges()):
                if edge is None:
                    continue
                other = edge.other_node(node)
                facing = other.tile.connections[(side + 2) % 4]
                assert facing in compatibility[node.tile.connections[side]]
