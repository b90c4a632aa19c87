"""Tests for JSON map and tile loading."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Any

import pytest

from tests.helpers import write_json, write_pond_data
from tilewave import config
from tilewave.data import JsonDataLoader, MapData, PresetTileData
from tilewave.data.records import tile_definition_from_json
from tilewave.generator import generate_map
from tilewave.maps import HexRingTopology, SquareGridTopology

BUNDLED_DATA = Path(__file__).parents[2] / "data"


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    return write_pond_data(tmp_path)


# =============================================================================
# Records
# =============================================================================


class TestRecords:
    def test_map_data_defaults(self) -> None:
        map_data = MapData.from_json(
            {
                "TileListName": "a",
                "TileConnectionsName": "b",
                "PresetTilesName": "c",
            }
        )
        assert map_data.map_shape == config.DEFAULT_MAP_SHAPE
        assert map_data.primary_size == 1
        assert map_data.secondary_size == 0

    def test_map_data_missing_field(self) -> None:
        with pytest.raises(ValueError, match="TileListName"):
            MapData.from_json({"TileConnectionsName": "b", "PresetTilesName": "c"})

    @pytest.mark.parametrize(
        "coordinate",
        [[1, 2, -3], {"x": 1, "y": 2, "z": -3}, {"X": 1, "Y": 2, "Z": -3}],
    )
    def test_preset_coordinate_forms(self, coordinate: Any) -> None:
        preset = PresetTileData.from_json({"Name": "road", "Coordinate": coordinate})
        assert preset.coordinate == (1, 2, -3)
        assert preset.rotation == 0

    @pytest.mark.parametrize(
        "coordinate", [[1, 2], [1, 2, 3, 4], {"x": 1, "y": 2}, "1,2,3"]
    )
    def test_bad_preset_coordinates(self, coordinate: Any) -> None:
        with pytest.raises(ValueError):
            PresetTileData.from_json({"Name": "road", "Coordinate": coordinate})

    @pytest.mark.parametrize(
        "coordinate", [[1.5, 0, -1.5], [1, "2", -3], {"X": True, "Y": 0, "Z": 0}]
    )
    def test_non_integer_components_rejected(self, coordinate: Any) -> None:
        with pytest.raises(ValueError, match="Coordinate component"):
            PresetTileData.from_json({"Name": "road", "Coordinate": coordinate})

    def test_integral_float_components_accepted(self) -> None:
        preset = PresetTileData.from_json(
            {"Name": "road", "Coordinate": [2.0, -1.0, -1.0]}
        )
        assert preset.coordinate == (2, -1, -1)
        assert all(type(part) is int for part in preset.coordinate)

    def test_tile_definition_from_json(self) -> None:
        definition = tile_definition_from_json(
            {
                "Name": "road",
                "Tags": ["path"],
                "Connections": ["r", "g", "r", "g"],
                "Probability": 2,
                "ProbabilityModifiers": {"road": 1},
            }
        )
        assert definition.name == "road"
        assert definition.tags == frozenset({"path"})
        assert definition.connections == ("r", "g", "r", "g")
        assert definition.probability == 2
        assert definition.probability_modifiers == {"road": 1}

    def test_tile_definition_optional_fields(self) -> None:
        definition = tile_definition_from_json({"Name": "x", "Connections": ["a"]})
        assert definition.probability == 1
        assert definition.tags == frozenset()
        assert definition.probability_modifiers == {}

    def test_tile_definition_bad_modifiers(self) -> None:
        with pytest.raises(ValueError, match="ProbabilityModifiers"):
            tile_definition_from_json(
                {"Name": "x", "Connections": ["a"], "ProbabilityModifiers": [1]}
            )


# =============================================================================
# Loader
# =============================================================================


class TestJsonDataLoader:
    def test_load_map_builds_named_topology(self, data_root: Path) -> None:
        tile_map = JsonDataLoader.from_root(data_root).load_map("pond")

        assert isinstance(tile_map.topology, SquareGridTopology)
        assert list(tile_map.tile_factory.definitions) == ["meadow", "pond"]
        assert tile_map.compatibility == {"m": frozenset({"m"})}
        assert [(p.name, p.coordinate) for p in tile_map.presets] == [
            ("pond", (1, 1, 0))
        ]

    def test_loaded_map_generates(self, data_root: Path) -> None:
        tile_map = JsonDataLoader.from_root(data_root).load_map("pond")
        tiles = generate_map(tile_map, random.Random(0))

        assert len(tiles) == 6
        assert tiles[(1, 1, 0)].name == "pond"
        # The preset's modifier leaves its neighbours at probability 0 for pond
        for coordinate in [(0, 1, 0), (2, 1, 0), (1, 0, 0)]:
            assert tiles[coordinate].name == "meadow"

    def test_missing_file_raises(self, data_root: Path) -> None:
        with pytest.raises(FileNotFoundError):
            JsonDataLoader.from_root(data_root).load_map("nowhere")

    def test_non_object_document_rejected(self, data_root: Path) -> None:
        write_json(data_root / config.MAP_DATA_DIR / "list.json", [1, 2, 3])
        with pytest.raises(ValueError, match="JSON object"):
            JsonDataLoader.from_root(data_root).load_map_data("list")

    def test_malformed_json_rejected(self, data_root: Path) -> None:
        path = data_root / config.MAP_DATA_DIR / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            JsonDataLoader.from_root(data_root).load_map_data("broken")

    def test_tile_list_needs_names(self, data_root: Path) -> None:
        write_json(data_root / config.TILE_LISTS_DIR / "bad.json", {"Names": "x"})
        with pytest.raises(ValueError, match="Names"):
            JsonDataLoader.from_root(data_root).load_tile_names("bad")

    def test_connections_need_object(self, data_root: Path) -> None:
        write_json(data_root / config.TILE_CONNECTIONS_DIR / "bad.json", {})
        with pytest.raises(ValueError, match="Connections"):
            JsonDataLoader.from_root(data_root).load_tile_connections("bad")

    def test_empty_preset_file(self, data_root: Path) -> None:
        write_json(data_root / config.PRESET_TILES_DIR / "none.json", {})
        assert JsonDataLoader.from_root(data_root).load_preset_tiles("none") == []

    def test_separate_directories(self, data_root: Path) -> None:
        loader = JsonDataLoader(
            map_dir=data_root / config.MAP_DATA_DIR,
            preset_dir=data_root / config.PRESET_TILES_DIR,
            tile_list_dir=data_root / config.TILE_LISTS_DIR,
            tile_data_dir=data_root / config.TILE_DATA_DIR,
            connections_dir=str(data_root / config.TILE_CONNECTIONS_DIR),
        )
        assert loader.load_tile_connections("pond_rules") == {"m": {"m"}}


class TestBundledData:
    def test_sample_map_loads(self) -> None:
        tile_map = JsonDataLoader.from_root(BUNDLED_DATA).load_map("testMap")

        assert isinstance(tile_map.topology, HexRingTopology)
        assert tile_map.primary_size == 3
        assert len(tile_map.tile_factory.definitions) == 5
        assert tile_map.presets[0].name == "road_straight"
        assert tile_map.presets[0].coordinate == (3, 3, -6)

    def test_every_bundled_label_has_rules(self) -> None:
        loader = JsonDataLoader.from_root(BUNDLED_DATA)
        definitions = loader.load_tile_definitions("countryside")
        compatibility = loader.load_tile_connections("countryside")

        for definition in definitions.values():
            assert set(definition.connections) <= set(compatibility)
