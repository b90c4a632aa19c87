#!/usr/bin/env python3
"""Benchmark hex-ring map generation across ring counts."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import random
import time
from pathlib import Path

from tilewave import config
from tilewave.data import JsonDataLoader
from tilewave.errors import GenerationFailure
from tilewave.generator import MapGenerator
from tilewave.maps import HexRingTopology, TileMap

RING_COUNTS: tuple[int, ...] = (2, 4, 6, 8, 10)


class HexWFCBenchmark:
    """Benchmark runner for graph WFC on hex rings."""

    def __init__(self, iterations: int, data_root: Path, map_name: str) -> None:
        self.iterations = iterations
        loader = JsonDataLoader.from_root(data_root)
        self.map_data = loader.load_map_data(map_name)
        self.definitions = loader.load_tile_definitions(self.map_data.tile_list_name)
        self.connections = loader.load_tile_connections(
            self.map_data.tile_connections_name
        )
        self.results: dict[str, dict[str, float]] = {}

    def _build_map(self, rings: int) -> TileMap:
        # Presets are tied to one ring count, so the benchmark runs without them
        map_data = dataclasses.replace(self.map_data, primary_size=rings)
        return TileMap.from_data(map_data, self.definitions, self.connections)

    def _run_case(self, rings: int) -> tuple[float, int]:
        """Run one ring count; return (average ms per successful run, failures)."""
        elapsed_total = 0.0
        successes = 0
        failures = 0

        for i in range(self.iterations):
            tile_map = self._build_map(rings)
            rng = random.Random((rings * 1_000) + i)

            start = time.perf_counter()
            try:
                MapGenerator(tile_map, rng).generate()
            except GenerationFailure:
                failures += 1
                continue
            elapsed_total += time.perf_counter() - start
            successes += 1

        if successes == 0:
            return 0.0, failures
        return (elapsed_total / successes) * 1000.0, failures

    def run(self) -> None:
        """Run all configured ring counts."""
        print("Hex WFC Benchmark")
        print("=" * 48)
        print(f"Iterations per size: {self.iterations}")
        print()
        print(f"{'Rings':>6} {'Nodes':>7} {'Time (ms)':>12} {'Failures':>10}")
        print("-" * 48)

        for rings in RING_COUNTS:
            elapsed_ms, failures = self._run_case(rings)
            nodes = HexRingTopology.node_count_for(rings)

            self.results[str(rings)] = {
                "nodes": nodes,
                "time_ms": elapsed_ms,
                "failures": failures,
            }

            print(f"{rings:>6} {nodes:>7} {elapsed_ms:12.2f} {failures:>10}")

    def save_results(self, filename: str) -> None:
        """Save benchmark output to a JSON file."""
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")

    def compare_with_baseline(self, baseline_file: str) -> None:
        """Compare current run with a saved baseline JSON file."""
        try:
            with Path(baseline_file).open() as f:
                baseline: dict[str, dict[str, float]] = json.load(f)
        except FileNotFoundError:
            print(f"\nBaseline file not found: {baseline_file}")
            return

        print(f"\nComparison vs baseline: {baseline_file}")
        print("=" * 64)

        for rings_key, current in self.results.items():
            if rings_key not in baseline:
                continue

            old_ms = baseline[rings_key].get("time_ms", 0.0)
            new_ms = current["time_ms"]
            if old_ms <= 0 or new_ms <= 0:
                continue

            delta_pct = ((new_ms - old_ms) / old_ms) * 100.0
            speed_ratio = old_ms / new_ms
            trend = "faster" if speed_ratio > 1.0 else "slower"

            print(
                f"{rings_key:>6} rings: {new_ms:8.2f}ms "
                f"vs {old_ms:8.2f}ms | {speed_ratio:5.2f}x {trend} "
                f"({delta_pct:+6.1f}%)"
            )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark hex-ring WFC")
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of runs per ring count (default: 5)",
    )
    parser.add_argument(
        "--data-root",
        type=Path,
        default=config.DATA_ROOT_PATH,
        help="Root of the JSON map definitions",
    )
    parser.add_argument("--map", default="testMap", help="Map file to take tiles from")
    parser.add_argument("--save", type=str, help="Save current results to JSON")
    parser.add_argument(
        "--compare",
        type=str,
        help="Compare current results against baseline JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Log generation info")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    benchmark = HexWFCBenchmark(args.iterations, args.data_root, args.map)
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)

    if args.compare:
        benchmark.compare_with_baseline(args.compare)


if __name__ == "__main__":
    main()
