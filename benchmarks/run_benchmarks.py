#!/usr/bin/env python3
"""Benchmark suite for pyskiplist comparing against a bisect-sorted list."""

import argparse
import bisect
import json
import random
import time
from pathlib import Path
from typing import Dict, List

import numpy as np
import plotly.graph_objects as go
from tqdm import tqdm

from pyskiplist import SkipList


class Metrics:
    def __init__(self):
        self.set_latencies: List[float] = []
        self.get_latencies: List[float] = []
        self.remove_latencies: List[float] = []

    def to_dict(self) -> Dict:
        return {
            name: {
                "p50": np.percentile(values, 50),
                "p95": np.percentile(values, 95),
                "p99": np.percentile(values, 99),
                "mean": np.mean(values),
            }
            for name, values in (
                ("set", self.set_latencies),
                ("get", self.get_latencies),
                ("remove", self.remove_latencies),
            )
        }

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()
        fig.add_trace(go.Box(y=self.set_latencies, name="Set Latency", boxpoints="outliers"))
        fig.add_trace(go.Box(y=self.get_latencies, name="Get Latency", boxpoints="outliers"))
        fig.add_trace(go.Box(y=self.remove_latencies, name="Remove Latency", boxpoints="outliers"))
        fig.update_layout(
            title=title,
            yaxis_title="Latency (µs)",
            boxmode="group"
        )
        fig.write_html(output_path)


class BenchmarkSuite:
    def __init__(self, num_entries: int, max_level: int, seed: int):
        self.num_entries = num_entries
        self.max_level = max_level
        gen = random.Random(seed)
        self._keys = gen.sample(range(num_entries * 10), num_entries)
        self._seed = seed

    def run_skiplist_benchmark(self) -> Metrics:
        metrics = Metrics()
        sl = SkipList(max_level=self.max_level, rng=random.Random(self._seed))

        for k in tqdm(self._keys, desc="SkipList Set"):
            start = time.perf_counter()
            sl.set(k, k)
            metrics.set_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._keys, desc="SkipList Get"):
            start = time.perf_counter()
            sl.get(k)
            metrics.get_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._keys, desc="SkipList Remove"):
            start = time.perf_counter()
            sl.remove(k)
            metrics.remove_latencies.append((time.perf_counter() - start) * 1e6)

        return metrics

    def run_bisect_benchmark(self) -> Metrics:
        metrics = Metrics()
        keys: List[int] = []
        values: List[int] = []

        for k in tqdm(self._keys, desc="Bisect Set"):
            start = time.perf_counter()
            i = bisect.bisect_left(keys, k)
            if i < len(keys) and keys[i] == k:
                values[i] = k
            else:
                keys.insert(i, k)
                values.insert(i, k)
            metrics.set_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._keys, desc="Bisect Get"):
            start = time.perf_counter()
            i = bisect.bisect_left(keys, k)
            _ = values[i] if i < len(keys) and keys[i] == k else None
            metrics.get_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._keys, desc="Bisect Remove"):
            start = time.perf_counter()
            i = bisect.bisect_left(keys, k)
            if i < len(keys) and keys[i] == k:
                del keys[i]
                del values[i]
            metrics.remove_latencies.append((time.perf_counter() - start) * 1e6)

        return metrics


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=100000, help="Number of entries")
    parser.add_argument("--max-level", type=int, default=24, help="Skip list max level")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.max_level, args.seed)
    skiplist_metrics = suite.run_skiplist_benchmark()
    bisect_metrics = suite.run_bisect_benchmark()

    skiplist_metrics.plot_latencies(
        "SkipList Latency Distribution",
        args.output / "skiplist_latencies.html"
    )
    bisect_metrics.plot_latencies(
        "Bisect Latency Distribution",
        args.output / "bisect_latencies.html"
    )

    with open(args.output / "metrics.json", "w") as f:
        json.dump({
            "skiplist": skiplist_metrics.to_dict(),
            "bisect": bisect_metrics.to_dict(),
        }, f, indent=2)


if __name__ == "__main__":
    main()
