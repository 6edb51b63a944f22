#!/usr/bin/env python3
from __future__ import annotations

import argparse
import hashlib
import pathlib
from typing import Iterable, List

import numpy as np


def create_instance(num_cities: int, rng: np.random.Generator, scale: float) -> np.ndarray:
    return rng.random((num_cities, 2)) * scale


def format_instance(coordinates: np.ndarray) -> str:
    lines = [f"{idx} {x:.6f} {y:.6f}" for idx, (x, y) in enumerate(coordinates)]
    return "\n".join(lines) + "\n"


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate random 'id x y' city files.")
    parser.add_argument(
        "--counts",
        nargs="+",
        type=int,
        default=[8, 12, 16, 20],
        help="City counts to generate.",
    )
    parser.add_argument(
        "--instances-per-count",
        type=int,
        default=3,
        help="How many instances to generate per city count.",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=100.0,
        help="Coordinates drawn uniformly in [0, scale).",
    )
    parser.add_argument(
        "--output-dir",
        type=pathlib.Path,
        default=pathlib.Path("data/problems"),
        help="Directory receiving one <count>_<digest>.tsp file per instance.",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42).")
    return parser.parse_args(None if raw_args is None else list(raw_args))


def main(raw_args: Iterable[str] | None = None) -> List[pathlib.Path]:
    args = parse_args(raw_args)
    rng = np.random.default_rng(args.seed)
    args.output_dir.mkdir(parents=True, exist_ok=True)

    written: List[pathlib.Path] = []
    for count in args.counts:
        for _ in range(args.instances_per_count):
            coordinates = create_instance(count, rng, args.scale)
            digest = hashlib.sha1(coordinates.tobytes()).hexdigest()[:10]
            path = args.output_dir / f"{count}_{digest}.tsp"
            path.write_text(format_instance(coordinates), encoding="utf-8")
            written.append(path)
            print(f"wrote {path} ({count} cities)")
    return written


if __name__ == "__main__":
    main()
