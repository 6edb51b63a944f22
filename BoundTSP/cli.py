from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from typing import Iterable

from BoundTSP.core import BoundTSP
from BoundTSP.instance import InstanceFileError
from BoundTSP.solvers import SearchConfig


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bound-tsp",
        description="Solve a Euclidean TSP instance with an MST seed and branch-and-bound.",
    )
    parser.add_argument("cities_file", type=pathlib.Path, help="File of 'id x y' records, one per city.")
    parser.add_argument("--cities", "-n", type=int, required=True, help="Number of city records to read.")
    parser.add_argument(
        "--time-limit",
        type=float,
        default=None,
        help="Wall clock budget in seconds (default: run to completion).",
    )
    parser.add_argument(
        "--progress-interval",
        type=int,
        default=100_000,
        help="Branch decisions between progress reports.",
    )
    parser.add_argument(
        "--no-refine",
        action="store_true",
        help="Do not polish improved tours with pairwise swaps.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only print the final tour.")
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Also print refinement passes.")
    return parser.parse_args(None if raw_args is None else list(raw_args))


def configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.quiet:
        level = logging.WARNING
    elif args.verbose:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)


def main(raw_args: Iterable[str] | None = None) -> int:
    args = parse_args(raw_args)
    configure_logging(args)

    try:
        config = SearchConfig(
            progress_interval=args.progress_interval,
            time_limit=args.time_limit,
            refine=not args.no_refine,
        )
        result = BoundTSP(config).solve_file(args.cities_file, args.cities)
    except (InstanceFileError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print()
    print("Best tour:", " ".join(map(str, result.path)))
    print("Cost:", result.cost)
    print("Status:", result.status)
    print(f"Branches: {result.metadata['calls']}  Pruned: {result.metadata['prunes']}")
    print(f"Elapsed: {result.metadata['wallclock_total']:.3f}s")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
