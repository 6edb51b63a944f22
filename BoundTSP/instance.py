"""City sets, city files and the pairwise distance table."""
from __future__ import annotations

import math
import pathlib
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np


class InstanceFileError(ValueError):
    """Raised when a city file cannot be read or does not match its declared size."""


@dataclass(frozen=True)
class City:
    idx: int
    x: float
    y: float

    def distance(self, other: City) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


def parse_cities(text: str, n_cities: int, source: str = "<string>") -> List[City]:
    """Parse exactly ``n_cities`` ``id x y`` records from whitespace-separated text.

    Records after the first ``n_cities`` are ignored. Cities are returned
    ordered by id.
    """
    if n_cities <= 0:
        raise ValueError(f"City count must be positive, got {n_cities}.")
    tokens = text.split()
    available = len(tokens) // 3
    if available < n_cities:
        raise InstanceFileError(f"{source}: expected {n_cities} city records, found {available}.")

    cities: List[City | None] = [None] * n_cities
    for record in range(n_cities):
        raw_id, raw_x, raw_y = tokens[3 * record : 3 * record + 3]
        try:
            idx = int(raw_id)
            x = float(raw_x)
            y = float(raw_y)
        except ValueError as exc:
            raise InstanceFileError(
                f"{source}: record {record + 1} ({raw_id!r} {raw_x!r} {raw_y!r}) is not numeric."
            ) from exc
        if not (math.isfinite(x) and math.isfinite(y)):
            raise InstanceFileError(
                f"{source}: record {record + 1} ({raw_id!r} {raw_x!r} {raw_y!r}) has a non-finite coordinate."
            )
        if not 0 <= idx < n_cities:
            raise InstanceFileError(f"{source}: record {record + 1} has id {idx} outside [0, {n_cities}).")
        if cities[idx] is not None:
            raise InstanceFileError(f"{source}: record {record + 1} repeats city id {idx}.")
        cities[idx] = City(idx, x, y)
    return cities  # type: ignore[return-value]


def load_cities(path: str | pathlib.Path, n_cities: int) -> List[City]:
    path = pathlib.Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InstanceFileError(f"Cannot open city file {path}: {exc.strerror or exc}") from exc
    return parse_cities(text, n_cities, source=str(path))


def as_distance_matrix(graph: np.ndarray | Sequence[Sequence[float]]) -> np.ndarray:
    dist_matrix = np.asarray(graph, dtype=float)
    if dist_matrix.ndim != 2 or dist_matrix.shape[0] != dist_matrix.shape[1] or dist_matrix.shape[0] == 0:
        raise ValueError(f"Distance matrix must be square and non-empty, got shape {dist_matrix.shape}.")
    if not np.isfinite(dist_matrix).all():
        raise ValueError("Distance matrix contains non-finite entries.")
    return dist_matrix


def coordinates_of(cities: Sequence[City]) -> np.ndarray:
    return np.array([[city.x, city.y] for city in cities], dtype=float).reshape(len(cities), 2)


class DistanceTable:
    """Read-only N x N table of pairwise distances.

    The numpy matrix is kept for vectorised consumers; scalar lookups go
    through a nested list, which is much faster to index from Python loops.
    """

    def __init__(self, dist_matrix: np.ndarray):
        matrix = np.array(dist_matrix, dtype=float)
        matrix.setflags(write=False)
        self.matrix = matrix
        self._rows: List[List[float]] = matrix.tolist()

    @classmethod
    def from_coordinates(cls, coordinates: np.ndarray | Sequence[Sequence[float]]) -> DistanceTable:
        coords = np.asarray(coordinates, dtype=float)
        if coords.ndim != 2 or coords.shape[1] != 2 or coords.shape[0] == 0:
            raise ValueError(f"Coordinates must have shape (n, 2) with n >= 1, got {coords.shape}.")
        if not np.isfinite(coords).all():
            raise ValueError("Coordinates contain non-finite values.")
        diff = coords[:, None, :] - coords[None, :, :]
        return cls(np.linalg.norm(diff, axis=-1))

    @classmethod
    def from_cities(cls, cities: Sequence[City]) -> DistanceTable:
        return cls.from_coordinates(coordinates_of(cities))

    @classmethod
    def from_matrix(cls, graph: np.ndarray | Sequence[Sequence[float]]) -> DistanceTable:
        return cls(as_distance_matrix(graph))

    def __call__(self, city1: int, city2: int) -> float:
        return self._rows[city1][city2]

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def size(self) -> int:
        return len(self._rows)


__all__ = [
    "City",
    "DistanceTable",
    "InstanceFileError",
    "as_distance_matrix",
    "coordinates_of",
    "load_cities",
    "parse_cities",
]
