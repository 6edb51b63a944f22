from __future__ import annotations

import numpy as np
import pytest

from BoundTSP.instance import DistanceTable

UNIT_SQUARE = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]


def random_coordinates(n_cities: int, seed: int, scale: float = 100.0) -> np.ndarray:
    """Random Euclidean instance with cities in [0, scale) x [0, scale)."""
    rng = np.random.default_rng(seed)
    return rng.random((n_cities, 2)) * scale


@pytest.fixture
def unit_square() -> DistanceTable:
    return DistanceTable.from_coordinates(UNIT_SQUARE)


@pytest.fixture
def make_table():
    def _make(n_cities: int, seed: int = 0) -> DistanceTable:
        return DistanceTable.from_coordinates(random_coordinates(n_cities, seed))

    return _make


@pytest.fixture
def city_file(tmp_path):
    def _write(lines, name: str = "cities.tsp"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
