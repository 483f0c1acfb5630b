"""Position and edge-pair generators for bulk graph creation."""

from __future__ import annotations

import math
import random
from collections.abc import Iterator


def diagonal_positions(count: int, spacing: float) -> list[tuple[float, float]]:
    """Place nodes along the main diagonal, ``spacing`` apart."""
    return [(i * spacing, i * spacing) for i in range(count)]


def random_positions(
    count: int,
    width: float,
    height: float,
    rng: random.Random,
) -> list[tuple[float, float]]:
    """Uniform positions in ``[0, width) x [0, height)``."""
    positions: list[tuple[float, float]] = []
    for _ in range(count):
        positions.append((rng.random() * width, rng.random() * height))
    return positions


def circle_positions(
    count: int,
    radius: float,
    center_x: float,
    center_y: float,
) -> list[tuple[float, float]]:
    """Equal angular spacing around a circle, starting at angle 0."""
    if count == 0:
        return []
    step = 2 * math.pi / count
    return [
        (center_x + radius * math.cos(i * step), center_y + radius * math.sin(i * step))
        for i in range(count)
    ]


def all_pairs(count: int) -> Iterator[tuple[int, int]]:
    """Every unordered pair ``(i, j)`` with ``i < j``, outer index ascending."""
    for i in range(count):
        for j in range(i + 1, count):
            yield i, j


def sampled_pairs(
    count: int,
    probability: float,
    rng: random.Random,
) -> Iterator[tuple[int, int]]:
    """Pairs from :func:`all_pairs`, each kept independently with ``probability``."""
    for pair in all_pairs(count):
        if rng.random() < probability:
            yield pair
