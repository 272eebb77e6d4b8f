from __future__ import annotations

import random
from typing import Iterable, List, Optional, Tuple

from .card import Card

MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 10
FILLER_VALUE = 1  # duplicated a third time when the grid has an odd cell count


def is_valid_grid_size(grid_size: object) -> bool:
    """True for an int (not bool) within [MIN_GRID_SIZE, MAX_GRID_SIZE]."""
    if isinstance(grid_size, bool) or not isinstance(grid_size, int):
        return False
    return MIN_GRID_SIZE <= grid_size <= MAX_GRID_SIZE


def pair_count(grid_size: int) -> int:
    return (grid_size * grid_size) // 2


def deal(values: Iterable[int]) -> Tuple[Card, ...]:
    """Assigns each value an id equal to its position in the sequence."""
    return tuple(Card(id=i, value=int(v)) for i, v in enumerate(values))


def generate(grid_size: int, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> Tuple[Card, ...]:
    """Creates a shuffled deck of matched pairs for a grid_size x grid_size grid."""
    if not is_valid_grid_size(grid_size):
        raise ValueError(f'grid size must be an integer in [{MIN_GRID_SIZE}, {MAX_GRID_SIZE}], got {grid_size!r}')
    if rng is None:
        rng = random.Random(seed)
    total = grid_size * grid_size
    pairs = pair_count(grid_size)
    values: List[int] = list(range(1, pairs + 1)) * 2
    if total % 2 != 0:
        values.append(FILLER_VALUE)
    rng.shuffle(values)
    return deal(values[:total])
