"""
Random Utilities

Uniform integer generation and in-place shuffling. Every function accepts an
optional random.Random instance so callers can seed the whole game.
"""

import random
from typing import Any, MutableSequence, Optional


def _source(rng: Optional[random.Random]):
    return rng if rng is not None else random


def random_int(minimum: int, maximum: int, rng: Optional[random.Random] = None) -> int:
    """
    Returns a uniformly distributed integer in [minimum, maximum] inclusive.

    Raises:
        ValueError: If minimum is greater than maximum
    """
    if minimum > maximum:
        raise ValueError(f"Invalid range: {minimum} > {maximum}")

    return _source(rng).randint(minimum, maximum)


def shuffle(sequence: MutableSequence[Any], rng: Optional[random.Random] = None) -> None:
    """
    Fisher-Yates shuffle in place.

    Walks from the last index down to 1, swapping each position with a
    uniformly chosen index at or below it.
    """
    for i in range(len(sequence) - 1, 0, -1):
        j = random_int(0, i, rng)
        sequence[i], sequence[j] = sequence[j], sequence[i]
