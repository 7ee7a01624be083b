"""Small helpers."""

from __future__ import annotations

import random


def random_pick(low: int, high: int, rng: random.Random | None = None) -> int:
    """Return a random integer n with low <= n < high.

    Raises ValueError when the range is empty.
    """
    source = rng if rng is not None else random
    return low + source.randrange(high - low)