"""
Scoring Rules
=============

The two box scoring formulas.

- Green: square of the mean of the most recent (up to) three absorbed weights.
- Blue: Cantor's pairing function of the smallest and largest absorbed weight.
"""

from __future__ import annotations

from itertools import islice
from typing import Sequence

# Number of most recent weights a green box averages over
GREEN_WINDOW = 3


def cantor_pairing(a: float, b: float) -> float:
    """
    Cantor's pairing function, pairing(a, b) = (a + b)(a + b + 1) / 2 + b.

    pairing(0, 1) == 2.
    """
    total = a + b
    return (total * (total + 1)) / 2 + b


def green_score(history: Sequence[float]) -> float:
    """
    Square of the mean of the last GREEN_WINDOW values of history.

    Uses every value when fewer than GREEN_WINDOW have been absorbed.

    Args:
        history: Absorbed weights in arrival order. Must not be empty.

    Returns:
        The green box score.
    """
    # Last GREEN_WINDOW values, oldest first
    window = list(islice(reversed(history), GREEN_WINDOW))[::-1]
    mean = sum(window) / len(window)
    return mean ** 2


def blue_score(low: float, high: float) -> float:
    """Cantor pairing of the smallest and largest absorbed weight."""
    return cantor_pairing(low, high)
