"""
Boxes
=====

Stateful boxes that absorb token weights and emit a score after each
absorption. There are exactly two kinds, green and blue, which share all
state and differ only in how the score is computed.
"""

from __future__ import annotations

import math
from collections import deque
from enum import Enum
from typing import Deque, Optional, Tuple

from box_game.core.scoring import GREEN_WINDOW, blue_score, green_score


class BoxKind(Enum):
    """Scoring variant of a box, fixed when the box is created."""
    GREEN = "green"   # mean of recent weights, squared
    BLUE = "blue"     # pairing of the range record's ends

    @classmethod
    def from_name(cls, name: str) -> "BoxKind":
        """Look up a kind by its config name ("green" / "blue")."""
        return cls(name.lower())


class Box:
    """
    A box with a running weight, an absorption history and a score.

    Green boxes keep their history in arrival order and score the last
    GREEN_WINDOW entries.

    Blue boxes keep a range record and score its two ends:
    - a weight below the front is pushed on the front,
    - a weight above the back is pushed on the back,
    - any other weight is filed three places from the back, or on the back
      while the record holds fewer than three entries.

    So the front is the smallest weight and the back the largest until an
    in-range weight lands on an end, e.g. absorbing 2, 1, 4, 3 leaves the
    record as (3, 1, 2, 4) and scores 12, 8, 19, 32.

    Boxes compare by weight so that ``min(boxes)`` selects the lightest one.
    """

    __slots__ = ("_kind", "_initial_weight", "_weight", "_history", "_window", "_score")

    def __init__(self, kind: BoxKind, initial_weight: float):
        """
        Initialize box.

        Args:
            kind: Scoring variant. Cannot be changed afterwards.
            initial_weight: Starting weight.
        """
        self._kind = kind
        self._initial_weight = float(initial_weight)
        self._weight: float = float(initial_weight)
        self._history: Deque[float] = deque()
        self._window: Deque[float] = deque(maxlen=GREEN_WINDOW)
        self._score: float = 0.0

    def __repr__(self) -> str:
        return (
            f"Box({self._kind.value}, weight={self._weight:g}, "
            f"score={self._score:g}, absorbed={len(self._history)})"
        )

    def __lt__(self, other: "Box") -> bool:
        return self._weight < other._weight

    @property
    def kind(self) -> BoxKind:
        """Scoring variant."""
        return self._kind

    @property
    def initial_weight(self) -> float:
        """Weight the box was created with."""
        return self._initial_weight

    @property
    def weight(self) -> float:
        """Current total weight (initial weight plus every absorbed token)."""
        return self._weight

    @property
    def score(self) -> float:
        """Score after the most recent absorption, 0.0 before any."""
        return self._score

    @property
    def history(self) -> Tuple[float, ...]:
        """Absorbed weights (see class docstring for ordering)."""
        return tuple(self._history)

    @property
    def absorbed_count(self) -> int:
        """Number of tokens absorbed so far."""
        return len(self._history)

    @property
    def window(self) -> Tuple[float, ...]:
        """Weights a green box currently averages over."""
        return tuple(self._window)

    @property
    def range_ends(self) -> Optional[Tuple[float, float]]:
        """(front, back) of the record a blue box scores on, None if empty."""
        if not self._history:
            return None
        return (self._history[0], self._history[-1])

    def absorb(self, token_weight: float) -> float:
        """
        Absorb a token weight and recompute the score.

        Args:
            token_weight: Non-negative, finite weight.

        Returns:
            The new score.

        Raises:
            ValueError: If the weight is negative or not finite.
        """
        value = float(token_weight)
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Token weight must be a non-negative finite number, got {token_weight}")

        if self._kind is BoxKind.GREEN:
            self._history.append(value)
            self._window.append(value)
            self._score = green_score(self._window)
        else:
            self._file_in_range_record(value)
            self._score = blue_score(self._history[0], self._history[-1])

        self._weight += value
        return self._score

    def _file_in_range_record(self, value: float) -> None:
        """Place value in the blue range record."""
        history = self._history
        if not history:
            history.append(value)
        elif value < history[0]:
            history.appendleft(value)
        elif value > history[-1]:
            history.append(value)
        elif len(history) < 3:
            history.append(value)
        else:
            history.insert(len(history) - 3, value)


def make_green_box(initial_weight: float) -> Box:
    """Create a green (mean-square) box."""
    return Box(BoxKind.GREEN, initial_weight)


def make_blue_box(initial_weight: float) -> Box:
    """Create a blue (range pairing) box."""
    return Box(BoxKind.BLUE, initial_weight)


def make_box(kind: BoxKind, initial_weight: float) -> Box:
    """Create a box of the given kind."""
    if kind is BoxKind.GREEN:
        return make_green_box(initial_weight)
    return make_blue_box(initial_weight)
