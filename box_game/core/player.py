"""
Players
=======

A player owns a running score and, on each turn, feeds one token to the
currently lightest box.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from box_game.core.boxes import Box, BoxKind


@dataclass(frozen=True)
class TurnRecord:
    """Record of a single turn."""
    turn: int             # 0-based turn index within the game
    player: str
    token_weight: float
    box_index: int        # construction index of the box that absorbed the token
    box_kind: BoxKind
    points: float         # box score credited to the player
    player_total: float   # player's score after this turn

    def __repr__(self) -> str:
        return (
            f"TurnRecord(#{self.turn} {self.player}: {self.token_weight:g} -> "
            f"box {self.box_index} ({self.box_kind.value}), +{self.points:g})"
        )

    def to_dict(self) -> dict:
        """JSON-friendly representation."""
        return {
            "turn": self.turn,
            "player": self.player,
            "token_weight": self.token_weight,
            "box_index": self.box_index,
            "box_kind": self.box_kind.value,
            "points": self.points,
            "player_total": self.player_total,
        }


def select_box(boxes: Sequence[Box]) -> int:
    """
    Index of the box with the smallest weight.

    Ties go to the earliest box in the sequence.

    Raises:
        ValueError: If boxes is empty.
    """
    if not boxes:
        raise ValueError("Cannot select from an empty box collection")
    best = 0
    for i in range(1, len(boxes)):
        if boxes[i] < boxes[best]:
            best = i
    return best


class Player:
    """
    One of the two players.

    The score only changes through take_turn.
    """

    def __init__(self, name: str):
        """
        Initialize player.

        Args:
            name: Display name, e.g. "A".
        """
        self._name = name
        self._score: float = 0.0
        self._turns_taken: int = 0

    def __repr__(self) -> str:
        return f"Player({self._name}, score={self._score:g})"

    @property
    def name(self) -> str:
        """Display name."""
        return self._name

    @property
    def score(self) -> float:
        """Sum of all box scores credited on this player's turns."""
        return self._score

    @property
    def turns_taken(self) -> int:
        """Number of turns this player has played."""
        return self._turns_taken

    def take_turn(self, token_weight: float, boxes: Sequence[Box], turn: int = 0) -> TurnRecord:
        """
        Let the lightest box absorb a token and collect its new score.

        Args:
            token_weight: Weight of the token to play.
            boxes: All boxes in construction order.
            turn: Turn index, stored in the returned record.

        Returns:
            TurnRecord describing the turn.
        """
        index = select_box(boxes)
        box = boxes[index]
        box.absorb(token_weight)
        points = box.score
        self._score += points
        self._turns_taken += 1
        return TurnRecord(
            turn=turn,
            player=self._name,
            token_weight=float(token_weight),
            box_index=index,
            box_kind=box.kind,
            points=points,
            player_total=self._score
        )
