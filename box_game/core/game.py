"""
Core Game
=========

Main game orchestrator combining boxes, players and turn order.

Player A moves on even turns and player B on odd turns. Every turn
consumes exactly one token.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from box_game.core.boxes import Box, BoxKind, make_box
from box_game.core.config_loader import GameConfig, get_config
from box_game.core.player import Player, TurnRecord


@dataclass
class StepResult:
    """Result of a single turn."""
    turn: TurnRecord
    score_a: float
    score_b: float


@dataclass
class GameSnapshot:
    """
    Box and player state at one point in a game.

    Box arrays are in construction order.
    """
    turns_played: int
    box_weights: np.ndarray       # (num_boxes,) float64
    box_scores: np.ndarray        # (num_boxes,) float64
    box_is_blue: np.ndarray       # (num_boxes,) bool
    box_absorbed: np.ndarray      # (num_boxes,) int32
    player_scores: np.ndarray     # (2,) float64, A then B
    next_player: str

    @property
    def lightest_box(self) -> int:
        """Index of the box the next turn will use."""
        # np.argmin returns the first minimum, matching turn selection
        return int(np.argmin(self.box_weights))


@dataclass
class GameResult:
    """Outcome of a finished game."""
    player_names: Tuple[str, str]
    score_a: float
    score_b: float
    turns: List[TurnRecord] = field(default_factory=list)

    @property
    def scores(self) -> Tuple[float, float]:
        """(player A score, player B score)."""
        return (self.score_a, self.score_b)

    @property
    def winner(self) -> Optional[str]:
        """Name of the higher-scoring player, or None on a draw."""
        if self.score_a > self.score_b:
            return self.player_names[0]
        if self.score_b > self.score_a:
            return self.player_names[1]
        return None

    @property
    def margin(self) -> float:
        """Absolute score difference."""
        return abs(self.score_a - self.score_b)


class CoreGame:
    """
    Main game simulation class.

    Owns the boxes and both players for one game. reset() discards them and
    builds fresh ones, so nothing carries over between games.

    One step = one token played by the player whose turn it is.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._boxes: Tuple[Box, ...]
        self._players: Tuple[Player, Player]
        self._turns: List[TurnRecord]
        self.reset()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def boxes(self) -> Tuple[Box, ...]:
        """Boxes in construction order."""
        return self._boxes

    @property
    def players(self) -> Tuple[Player, Player]:
        """(player A, player B)."""
        return self._players

    @property
    def turns_played(self) -> int:
        """Number of tokens consumed so far."""
        return len(self._turns)

    @property
    def current_player(self) -> Player:
        """Player who takes the next turn."""
        return self._players[len(self._turns) % 2]

    @property
    def scores(self) -> Tuple[float, float]:
        """(player A score, player B score)."""
        return (self._players[0].score, self._players[1].score)

    @property
    def turns(self) -> List[TurnRecord]:
        """Turn records so far (copy)."""
        return list(self._turns)

    def reset(self) -> GameSnapshot:
        """
        Start a new game with fresh boxes and players.

        Returns:
            Initial game snapshot.
        """
        self._boxes = tuple(
            make_box(BoxKind.from_name(slot.kind), slot.initial_weight)
            for slot in self._config.boxes
        )
        name_a, name_b = self._config.players.names
        self._players = (Player(name_a), Player(name_b))
        self._turns = []
        return self.snapshot()

    def step(self, token_weight: float) -> StepResult:
        """
        Play one token.

        Args:
            token_weight: Non-negative token weight.

        Returns:
            StepResult with the turn record and both running scores.
        """
        turn_index = len(self._turns)
        player = self.current_player
        record = player.take_turn(token_weight, self._boxes, turn=turn_index)
        self._turns.append(record)

        score_a, score_b = self.scores
        return StepResult(turn=record, score_a=score_a, score_b=score_b)

    def run(self, token_weights: Iterable[float]) -> GameResult:
        """
        Play every token in order and return the result.

        Continues from the current state; call reset() first for a new game.
        """
        for token_weight in token_weights:
            self.step(token_weight)
        return self.result()

    def result(self) -> GameResult:
        """Current scores and turn history as a GameResult."""
        score_a, score_b = self.scores
        return GameResult(
            player_names=self._config.players.names,
            score_a=score_a,
            score_b=score_b,
            turns=list(self._turns)
        )

    def snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return GameSnapshot(
            turns_played=len(self._turns),
            box_weights=np.array([b.weight for b in self._boxes], dtype=np.float64),
            box_scores=np.array([b.score for b in self._boxes], dtype=np.float64),
            box_is_blue=np.array([b.kind is BoxKind.BLUE for b in self._boxes], dtype=bool),
            box_absorbed=np.array([b.absorbed_count for b in self._boxes], dtype=np.int32),
            player_scores=np.array(self.scores, dtype=np.float64),
            next_player=self.current_player.name
        )

    def get_info(self) -> Dict[str, object]:
        """Summary dict for reporting."""
        score_a, score_b = self.scores
        return {
            "turns_played": len(self._turns),
            "score_a": score_a,
            "score_b": score_b,
            "box_weights": [b.weight for b in self._boxes],
            "box_scores": [b.score for b in self._boxes],
        }


def play_game(
    token_weights: Iterable[float],
    config: Optional[GameConfig] = None
) -> GameResult:
    """
    Play a complete game on a fresh table.

    Args:
        token_weights: Token weights in play order.
        config: Game configuration. Uses default if None.

    Returns:
        GameResult with final scores and the turn history.
    """
    return CoreGame(config).run(token_weights)


def play(
    token_weights: Iterable[float],
    config: Optional[GameConfig] = None
) -> Tuple[float, float]:
    """
    Play a complete game and return (player A score, player B score).

    An empty token sequence scores (0.0, 0.0).
    """
    return play_game(token_weights, config).scores


def format_scores(result: Union[GameResult, Tuple[float, float]]) -> str:
    """Report line, e.g. 'Scores: player A 13, player B 25'."""
    if isinstance(result, GameResult):
        name_a, name_b = result.player_names
        score_a, score_b = result.scores
    else:
        name_a, name_b = "A", "B"
        score_a, score_b = result
    return f"Scores: player {name_a} {score_a:g}, player {name_b} {score_b:g}"
