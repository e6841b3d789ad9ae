"""
RNG - Token Queue
=================

Deterministic, seeded token sequences for evaluation runs and the CLI.
"""

from __future__ import annotations

import random
from typing import List, Optional

from box_game.core.config_loader import GameConfig, get_config


class TokenQueue:
    """
    Seeded stream of integer token weights.

    Weights are drawn uniformly from [min_weight, max_weight] of the token
    config. The same seed always yields the same stream.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize token queue.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. If None, a seed is drawn
                once so reset() still replays the same stream.
        """
        if config is None:
            config = get_config()

        if seed is None:
            seed = random.randrange(2 ** 32)

        self._config = config
        self._seed: int = seed
        self._rng = random.Random(seed)
        self._low = config.tokens.min_weight
        self._high = config.tokens.max_weight

        # Drawn but not yet consumed (filled by peek)
        self._buffer: List[int] = []
        self._drawn: int = 0

    @property
    def seed(self) -> int:
        """Seed the queue was last (re)started with."""
        return self._seed

    @property
    def drawn(self) -> int:
        """Number of tokens consumed so far."""
        return self._drawn

    def _draw(self) -> int:
        return self._rng.randint(self._low, self._high)

    def advance(self) -> int:
        """
        Consume and return the next token weight.
        """
        if self._buffer:
            token = self._buffer.pop(0)
        else:
            token = self._draw()
        self._drawn += 1
        return token

    def peek(self, count: int = 1) -> List[int]:
        """
        Look at upcoming token weights without consuming them.

        Args:
            count: Number of upcoming tokens.

        Returns:
            List of the next `count` token weights.
        """
        while len(self._buffer) < count:
            self._buffer.append(self._draw())
        return self._buffer[:count]

    def take(self, count: Optional[int] = None) -> List[int]:
        """
        Consume several tokens.

        Args:
            count: Number of tokens. Uses tokens.sequence_length if None.
        """
        if count is None:
            count = self._config.tokens.sequence_length
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return [self.advance() for _ in range(count)]

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restart the stream.

        Args:
            seed: New random seed. Keeps current if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)
        self._buffer = []
        self._drawn = 0


def generate_tokens(
    seed: int,
    length: Optional[int] = None,
    config: Optional[GameConfig] = None
) -> List[int]:
    """Token sequence for a seed (convenience wrapper around TokenQueue)."""
    return TokenQueue(config, seed).take(length)
