"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to the table
setup and token generation parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

# Kind names accepted in the boxes section
BOX_KIND_NAMES = ("green", "blue")

# The game is defined for exactly this many boxes of each kind
BOXES_PER_KIND = 2


@dataclass(frozen=True)
class BoxSlotConfig:
    """Kind and starting weight of one box slot."""
    kind: str              # "green" or "blue"
    initial_weight: float


@dataclass(frozen=True)
class PlayersConfig:
    """Player names in turn order (first name moves on even turns)."""
    names: Tuple[str, str]


@dataclass(frozen=True)
class TokenConfig:
    """Parameters for generated token sequences."""
    min_weight: int
    max_weight: int
    sequence_length: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable so a running game cannot alter its own setup.
    """
    boxes: Tuple[BoxSlotConfig, ...]
    players: PlayersConfig
    tokens: TokenConfig

    @property
    def num_boxes(self) -> int:
        """Number of boxes on the table."""
        return len(self.boxes)

    @property
    def initial_weights(self) -> Tuple[float, ...]:
        """Starting weights in construction order."""
        return tuple(slot.initial_weight for slot in self.boxes)

    def get_box(self, index: int) -> BoxSlotConfig:
        """Get box slot config by construction index."""
        if 0 <= index < len(self.boxes):
            return self.boxes[index]
        raise ValueError(f"Invalid box index: {index}")


def _parse_box(box_data: dict) -> BoxSlotConfig:
    """Parse a single box slot from YAML."""
    kind = str(box_data["kind"]).lower()
    if kind not in BOX_KIND_NAMES:
        raise ValueError(f"Box kind must be one of {BOX_KIND_NAMES}, got '{kind}'")
    return BoxSlotConfig(
        kind=kind,
        initial_weight=float(box_data["initial_weight"])
    )


def _parse_names(names_data: List) -> Tuple[str, str]:
    """Parse the player name pair from YAML."""
    if len(names_data) != 2:
        raise ValueError(f"Exactly 2 player names required, got {names_data}")
    return (str(names_data[0]), str(names_data[1]))


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    expected_boxes = BOXES_PER_KIND * len(BOX_KIND_NAMES)
    if config.num_boxes != expected_boxes:
        raise ValueError(
            f"Exactly {expected_boxes} boxes required, got {config.num_boxes}"
        )

    for kind in BOX_KIND_NAMES:
        count = sum(1 for slot in config.boxes if slot.kind == kind)
        if count != BOXES_PER_KIND:
            raise ValueError(
                f"Exactly {BOXES_PER_KIND} {kind} boxes required, got {count}"
            )

    weights = config.initial_weights
    if any(later < earlier for earlier, later in zip(weights, weights[1:])):
        raise ValueError(
            f"Boxes must be listed in ascending initial_weight order, got {weights}"
        )

    # Kinds follow weight slots: the lightest boxes are green
    green_weights = [s.initial_weight for s in config.boxes if s.kind == "green"]
    blue_weights = [s.initial_weight for s in config.boxes if s.kind == "blue"]
    if max(green_weights) >= min(blue_weights):
        raise ValueError(
            f"Green boxes must hold the lowest initial weights, got green "
            f"{green_weights} and blue {blue_weights}"
        )

    if any(w < 0 for w in config.initial_weights):
        raise ValueError(f"Initial weights must be non-negative, got {config.initial_weights}")

    names = config.players.names
    if names[0] == names[1]:
        raise ValueError(f"Player names must be distinct, got {names}")

    tokens = config.tokens
    if tokens.min_weight < 0:
        raise ValueError(f"tokens.min_weight must be non-negative, got {tokens.min_weight}")
    if tokens.max_weight < tokens.min_weight:
        raise ValueError(
            f"tokens.max_weight ({tokens.max_weight}) must be >= "
            f"tokens.min_weight ({tokens.min_weight})"
        )
    if tokens.sequence_length < 0:
        raise ValueError(
            f"tokens.sequence_length must be non-negative, got {tokens.sequence_length}"
        )


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    boxes = tuple(_parse_box(b) for b in raw["boxes"])

    players_data = raw.get("players", {})
    players = PlayersConfig(
        names=_parse_names(players_data.get("names", ["A", "B"]))
    )

    tokens_data = raw.get("tokens", {})
    tokens = TokenConfig(
        min_weight=int(tokens_data.get("min_weight", 0)),
        max_weight=int(tokens_data.get("max_weight", 21)),
        sequence_length=int(tokens_data.get("sequence_length", 8))
    )

    config = GameConfig(
        boxes=boxes,
        players=players,
        tokens=tokens
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
