"""
Box Game Core - boxes, players and the turn loop.

Main exports:
- play: Play a token sequence, returning (player A score, player B score)
- CoreGame: Turn-by-turn game simulation
- Box / BoxKind: Green and blue scoring boxes
- Player: Running score holder
- GameConfig: Configuration loaded from game_config.yaml
"""

from box_game.core.config_loader import GameConfig, load_config
from box_game.core.boxes import Box, BoxKind, make_blue_box, make_green_box
from box_game.core.player import Player, TurnRecord, select_box
from box_game.core.game import (
    CoreGame,
    GameResult,
    GameSnapshot,
    format_scores,
    play,
    play_game,
)
from box_game.core.rng import TokenQueue, generate_tokens
from box_game.core.replay_recorder import (
    ReplayRecorder,
    generate_replay_filename,
    load_replay,
    verify_replay,
)

__all__ = [
    "GameConfig",
    "load_config",
    "Box",
    "BoxKind",
    "make_green_box",
    "make_blue_box",
    "Player",
    "TurnRecord",
    "select_box",
    "CoreGame",
    "GameResult",
    "GameSnapshot",
    "format_scores",
    "play",
    "play_game",
    "TokenQueue",
    "generate_tokens",
    "ReplayRecorder",
    "generate_replay_filename",
    "load_replay",
    "verify_replay",
]
