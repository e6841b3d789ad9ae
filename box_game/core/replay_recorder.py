"""
Replay Recorder
===============

Records a game's turns to JSON so it can be inspected or re-checked later.

Usage:
    from box_game.core import ReplayRecorder

    recorder = ReplayRecorder(seed=42)
    recorder.run([1, 1, 2, 3])
    recorder.save("my_replay.json")

A saved replay can be re-checked with verify_replay(load_replay(path)).
"""

from __future__ import annotations

import hashlib
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from box_game.core.config_loader import GameConfig, get_config
from box_game.core.game import CoreGame, GameResult, StepResult


def generate_replay_filename(
    name: str = "replay",
    seed: Optional[int] = None,
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped replay filename.

    Format: {name}_{YYYYMMDD_HHMMSS}_s{seed}.json

    Args:
        name: Prefix for the file.
        seed: Token seed (optional, included if provided).
        directory: Directory for the file. Defaults to current directory.

    Returns:
        Path object for the replay file.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if seed is not None:
        filename = f"{name}_{timestamp}_s{seed}.json"
    else:
        filename = f"{name}_{timestamp}.json"

    if directory:
        return Path(directory) / filename
    return Path(filename)


def compute_config_hash(config: Optional[GameConfig] = None) -> str:
    """Short hash of the table setup, used to match replays to configs."""
    if config is None:
        config = get_config()
    hash_data = {
        "boxes": [
            {"kind": slot.kind, "initial_weight": slot.initial_weight}
            for slot in config.boxes
        ],
        "players": list(config.players.names),
    }
    return hashlib.md5(json.dumps(hash_data, sort_keys=True).encode()).hexdigest()[:8]


class ReplayRecorder:
    """
    Wrapper that records every turn of a CoreGame.

    Attributes:
        game: The wrapped game.
        seed: Token seed, stored in the replay metadata (None for explicit tokens).
    """

    def __init__(
        self,
        game: Optional[CoreGame] = None,
        seed: Optional[int] = None,
        name: str = "replay"
    ):
        """
        Initialize the replay recorder.

        Args:
            game: The game to wrap. A new CoreGame with default config if None.
            seed: Token seed, for the metadata only.
            name: Replay name (used for auto-generated filenames).
        """
        self.game = game if game is not None else CoreGame()
        self.seed = seed
        self.name = name
        self._tokens: List[float] = []
        self._config_hash = compute_config_hash(self.game.config)

    def reset(self, seed: Optional[int] = None) -> None:
        """Start a new game and clear the recording."""
        self.game.reset()
        self._tokens = []
        if seed is not None:
            self.seed = seed

    def step(self, token_weight: float) -> StepResult:
        """Play one token and record it."""
        result = self.game.step(token_weight)
        self._tokens.append(float(token_weight))
        return result

    def run(self, token_weights: Iterable[float]) -> GameResult:
        """Play and record every token."""
        for token_weight in token_weights:
            self.step(token_weight)
        return self.game.result()

    def get_replay_data(self) -> Dict[str, Any]:
        """
        Get the current replay data as a dictionary.

        Returns:
            Dictionary containing all replay data.
        """
        result = self.game.result()
        return {
            "name": self.name,
            "seed": self.seed,
            "config_hash": self._config_hash,
            "players": list(result.player_names),
            "tokens": list(self._tokens),
            "turns": [t.to_dict() for t in result.turns],
            "final_scores": list(result.scores),
            "winner": result.winner,
            "total_turns": len(result.turns),
        }

    def save(
        self,
        path: Optional[Union[str, Path]] = None,
        overwrite: bool = True,
        directory: Optional[Union[str, Path]] = None,
        verbose: bool = False
    ) -> Path:
        """
        Save the replay to a JSON file.

        Args:
            path: Path to save the replay. If None, auto-generates a timestamped name.
            overwrite: If True, overwrite existing file.
            directory: Directory for auto-generated filename (only used if path is None).
            verbose: Print a short summary after saving.

        Returns:
            Path where the replay was saved.
        """
        if path is None:
            path = generate_replay_filename(
                name=self.name,
                seed=self.seed,
                directory=directory
            )
        else:
            path = Path(path)

        if path.exists() and not overwrite:
            raise FileExistsError(f"Replay file already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)

        replay_data = self.get_replay_data()

        with open(path, "w") as f:
            json.dump(replay_data, f, indent=2)

        if verbose:
            print(f"Replay saved: {path}")
            print(f"  Seed: {self.seed}")
            print(f"  Turns: {replay_data['total_turns']}")
            print(f"  Final scores: {replay_data['final_scores']}")

        return path


def load_replay(path: Union[str, Path]) -> Dict[str, Any]:
    """Load replay data saved by ReplayRecorder.save()."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Replay file not found: {path}")
    with open(path, "r") as f:
        return json.load(f)


def verify_replay(
    replay_data: Dict[str, Any],
    config: Optional[GameConfig] = None
) -> bool:
    """
    Replay the recorded tokens and compare against the recorded scores.

    Args:
        replay_data: Data from get_replay_data() or load_replay().
        config: Game configuration. Uses default if None.

    Returns:
        True if every turn and the final scores match.

    Raises:
        ValueError: If the replay was recorded with a different table setup.
    """
    if config is None:
        config = get_config()

    expected_hash = compute_config_hash(config)
    if replay_data.get("config_hash") != expected_hash:
        raise ValueError(
            f"Replay config hash {replay_data.get('config_hash')} does not match "
            f"current config {expected_hash}"
        )

    result = CoreGame(config).run(replay_data["tokens"])
    replayed_turns = [t.to_dict() for t in result.turns]
    return (
        replayed_turns == replay_data["turns"]
        and list(result.scores) == list(replay_data["final_scores"])
    )
