"""
Play From the Command Line
==========================

Plays a single game and prints the final scores.

Usage:
    python -m box_game.play_cli 1 1 2 3 5 8 13 21
    python -m box_game.play_cli --seed 42 --length 10 --turns
    python -m box_game.play_cli 1 1 2 3 --replay replays/fib4.json
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from box_game.core.config_loader import get_config, load_config
from box_game.core.game import CoreGame, format_scores
from box_game.core.replay_recorder import ReplayRecorder
from box_game.core.rng import generate_tokens


def _parse_token(text: str) -> int:
    """argparse type for a non-negative integer token weight."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"token weight must be an integer, got '{text}'")
    if value < 0:
        raise argparse.ArgumentTypeError(f"token weight must be non-negative, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play one box game")
    parser.add_argument(
        "tokens",
        type=_parse_token,
        nargs="*",
        help="Token weights in play order"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Generate the tokens from this seed instead"
    )
    parser.add_argument(
        "--length",
        type=int,
        default=None,
        help="Number of generated tokens (with --seed)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to game config YAML (uses default if not specified)"
    )
    parser.add_argument(
        "--turns",
        action="store_true",
        help="Print every turn"
    )
    parser.add_argument(
        "--replay",
        type=str,
        default=None,
        help="Save a replay JSON to this path"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.seed is not None and args.tokens:
        parser.error("give either token weights or --seed, not both")
    if args.length is not None and args.seed is None:
        parser.error("--length only applies with --seed")

    try:
        config = load_config(args.config) if args.config else get_config()
        if args.seed is not None:
            tokens: List[int] = generate_tokens(args.seed, args.length, config)
            print(f"Tokens (seed {args.seed}): {' '.join(str(t) for t in tokens)}")
        else:
            tokens = list(args.tokens)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    recorder = ReplayRecorder(CoreGame(config), seed=args.seed)
    result = recorder.run(tokens)

    if args.turns:
        for turn in result.turns:
            print(
                f"  [{turn.turn}] player {turn.player}: {turn.token_weight:g} -> "
                f"box {turn.box_index} ({turn.box_kind.value}) "
                f"+{turn.points:g} = {turn.player_total:g}"
            )

    print(format_scores(result))
    if result.winner is None:
        print("Result: draw")
    else:
        print(f"Winner: player {result.winner}")

    if args.replay:
        recorder.save(args.replay, verbose=True)

    return 0


if __name__ == "__main__":
    sys.exit(main())
