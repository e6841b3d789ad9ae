"""
Evaluation Harness
==================

Plays one generated game per seed from the seed bank and summarizes the
scores of both players.

Usage:
    python -m box_game.evaluation.run_eval [--length N] [--output results.json]
"""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from box_game.core.config_loader import GameConfig, get_config, load_config
from box_game.core.game import play_game
from box_game.core.rng import generate_tokens


@dataclass
class EvalResult:
    """Result for a single seed."""
    seed: int
    tokens: List[int]
    score_a: float
    score_b: float
    winner: Optional[str]


@dataclass
class EvalSummary:
    """Summary of evaluation across all seeds."""
    mean_score_a: float
    mean_score_b: float
    std_score_a: float
    std_score_b: float
    median_score_a: float
    median_score_b: float
    wins_a: int
    wins_b: int
    draws: int
    total_time: float
    results: List[EvalResult]

    @property
    def games(self) -> int:
        """Number of games played."""
        return len(self.results)


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """
    Load the evaluation seed bank.

    Args:
        path: Path to seed_bank.json. Uses default if None.

    Returns:
        List of seeds.
    """
    if path is None:
        path = os.path.join(os.path.dirname(__file__), "seed_bank.json")

    with open(path, "r") as f:
        data = json.load(f)

    return [int(s) for s in data["seeds"]]


def evaluate_single_seed(
    seed: int,
    length: Optional[int] = None,
    config: Optional[GameConfig] = None,
    verbose: bool = False
) -> EvalResult:
    """
    Play the generated game for one seed.

    Args:
        seed: Token seed.
        length: Tokens per game. Uses tokens.sequence_length if None.
        config: Game configuration. Uses default if None.
        verbose: If True, print the result.

    Returns:
        EvalResult for this seed.
    """
    if config is None:
        config = get_config()

    tokens = generate_tokens(seed, length, config)
    game_result = play_game(tokens, config)

    result = EvalResult(
        seed=seed,
        tokens=tokens,
        score_a=game_result.score_a,
        score_b=game_result.score_b,
        winner=game_result.winner
    )

    if verbose:
        print(f"  Seed {seed}: A={result.score_a:g}, B={result.score_b:g}, "
              f"winner={result.winner or 'draw'}")

    return result


def evaluate_seeds(
    seeds: Optional[Sequence[int]] = None,
    length: Optional[int] = None,
    config: Optional[GameConfig] = None,
    verbose: bool = True
) -> EvalSummary:
    """
    Evaluate every seed in the seed bank.

    Args:
        seeds: List of seeds. Uses seed_bank.json if None.
        length: Tokens per game. Uses tokens.sequence_length if None.
        config: Game configuration. Uses default if None.
        verbose: If True, print progress.

    Returns:
        EvalSummary with aggregate statistics.

    Raises:
        ValueError: If no seeds are given.
    """
    if seeds is None:
        seeds = load_seed_bank()
    if len(seeds) == 0:
        raise ValueError("At least one seed is required")

    if config is None:
        config = get_config()

    if verbose:
        print(f"Evaluating on {len(seeds)} seeds...")

    results: List[EvalResult] = []
    total_start = time.time()

    for seed in seeds:
        results.append(evaluate_single_seed(seed, length, config, verbose=verbose))

    total_time = time.time() - total_start

    scores_a = np.array([r.score_a for r in results], dtype=np.float64)
    scores_b = np.array([r.score_b for r in results], dtype=np.float64)
    name_a, name_b = config.players.names

    summary = EvalSummary(
        mean_score_a=float(np.mean(scores_a)),
        mean_score_b=float(np.mean(scores_b)),
        std_score_a=float(np.std(scores_a)),
        std_score_b=float(np.std(scores_b)),
        median_score_a=float(np.median(scores_a)),
        median_score_b=float(np.median(scores_b)),
        wins_a=sum(1 for r in results if r.winner == name_a),
        wins_b=sum(1 for r in results if r.winner == name_b),
        draws=sum(1 for r in results if r.winner is None),
        total_time=total_time,
        results=results
    )

    if verbose:
        print()
        print("=" * 50)
        print("EVALUATION SUMMARY")
        print("=" * 50)
        print(f"Seeds evaluated: {len(seeds)}")
        print(f"Mean score:      {name_a}={summary.mean_score_a:.2f}  {name_b}={summary.mean_score_b:.2f}")
        print(f"Std deviation:   {name_a}={summary.std_score_a:.2f}  {name_b}={summary.std_score_b:.2f}")
        print(f"Median score:    {name_a}={summary.median_score_a:.2f}  {name_b}={summary.median_score_b:.2f}")
        print(f"Wins:            {name_a}={summary.wins_a}  {name_b}={summary.wins_b}  draws={summary.draws}")
        print(f"Total time:      {total_time:.2f}s")
        print("=" * 50)

    return summary


def save_results(summary: EvalSummary, output_path: str, verbose: bool = True) -> None:
    """Save evaluation results to JSON."""
    data = {
        "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        "games": summary.games,
        "mean_score_a": summary.mean_score_a,
        "mean_score_b": summary.mean_score_b,
        "std_score_a": summary.std_score_a,
        "std_score_b": summary.std_score_b,
        "median_score_a": summary.median_score_a,
        "median_score_b": summary.median_score_b,
        "wins_a": summary.wins_a,
        "wins_b": summary.wins_b,
        "draws": summary.draws,
        "total_time": summary.total_time,
        "results": [
            {
                "seed": r.seed,
                "tokens": r.tokens,
                "score_a": r.score_a,
                "score_b": r.score_b,
                "winner": r.winner
            }
            for r in summary.results
        ]
    }

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    if verbose:
        print(f"Results saved to {output_path}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate box game outcomes over a seed bank")
    parser.add_argument(
        "--seeds",
        type=str,
        default=None,
        help="Path to seed bank JSON (uses default if not specified)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to game config YAML (uses default if not specified)"
    )
    parser.add_argument(
        "--length",
        type=int,
        default=None,
        help="Tokens per game (uses config tokens.sequence_length if not specified)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path to save results JSON"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce output verbosity"
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_config()
        seeds = load_seed_bank(args.seeds) if args.seeds else None
        summary = evaluate_seeds(
            seeds=seeds,
            length=args.length,
            config=config,
            verbose=not args.quiet
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if args.output:
        save_results(summary, args.output, verbose=not args.quiet)

    return 0


if __name__ == "__main__":
    sys.exit(main())
