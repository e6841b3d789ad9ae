"""
Evaluation Package
==================

Contains the seed bank and the harness that plays one generated game per
seed and summarizes the results.
"""

from box_game.evaluation.run_eval import evaluate_seeds, load_seed_bank

__all__ = ["evaluate_seeds", "load_seed_bank"]
