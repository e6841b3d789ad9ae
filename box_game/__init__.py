"""
Box Game
========

A two-player game over four scoring boxes. Players take turns feeding the
next token weight to the currently lightest box and collect the score it
emits:

- Green boxes score the square of the mean of their last three weights.
- Blue boxes score Cantor's pairing of the ends of their range record.

The player with the higher total after the last token wins.
"""

from box_game.core.game import format_scores, play, play_game

__all__ = ["play", "play_game", "format_scores"]
