"""
Tests for box absorption and scoring.
"""

import math
from collections import deque

import pytest

from box_game.core.boxes import Box, BoxKind, make_blue_box, make_box, make_green_box
from box_game.core.scoring import cantor_pairing, green_score


@pytest.fixture
def green_box():
    return make_green_box(0.0)


@pytest.fixture
def blue_box():
    return make_blue_box(0.2)


class TestScoringFormulas:
    """Test the pure scoring functions."""

    def test_cantor_pairing_reference_value(self):
        """pairing(0, 1) is 2."""
        assert cantor_pairing(0, 1) == 2

    def test_cantor_pairing_is_not_symmetric(self):
        assert cantor_pairing(1, 2) == 8
        assert cantor_pairing(2, 1) == 7

    def test_green_score_uses_last_three(self):
        assert green_score([100.0, 1.0, 2.0, 3.0]) == 4.0

    def test_green_score_short_history(self):
        assert green_score([3.0]) == 9.0
        assert green_score([1.0, 2.0]) == 2.25

    def test_green_score_accepts_deque(self):
        history = deque(float(i) for i in range(1000))
        assert green_score(history) == 998.0 ** 2


class TestGreenBox:
    """Test green (mean-square) boxes."""

    def test_fresh_box_scores_zero(self, green_box):
        assert green_box.score == 0.0
        assert green_box.kind is BoxKind.GREEN
        assert green_box.history == ()

    def test_absorption_sequence(self, green_box):
        """Scores for 1, 2, 3, 4 are 1, 2.25, 4, 9."""
        expected_scores = [1.0, 2.25, 4.0, 9.0]
        for token, expected in zip([1, 2, 3, 4], expected_scores):
            green_box.absorb(token)
            assert green_box.score == expected

    def test_first_token_scores_its_square(self):
        box = make_green_box(0.1)
        box.absorb(7)
        assert box.score == 49.0

    def test_window_tracks_recent_weights(self, green_box):
        for token in [5, 6, 7, 8]:
            green_box.absorb(token)
        assert green_box.window == (6.0, 7.0, 8.0)
        assert green_box.history == (5.0, 6.0, 7.0, 8.0)

    def test_absorb_returns_new_score(self, green_box):
        assert green_box.absorb(3) == 9.0

    def test_long_history_scores_only_recent_weights(self, green_box):
        tokens = [i % 7 for i in range(5000)]
        for token in tokens:
            green_box.absorb(token)

        assert green_box.absorbed_count == 5000
        assert green_box.window == tuple(float(t) for t in tokens[-3:])

        fresh = make_green_box(0.0)
        for token in tokens[-3:]:
            fresh.absorb(token)
        assert green_box.score == fresh.score


class TestBlueBox:
    """Test blue (range pairing) boxes."""

    def test_fresh_box_scores_zero(self):
        box = make_blue_box(0.0)
        assert box.score == 0.0
        assert box.kind is BoxKind.BLUE
        assert box.range_ends is None

    def test_absorption_sequence(self, blue_box):
        """Scores for 2, 1, 4, 3 are 12, 8, 19, 32."""
        expected_scores = [12, 8, 19, 32]
        for token, expected in zip([2, 1, 4, 3], expected_scores):
            blue_box.absorb(token)
            assert blue_box.score == expected

    def test_first_token_pairs_with_itself(self, blue_box):
        """pairing(t, t) = t(2t + 1) + t."""
        blue_box.absorb(5)
        assert blue_box.score == 60
        assert blue_box.range_ends == (5.0, 5.0)

    def test_outside_range_tokens_move_the_ends(self, blue_box):
        for token in [4, 2, 9, 1, 12]:
            blue_box.absorb(token)
        assert blue_box.range_ends == (1.0, 12.0)
        assert blue_box.score == cantor_pairing(1, 12)

    def test_in_range_token_on_short_record_goes_to_back(self, blue_box):
        blue_box.absorb(1)
        blue_box.absorb(5)
        blue_box.absorb(3)
        assert blue_box.range_ends == (1.0, 3.0)
        assert blue_box.score == cantor_pairing(1, 3)

    def test_in_range_token_on_long_record_keeps_ends(self, blue_box):
        for token in [1, 2, 8, 9]:
            blue_box.absorb(token)
        blue_box.absorb(5)
        assert blue_box.range_ends == (1.0, 9.0)
        assert blue_box.history == (1.0, 5.0, 2.0, 8.0, 9.0)

    def test_history_keeps_every_token(self, blue_box):
        tokens = [2, 1, 4, 3]
        for token in tokens:
            blue_box.absorb(token)
        assert sorted(blue_box.history) == sorted(float(t) for t in tokens)
        assert blue_box.history == (3.0, 1.0, 2.0, 4.0)


class TestBoxState:
    """Test behavior shared by both kinds."""

    @pytest.mark.parametrize("factory", [make_green_box, make_blue_box])
    def test_weight_accumulates_tokens(self, factory):
        """weight = initial weight + sum of absorbed tokens."""
        box = factory(0.3)
        expected = 0.3
        for token in [3, 0, 8, 1, 21]:
            box.absorb(token)
            expected += token
            assert box.weight == expected
        assert box.initial_weight == 0.3
        assert box.absorbed_count == 5

    @pytest.mark.parametrize("factory", [make_green_box, make_blue_box])
    def test_absorb_is_history_sensitive(self, factory):
        """Absorbing a value twice scores differently than once."""
        once = factory(0.0)
        once.absorb(4)

        twice = factory(0.0)
        twice.absorb(1)
        twice.absorb(4)

        assert once.score != twice.score

    def test_repeated_value_changes_green_score(self, green_box):
        green_box.absorb(2)
        green_box.absorb(8)
        first = green_box.score
        green_box.absorb(8)
        assert green_box.score != first

    @pytest.mark.parametrize("bad_token", [-1, -0.5, math.inf, math.nan])
    def test_rejects_invalid_tokens(self, green_box, bad_token):
        with pytest.raises(ValueError):
            green_box.absorb(bad_token)
        assert green_box.absorbed_count == 0
        assert green_box.weight == 0.0

    def test_kind_is_read_only(self, blue_box):
        with pytest.raises(AttributeError):
            blue_box.kind = BoxKind.GREEN
        assert blue_box.kind is BoxKind.BLUE

    def test_no_instance_attributes_can_be_added(self, blue_box):
        with pytest.raises(AttributeError):
            blue_box.box_type = BoxKind.GREEN

    def test_boxes_order_by_weight(self):
        light = make_blue_box(0.2)
        heavy = make_green_box(0.3)
        assert light < heavy
        assert min([heavy, light]) is light

    def test_make_box_dispatches_on_kind(self):
        assert make_box(BoxKind.GREEN, 1.0).kind is BoxKind.GREEN
        assert make_box(BoxKind.BLUE, 1.0).kind is BoxKind.BLUE
        assert BoxKind.from_name("Blue") is BoxKind.BLUE
        assert isinstance(make_box(BoxKind.GREEN, 0.0), Box)
