"""
Unit Tests for the Outcome Model

Tests for Score and TimedScore, focusing on:
    - Total order of the three tiers
    - Negation
    - Asymmetric turn tie-break around the baseline
"""

import itertools

import pytest

from minimax_engine.board import Team
from minimax_engine.evaluation import BASELINE, LOSE, WIN, Score, Tier, TimedScore


class TestScore:
    """Tests for Score ordering and arithmetic."""

    def test_tier_order(self):
        assert LOSE < Score.heuristic(0) < WIN
        assert LOSE < WIN
        assert Score.heuristic(-10**9) > LOSE, "Lose is below every heuristic"
        assert Score.heuristic(10**9) < WIN, "Win is above every heuristic"

    def test_heuristic_order_follows_value(self):
        assert Score.heuristic(100) > Score.heuristic(0)
        assert Score.heuristic(0) > Score.heuristic(-100)
        assert Score.heuristic(3) == Score.heuristic(3)

    def test_totality(self):
        """Exactly one of <, ==, > holds for every pair."""
        scores = [LOSE, WIN] + [Score.heuristic(v) for v in (-5, 0, 5)]

        for a, b in itertools.product(scores, repeat=2):
            outcomes = [a < b, a == b, a > b]
            assert outcomes.count(True) == 1, f"{a} vs {b}: {outcomes}"

    def test_negation(self):
        assert -WIN == LOSE
        assert -LOSE == WIN
        assert -Score.heuristic(7) == Score.heuristic(-7)
        assert -BASELINE == BASELINE

    def test_decisive(self):
        assert WIN.is_decisive()
        assert LOSE.is_decisive()
        assert not Score.heuristic(42).is_decisive()

    def test_value_on_decisive_score_rejected(self):
        with pytest.raises(ValueError):
            Score(Tier.WIN, 3)

    def test_hashable(self):
        assert len({Score.heuristic(1), Score.heuristic(1), WIN, Score.win()}) == 2

    def test_repr(self):
        assert repr(Score.heuristic(-3)) == "Heuristic(-3)"
        assert repr(WIN) == "Win"
        assert repr(LOSE) == "Lose"


class TestTimedScore:
    """Tests for the turn-count tie-break."""

    def test_score_dominates_turns(self):
        assert TimedScore(WIN, 50) > TimedScore(Score.heuristic(10**6), 0)
        assert TimedScore(Score.heuristic(1), 0) > TimedScore(Score.heuristic(0), 99)

    def test_faster_win_preferred(self):
        assert TimedScore(WIN, 1) > TimedScore(WIN, 3)
        assert TimedScore(Score.heuristic(5), 2) > TimedScore(Score.heuristic(5), 4)

    def test_slower_loss_preferred(self):
        assert TimedScore(LOSE, 5) > TimedScore(LOSE, 2)
        assert TimedScore(Score.heuristic(-5), 4) > TimedScore(Score.heuristic(-5), 2)

    def test_baseline_ignores_turns(self):
        a = TimedScore(BASELINE, 1)
        b = TimedScore(BASELINE, 6)

        assert a.compare(b) == 0
        assert not a < b and not a > b
        assert a <= b and a >= b
        assert a != b, "Equality stays structural"

    def test_later_adds_one_ply(self):
        assert TimedScore(WIN, 2).later() == TimedScore(WIN, 3)

    def test_team_flip(self):
        assert Team.ALLY.other_team() is Team.ENEMY
        assert Team.ENEMY.other_team() is Team.ALLY
