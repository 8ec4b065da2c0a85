"""
Evaluation Module

The outcome model shared by boards and the search.

Data Flow:
    board.static_score() → Score (Lose | Heuristic(v) | Win)
    search               → TimedScore (Score + plies until reached)
"""

from minimax_engine.evaluation.score import (
    BASELINE,
    LOSE,
    WIN,
    Score,
    Tier,
    TimedScore,
)

__all__ = ['Score', 'TimedScore', 'Tier', 'LOSE', 'WIN', 'BASELINE']
