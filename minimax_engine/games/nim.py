"""
Normal-Play Nim

Heaps of tokens; a move removes one or more tokens from a single heap. The
player who cannot move (all heaps empty) loses, which is exactly the engine's
fail state, so Nim needs no special terminal handling.

Nim is solved: the side to move loses under perfect play iff the XOR of the
heap sizes (the nim-sum) is zero. That makes it a convenient reference game
for checking the search against a known answer.

Board Representation:
    heaps: 1-D int64 array of heap sizes
    to_move: Team whose turn it is
"""

from typing import List, NamedTuple, Sequence

import numpy as np

from minimax_engine.board.base import Team
from minimax_engine.evaluation.score import Score


class NimMove(NamedTuple):
    heap: int
    take: int

    def __str__(self) -> str:
        return f"{self.take}@{self.heap}"


class NimBoard:
    """
    Nim position implementing the Board capability.

    Equal heaps with the same side to move are equal positions.
    """

    def __init__(self, heaps: Sequence[int], to_move: Team = Team.ALLY):
        self.heaps = np.array(heaps, dtype=np.int64)
        if self.heaps.ndim != 1:
            raise ValueError(f"heaps must be one-dimensional, got shape {self.heaps.shape}")
        if (self.heaps < 0).any():
            raise ValueError(f"heap sizes must be non-negative, got {self.heaps.tolist()}")
        self.to_move = to_move

    def copy(self) -> "NimBoard":
        board = NimBoard.__new__(NimBoard)
        board.heaps = self.heaps.copy()
        board.to_move = self.to_move
        return board

    def nim_sum(self) -> int:
        return int(np.bitwise_xor.reduce(self.heaps)) if self.heaps.size else 0

    def generate_moves(self, team: Team) -> List[NimMove]:
        """
        All moves for `team`. Larger takes come first, which tends to reach
        the empty position, and with it cutoffs, sooner.
        """
        if team is not self.to_move:
            return []
        return [
            NimMove(heap, take)
            for heap in np.flatnonzero(self.heaps).tolist()
            for take in range(int(self.heaps[heap]), 0, -1)
        ]

    def apply(self, move: NimMove):
        if not 0 < move.take <= self.heaps[move.heap]:
            raise ValueError(f"Illegal move {move} for heaps {self.heaps.tolist()}")
        self.heaps[move.heap] -= move.take
        self.to_move = self.to_move.other_team()

    def static_score(self) -> Score:
        """
        Nim-sum evaluation: +1 when the position favours Ally, -1 otherwise.

        Returned as a heuristic rather than Win/Lose so the search still
        treats it as an estimate at the horizon.
        """
        mover_wins = self.nim_sum() != 0
        ally_wins = mover_wins == (self.to_move is Team.ALLY)
        return Score.heuristic(1 if ally_wins else -1)

    def is_terminal(self) -> bool:
        return not self.heaps.any()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NimBoard):
            return NotImplemented
        return self.to_move is other.to_move and np.array_equal(self.heaps, other.heaps)

    def __hash__(self) -> int:
        return hash((self.heaps.tobytes(), self.to_move))

    def __repr__(self) -> str:
        return f"NimBoard({self.heaps.tolist()}, to_move={self.to_move.name})"
