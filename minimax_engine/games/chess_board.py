"""
Chess Adapter

Exposes a python-chess Board through the Board capability so the generic
engine can search chess positions.

Evaluation Components:
    - Checkmate: Win/Lose from Ally's point of view
    - Draws (stalemate, insufficient material, 75-move rule, fivefold
      repetition): Heuristic(0)
    - Otherwise: material balance in centipawns, Ally minus Enemy

A checkmated side has no moves, which the engine scores as a loss. A
stalemated side is offered a null move instead, so the search reaches
static_score() and the position counts as a draw.

Hashing uses the Polyglot Zobrist key shipped with python-chess.

References:
    - Zobrist Hashing: https://www.chessprogramming.org/Zobrist_Hashing
    - Simplified Evaluation Function
      https://www.chessprogramming.org/Simplified_Evaluation_Function
"""

from typing import List, Optional

import chess
import chess.polyglot
import numpy as np

from minimax_engine.board.base import Team
from minimax_engine.evaluation.score import BASELINE, Score

# ============================================================================
# Material Values (centipawns)
# ============================================================================
PIECE_TYPES = [chess.PAWN, chess.KNIGHT, chess.BISHOP, chess.ROOK, chess.QUEEN]
PIECE_VALUES = np.array([100, 320, 330, 500, 900], dtype=np.int64)


class ChessBoard:
    """
    python-chess position seen from one side.

    Attributes:
        board: Wrapped chess.Board (owned by this adapter)
        ally: Color the engine plays (maximizes for)
    """

    def __init__(self, board: Optional[chess.Board] = None, ally: Optional[chess.Color] = None):
        """
        Args:
            board: Position to wrap (copied; default: starting position)
            ally: Color of the maximizing side (default: side to move)
        """
        self.board = board.copy() if board is not None else chess.Board()
        self.ally = self.board.turn if ally is None else ally

    def color_of(self, team: Team) -> chess.Color:
        return self.ally if team is Team.ALLY else not self.ally

    def team_to_move(self) -> Team:
        return Team.ALLY if self.board.turn == self.ally else Team.ENEMY

    def copy(self) -> "ChessBoard":
        clone = ChessBoard.__new__(ChessBoard)
        clone.board = self.board.copy()
        clone.ally = self.ally
        return clone

    def generate_moves(self, team: Team) -> List[chess.Move]:
        """
        Legal moves for `team`.

        A stalemated side gets a single null move: it is not stuck in the
        losing sense, and since the game is over the search scores the
        position with static_score() instead of applying the move.
        """
        board = self.board
        color = self.color_of(team)
        if board.turn != color:
            # Moves the other side would have if it were its turn
            board = self.board.copy(stack=False)
            board.turn = color
            board.ep_square = None

        moves = list(board.legal_moves)
        if not moves and not board.is_check():
            return [chess.Move.null()]
        return moves

    def apply(self, move: chess.Move):
        self.board.push(move)

    def material(self, color: chess.Color) -> int:
        """Material of one side in centipawns (kings excluded)."""
        counts = np.array(
            [len(self.board.pieces(piece_type, color)) for piece_type in PIECE_TYPES],
            dtype=np.int64,
        )
        return int(counts @ PIECE_VALUES)

    def static_score(self) -> Score:
        if self.board.is_checkmate():
            # Side to move is mated
            return Score.lose() if self.board.turn == self.ally else Score.win()

        if self.board.is_game_over():
            return BASELINE

        return Score.heuristic(self.material(self.ally) - self.material(not self.ally))

    def is_terminal(self) -> bool:
        return self.board.is_game_over()

    def _key(self):
        return (
            self.board.board_fen(),
            self.board.turn,
            self.board.castling_rights,
            self.board.ep_square,
            self.ally,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChessBoard):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((chess.polyglot.zobrist_hash(self.board), self.ally))

    def __repr__(self) -> str:
        return f"ChessBoard({self.board.fen()!r}, ally={chess.COLOR_NAMES[self.ally]})"
