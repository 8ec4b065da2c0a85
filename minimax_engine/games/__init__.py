"""
Games Module

Concrete boards implementing the Board capability. They live outside the
search packages: the engine never imports them.

Key Components:
    - NimBoard: Normal-play Nim, solvable by nim-sum (reference game)
    - ChessBoard: python-chess adapter with material evaluation
"""

from minimax_engine.games.chess_board import ChessBoard
from minimax_engine.games.nim import NimBoard, NimMove

__all__ = ['ChessBoard', 'NimBoard', 'NimMove']
