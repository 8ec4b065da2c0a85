"""
Board Module

The game-state abstraction consumed by the search. Concrete games live in
minimax_engine.games; anything with the same methods works.
"""

from minimax_engine.board.base import Board, Team

__all__ = ['Board', 'Team']
