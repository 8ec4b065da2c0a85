"""
Board Capability

This module defines what the search needs from a game. The engine is written
once against this interface and works with any game state that provides it;
nothing here has to be subclassed, a class only needs the right methods.

Key Principles:
    1. Boards are values: copy() returns an independent duplicate
    2. Boards are hashable: equal positions hash equally (transposition key)
    3. apply() mutates in place; the search only ever calls it on a copy
    4. static_score() is always from Ally's point of view

Convention:
    - Ally is the maximizing side, Enemy the minimizing side
    - Move generation is asked separately for each team, so games where
      legality depends on whose turn governs the position stay expressible
"""

from enum import Enum
from typing import Protocol, Sequence, TypeVar

from minimax_engine.evaluation.score import Score


class Team(Enum):
    """The two sides of the game. Ally maximizes, Enemy minimizes."""
    ALLY = "ally"
    ENEMY = "enemy"

    def other_team(self) -> "Team":
        return Team.ENEMY if self is Team.ALLY else Team.ALLY


Move = TypeVar("Move")
B = TypeVar("B", bound="Board")


class Board(Protocol[Move]):
    """
    Game state the search operates on.

    Methods:
        copy(): Independent duplicate of the position
        generate_moves(team): Legal moves for the given team
        apply(move): Play a move in place
        static_score(): Evaluation at a horizon or terminal position
        is_terminal(): True once the game has concluded
    """

    def copy(self: B) -> B:
        ...

    def __eq__(self, other: object) -> bool:
        ...

    def __hash__(self) -> int:
        ...

    def generate_moves(self, team: Team) -> Sequence[Move]:
        ...

    def apply(self, move: Move) -> None:
        ...

    def static_score(self) -> Score:
        ...

    def is_terminal(self) -> bool:
        ...
