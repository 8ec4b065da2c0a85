"""
Minimax Search with Alpha-Beta Pruning

This module implements the core search algorithm. Minimax explores the game
tree assuming optimal play by both sides; alpha-beta pruning skips siblings
once they provably cannot change the result.

Key Concepts:
    - Ally maximizes, Enemy minimizes; one procedure serves both sides and
      only the comparison direction changes
    - Outcomes are TimedScores, so among equal scores the search prefers the
      faster win and the slower loss
    - Fail state: a side with no legal move has lost, whatever the remaining
      depth (Ally stuck = Lose, Enemy stuck = Win)
    - Transposition tables: one per side, owned by the engine and kept across
      searches, so later plies of iterative deepening and later moves of the
      same game reuse earlier work
    - Cancellation: an optional should_stop callback is polled on entry to
      every node; a stopped search unwinds with None and caches nothing

Algorithm Complexity:
    - Minimax: O(b^d) where b=branching factor, d=depth
    - Alpha-Beta: O(b^(d/2)) with perfect move ordering

Move ordering is left to the board: moves are searched in the order
generate_moves() returns them.

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Generic, Optional, Tuple, TypeVar

from minimax_engine.board.base import Board, Team
from minimax_engine.config import EngineConfig
from minimax_engine.evaluation.score import LOSE, WIN, TimedScore
from minimax_engine.search.transposition import NodeType, TranspositionTable, TTEntry

logger = logging.getLogger(__name__)

Move = TypeVar("Move")

ShouldStop = Callable[[], bool]

# Initial search window
ALPHA_INIT = TimedScore(LOSE, 0)
BETA_INIT = TimedScore(WIN, 0)


@dataclass(frozen=True)
class MoveStats(Generic[Move]):
    """
    Result of a search.

    Attributes:
        move: Chosen move (None at a leaf or when no legal move exists)
        score: Outcome of the chosen line and plies until it is reached
        nodes_visited: Nodes explored below this one
        principal_variation: Best line from this node, root first (empty
            unless the engine tracks it)
    """

    move: Optional[Move]
    score: TimedScore
    nodes_visited: int = 0
    principal_variation: Tuple[Move, ...] = ()


class Minimax(Generic[Move]):
    """
    Minimax search engine with per-side transposition tables.

    One instance is meant to live as long as the game: the tables persist
    between calls and are only trimmed by LRU eviction.

    Attributes:
        ally_table: Results for positions where Ally is to move
        enemy_table: Results for positions where Enemy is to move
        track_principal_variation: Whether results carry the best line
    """

    def __init__(
        self,
        capacity: int,
        track_principal_variation: bool = False,
        depth_guarded_overwrite: bool = True,
        check_cache_bounds: bool = False,
    ):
        """
        Initialize the engine.

        Args:
            capacity: Entries per transposition table, strictly positive
            track_principal_variation: Record the best line (default: False)
            depth_guarded_overwrite: Table replacement policy (default: True)
            check_cache_bounds: Only reuse cut-off results when their bound
                settles the current window (default: False)

        Raises:
            ValueError: If capacity is not a positive integer
        """
        self.ally_table: TranspositionTable = TranspositionTable(
            capacity, depth_guarded_overwrite
        )
        self.enemy_table: TranspositionTable = TranspositionTable(
            capacity, depth_guarded_overwrite
        )
        self.track_principal_variation = track_principal_variation
        self.check_cache_bounds = check_cache_bounds

    @classmethod
    def from_config(cls, config: EngineConfig) -> "Minimax":
        return cls(
            config.tt_capacity,
            track_principal_variation=config.track_principal_variation,
            depth_guarded_overwrite=config.depth_guarded_overwrite,
            check_cache_bounds=config.check_cache_bounds,
        )

    def minimax(self, board: Board, team: Team, plies: int) -> MoveStats:
        """
        Find the best move for `team` searching `plies` half-moves deep.

        Args:
            board: Position to search (not modified)
            team: Side to move
            plies: Search depth in plies

        Returns:
            MoveStats for the root, nodes_visited including the root itself

        Raises:
            ValueError: If plies is negative
        """
        return self._search_root(board, team, plies, None)

    def minimax_cancellable(
        self,
        board: Board,
        team: Team,
        plies: int,
        should_stop: ShouldStop,
    ) -> Optional[MoveStats]:
        """
        Same as minimax(), but gives up as soon as should_stop() returns True.

        The callback is polled on entry to every node, so the delay before
        giving up is the time needed to finish the node currently being
        entered, not an instant interrupt.

        Returns:
            MoveStats, or None if the search was stopped before completing
        """
        return self._search_root(board, team, plies, should_stop)

    def choose_ally_move(
        self,
        board: Board,
        plies: int,
        alpha: TimedScore,
        beta: TimedScore,
        should_stop: Optional[ShouldStop] = None,
    ) -> Optional[MoveStats]:
        """Maximizing node: best result for Ally within (alpha, beta)."""
        return self._choose_move(board, Team.ALLY, plies, alpha, beta, should_stop)

    def choose_enemy_move(
        self,
        board: Board,
        plies: int,
        alpha: TimedScore,
        beta: TimedScore,
        should_stop: Optional[ShouldStop] = None,
    ) -> Optional[MoveStats]:
        """Minimizing node: best result for Enemy within (alpha, beta)."""
        return self._choose_move(board, Team.ENEMY, plies, alpha, beta, should_stop)

    def _table_for(self, team: Team) -> TranspositionTable:
        return self.ally_table if team is Team.ALLY else self.enemy_table

    def _search_root(
        self,
        board: Board,
        team: Team,
        plies: int,
        should_stop: Optional[ShouldStop],
    ) -> Optional[MoveStats]:
        if plies < 0:
            raise ValueError(f"plies must be non-negative, got {plies}")

        # The root position becomes a table key, so detach it from the caller
        root = board.copy()

        if team is Team.ALLY:
            result = self.choose_ally_move(root, plies, ALPHA_INIT, BETA_INIT, should_stop)
        else:
            result = self.choose_enemy_move(root, plies, ALPHA_INIT, BETA_INIT, should_stop)

        if result is None:
            logger.debug(f"Search cancelled: team={team.value}, plies={plies}")
            return None

        result = replace(result, nodes_visited=result.nodes_visited + 1)
        logger.debug(
            f"Search complete: team={team.value}, plies={plies}, "
            f"move={result.move}, score={result.score}, nodes={result.nodes_visited}"
        )
        return result

    def _choose_move(
        self,
        board: Board,
        team: Team,
        plies: int,
        alpha: TimedScore,
        beta: TimedScore,
        should_stop: Optional[ShouldStop],
    ) -> Optional[MoveStats]:
        """
        Search one node for `team`.

        Algorithm:
            1. Stop requested → None, nothing cached
            2. No legal moves → forced result, checked before the depth limit
            3. Depth exhausted or game over → static evaluation
            4. Table hit at sufficient depth → cached result
            5. Search each move on a copy of the board, keep the best,
               tighten alpha (maximizer) or beta (minimizer), prune once
               alpha >= beta
            6. Store the result for this side and return it

        alpha, beta and every returned score count turns from this node, so
        the window is shifted one ply before it is handed to a child.
        """
        if should_stop is not None and should_stop():
            return None

        maximizing = team is Team.ALLY
        moves = board.generate_moves(team)

        # Fail state if you can't move
        if not moves:
            return MoveStats(None, TimedScore(LOSE if maximizing else WIN, 0), 0)

        if plies == 0 or board.is_terminal():
            return MoveStats(None, TimedScore(board.static_score(), 0), 0)

        table = self._table_for(team)
        entry = table.lookup(board, plies)
        if entry is not None and self._entry_usable(entry, alpha, beta):
            cached = entry.result
            # A stored line belongs to the path that produced it
            if cached.principal_variation:
                cached = replace(cached, principal_variation=())
            return cached

        alpha_init, beta_init = alpha, beta
        opponent = team.other_team()
        best_move = None
        best_score: Optional[TimedScore] = None
        best_line: Tuple = ()
        nodes_visited = 0

        for move in moves:
            child_board = board.copy()
            child_board.apply(move)

            # Bounds count turns from this node; the child counts from itself
            child = self._choose_move(
                child_board, opponent, plies - 1, alpha.sooner(), beta.sooner(), should_stop
            )
            if child is None:
                return None

            candidate = child.score.later()

            if best_score is None or (
                candidate > best_score if maximizing else candidate < best_score
            ):
                best_move = move
                best_score = candidate
                if self.track_principal_variation:
                    best_line = (move,) + child.principal_variation

            nodes_visited += child.nodes_visited + 1

            if maximizing:
                if best_score > alpha:
                    alpha = best_score
            elif best_score < beta:
                beta = best_score

            if alpha >= beta:
                break

        if best_score <= alpha_init:
            node_type = NodeType.UPPER_BOUND
        elif best_score >= beta_init:
            node_type = NodeType.LOWER_BOUND
        else:
            node_type = NodeType.EXACT

        result = MoveStats(best_move, best_score, nodes_visited, best_line)
        table.insert(board, result, plies, node_type)
        return result

    def _entry_usable(self, entry: TTEntry, alpha: TimedScore, beta: TimedScore) -> bool:
        """
        Whether a depth-sufficient table entry may answer the current node.

        Without bound checking every such entry is reused. With it, a result
        cut short by pruning is only reused when its bound alone settles the
        current window.
        """
        if not self.check_cache_bounds or entry.node_type == NodeType.EXACT:
            return True
        if entry.node_type == NodeType.LOWER_BOUND:
            return entry.result.score >= beta
        return entry.result.score <= alpha
