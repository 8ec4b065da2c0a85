"""
Transposition Table with LRU Eviction

This module implements a transposition table (TT) - a cache of search results
keyed by the position itself, so a position reached through a different move
order, or searched again by a later iterative-deepening pass, is not
re-searched.

Entries remember the depth (remaining plies) they were searched to. A result
is only reused for a request of equal or smaller depth: a shallow result is
never handed back as the answer to a deeper question.

The table is bounded. Once full, inserting a new position evicts the least
recently used one. Both successful lookups and inserts count as uses.

References:
    - Transposition Table: https://www.chessprogramming.org/Transposition_Table
    - Replacement Strategies: https://www.chessprogramming.org/Transposition_Table#Replacement_Strategies
"""

from collections import OrderedDict
from enum import Enum
from typing import Dict, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class NodeType(Enum):
    """
    How a cached result relates to the true minimax value.

    A result found inside the search window is exact. When alpha-beta cut
    the search short, the result is only a bound:
        - EXACT: All relevant moves searched
        - LOWER_BOUND: Fail high (true value is at least this good)
        - UPPER_BOUND: Fail low (true value is at most this good)
    """
    EXACT = 0
    LOWER_BOUND = 1
    UPPER_BOUND = 2


class TTEntry(Generic[V]):
    """
    Entry in the transposition table.

    Attributes:
        result: Cached search result
        depth: Remaining plies the result was searched with
        node_type: EXACT, LOWER_BOUND, or UPPER_BOUND
    """

    __slots__ = ("result", "depth", "node_type")

    def __init__(self, result: V, depth: int, node_type: NodeType = NodeType.EXACT):
        self.result = result
        self.depth = depth
        self.node_type = node_type

    def __repr__(self) -> str:
        return f"TTEntry(depth={self.depth}, type={self.node_type.name}, result={self.result!r})"


class TranspositionTable(Generic[K, V]):
    """
    Bounded, depth-aware cache of search results.

    Attributes:
        capacity: Maximum number of entries
        depth_guarded_overwrite: If True, a stored entry is only replaced by
            one searched at least as deep
        table: Ordered mapping key → TTEntry, least recently used first
    """

    def __init__(self, capacity: int, depth_guarded_overwrite: bool = True):
        """
        Initialize transposition table.

        Args:
            capacity: Maximum number of entries, strictly positive
            depth_guarded_overwrite: Keep deeper entries on insert (default: True)

        Raises:
            ValueError: If capacity is not a positive integer
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")

        self.capacity = capacity
        self.depth_guarded_overwrite = depth_guarded_overwrite
        self.table: "OrderedDict[K, TTEntry[V]]" = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def lookup(self, state: K, depth: int) -> Optional[TTEntry[V]]:
        """
        Look up a position.

        Args:
            state: Position to look up
            depth: Remaining plies of the current search

        Returns:
            TTEntry if it was searched to at least `depth`, None otherwise
        """
        entry = self.table.get(state)

        if entry is not None and entry.depth >= depth:
            self.table.move_to_end(state)
            self.hits += 1
            return entry

        self.misses += 1
        return None

    def get(self, state: K, depth: int) -> Optional[V]:
        """Cached result for `state` if searched to at least `depth`."""
        entry = self.lookup(state, depth)
        return entry.result if entry is not None else None

    def insert(
        self,
        state: K,
        result: V,
        depth: int,
        node_type: NodeType = NodeType.EXACT,
    ):
        """
        Store a search result.

        Args:
            state: Position the result belongs to
            result: Search result for the position
            depth: Remaining plies the result was searched with
            node_type: EXACT, LOWER_BOUND, or UPPER_BOUND
        """
        existing = self.table.get(state)

        if existing is not None:
            self.table.move_to_end(state)

            # Never regress a deeper result to a shallower one
            if self.depth_guarded_overwrite and depth < existing.depth:
                return
        elif len(self.table) >= self.capacity:
            self.table.popitem(last=False)
            self.evictions += 1

        self.table[state] = TTEntry(result, depth, node_type)

    def __contains__(self, state: K) -> bool:
        return state in self.table

    def __len__(self) -> int:
        return len(self.table)

    def get_stats(self) -> Dict[str, int | float]:
        """Get statistics about transposition table usage."""

        total_lookups = self.hits + self.misses
        hit_rate = (self.hits / total_lookups * 100) if total_lookups > 0 else 0

        return {
            'entries': len(self.table),
            'capacity': self.capacity,
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
            'hit_rate': hit_rate,
        }

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (
            f"TranspositionTable(entries={stats['entries']}/{self.capacity}, "
            f"hit_rate={stats['hit_rate']:.1f}%)"
        )
