"""
Search Module

This module implements the adversarial search. The primary algorithm is
minimax with alpha-beta pruning, with per-side transposition tables caching
previously searched positions, driven by an iterative-deepening worker that
can be stopped at any moment.

Key Components:
    - Minimax: Core search engine (alpha-beta, fail states, caching)
    - MoveStats: Search result (move, timed score, nodes, optional line)
    - TranspositionTable: Bounded LRU, depth-aware position cache
    - BackgroundSearch: Non-blocking iterative-deepening driver
"""

from minimax_engine.search.background import BackgroundSearch, SearchWorkerError
from minimax_engine.search.minimax import Minimax, MoveStats
from minimax_engine.search.transposition import NodeType, TranspositionTable, TTEntry

__all__ = [
    'Minimax',
    'MoveStats',
    'TranspositionTable',
    'TTEntry',
    'NodeType',
    'BackgroundSearch',
    'SearchWorkerError',
]
