"""
UCI Protocol Interface

This module implements the Universal Chess Interface (UCI) protocol as a
front end to the background search driver, so the generic engine can be
plugged into chess GUIs like Arena or CuteChess through the chess adapter.

Protocol Flow:
    GUI → "uci"
    Engine → "id name MinimaxEngine 0.1.0"
    Engine → "uciok"
    GUI → "isready"
    Engine → "readyok"
    GUI → "position startpos moves e2e4"
    GUI → "go movetime 1000"
    Engine → "info score cp 0 nodes 12345 time 1000"
    Engine → "bestmove e7e5"

Reference:
    UCI Protocol: https://www.chessprogramming.org/UCI
"""

from minimax_engine.uci.interface import UCIEngine

__all__ = ['UCIEngine']
