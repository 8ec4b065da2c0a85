"""
Main entry point for running the engine as a UCI engine.

Usage:
    python -m minimax_engine.uci
"""

from minimax_engine.uci.interface import UCIEngine

if __name__ == "__main__":
    engine = UCIEngine()
    engine.run()
