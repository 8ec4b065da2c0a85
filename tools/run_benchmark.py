#!/usr/bin/env python3
"""
Search Benchmark Runner

Runs the engine on a set of Nim and chess positions at increasing depths
and reports nodes, time and transposition table hit rates per ply. One
engine is kept per position across depths, the way iterative deepening
uses it, so later plies show how much earlier work is reused.

Usage:
    python tools/run_benchmark.py [--depths 1,2,3,4] [--capacity 1000000] [--verbose]
"""

import argparse
import logging
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import chess

from minimax_engine.board.base import Team
from minimax_engine.config import EngineConfig
from minimax_engine.games.chess_board import ChessBoard
from minimax_engine.games.nim import NimBoard
from minimax_engine.search.minimax import Minimax

POSITIONS = {
    "nim-3-4-5": lambda: NimBoard([3, 4, 5]),
    "nim-1-3-5-7": lambda: NimBoard([1, 3, 5, 7]),
    "chess-start": lambda: ChessBoard(chess.Board()),
    "chess-kiwipete": lambda: ChessBoard(chess.Board(
        "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
    )),
}


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def hit_rate(engine: Minimax) -> float:
    hits = engine.ally_table.hits + engine.enemy_table.hits
    lookups = hits + engine.ally_table.misses + engine.enemy_table.misses
    return 100 * hits / lookups if lookups > 0 else 0.0


def run_benchmark(depths: list[int], config: EngineConfig, verbose: bool = False):
    """
    Search every benchmark position at each depth.

    Args:
        depths: Ply budgets to search, in order
        config: Engine configuration shared by all positions
        verbose: If True, print the table statistics after each search
    """
    print("=" * 80)
    print("SEARCH BENCHMARK - Minimax Engine")
    print("=" * 80)
    print(f"Config: {config}")
    print(f"Depths: {depths}")
    print("=" * 80)

    all_results = []

    for name, make_board in POSITIONS.items():
        print(f"\n{name}")
        print("-" * 80)

        engine = Minimax.from_config(config)
        board = make_board()

        for depth in depths:
            start_time = time.time()
            stats = engine.minimax(board, Team.ALLY, depth)
            elapsed = time.time() - start_time

            nodes_per_sec = stats.nodes_visited / elapsed if elapsed > 0 else 0
            all_results.append({
                'position': name,
                'depth': depth,
                'move': stats.move,
                'score': stats.score,
                'nodes': stats.nodes_visited,
                'time': elapsed,
                'nodes_per_sec': nodes_per_sec,
                'tt_hit_rate': hit_rate(engine),
            })

            print(
                f"  ply {depth:<3} move={str(stats.move):<8} score={str(stats.score):<24} "
                f"nodes={stats.nodes_visited:>10,}  time={format_time(elapsed):>7}  "
                f"TT hits={hit_rate(engine):5.1f}%"
            )
            if verbose:
                print(f"    ally:  {engine.ally_table.get_stats()}")
                print(f"    enemy: {engine.enemy_table.get_stats()}")

    print("\n" + "=" * 80)
    print("SUMMARY TABLE")
    print("=" * 80)
    print(f"{'Position':<18} {'Depth':<7} {'Nodes':>12} {'Time':>9} {'Nodes/sec':>14} {'TT Hit %':>10}")
    print("-" * 80)

    for r in all_results:
        print(
            f"{r['position']:<18} {r['depth']:<7} {r['nodes']:>12,} {format_time(r['time']):>9} "
            f"{r['nodes_per_sec']:>14,.0f} {r['tt_hit_rate']:>9.1f}%"
        )

    print("=" * 80)
    print("Benchmark complete!")
    print("=" * 80)

    return all_results


def main():
    parser = argparse.ArgumentParser(
        description="Run the search benchmark at multiple depths"
    )
    parser.add_argument(
        "--depths",
        type=str,
        default="1,2,3,4",
        help="Comma-separated list of depths to search (default: 1,2,3,4)"
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=1_000_000,
        help="Entries per transposition table (default: 1000000)"
    )
    parser.add_argument(
        "--no-bound-check",
        action="store_true",
        help="Reuse cut-off table entries without checking their bounds"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print table statistics after each search"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    try:
        depths = [int(d.strip()) for d in args.depths.split(",")]
        config = EngineConfig(
            tt_capacity=args.capacity,
            check_cache_bounds=not args.no_bound_check,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        run_benchmark(depths, config, verbose=args.verbose)
    except KeyboardInterrupt:
        print("\n\nBenchmark interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
