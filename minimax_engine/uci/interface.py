"""
UCI Protocol Implementation

This module implements the Universal Chess Interface (UCI) protocol on top of
the background search driver, using the chess adapter as the board.

UCI Commands Supported:
    - uci: Identify engine
    - isready: Synchronization check
    - ucinewgame: Start new game
    - position: Set board position
    - go: Start searching
    - stop: Stop searching
    - quit: Shutdown engine

Threading:
    - Main thread: Listen for UCI commands
    - Search worker: Iterative deepening (owned by BackgroundSearch)
    - Reporter thread: Waits for the time budget, the depth limit or 'stop',
      then collects the result and prints bestmove

Time management: with clock times the engine spends 1/30 of its remaining
time on the move; 'movetime' is used as given; 'infinite' and plain 'depth'
searches run until the depth is reached or 'stop' arrives.

References:
    - UCI Protocol: https://www.chessprogramming.org/UCI
"""

import logging
import sys
import threading
import time
from pathlib import Path
from typing import Optional, Tuple

import chess

from minimax_engine.board.base import Team
from minimax_engine.config import EngineConfig
from minimax_engine.evaluation.score import Tier
from minimax_engine.games.chess_board import ChessBoard
from minimax_engine.search.background import BackgroundSearch, SearchWorkerError
from minimax_engine.search.minimax import MoveStats

DEFAULT_MOVETIME_MS = 5000
MOVES_TO_GO = 30
POLL_INTERVAL = 0.01


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logger(debug=True, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Send the package's log records to a file, one per session.

    stdout belongs to the GUI, so the engine never logs to the console.

    Args:
        debug: Record search progress (DEBUG) rather than commands only (INFO)
        log_dir: Directory for engine.log (default: ~/.minimax_engine)
    """
    log_dir = log_dir if log_dir else Path.home() / ".minimax_engine"
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("minimax_engine")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handler = logging.FileHandler(log_dir / "engine.log", mode='w')
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(handler)

    return logger


def format_score(stats: MoveStats) -> str:
    """
    UCI score field for a search result.

    Decisive outcomes become 'mate N' (moves, negative when losing), anything
    else 'cp N'.
    """
    score = stats.score.score
    if score.tier == Tier.HEURISTIC:
        return f"cp {score.value}"

    moves = (stats.score.turns + 1) // 2
    return f"mate {moves}" if score.tier == Tier.WIN else f"mate -{moves}"


def parse_position(args) -> Tuple[chess.Board, Optional[str]]:
    """
    Build the board named by the arguments of a 'position' command.

    Accepts 'startpos' or 'fen <fields...>', optionally followed by
    'moves <uci...>'. Moves are played until one fails to parse or is
    illegal; the board up to that point is kept.

    Returns:
        (board, reason the move list was cut short or None)

    Raises:
        ValueError: If the base position is missing or invalid
    """
    if not args:
        raise ValueError("Position command without a position")

    split = args.index("moves") if "moves" in args else len(args)
    base, moves = args[:split], args[split + 1:]

    if base[0] == "startpos":
        board = chess.Board()
    elif base[0] == "fen":
        try:
            board = chess.Board(" ".join(base[1:]))
        except ValueError as e:
            raise ValueError(f"Invalid FEN: {e}") from e
    else:
        raise ValueError(f"Unknown position type: {base[0]}")

    for text in moves:
        try:
            move = chess.Move.from_uci(text)
        except ValueError:
            return board, f"Invalid move format: {text}"
        if move not in board.legal_moves:
            return board, f"Illegal move: {text}"
        board.push(move)

    return board, None


class UCIEngine:
    """
    UCI-compliant engine interface.

    This class handles all UCI communication and hands searches to a
    BackgroundSearch. The driver's transposition tables live for the whole
    session, so every search reuses what earlier ones stored.

    Attributes:
        board: Current chess position
        search: Background iterative-deepening driver
        stop_requested: Set by 'stop' to end the current search early
        reporter_thread: Thread waiting to collect and print the result

    Methods:
        run: Read stdin until quit
        handle_command: Dispatch one command line
        handle_uci: Respond to 'uci' command
        handle_isready: Respond to 'isready' command
        handle_position: Set board position
        handle_go: Start search
        handle_stop: Stop search
        handle_quit: Shutdown engine
    """

    def __init__(self, config: Optional[EngineConfig] = None, debug=True):
        """
        Initialize UCI engine.

        Args:
            config: Engine configuration (default: bound-checked caching)
            debug: Enable debug logging (default: True)
        """
        self.board = chess.Board()
        self.config = config if config else EngineConfig(check_cache_bounds=True)
        self.search = BackgroundSearch(config=self.config)

        self.stop_requested = threading.Event()
        self.reporter_thread: Optional[threading.Thread] = None
        self.last_result: Optional[MoveStats] = None

        # Engine info
        self.name = "MinimaxEngine"
        self.version = "0.1.0"
        self.author = "minimax_engine developers"

        self.logger = setup_logger(debug=debug)
        self.logger.info("=== MinimaxEngine Started ===")
        self.logger.info(f"Config: {self.config}")

    def run(self):
        """Read commands from stdin until 'quit' or end of input."""
        while True:
            try:
                line = input()
            except EOFError:
                self.logger.info("EOF received, shutting down")
                self.handle_quit()
                return

            try:
                if not self.handle_command(line):
                    return
            except Exception as e:
                # A bad command must not take the session down
                self.logger.error(f"Command error: {e}", exc_info=True)
                print(f"# Error: {e}", file=sys.stderr)

    def handle_command(self, line: str) -> bool:
        """
        Dispatch one command line.

        Unknown commands are ignored, as UCI requires.

        Returns:
            False once 'quit' has been handled, True otherwise
        """
        tokens = line.split()
        if not tokens:
            return True

        self.logger.debug(f">>> {line.strip()}")
        cmd = tokens[0].lower()

        if cmd == "quit":
            self.handle_quit()
            return False

        handlers = {
            "uci": lambda: self.handle_uci(),
            "isready": lambda: self.handle_isready(),
            "ucinewgame": lambda: self.handle_ucinewgame(),
            "position": lambda: self.handle_position(tokens),
            "go": lambda: self.handle_go(tokens),
            "stop": lambda: self.handle_stop(),
        }
        handler = handlers.get(cmd)
        if handler is None:
            self.logger.debug(f"Unknown command ignored: {cmd}")
        else:
            handler()
        return True

    def _send(self, line: str):
        print(line)
        sys.stdout.flush()
        self.logger.debug(f"<<< {line}")

    def handle_uci(self):
        """Handle 'uci' command - identify engine."""
        self.logger.info("Handling: uci")

        self._send(f"id name {self.name} {self.version}")
        self._send(f"id author {self.author}")
        self._send("uciok")

    def handle_isready(self):
        """Handle 'isready' command - synchronization."""
        self.logger.info("Handling: isready")
        self._send("readyok")

    def handle_ucinewgame(self):
        """
        Handle 'ucinewgame' command - reset the position.

        The transposition tables are kept: positions of the old game are
        simply evicted as the new game fills the tables.
        """
        self.logger.info("Handling: ucinewgame - resetting board")
        self.handle_stop()
        self.board = chess.Board()
        self.last_result = None

    def handle_position(self, tokens):
        """
        Handle 'position' - replace the current board.

        The board is only replaced when the base position parses; a move list
        is applied up to its first bad move.

        Args:
            tokens: Command tokens, e.g. ['position', 'startpos', 'moves', 'e2e4']
        """
        self.logger.info(f"Handling: position {' '.join(tokens[1:])}")

        try:
            board, rejected = parse_position(tokens[1:])
        except ValueError as e:
            self.logger.error(str(e))
            print(f"# {e}", file=sys.stderr)
            return

        if rejected:
            self.logger.error(rejected)
            print(f"# {rejected}", file=sys.stderr)

        self.board = board
        self.logger.info(f"Position updated: {self.board.fen()}")

    def handle_go(self, tokens):
        """
        Handle 'go' command - start search.

        Formats:
            go depth 5
            go movetime 5000
            go wtime 300000 btime 300000
            go infinite

        Args:
            tokens: Command tokens (e.g., ['go', 'depth', '5'])
        """
        self.logger.info(f"Handling: go {' '.join(tokens[1:])}")

        if self.reporter_thread and self.reporter_thread.is_alive():
            self.logger.warning("go received while searching, stopping previous search")
            self.handle_stop()

        depth = None
        movetime = None
        wtime = None
        btime = None
        infinite = False

        i = 1
        while i < len(tokens):
            if tokens[i] == "depth" and i + 1 < len(tokens):
                depth = int(tokens[i + 1])
                i += 2
            elif tokens[i] == "movetime" and i + 1 < len(tokens):
                movetime = int(tokens[i + 1])
                i += 2
            elif tokens[i] == "wtime" and i + 1 < len(tokens):
                wtime = int(tokens[i + 1])
                i += 2
            elif tokens[i] == "btime" and i + 1 < len(tokens):
                btime = int(tokens[i + 1])
                i += 2
            elif tokens[i] == "infinite":
                infinite = True
                i += 1
            else:
                i += 1

        clock = wtime if self.board.turn == chess.WHITE else btime
        if movetime is None and clock is not None:
            movetime = max(1, clock // MOVES_TO_GO)
        if movetime is None and depth is None and not infinite:
            movetime = DEFAULT_MOVETIME_MS
            self.logger.debug(f"No limit specified, using movetime {movetime} ms")

        if not any(self.board.legal_moves):
            self.logger.error("No legal moves available")
            return

        self.logger.info(f"Starting search: depth={depth}, movetime={movetime}, infinite={infinite}")

        self.stop_requested.clear()
        self.search.start_search(ChessBoard(self.board), Team.ALLY, max_plies=depth)

        budget = None if movetime is None else movetime / 1000.0
        self.reporter_thread = threading.Thread(
            target=self._report_when_done,
            args=(budget, self.board.copy()),
            daemon=True,
        )
        self.reporter_thread.start()

    def _report_when_done(self, budget: Optional[float], board: chess.Board):
        """
        Background thread waiting for the search to end.

        Ends on 'stop', when the time budget runs out, or when the depth
        limit has been searched, then prints info and bestmove.

        Args:
            budget: Seconds to think (None for no time limit)
            board: Copy of the searched position
        """
        start_time = time.time()
        deadline = None if budget is None else start_time + budget

        while not self.stop_requested.is_set():
            if self.search.wait_until_finished(timeout=POLL_INTERVAL):
                break
            if deadline is not None and time.time() >= deadline:
                break

        try:
            result = self.search.stop_and_collect()
        except SearchWorkerError:
            self.logger.error("Search worker failed, falling back", exc_info=True)
            result = None
        elapsed_ms = int((time.time() - start_time) * 1000)
        self.last_result = result

        if result is None or result.move is None:
            # Not even one ply finished: any legal move beats none
            fallback = next(iter(board.legal_moves), None)
            if fallback is None:
                self.logger.error("No legal moves available for fallback!")
                return
            self.logger.warning(f"Search produced no move, using fallback {fallback.uci()}")
            self._send(f"bestmove {fallback.uci()}")
            return

        self.logger.info(
            f"Search done: best_move={result.move.uci()}, score={result.score}, "
            f"nodes={result.nodes_visited}, time={elapsed_ms}ms"
        )

        info_parts = [
            "info",
            f"score {format_score(result)}",
            f"nodes {result.nodes_visited}",
            f"time {elapsed_ms}",
        ]
        if result.principal_variation:
            info_parts.append("pv " + " ".join(m.uci() for m in result.principal_variation))

        self._send(" ".join(info_parts))
        self._send(f"bestmove {result.move.uci()}")

    def handle_stop(self):
        """
        Handle 'stop' command - stop ongoing search.

        The reporter thread collects the best completed result and prints it.
        """
        self.logger.info("Handling: stop")
        self.stop_requested.set()

        if self.reporter_thread and self.reporter_thread.is_alive():
            self.reporter_thread.join()

    def handle_quit(self):
        """Handle 'quit' command - shutdown engine."""
        self.logger.info("Handling: quit - shutting down engine")

        self.handle_stop()
        self.search.close()

        self.logger.info("=== MinimaxEngine Stopped ===")


def main():
    """Console entry point."""
    engine = UCIEngine()
    engine.run()
