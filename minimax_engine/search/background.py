"""
Background Iterative-Deepening Search

This module runs the minimax engine on a worker thread so the caller (a UCI
loop, a game server, a GUI) never blocks while the engine thinks.

Threading:
    - Controller thread: calls start_search() and stop_and_collect()
    - Worker thread: owns the engine and its transposition tables
    - Communication: a work queue, a stop event and a result queue; nothing
      else is shared, so the tables need no lock

Protocol:
    controller → worker:  (board copy, team, ply cap) on the work queue
    controller → worker:  stop event
    worker → controller:  last completed result (or None) on the result queue

The worker searches ply 1, 2, 3, ... and keeps the most recent search that
ran to completion. When the stop event is set the in-flight search notices it
on entry to its next node, unwinds without caching anything, and the worker
replies with the last complete result. Nothing ever times out on its own:
the controller decides when to stop, e.g. from a wall-clock timer.
"""

import logging
import queue
import threading
from typing import Optional

from minimax_engine.board.base import Board, Team
from minimax_engine.config import EngineConfig
from minimax_engine.search.minimax import Minimax, MoveStats

logger = logging.getLogger(__name__)

_SHUTDOWN = object()


class SearchWorkerError(RuntimeError):
    """The worker thread died. The driver cannot be used any more."""


class BackgroundSearch:
    """
    Non-blocking iterative-deepening driver.

    At most one search may be in flight: start_search() must be followed by
    stop_and_collect() before the next start_search().

    Attributes:
        config: Engine configuration (table capacity, ply cap, ...)
        searching: True between start_search() and stop_and_collect()

    Methods:
        start_search: Begin deepening on a position, returns immediately
        stop_and_collect: Stop and return the last completed result
        wait_until_finished: Block until the ply cap has been searched
        close: Shut the worker down
    """

    def __init__(
        self,
        engine: Optional[Minimax] = None,
        config: Optional[EngineConfig] = None,
    ):
        """
        Start the worker thread.

        Args:
            engine: Engine to search with (default: built from config)
            config: Engine configuration (default: EngineConfig())
        """
        self.config = config if config else EngineConfig()
        engine = engine if engine else Minimax.from_config(self.config)

        self.searching = False
        self._dead = False

        self._work: queue.Queue = queue.Queue()
        self._results: queue.Queue = queue.Queue()
        self._stop = threading.Event()
        self._finished = threading.Event()

        self._worker = threading.Thread(
            target=self._run,
            args=(engine,),
            name="minimax-search",
            daemon=True,
        )
        self._worker.start()

    def start_search(self, board: Board, team: Team, max_plies: Optional[int] = None):
        """
        Begin searching `board` for `team` in the background.

        Args:
            board: Position to search (copied before handing it to the worker)
            team: Side to move
            max_plies: Deepest ply to search (default: config.max_plies)

        Raises:
            RuntimeError: If a search is already in flight
            SearchWorkerError: If the worker has died
        """
        self._check_alive()
        if self.searching:
            raise RuntimeError("A search is already in progress; collect it first")
        if max_plies is not None and max_plies <= 0:
            raise ValueError(f"max_plies must be positive, got {max_plies}")

        if max_plies is None:
            max_plies = self.config.max_plies

        self._finished.clear()
        self.searching = True
        self._work.put((board.copy(), team, max_plies))

    def stop_and_collect(self) -> Optional[MoveStats]:
        """
        Stop the current search and wait for its result.

        This is the only call that blocks. It returns once the worker has
        unwound the search in progress.

        Returns:
            Result of the deepest fully completed ply, None if not even ply 1
            completed

        Raises:
            RuntimeError: If no search is in flight
            SearchWorkerError: If the worker died during the search
        """
        self._check_alive()
        if not self.searching:
            raise RuntimeError("No search in progress")

        self._stop.set()
        reply = self._results.get()
        self.searching = False

        if isinstance(reply, BaseException):
            self._dead = True
            raise SearchWorkerError("Search worker died") from reply

        return reply

    def wait_until_finished(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until the worker has searched up to its ply cap.

        A root without moves finishes after ply 1. Otherwise, without a ply
        cap the search never finishes on its own and this only returns on
        timeout.

        Returns:
            True if the search finished, False on timeout
        """
        return self._finished.wait(timeout)

    def close(self):
        """Stop any search in flight and shut the worker down."""
        if self._dead or not self._worker.is_alive():
            return

        if self.searching:
            try:
                self.stop_and_collect()
            except SearchWorkerError:
                # The worker has already exited
                logger.warning("Search worker had failed before close", exc_info=True)
                return

        self._work.put(_SHUTDOWN)
        self._worker.join()
        self._dead = True

    def __enter__(self) -> "BackgroundSearch":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _check_alive(self):
        if self._dead:
            raise SearchWorkerError("Search worker is not running")

    def _run(self, engine: Minimax):
        """Worker loop: wait for work, deepen until stopped, reply."""
        while True:
            job = self._work.get()
            if job is _SHUTDOWN:
                logger.debug("Search worker shutting down")
                return

            board, team, max_plies = job
            try:
                best = self._deepen(engine, board, team, max_plies)
            except Exception as e:
                logger.error(f"Search worker failed: {e}", exc_info=True)
                self._stop.wait()
                self._stop.clear()
                self._results.put(e)
                return

            # Clear before replying so a stop can never leak into the next search
            self._stop.clear()
            self._results.put(best)

    def _deepen(
        self,
        engine: Minimax,
        board: Board,
        team: Team,
        max_plies: Optional[int],
    ) -> Optional[MoveStats]:
        """Search ply 1, 2, 3, ... until stopped; return the last complete result."""
        best: Optional[MoveStats] = None
        plies = 1

        while max_plies is None or plies <= max_plies:
            result = engine.minimax_cancellable(board, team, plies, self._stop.is_set)
            if result is None:
                logger.debug(f"Ply {plies} cancelled, keeping ply {plies - 1}")
                return best

            best = result
            logger.debug(
                f"Ply {plies} complete: move={result.move}, score={result.score}, "
                f"nodes={result.nodes_visited}"
            )
            if result.move is None:
                # Root is terminal or stuck: deeper plies give the same answer
                logger.debug(f"No move at the root, stopping at ply {plies}")
                break
            plies += 1
        else:
            logger.debug(f"Reached ply cap {max_plies}, waiting for stop")

        self._finished.set()
        self._stop.wait()
        return best
