"""
Minimax Engine

A reusable adversarial search engine for two-player, turn-alternating,
perfect-information games: minimax with alpha-beta pruning, depth-aware LRU
transposition tables, and a cancellable iterative-deepening driver running
on a background thread.

## Architecture

1. **evaluation**: Outcome model
   - Score: Lose < Heuristic(v) < Win
   - TimedScore: prefers faster wins and slower losses among equal scores

2. **board**: Game-state capability consumed by the search
   - Team (Ally maximizes, Enemy minimizes)
   - Board protocol: copy, hash, move generation, apply, evaluation

3. **search**: Search algorithms
   - Minimax with alpha-beta pruning and per-side transposition tables
   - BackgroundSearch: iterative deepening until told to stop

4. **games**: Reference boards (Nim, python-chess adapter)

5. **uci**: Universal Chess Interface front end

## Quick Start

```python
from minimax_engine import Minimax, Team
from minimax_engine.games import NimBoard

engine = Minimax(capacity=100_000)
stats = engine.minimax(NimBoard([3, 4, 5]), Team.ALLY, plies=6)
print(stats.move, stats.score, stats.nodes_visited)
```

### As a UCI Engine

```bash
python -m minimax_engine.uci
```
"""

__version__ = "0.1.0"
__license__ = "MIT"

from minimax_engine.board import Board, Team
from minimax_engine.config import EngineConfig
from minimax_engine.evaluation import Score, TimedScore
from minimax_engine.search import (
    BackgroundSearch,
    Minimax,
    MoveStats,
    SearchWorkerError,
    TranspositionTable,
)

__all__ = [
    'Board',
    'Team',
    'EngineConfig',
    'Score',
    'TimedScore',
    'Minimax',
    'MoveStats',
    'TranspositionTable',
    'BackgroundSearch',
    'SearchWorkerError',
]
