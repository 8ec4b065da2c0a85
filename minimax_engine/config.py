"""
Engine configuration.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class EngineConfig:
    """Configuration for the search engine and its background driver.

    Keeps the cache sizing and search options in one place so the engine,
    the background driver and the UCI front end are built the same way.
    """

    # Transposition tables
    tt_capacity: int = 1_000_000
    """Maximum entries per transposition table (one table per side)"""

    depth_guarded_overwrite: bool = True
    """Keep a deeper cached result when a shallower one is inserted"""

    check_cache_bounds: bool = False
    """Reuse results cut short by pruning only when their bound settles the window"""

    # Search
    track_principal_variation: bool = False
    """Record the best line from root to leaf (copies a tuple per node)"""

    max_plies: Optional[int] = None
    """Stop iterative deepening at this ply budget (None for unbounded)"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.tt_capacity, bool) or not isinstance(self.tt_capacity, int):
            raise ValueError(f"tt_capacity must be an integer, got {self.tt_capacity!r}")

        if self.tt_capacity <= 0:
            raise ValueError(f"tt_capacity must be positive, got {self.tt_capacity}")

        if self.max_plies is not None and self.max_plies <= 0:
            raise ValueError(f"max_plies must be positive, got {self.max_plies}")

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"EngineConfig(tt_capacity={self.tt_capacity}, "
            f"depth_guarded_overwrite={self.depth_guarded_overwrite}, "
            f"check_cache_bounds={self.check_cache_bounds}, "
            f"track_principal_variation={self.track_principal_variation}, "
            f"max_plies={self.max_plies})"
        )
