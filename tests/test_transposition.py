"""
Unit Tests for the Transposition Table

Tests for depth-aware lookup, the overwrite policy and LRU eviction.
"""

import pytest

from minimax_engine.search import NodeType, TranspositionTable


class TestTranspositionTable:
    """Tests for transposition table."""

    def test_store_and_lookup(self):
        """Test basic insert and get operations."""

        tt = TranspositionTable(capacity=10)

        tt.insert("a", "result-a", depth=5)

        assert tt.get("a", 5) == "result-a", "Should find stored entry"
        assert tt.get("a", 0) == "result-a", "Shallower requests are served too"
        assert "a" in tt
        assert len(tt) == 1

    def test_lookup_returns_entry(self):
        tt = TranspositionTable(capacity=10)
        tt.insert("a", "result-a", depth=3, node_type=NodeType.LOWER_BOUND)

        entry = tt.lookup("a", 2)

        assert entry.result == "result-a"
        assert entry.depth == 3
        assert entry.node_type == NodeType.LOWER_BOUND

    def test_insufficient_depth_returns_none(self):
        """Test that get returns None if cached depth is insufficient."""

        tt = TranspositionTable(capacity=10)
        tt.insert("a", "shallow", depth=4)

        for required in range(5, 9):
            assert tt.get("a", required) is None, "Should not return a shallower entry"

    def test_missing_key(self):
        tt = TranspositionTable(capacity=10)
        assert tt.get("nothing", 0) is None
        assert tt.misses == 1

    def test_depth_guarded_overwrite(self):
        """Test that a shallower result never replaces a deeper one."""

        tt = TranspositionTable(capacity=10)

        tt.insert("a", "deep", depth=5)
        tt.insert("a", "shallow", depth=3)
        assert tt.get("a", 5) == "deep", "Should keep higher depth entry"

        tt.insert("a", "deeper", depth=6)
        assert tt.get("a", 6) == "deeper", "Should accept a deeper entry"

        tt.insert("a", "same", depth=6)
        assert tt.get("a", 6) == "same", "Equal depth replaces"

    def test_unconditional_overwrite(self):
        tt = TranspositionTable(capacity=10, depth_guarded_overwrite=False)

        tt.insert("a", "deep", depth=5)
        tt.insert("a", "shallow", depth=3)

        assert tt.get("a", 3) == "shallow"
        assert tt.get("a", 5) is None

    def test_lru_eviction(self):
        """Inserting past capacity evicts exactly the least recently used key."""

        tt = TranspositionTable(capacity=3)
        tt.insert("a", 1, depth=1)
        tt.insert("b", 2, depth=1)
        tt.insert("c", 3, depth=1)

        # Touch "a" so "b" becomes least recently used
        assert tt.get("a", 1) == 1

        tt.insert("d", 4, depth=1)

        assert len(tt) == 3
        assert tt.get("b", 0) is None, "Least recently used key should be evicted"
        assert tt.get("a", 0) == 1
        assert tt.get("c", 0) == 3
        assert tt.get("d", 0) == 4
        assert tt.evictions == 1

    def test_shallow_miss_does_not_refresh(self):
        tt = TranspositionTable(capacity=2)
        tt.insert("a", 1, depth=1)
        tt.insert("b", 2, depth=1)

        assert tt.get("a", 5) is None
        tt.insert("c", 3, depth=1)

        assert "a" not in tt, "A depth-insufficient lookup is not a use"
        assert "b" in tt

    def test_rejected_insert_still_refreshes(self):
        tt = TranspositionTable(capacity=2)
        tt.insert("a", "deep", depth=5)
        tt.insert("b", 2, depth=1)

        tt.insert("a", "shallow", depth=1)
        tt.insert("c", 3, depth=1)

        assert tt.get("a", 5) == "deep"
        assert "b" not in tt

    def test_replacing_existing_key_does_not_evict(self):
        tt = TranspositionTable(capacity=2)
        tt.insert("a", 1, depth=1)
        tt.insert("b", 2, depth=1)
        tt.insert("a", 10, depth=2)

        assert len(tt) == 2
        assert tt.evictions == 0

    @pytest.mark.parametrize("capacity", [0, -1, 2.5, None, True])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(ValueError):
            TranspositionTable(capacity=capacity)

    def test_stats(self):
        tt = TranspositionTable(capacity=10)
        tt.insert("a", 1, depth=2)
        tt.get("a", 1)
        tt.get("a", 3)

        stats = tt.get_stats()

        assert stats['entries'] == 1
        assert stats['capacity'] == 10
        assert stats['hits'] == 1
        assert stats['misses'] == 1
        assert stats['hit_rate'] == pytest.approx(50.0)
        assert "1/10" in repr(tt)
