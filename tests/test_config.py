"""
Unit Tests for Engine Configuration
"""

import pytest

from minimax_engine.config import EngineConfig


class TestEngineConfig:
    """Tests for EngineConfig defaults and validation."""

    def test_defaults(self):
        config = EngineConfig()

        assert config.tt_capacity == 1_000_000
        assert config.depth_guarded_overwrite
        assert not config.check_cache_bounds
        assert not config.track_principal_variation
        assert config.max_plies is None

    @pytest.mark.parametrize("capacity", [0, -5, 1.5, "100", True])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(ValueError):
            EngineConfig(tt_capacity=capacity)

    @pytest.mark.parametrize("max_plies", [0, -1])
    def test_invalid_max_plies(self, max_plies):
        with pytest.raises(ValueError):
            EngineConfig(max_plies=max_plies)

    def test_repr_lists_fields(self):
        text = repr(EngineConfig(tt_capacity=64, max_plies=6))

        assert "tt_capacity=64" in text
        assert "max_plies=6" in text
