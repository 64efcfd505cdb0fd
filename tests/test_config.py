"""Tests for the startup configuration dataclass."""

import json

import pytest

from copperhead.config import GameConfig


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.tick_rate_ms == 100
        assert cfg.seed is None
        assert cfg.port == 8000

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"tick_rate_ms": 5},
            {"tick_rate_ms": 5000},
            {"port": 0},
            {"log_level": "chatty"},
        ],
    )
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)

    def test_to_dict_serializable(self):
        serialized = json.dumps(GameConfig().to_dict())
        assert isinstance(serialized, str)

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(tick_rate_ms=50, seed=7, port=9001)
        path = tmp_path / "nested" / "config.json"
        cfg.save(path)
        assert path.exists()
        assert GameConfig.load(path) == cfg

    def test_load_rejects_unknown_keys(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"grid_width": 30}))
        with pytest.raises(TypeError):
            GameConfig.load(path)
