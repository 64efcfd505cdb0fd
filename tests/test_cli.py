"""Tests for the command-line entry point."""

import json
from unittest.mock import patch

from copperhead.cli import _build_parser, main, render_text
from copperhead.config import GameConfig
from copperhead.game import Game


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_serve_defaults(self):
        args = _build_parser().parse_args(["serve"])
        assert args.command == "serve"
        assert args.config is None
        assert args.port is None

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.keys == "space"
        assert args.ticks == 0
        assert not args.json


class TestCLISimulate:
    def test_json_output(self, capsys):
        result = main([
            "simulate", "--seed", "3", "--keys", "space,up,left", "--json",
        ])
        assert result == 0
        state = json.loads(capsys.readouterr().out)
        assert state["state"] == "running"
        assert state["tick"] == 3
        assert state["snake"]["body"][0] == [10, 9]

    def test_runs_into_wall(self, capsys):
        result = main(["simulate", "--seed", "0", "--ticks", "30", "--json"])
        assert result == 0
        state = json.loads(capsys.readouterr().out)
        assert state["state"] == "game_over"

    def test_board_output(self, capsys):
        assert main(["simulate", "--seed", "1"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 21
        assert out[-1].startswith("state=running")

    def test_unknown_keys_are_ignored(self, capsys):
        assert main(["simulate", "--keys", "space,bogus", "--json"]) == 0
        state = json.loads(capsys.readouterr().out)
        assert state["tick"] == 2


class TestRenderText:
    def test_glyphs(self):
        game = Game(seed=0)
        game.food = (0, 0)
        lines = render_text(game.snapshot()).splitlines()
        assert lines[0][0] == "*"
        assert lines[10][8:11] == "oo@"
        assert "score=0" in lines[-1]


class TestCLIServe:
    def test_serve_uses_config_and_overrides(self, tmp_path):
        path = tmp_path / "cfg.json"
        GameConfig(port=9100, tick_rate_ms=200).save(path)
        with patch("uvicorn.run") as run:
            result = main(["serve", "--config", str(path), "--port", "9200"])
        assert result == 0
        _, kwargs = run.call_args
        assert kwargs["port"] == 9200
        assert kwargs["host"] == "127.0.0.1"
        assert run.call_args.args[0].state.config.tick_rate_ms == 200

    def test_missing_config_file(self, tmp_path):
        assert main(["serve", "--config", str(tmp_path / "nope.json")]) == 2

    def test_invalid_override(self):
        with patch("uvicorn.run") as run:
            assert main(["serve", "--tick-rate-ms", "1"]) == 2
        run.assert_not_called()
