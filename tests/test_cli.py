"""Tests for the command-line tools."""

import json
import re

from mode_snake.cli import _build_parser, main
from mode_snake.persistence import JsonBestScoreStore


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.mode == "classic"
        assert args.games == 10
        assert args.max_ticks == 500
        assert args.seed == 42
        assert args.config is None

    def test_simulate_flags(self):
        args = _build_parser().parse_args([
            "simulate", "--mode", "portal", "--games", "4",
            "--max-ticks", "80", "--seed", "5",
        ])
        assert args.mode == "portal"
        assert args.games == 4
        assert args.max_ticks == 80
        assert args.seed == 5


class TestCLISimulate:
    def test_simulate_runs(self, capsys):
        code = main(["simulate", "--games", "2", "--max-ticks", "60"])
        assert code == 0
        assert "Simulation: 2 classic game(s)" in capsys.readouterr().out

    def test_simulate_records_best(self, tmp_path, capsys):
        path = tmp_path / "best.json"
        code = main([
            "simulate", "--mode", "noDie", "--games", "2",
            "--max-ticks", "300", "--best-score-file", str(path),
        ])
        assert code == 0
        out = capsys.readouterr().out
        best = int(re.search(r"max (\d+)", out).group(1))
        assert JsonBestScoreStore(path).load_best_score() == best

    def test_simulate_invalid_games(self):
        assert main(["simulate", "--games", "0"]) == 2


class TestCLIBest:
    def test_best_missing_file(self, tmp_path, capsys):
        code = main(["best", "--file", str(tmp_path / "none.json")])
        assert code == 0
        assert "Best score: 0" in capsys.readouterr().out

    def test_best_reset(self, tmp_path, capsys):
        path = tmp_path / "best.json"
        path.write_text(json.dumps({"best_score": 8}))
        main(["best", "--file", str(path)])
        assert "Best score: 8" in capsys.readouterr().out
        main(["best", "--file", str(path), "--reset"])
        assert "Best score: 0" in capsys.readouterr().out
