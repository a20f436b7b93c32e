"""Command-line tools for Mode Snake."""

from __future__ import annotations

import argparse
import logging
import sys

from mode_snake.state import GameMode

logger = logging.getLogger(__name__)

DEFAULT_BEST_SCORE_PATH = "~/.mode_snake/best_score.json"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mode-snake",
        description="Mode Snake headless simulation and score tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play headless games with a random autopilot.",
    )
    sim_p.add_argument(
        "--mode", type=str, default="classic",
        choices=[m.value for m in GameMode],
    )
    sim_p.add_argument("--games", type=int, default=10)
    sim_p.add_argument("--max-ticks", type=int, default=500)
    sim_p.add_argument("--seed", type=int, default=42)
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON game config file.",
    )
    sim_p.add_argument(
        "--best-score-file", type=str, default=None,
        help="Record the best simulated score in this file.",
    )

    # --- best ---
    best_p = sub.add_parser("best", help="Show or reset the stored best score.")
    best_p.add_argument(
        "--file", type=str, default=DEFAULT_BEST_SCORE_PATH,
        help="Best-score JSON file.",
    )
    best_p.add_argument(
        "--reset", action="store_true", help="Reset the best score to 0.",
    )

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    from dataclasses import replace
    from pathlib import Path

    from mode_snake.config import GameConfig
    from mode_snake.persistence import JsonBestScoreStore
    from mode_snake.simulate import simulate_games

    config = GameConfig.load(args.config) if args.config else GameConfig()
    config = replace(config, seed=args.seed)
    best_path = args.best_score_file or config.best_score_path
    store = JsonBestScoreStore(Path(best_path).expanduser()) if best_path else None
    try:
        result = simulate_games(
            mode=args.mode,
            num_games=args.games,
            max_ticks=args.max_ticks,
            seed=args.seed,
            config=config,
            store=store,
        )
    except ValueError as exc:
        logger.error("%s", exc)
        return 2
    print(result.summary())  # noqa: T201
    return 0


def _run_best(args: argparse.Namespace) -> int:
    from pathlib import Path

    from mode_snake.persistence import JsonBestScoreStore

    store = JsonBestScoreStore(Path(args.file).expanduser())
    if args.reset:
        store.save_best_score(0)
    print(f"Best score: {store.load_best_score()}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``mode-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "best": _run_best,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
