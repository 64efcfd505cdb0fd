"""Command-line entry point: run the server or a headless simulation."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys

from copperhead.config import GameConfig
from copperhead.game import Game, GameSnapshot, InputEvent
from copperhead.grid import CellType, Grid

logger = logging.getLogger(__name__)

_GLYPHS = {
    CellType.EMPTY: ".",
    CellType.SNAKE: "o",
    CellType.HEAD: "@",
    CellType.FOOD: "*",
}


def render_text(snapshot: GameSnapshot) -> str:
    """Draw a snapshot as an ASCII board with a status line."""
    grid = Grid(width=snapshot.width, height=snapshot.height)
    cells = grid.occupancy(snapshot.body, snapshot.food)
    lines = [
        "".join(_GLYPHS[CellType(code)] for code in row)
        for row in cells.tolist()
    ]
    lines.append(
        f"state={snapshot.state.value} score={snapshot.score} "
        f"high={snapshot.high_score} tick={snapshot.tick}"
    )
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="copperhead",
        description="Copperhead snake game server and headless simulator.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP/WebSocket server.")
    serve_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    serve_p.add_argument("--host", type=str, default=None)
    serve_p.add_argument("--port", type=int, default=None)
    serve_p.add_argument("--tick-rate-ms", type=int, default=None)
    serve_p.add_argument("--seed", type=int, default=None)
    serve_p.add_argument("--log-level", type=str, default=None)

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play a scripted game without a display.",
    )
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--keys", type=str, default="space",
        help="Comma-separated key names; one tick runs after each key.",
    )
    sim_p.add_argument(
        "--ticks", type=int, default=0,
        help="Extra ticks to run after the scripted keys.",
    )
    sim_p.add_argument(
        "--json", action="store_true",
        help="Print the final snapshot as JSON instead of a board.",
    )

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()
    flag_map = {
        "host": "host",
        "port": "port",
        "tick_rate_ms": "tick_rate_ms",
        "seed": "seed",
        "log_level": "log_level",
    }
    overrides = {
        cfg_name: getattr(args, cli_name)
        for cli_name, cfg_name in flag_map.items()
        if getattr(args, cli_name, None) is not None
    }
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from copperhead.server.app import create_app

    config = _load_config(args)
    logging.getLogger().setLevel(config.log_level.upper())
    logger.info("Serving on %s:%d", config.host, config.port)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    return 0


def _run_simulate(args: argparse.Namespace) -> int:
    game = Game(seed=args.seed)
    for name in filter(None, (k.strip() for k in args.keys.split(","))):
        if InputEvent.parse(name) is None:
            logger.warning("Ignoring unknown key %r.", name)
        game.pressed(name)
        game.update()
    for _ in range(max(args.ticks, 0)):
        game.update()

    snapshot = game.snapshot()
    if args.json:
        print(json.dumps(snapshot.to_dict()))  # noqa: T201
    else:
        print(render_text(snapshot))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``copperhead`` CLI."""
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
        "serve": _run_serve,
        "simulate": _run_simulate,
    }
    try:
        return handlers[args.command](args)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
