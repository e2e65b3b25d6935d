"""Entry point: ``python -m survival``.

Supports two modes:
  - ``python -m survival``       -> FastAPI server driving a live simulation
  - ``python -m survival cli``   -> Headless run with a JSON replay trace
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Survival-wave combat simulation")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI control/observation server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--paused", action="store_true", help="Build the world but wait for /control/start")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless simulation")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=3000)
    cli.add_argument("--max-enemies", type=int, default=50)
    cli.add_argument("--replay", type=str, default="replay.json")
    cli.add_argument("--no-replay", action="store_true", help="Skip writing the replay trace")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from survival.api.app import create_app
    from survival.config import SimulationConfig

    config = SimulationConfig(world_seed=args.seed, log_level=args.log_level)
    app = create_app(config, autostart=not args.paused)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from survival.config import SimulationConfig
    from survival.engine.world_loop import WorldLoop
    from survival.utils.logging import setup_logging
    from survival.utils.replay import ReplayRecorder

    config = SimulationConfig(
        world_seed=args.seed,
        max_ticks=args.ticks,
        max_active_enemies=args.max_enemies,
        replay_file=args.replay,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    recorder = None
    if not args.no_replay:
        recorder = ReplayRecorder(config.replay_file, config.world_seed, every=10)

    loop = WorldLoop.build(config, recorder=recorder)
    try:
        loop.run(auto_upgrade=True)
    finally:
        loop.shutdown()

    stats = loop.context.player.stats
    logger.info("Done: %s at tick %d, wave %d, level %d, %.0f/%.0f HP",
                loop.state.name, loop.context.tick, loop.context.wave.wave_number,
                stats.level, stats.current_health, stats.max_health)
    if recorder is not None:
        logger.info("Replay written to %s", config.replay_file)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
