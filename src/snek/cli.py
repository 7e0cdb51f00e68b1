"""Command-line tools for benchmarking the simulation engine."""

from __future__ import annotations

import argparse
import logging
import sys

from snek.size import Size

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snek",
        description="Snek simulation benchmarking and profiling workloads.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure standard ruleset turn throughput.",
    )
    bench_p.add_argument("--games", type=int, default=100)
    bench_p.add_argument("--snakes", type=int, default=2)
    bench_p.add_argument(
        "--size", type=Size.parse, default=Size.small(),
        help="Board size: small, medium, large, or WIDTHxHEIGHT.",
    )
    bench_p.add_argument("--max-turns", type=int, default=500)
    bench_p.add_argument("--spawn-chance", type=float, default=0.15)
    bench_p.add_argument("--seed", type=int, default=42)

    # --- cycle ---
    sub.add_parser(
        "cycle", help="Run the deterministic solo workload for profiling.",
    )

    return parser


def _run_benchmark(args: argparse.Namespace) -> int:
    from snek.benchmark import benchmark_throughput

    result = benchmark_throughput(
        num_games=args.games,
        snake_count=args.snakes,
        size=args.size,
        max_turns=args.max_turns,
        apple_spawn_chance=args.spawn_chance,
        seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_cycle(args: argparse.Namespace) -> int:
    from snek.benchmark import CYCLE_SNAKE_ID, run_static_cycle

    board, turns = run_static_cycle()
    snake = board.get_snake(CYCLE_SNAKE_ID)
    print(  # noqa: T201
        f"Static cycle: {turns} turns, final length {snake.length}, "
        f"{snake.state.cause.value}"
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snek`` CLI."""
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
        "benchmark": _run_benchmark,
        "cycle": _run_cycle,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
