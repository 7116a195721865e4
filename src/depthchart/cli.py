"""Command-line interface for serving and inspecting the depth chart."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from depthchart.config import PHASES, display_name, iter_groups
from depthchart.config_loader import AppSettings
from depthchart.ingest import SeedError, default_seed_path, load_seed_file, seed_store
from depthchart.ordering import find_density_violations, group_by_position
from depthchart.persistence import PlayerStore


DB_HELP = "SQLite database path (overrides DEPTHCHART_DB_PATH)"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    settings = AppSettings.from_env()
    parser = argparse.ArgumentParser(description="Manage a team position depth chart")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (e.g., INFO, DEBUG)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default=settings.host, help="Interface to bind")
    serve.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    serve.add_argument("--db", type=Path, default=Path(settings.db_path), help=DB_HELP)
    serve.add_argument(
        "--seed",
        type=Path,
        default=Path(settings.seed_path) if settings.seed_path else None,
        help="Roster file used when the database is empty",
    )

    seed = subparsers.add_parser("seed", help="Load a roster file into the database")
    seed.add_argument(
        "seed_file",
        type=Path,
        nargs="?",
        default=None,
        help="JSON or CSV roster (defaults to the bundled sample roster)",
    )
    seed.add_argument("--db", type=Path, default=Path(settings.db_path), help=DB_HELP)
    seed.add_argument("--replace", action="store_true", help="Replace the existing roster instead of refusing a populated database")
    seed.add_argument(
        "--no-normalize",
        dest="normalize",
        action="store_false",
        help="Keep seed orders as-is instead of renumbering each position",
    )

    show = subparsers.add_parser("show", help="Print the depth chart")
    show.add_argument("--db", type=Path, default=Path(settings.db_path), help=DB_HELP)
    show.add_argument("--phase", choices=PHASES, default=None, help="Only print one phase")

    check = subparsers.add_parser("check", help="Report positions whose orders are not 1..n")
    check.add_argument("--db", type=Path, default=Path(settings.db_path), help=DB_HELP)

    return parser.parse_args(argv)


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    from depthchart.api import create_app

    settings = AppSettings.from_env()
    settings.db_path = str(args.db)
    settings.host = args.host
    settings.port = args.port
    if args.seed is not None:
        settings.seed_path = str(args.seed)
    app = create_app(settings=settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=args.log_level.lower())
    return 0


def _seed(args: argparse.Namespace) -> int:
    seed_file = args.seed_file or default_seed_path()
    try:
        players = load_seed_file(seed_file)
    except SeedError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    store = PlayerStore(args.db)
    try:
        written = seed_store(store, players, normalize=args.normalize, replace=args.replace)
    except SeedError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(f"Seeded {written} players into {store.db_path}")
    return 0


def _show(args: argparse.Namespace) -> int:
    store = PlayerStore(args.db)
    by_position = group_by_position(store.list_players())
    for phase in PHASES:
        if args.phase and phase != args.phase:
            continue
        print(phase.upper())
        for group in iter_groups(phase):
            print(f"  {group.name}")
            for code in group.positions:
                names = ", ".join(
                    f"{player.order}. {player.full_name} #{player.jersey} ({player.status})"
                    for player in by_position.get(code, [])
                )
                print(f"    {display_name(code):<4} {names or '-'}")
    return 0


def _check(args: argparse.Namespace) -> int:
    store = PlayerStore(args.db)
    violations = find_density_violations(store.list_players())
    if not violations:
        print("All positions have dense ordering")
        return 0
    for position, orders in sorted(violations.items()):
        print(f"{position}: orders {orders}")
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level)
    handlers = {
        "serve": _serve,
        "seed": _seed,
        "show": _show,
        "check": _check,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
