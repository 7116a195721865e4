"""Helpers to load roster seed files and write them into the player store."""

from __future__ import annotations

import csv
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from pydantic import ValidationError

from depthchart.config import is_known_position
from depthchart.models import Player
from depthchart.ordering import apply_updates, find_density_violations, normalize_orders
from depthchart.persistence import PlayerStore


logger = logging.getLogger(__name__)


class SeedError(ValueError):
    """Raised when a seed file cannot be turned into player records."""


def default_seed_path() -> Path:
    """Location of the sample roster bundled with the package."""

    return Path(str(resources.files("depthchart").joinpath("data/players.json")))


def _read_json_rows(path: Path) -> List[Mapping[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SeedError(f"Invalid seed JSON in {path}: {exc}") from exc
    if isinstance(data, dict):
        for key, value in data.items():
            if key.lower() == "players":
                data = value
                break
    if not isinstance(data, list):
        raise SeedError(f"Seed file {path} must contain a list of players")
    return data


def _read_csv_rows(path: Path) -> List[Mapping[str, Any]]:
    with path.open(newline="", encoding="utf-8-sig") as handle:
        return list(csv.DictReader(handle))


def rows_to_players(rows: Iterable[Any]) -> List[Player]:
    players: List[Player] = []
    seen: set[str] = set()
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise SeedError(f"Seed row {index} is not an object")
        try:
            player = Player.from_mapping(row)
        except ValidationError as exc:
            raise SeedError(f"Seed row {index} is invalid: {exc}") from exc
        if player.id in seen:
            raise SeedError(f"Seed row {index} repeats player id {player.id!r}")
        seen.add(player.id)
        if not is_known_position(player.position):
            logger.warning(
                "Player %s (%s) has unknown position %s",
                player.id,
                player.full_name,
                player.position,
            )
        players.append(player)
    return players


def load_seed_file(path: Path | str) -> List[Player]:
    """Parse a JSON or CSV roster file into players.

    Field names are matched case-insensitively, so ``FirstName`` and
    ``firstName`` are equivalent.
    """

    path = Path(path)
    if not path.exists():
        raise SeedError(f"Seed file {path} does not exist")
    if path.suffix.lower() == ".csv":
        rows = _read_csv_rows(path)
    else:
        rows = _read_json_rows(path)
    players = rows_to_players(rows)
    logger.info("Loaded %d players from %s", len(players), path)
    return players


def seed_store(
    store: PlayerStore,
    players: Iterable[Player],
    *,
    normalize: bool = True,
    replace: bool = False,
) -> int:
    """Write players into an empty store, repairing gapped orders when asked.

    A populated store raises SeedError unless ``replace`` is set, in which case
    the old roster is removed in the same transaction as the insert.
    """

    existing = store.count()
    if existing and not replace:
        raise SeedError(f"Store already holds {existing} players; use replace to overwrite them")
    players = list(players)
    if normalize:
        for position, orders in sorted(find_density_violations(players).items()):
            logger.warning("Renumbering %s; seed orders were %s", position, orders)
        players = apply_updates(players, normalize_orders(players))
    written = store.upsert_players(players, replace_all=replace)
    logger.info("Seeded %d players", written)
    return written
