from __future__ import annotations

from pathlib import Path

import pytest

from depthchart.models import Player
from depthchart.persistence import PlayerStore


def make_player(player_id: str, position: str, order: int, **extra) -> Player:
    fields = {
        "first_name": extra.pop("first_name", player_id.upper()),
        "last_name": extra.pop("last_name", "Player"),
        "jersey": extra.pop("jersey", 10),
        "status": extra.pop("status", "A"),
    }
    return Player(id=player_id, position=position, order=order, **fields, **extra)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "DEPTHCHART_DB_PATH",
        "DEPTHCHART_SEED_PATH",
        "DEPTHCHART_CORS_ORIGINS",
        "DEPTHCHART_LOG_LEVEL",
        "PORT",
        "HOST",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def roster() -> list[Player]:
    return [
        make_player("a", "QB", 1),
        make_player("b", "QB", 2),
        make_player("c", "QB", 3),
        make_player("d", "RB", 1),
        make_player("e", "RB", 2),
        make_player("k", "K", 1),
    ]


@pytest.fixture
def store(tmp_path: Path, roster: list[Player]) -> PlayerStore:
    player_store = PlayerStore(tmp_path / "depthchart.sqlite")
    player_store.upsert_players(roster)
    return player_store


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
