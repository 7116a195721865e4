"""Persistence layer for the depth chart player roster."""

from __future__ import annotations

import logging
import os
import sqlite3
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from depthchart.models import Player


logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "depthchart.sqlite"


class PlayerStore:
    """Simple SQLite-backed store for depth chart players.

    Every write method runs in a single transaction, so the deltas computed for
    one depth chart operation are applied completely or not at all. An explicit
    ``db_path`` wins; ``DEPTHCHART_DB_PATH`` is only consulted when none is given.
    """

    def __init__(self, db_path: Path | str | None = None):
        self._use_uri = False
        target = db_path if db_path is not None else os.getenv("DEPTHCHART_DB_PATH") or DEFAULT_DB_NAME
        if isinstance(target, str) and target.startswith("file:"):
            self.db_path: Path | str = target
            self._use_uri = True
        else:
            self.db_path = Path(target)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                conn = sqlite3.connect(self.db_path)
            except sqlite3.OperationalError:
                fallback_dir = Path(tempfile.gettempdir()) / "depthchart-runtime"
                fallback_dir.mkdir(parents=True, exist_ok=True)
                fallback = fallback_dir / "depthchart.sqlite"
                logger.warning("Cannot open %s; falling back to %s", self.db_path, fallback)
                conn = sqlite3.connect(fallback)
                self.db_path = fallback
                self._create_schema(conn)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection inside one transaction and always close it."""

        conn = self._connect()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._session() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id TEXT PRIMARY KEY,
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                jersey INTEGER NOT NULL,
                position TEXT NOT NULL,
                depth_order INTEGER NOT NULL,
                status TEXT NOT NULL
            )
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_players_position ON players (position, depth_order)"
        )

    def list_players(self) -> List[Player]:
        with self._session() as conn:
            rows = conn.execute(
                "SELECT * FROM players ORDER BY position, depth_order, id"
            ).fetchall()
        return [self._row_to_player(row) for row in rows]

    def get_player(self, player_id: str) -> Optional[Player]:
        with self._session() as conn:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_player(row)

    def count(self) -> int:
        with self._session() as conn:
            row = conn.execute("SELECT COUNT(*) FROM players").fetchone()
        return int(row[0])

    def missing_ids(self, player_ids: Iterable[str]) -> List[str]:
        wanted = list(dict.fromkeys(player_ids))
        if not wanted:
            return []
        placeholders = ", ".join("?" for _ in wanted)
        with self._session() as conn:
            rows = conn.execute(
                f"SELECT id FROM players WHERE id IN ({placeholders})",
                wanted,
            ).fetchall()
        present = {row["id"] for row in rows}
        return [player_id for player_id in wanted if player_id not in present]

    def replace_player(self, player: Player) -> Player:
        with self._session() as conn:
            cursor = conn.execute(
                """
                UPDATE players
                SET first_name = ?,
                    last_name = ?,
                    jersey = ?,
                    position = ?,
                    depth_order = ?,
                    status = ?
                WHERE id = ?
                """,
                (
                    player.first_name,
                    player.last_name,
                    player.jersey,
                    player.position,
                    player.order,
                    player.status,
                    player.id,
                ),
            )
            if cursor.rowcount == 0:
                raise KeyError(f"Player {player.id} not found")
        return player

    def apply_updates(self, updates: Sequence[Player]) -> List[str]:
        """Write position/order for each update; ids not stored are skipped."""

        applied: List[str] = []
        with self._session() as conn:
            for player in updates:
                cursor = conn.execute(
                    "UPDATE players SET position = ?, depth_order = ? WHERE id = ?",
                    (player.position, player.order, player.id),
                )
                if cursor.rowcount:
                    applied.append(player.id)
                else:
                    logger.info("Skipping update for unknown player %s", player.id)
        return applied

    def upsert_players(self, players: Iterable[Player], *, replace_all: bool = False) -> int:
        """Insert or overwrite players; ``replace_all`` first empties the table.

        Both steps share one transaction, so a failed load leaves the previous
        roster in place.
        """

        rows = [
            (
                player.id,
                player.first_name,
                player.last_name,
                player.jersey,
                player.position,
                player.order,
                player.status,
            )
            for player in players
        ]
        with self._session() as conn:
            if replace_all:
                conn.execute("DELETE FROM players")
            conn.executemany(
                """
                INSERT OR REPLACE INTO players (
                    id, first_name, last_name, jersey, position, depth_order, status
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
        return len(rows)

    def clear(self) -> None:
        with self._session() as conn:
            conn.execute("DELETE FROM players")

    def _row_to_player(self, row: sqlite3.Row) -> Player:
        return Player(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            jersey=int(row["jersey"]),
            position=row["position"],
            order=int(row["depth_order"]),
            status=row["status"],
        )
