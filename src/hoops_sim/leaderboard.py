"""SQLite-backed GOAT leaderboard.

The store is an explicit handle owned by the embedding service: it opens one
connection at construction and releases it on ``close()``. Writes are
serialised with a lock so concurrent requests cannot interleave an insert.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from threading import Lock
from typing import Any

from .config import DEFAULT_LEADERBOARD_LIMIT
from .models import LeaderboardEntry

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS goat_players (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    player_name TEXT NOT NULL,
    position TEXT NOT NULL,
    seasons_played INTEGER NOT NULL,
    total_points INTEGER NOT NULL,
    career_ppg REAL NOT NULL,
    championships INTEGER NOT NULL,
    mvps INTEGER NOT NULL,
    all_stars INTEGER NOT NULL,
    finals_mvps INTEGER NOT NULL,
    all_nba_first_teams INTEGER NOT NULL,
    all_nba_teams INTEGER NOT NULL,
    scoring_titles INTEGER NOT NULL,
    legacy_points INTEGER NOT NULL,
    goat_rating TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


class LeaderboardError(RuntimeError):
    """Raised when the leaderboard database cannot be read or written."""


class LeaderboardStore:
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()
        try:
            # FastAPI runs sync handlers on a threadpool; access is guarded by the lock.
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            with self._conn:
                self._conn.execute(_SCHEMA)
        except sqlite3.Error as exc:
            raise LeaderboardError(f"Failed to open leaderboard database {self.db_path}: {exc}") from exc
        logger.info("Leaderboard database ready at %s", self.db_path)

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> LeaderboardStore:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _row_to_entry(self, row: sqlite3.Row) -> LeaderboardEntry:
        values = dict(row)
        return LeaderboardEntry(
            entry_id=int(values.pop("id")),
            created_at=str(values.pop("created_at")) if values.get("created_at") is not None else None,
            **{column: values[column] for column in LeaderboardEntry.COLUMNS},
        )

    def add_entry(self, entry: LeaderboardEntry) -> LeaderboardEntry:
        columns = ", ".join(LeaderboardEntry.COLUMNS)
        placeholders = ", ".join(["?"] * len(LeaderboardEntry.COLUMNS))
        with self._lock:
            try:
                with self._conn:
                    cur = self._conn.execute(
                        f"INSERT INTO goat_players ({columns}) VALUES ({placeholders})",
                        entry.column_values(),
                    )
            except (sqlite3.Error, OverflowError) as exc:
                # OverflowError covers integers beyond the 64-bit range SQLite stores.
                raise LeaderboardError(f"Failed to add {entry.player_name} to leaderboard: {exc}") from exc
        entry.entry_id = int(cur.lastrowid)
        logger.info("Added %s to leaderboard with %s legacy points", entry.player_name, entry.legacy_points)
        return entry

    def top(self, limit: int = DEFAULT_LEADERBOARD_LIMIT) -> list[LeaderboardEntry]:
        with self._lock:
            try:
                rows = self._conn.execute(
                    "SELECT * FROM goat_players ORDER BY legacy_points DESC LIMIT ?",
                    (int(limit),),
                ).fetchall()
            except sqlite3.Error as exc:
                raise LeaderboardError(f"Failed to read leaderboard: {exc}") from exc
        return [self._row_to_entry(row) for row in rows]

    def rank_for(self, legacy_points: int) -> int:
        with self._lock:
            try:
                row = self._conn.execute(
                    "SELECT COUNT(*) + 1 AS rank FROM goat_players WHERE legacy_points > ?",
                    (legacy_points,),
                ).fetchone()
            except sqlite3.Error as exc:
                raise LeaderboardError(f"Failed to rank legacy score {legacy_points}: {exc}") from exc
        return int(row["rank"])

    def count(self) -> int:
        with self._lock:
            try:
                row = self._conn.execute("SELECT COUNT(*) AS count FROM goat_players").fetchone()
            except sqlite3.Error as exc:
                raise LeaderboardError(f"Failed to count leaderboard entries: {exc}") from exc
        return int(row["count"])
