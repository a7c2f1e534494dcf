"""
Repository: SQL operations for `stress_logs`.

This file contains only DB interaction code. It maps rows to plain Python
dicts suitable for JSON responses. Keep business rules out of this module.

Important notes:
- SQL uses `?` positional parameters.
- Every `sqlite3.Error` is re-raised as `StoreError`; the API turns that
  into a 500 response.
- Writes commit before the method returns.
"""

import sqlite3
from contextlib import closing
from typing import Any, Dict, List, Optional

from db import DDL, get_conn

COLUMNS = (
    "id",
    "user_id",
    "timestamp",
    "date",
    "mood",
    "tag",
    "note",
    "sleep_hours",
    "work_hours",
    "heart_rate",
)


class StoreError(Exception):
    """The stress log table could not be read or written."""


class StressLogRepo:
    """Reads and writes the `stress_logs` table of one SQLite file.

    Rows go in and come out as plain dicts keyed by `COLUMNS`. Each method
    opens its own connection and commits before returning, and every driver
    failure (including integers SQLite cannot store) surfaces as `StoreError`.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        return get_conn(self.db_path)

    def create_table(self) -> None:
        """Apply the DDL. Safe to call on every start."""

        try:
            with closing(self._connect()) as conn:
                conn.executescript(DDL)
                conn.commit()
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(f"Could not create stress_logs table: {e}") from e

    def insert_log(self, entry: Dict[str, Any]) -> str:
        """Append one fully populated row and return its id."""

        params = tuple(entry.get(col) for col in COLUMNS)
        try:
            with closing(self._connect()) as conn:
                conn.execute(
                    f"INSERT INTO stress_logs ({', '.join(COLUMNS)}) "
                    f"VALUES ({', '.join('?' for _ in COLUMNS)})",
                    params,
                )
                conn.commit()
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(str(e)) from e
        return entry["id"]

    def fetch_recent(self, user_id: str, limit: int) -> List[Dict[str, Any]]:
        """Fetch the most recent `limit` rows for `user_id`.

        Ordering is newest-first. Rows written in the same second are ordered
        by insertion, newest first.
        """

        try:
            with closing(self._connect()) as conn:
                cur = conn.execute(
                    f"SELECT {', '.join(COLUMNS)} FROM stress_logs "
                    "WHERE user_id = ? ORDER BY timestamp DESC, rowid DESC LIMIT ?",
                    (user_id, limit),
                )
                return [dict(r) for r in cur.fetchall()]
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(str(e)) from e

    def delete_all(self) -> int:
        """Delete every row for every user. Returns the number removed."""

        try:
            with closing(self._connect()) as conn:
                cur = conn.execute("DELETE FROM stress_logs")
                conn.commit()
                return cur.rowcount
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(str(e)) from e

    def count_by_user(self) -> Dict[str, int]:
        try:
            with closing(self._connect()) as conn:
                cur = conn.execute(
                    "SELECT user_id, COUNT(*) FROM stress_logs GROUP BY user_id ORDER BY user_id"
                )
                return {r[0]: r[1] for r in cur.fetchall()}
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(str(e)) from e

    def ping(self) -> None:
        """Lightweight DB health check. Raises `StoreError` on failure."""

        try:
            with closing(self._connect()) as conn:
                conn.execute("SELECT 1 FROM stress_logs LIMIT 1")
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(f"DB health check failed: {e}") from e
