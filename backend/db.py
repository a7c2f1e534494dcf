"""
Database connection helper.

This module centralizes how connections are created. We open a new
`sqlite3` connection per call against the single local data file named by
`settings.db_path`.

Usage:
    from db import get_conn
    with closing(get_conn()) as conn:
        conn.execute("SELECT 1;")

Every connection runs in WAL journal mode with relaxed `synchronous`
flushing. SQLite serializes writers itself, so callers need no locking.
"""

import sqlite3
from typing import Optional

from settings import settings

DDL = """
CREATE TABLE IF NOT EXISTS stress_logs (
    id TEXT PRIMARY KEY,
    user_id TEXT,
    timestamp INTEGER,
    date TEXT,
    mood INTEGER,
    tag TEXT,
    note TEXT,
    sleep_hours REAL,
    work_hours REAL,
    heart_rate INTEGER
);

CREATE INDEX IF NOT EXISTS idx_stress_logs_user_ts ON stress_logs (user_id, timestamp DESC);
"""


def get_conn(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Return a new sqlite3 connection with dict-like rows.

    `timeout` is the busy timeout: a writer waits up to 5 seconds for
    another writer's lock instead of failing straight away.
    """

    conn = sqlite3.connect(db_path or settings.db_path, timeout=5.0)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode = WAL")
    conn.execute("PRAGMA synchronous = NORMAL")
    conn.execute("PRAGMA temp_store = MEMORY")
    return conn
