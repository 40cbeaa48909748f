from __future__ import annotations

import logging
import os
import sqlite3
from typing import Optional

logger = logging.getLogger(__name__)

CURRENT_STORE_VERSION = 1
STORE_FILE_NAME = "preferences.sqlite3"


class PreferenceStore:
    """
    Persistent string key/value store (same contract as browser localStorage):
    get_item returns None for a missing key, set_item overwrites, remove_item
    is a no-op when the key is absent.
    """

    def __init__(self, db: sqlite3.Connection):
        self.db = db

    def get_item(self, key: str) -> Optional[str]:
        row = self.db.execute("SELECT value FROM preferences WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def set_item(self, key: str, value: str) -> None:
        self.db.execute(
            "INSERT INTO preferences (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, str(value)),
        )
        self.db.commit()

    def remove_item(self, key: str) -> None:
        self.db.execute("DELETE FROM preferences WHERE key = ?", (key,))
        self.db.commit()

    def keys(self) -> list[str]:
        return [row["key"] for row in self.db.execute("SELECT key FROM preferences ORDER BY key")]

    def close(self) -> None:
        self.db.close()


def open_store(sqlite_path: str) -> PreferenceStore:
    db = sqlite3.connect(sqlite_path)
    db.row_factory = sqlite3.Row

    existing_version = db.execute("PRAGMA user_version").fetchone()[0]
    upgrade_store_if_needed(db, existing_version)

    return PreferenceStore(db)


def initialize_store(app_data_dir: str) -> PreferenceStore:
    os.makedirs(app_data_dir, exist_ok=True)
    sqlite_path = os.path.join(app_data_dir, STORE_FILE_NAME)
    logger.info("Preference store path: %s", sqlite_path)
    return open_store(sqlite_path)


def upgrade_store_if_needed(db: sqlite3.Connection, existing_version: int) -> None:
    logger.debug("Existing preference store version: %s", existing_version)

    if existing_version >= CURRENT_STORE_VERSION:
        return

    if existing_version <= 0:
        logger.info("Migrate preference store to version 1...")
        db.execute("PRAGMA user_version=1")
        db.executescript("""
            CREATE TABLE IF NOT EXISTS preferences (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)
        db.commit()
