"""
Aspas - SQLite profile store.

Local on-device persistence for onboarding profiles.
"""

import logging
from datetime import datetime, timezone

import aiosqlite

from aspas.config import settings
from .adapter import StoreError

logger = logging.getLogger(__name__)

TABLE_NAME = "profiles"

# Singleton store instance
_store: "SqliteProfileStore | None" = None


class SqliteProfileStore:
    """Profile store backed by a local SQLite file via aiosqlite."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    async def _ensure_table(self, db: aiosqlite.Connection) -> None:
        await db.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                phone_number TEXT NOT NULL,
                first_name TEXT NOT NULL,
                profile_picture TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
            """
        )
        await db.commit()

    async def create_record(
        self,
        phone_number: str,
        first_name: str,
        profile_picture: str,
    ) -> int:
        """Insert one profile row and return its id."""
        try:
            db = await aiosqlite.connect(self.db_path)
        except (aiosqlite.Error, OSError) as e:
            raise StoreError(f"Failed to open profile store at {self.db_path}: {e}", stage="init") from e

        try:
            try:
                await self._ensure_table(db)
            except aiosqlite.Error as e:
                raise StoreError(f"Failed to initialize profile store: {e}", stage="init") from e

            try:
                cursor = await db.execute(
                    f"INSERT INTO {TABLE_NAME} (phone_number, first_name, profile_picture, created_at) "
                    "VALUES (?, ?, ?, ?)",
                    (phone_number, first_name, profile_picture, datetime.now(timezone.utc).isoformat()),
                )
                await db.commit()
            except aiosqlite.Error as e:
                raise StoreError(f"Failed to save profile: {e}", stage="commit") from e
        finally:
            await db.close()

        logger.debug(f"Profile row {cursor.lastrowid} written to {self.db_path}")
        return cursor.lastrowid

    async def ping(self) -> None:
        """Open the store and make sure the schema exists (health check)."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                await self._ensure_table(db)
        except (aiosqlite.Error, OSError) as e:
            raise StoreError(f"Profile store unavailable: {e}", stage="init") from e


def get_store() -> SqliteProfileStore:
    """
    Get the process-wide profile store.

    Uses singleton pattern so every flow in the process shares one handle.
    Pass it into the flow explicitly; the flow never looks it up itself.
    """
    global _store

    if _store is None:
        _store = SqliteProfileStore(settings.aspas_db_path)

    return _store
