# -*- coding: utf-8 -*-
"""
Draft repository - durable key-value storage for enrollment drafts.

The draft store writes one JSON document under one well-known key. Backends
only move strings in and out; serialization stays with the caller. Every
backend failure is raised as DraftStorageException so callers can decide
what to swallow.
"""

import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, Optional

from services.exceptions import DraftStorageException
from utils.logger import get_logger

logger = get_logger(__name__)


class DraftStorage(ABC):
    """Key-value interface for persisted drafts."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Stored value for key, or None when there is no entry."""
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete the entry; removing a missing key is not an error."""
        pass

    def close(self) -> None:
        """Release backend resources. Optional."""
        pass


class InMemoryDraftStorage(DraftStorage):
    """Dict-backed storage for tests and headless runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._entries: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def write(self, key: str, value: str) -> None:
        self._entries[key] = value

    def remove(self, key: str) -> None:
        self._entries.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._entries


class SQLiteDraftStorage(DraftStorage):
    """SQLite key-value table, one row per draft key."""

    CREATE_TABLE = """
        CREATE TABLE IF NOT EXISTS drafts (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize SQLite draft storage.

        Args:
            db_path: Database file; defaults to Config.DRAFT_DB_PATH
        """
        if db_path is None:
            from app.config import Config
            db_path = Config.DRAFT_DB_PATH

        self._db_path = Path(db_path)
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _get_connection(self) -> sqlite3.Connection:
        """Get connection, connecting and creating the table if needed."""
        if self._connection is None:
            try:
                self._db_path.parent.mkdir(parents=True, exist_ok=True)
                self._connection = sqlite3.connect(str(self._db_path))
                self._connection.execute(self.CREATE_TABLE)
                self._connection.commit()
            except (sqlite3.Error, OSError) as e:
                self._connection = None
                raise DraftStorageException(
                    f"Cannot open draft database {self._db_path}: {e}", original_error=e
                ) from e
        return self._connection

    @contextmanager
    def _transaction(self, key: str) -> Iterator[sqlite3.Connection]:
        conn = self._get_connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise DraftStorageException(
                f"Draft storage error for '{key}': {e}", key=key, original_error=e
            ) from e

    def read(self, key: str) -> Optional[str]:
        with self._transaction(key) as conn:
            row = conn.execute("SELECT value FROM drafts WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def write(self, key: str, value: str) -> None:
        with self._transaction(key) as conn:
            conn.execute(
                """
                INSERT INTO drafts (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                               updated_at = excluded.updated_at
                """,
                (key, value, datetime.now().isoformat()),
            )
        logger.debug(f"Draft '{key}' written ({len(value)} bytes)")

    def remove(self, key: str) -> None:
        with self._transaction(key) as conn:
            conn.execute("DELETE FROM drafts WHERE key = ?", (key,))

    def close(self) -> None:
        """Close SQLite connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.info("Draft database connection closed")
