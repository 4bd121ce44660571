"""SQLite store for JSON documents fetched from the catalog service.

Catalog searches and link manifests are kept per namespace with the time they
were fetched, so repeated builds can skip the network and offline builds can
run from whatever was stored last.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timedelta, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Optional

from downloadables import __version__ as DOWNLOADABLES_VERSION

from .provider_cache import canonical_json

SCHEMA_VERSION = "2"

logger = logging.getLogger(__name__)


class DocumentCache:
    """Namespaced JSON documents with fetch timestamps."""

    def __init__(
        self,
        path: Path,
        max_entries_per_namespace: int | None = None,
        now_fn: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Open (or create) the cache database.

        Args:
            path: SQLite file; parent directories are created
            max_entries_per_namespace: Keep at most this many documents per
                namespace, dropping the oldest fetches first
            now_fn: Clock override for tests
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._max_entries = max_entries_per_namespace
        self._now_fn = now_fn or (lambda: datetime.now(timezone.utc))
        self._lock = Lock()
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._migrate()

    def __enter__(self) -> DocumentCache:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _migrate(self) -> None:
        with self._conn:
            self._conn.execute("CREATE TABLE IF NOT EXISTS meta (name TEXT PRIMARY KEY, value TEXT NOT NULL)")
            row = self._conn.execute("SELECT value FROM meta WHERE name = 'schema_version'").fetchone()
            if row is None or row[0] != SCHEMA_VERSION:
                if row is not None:
                    logger.info("Cache schema %s is outdated; clearing %s", row[0], self.path)
                self._conn.execute("DROP TABLE IF EXISTS documents")
                self._conn.executemany(
                    "INSERT OR REPLACE INTO meta (name, value) VALUES (?, ?)",
                    [("schema_version", SCHEMA_VERSION), ("written_by", DOWNLOADABLES_VERSION)],
                )
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    namespace TEXT NOT NULL,
                    key TEXT NOT NULL,
                    body TEXT NOT NULL,
                    fetched_at TEXT NOT NULL,
                    PRIMARY KEY (namespace, key)
                )
                """
            )

    def _now(self) -> datetime:
        return self._now_fn().astimezone(timezone.utc)

    def get(self, namespace: str, key: str, max_age: Optional[timedelta] = None) -> Optional[Any]:
        """Stored document, or None when missing, unreadable or older than ``max_age``."""
        with self._lock:
            row = self._conn.execute(
                "SELECT body, fetched_at FROM documents WHERE namespace = ? AND key = ?",
                (namespace, key),
            ).fetchone()
        if row is None:
            return None
        body, fetched_at = row
        if max_age is not None and self._now() - datetime.fromisoformat(fetched_at) > max_age:
            logger.debug("Cached %s document %s is stale", namespace, key)
            return None
        try:
            return json.loads(body)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable cached %s document %s", namespace, key)
            return None

    def put(self, namespace: str, key: str, document: Any) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO documents (namespace, key, body, fetched_at) VALUES (?, ?, ?, ?)",
                (namespace, key, canonical_json(document), self._now().isoformat()),
            )
            if self._max_entries is not None:
                # Oldest fetch goes first; key order breaks ties.
                self._conn.execute(
                    """
                    DELETE FROM documents WHERE namespace = ? AND key NOT IN (
                        SELECT key FROM documents WHERE namespace = ?
                        ORDER BY fetched_at DESC, key ASC LIMIT ?
                    )
                    """,
                    (namespace, namespace, self._max_entries),
                )

    def count(self, namespace: str) -> int:
        with self._lock:
            (total,) = self._conn.execute(
                "SELECT COUNT(*) FROM documents WHERE namespace = ?",
                (namespace,),
            ).fetchone()
        return int(total)

    def close(self) -> None:
        with self._lock:
            self._conn.close()
