"""SQLite data store for TradeLight."""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional


class DataStore:
    """SQLite-based data store for TradeLight.

    Holds three things: the local key-value cache (the journal's equivalent of
    browser storage), the documents of the local remote store, and local
    user accounts.
    """

    REQUIRED_TABLES = [
        "local_storage",
        "documents",
        "users",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Key-value cache table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS local_storage (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

            # Documents table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS documents (
                    path TEXT PRIMARY KEY,
                    collection TEXT NOT NULL,
                    data TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            # Users table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    uid TEXT PRIMARY KEY,
                    email TEXT NOT NULL UNIQUE,
                    display_name TEXT NOT NULL DEFAULT '',
                    password_hash TEXT NOT NULL,
                    salt TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Local Storage ====================

    def get_item(self, key: str) -> Optional[str]:
        """Get a cached string value.

        Args:
            key: Cache key.

        Returns:
            Stored value, or None if the key is absent.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM local_storage WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set_item(self, key: str, value: str) -> None:
        """Store a string value under a key, replacing any previous value.

        Args:
            key: Cache key.
            value: Value to store.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT OR REPLACE INTO local_storage (key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()

    def remove_item(self, key: str) -> None:
        """Remove a cached value.

        Args:
            key: Cache key.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM local_storage WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()

    def get_keys(self, prefix: str = "") -> list[str]:
        """Get all cache keys starting with a prefix.

        Args:
            prefix: Key prefix to match.

        Returns:
            Sorted list of keys.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT key FROM local_storage WHERE substr(key, 1, ?) = ? ORDER BY key",
                (len(prefix), prefix),
            )
            return [row["key"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Documents ====================

    def save_document(self, path: str, collection: str, data: str) -> None:
        """Save a serialized document.

        Args:
            path: Full document path.
            collection: Path of the parent collection.
            data: JSON-encoded document body.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO documents (path, collection, data, updated_at)
                VALUES (?, ?, ?, ?)
                """,
                (path, collection, data, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def get_document(self, path: str) -> Optional[str]:
        """Get a serialized document by path.

        Args:
            path: Full document path.

        Returns:
            JSON-encoded body, or None if not found.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT data FROM documents WHERE path = ?", (path,))
            row = cursor.fetchone()
            return row["data"] if row else None
        finally:
            conn.close()

    def list_documents(self, collection: str) -> list[str]:
        """Get every serialized document in a collection.

        Args:
            collection: Path of the collection.

        Returns:
            JSON-encoded bodies ordered by document path.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT data FROM documents WHERE collection = ? ORDER BY path",
                (collection,),
            )
            return [row["data"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Users ====================

    def create_user(
        self,
        uid: str,
        email: str,
        display_name: str,
        password_hash: str,
        salt: str,
    ) -> None:
        """Insert a user account.

        Raises:
            sqlite3.IntegrityError: If the email is already registered.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO users (uid, email, display_name, password_hash, salt, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (uid, email, display_name, password_hash, salt, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def get_user_by_email(self, email: str) -> Optional[dict]:
        """Get a user account row by email."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT uid, email, display_name, password_hash, salt
                FROM users WHERE email = ?
                """,
                (email,),
            )
            row = cursor.fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    def get_user(self, uid: str) -> Optional[dict]:
        """Get a user account row by uid."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT uid, email, display_name FROM users WHERE uid = ?",
                (uid,),
            )
            row = cursor.fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    def update_display_name(self, uid: str, display_name: str) -> None:
        """Change a user's display name."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE users SET display_name = ? WHERE uid = ?",
                (display_name, uid),
            )
            conn.commit()
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
