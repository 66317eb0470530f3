"""Clothing item storage abstractions and SQLite implementation."""
from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional

from models.clothing_item import ClothingItem
from wardrobe_app.errors import WardrobeStoreError

LOGGER = logging.getLogger(__name__)


class WardrobeStore:
    """Persistence interface for clothing items.

    Implementations raise :class:`WardrobeStoreError` for any data-access
    failure so callers only need to handle one exception type.
    """

    def create_item(self, item: ClothingItem) -> ClothingItem:
        raise NotImplementedError

    def get_item(self, user_id: str, item_id: str) -> Optional[ClothingItem]:
        raise NotImplementedError

    def list_items_for_user(self, user_id: str) -> List[ClothingItem]:
        """Return every item owned by ``user_id``, newest first."""

        raise NotImplementedError

    def delete_item(self, user_id: str, item_id: str) -> bool:
        raise NotImplementedError

    @staticmethod
    def _rows_to_items(rows: Iterable[Any], convert: Callable[[Any], ClothingItem]) -> List[ClothingItem]:
        """Convert stored rows, skipping any that no longer pass item validation."""

        items: List[ClothingItem] = []
        for row in rows:
            try:
                items.append(convert(row))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                LOGGER.warning("Skipping unreadable clothing item: %s", exc)
        return items


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed store for clothing items."""

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS clothing_items (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    category TEXT NOT NULL,
                    color TEXT,
                    image_url TEXT NOT NULL,
                    description TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_clothing_items_user ON clothing_items (user_id, created_at)"
            )

    def create_item(self, item: ClothingItem) -> ClothingItem:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO clothing_items (
                        id, user_id, name, category, color, image_url, description, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        item.id,
                        item.user_id,
                        item.name,
                        item.category,
                        item.color,
                        item.image_url,
                        item.description,
                        item.created_at,
                        item.updated_at,
                    ),
                )
        except sqlite3.Error as exc:
            raise WardrobeStoreError(f"Could not insert clothing item: {exc}") from exc
        return item

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> ClothingItem:
        return ClothingItem(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            category=row["category"],
            color=row["color"] or "",
            image_url=row["image_url"],
            description=row["description"] or "",
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get_item(self, user_id: str, item_id: str) -> Optional[ClothingItem]:
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "SELECT * FROM clothing_items WHERE user_id = ? AND id = ?",
                    (user_id, item_id),
                )
                row = cursor.fetchone()
        except sqlite3.Error as exc:
            raise WardrobeStoreError(f"Could not read clothing item: {exc}") from exc
        return self._row_to_item(row) if row else None

    def list_items_for_user(self, user_id: str) -> List[ClothingItem]:
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "SELECT * FROM clothing_items WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
                    (user_id,),
                )
                rows = cursor.fetchall()
        except sqlite3.Error as exc:
            raise WardrobeStoreError(f"Could not list clothing items: {exc}") from exc
        return self._rows_to_items(rows, self._row_to_item)

    def delete_item(self, user_id: str, item_id: str) -> bool:
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM clothing_items WHERE user_id = ? AND id = ?",
                    (user_id, item_id),
                )
                return cursor.rowcount > 0
        except sqlite3.Error as exc:
            raise WardrobeStoreError(f"Could not delete clothing item: {exc}") from exc


__all__ = ["WardrobeStore", "SQLiteWardrobeStore"]
