"""Supabase-backed item and image stores.

The hosted deployment keeps clothing items in the ``clothing_items`` table and
photos in a public storage bucket. Both stores take an injected client so
tests can pass a fake.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from models.clothing_item import ClothingItem
from tools.image_store import ALLOWED_MIME_TYPES, MAX_IMAGE_BYTES, ImageStore
from tools.wardrobe_store import WardrobeStore
from wardrobe_app.errors import ImageUploadError, WardrobeStoreError

LOGGER = logging.getLogger(__name__)

ITEMS_TABLE = "clothing_items"


@lru_cache(maxsize=4)
def get_supabase_client(url: str, key: str) -> Client:
    """Return one shared client per project URL and key."""

    try:
        return create_client(url, key)
    except Exception as exc:  # noqa: BLE001
        raise WardrobeStoreError(f"Failed to create Supabase client: {exc}") from exc


class SupabaseWardrobeStore(WardrobeStore):
    """Item store over the Supabase ``clothing_items`` table."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _table(self):
        return self.client.table(ITEMS_TABLE)

    @staticmethod
    def _row_to_item(row: Dict[str, Any]) -> ClothingItem:
        return ClothingItem(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            name=row["name"],
            category=row["category"],
            color=row.get("color") or "",
            image_url=row["image_url"],
            description=row.get("description") or "",
            created_at=str(row["created_at"]),
            updated_at=str(row.get("updated_at") or row["created_at"]),
        )

    def create_item(self, item: ClothingItem) -> ClothingItem:
        row = {
            "id": item.id,
            "user_id": item.user_id,
            "name": item.name,
            "category": item.category,
            "color": item.color,
            "image_url": item.image_url,
            "description": item.description,
            "created_at": item.created_at,
            "updated_at": item.updated_at,
        }
        try:
            response = self._table().insert(row).execute()
        except Exception as exc:  # noqa: BLE001
            raise WardrobeStoreError(f"Could not insert clothing item: {exc}") from exc
        inserted = response.data or [row]
        return self._row_to_item(inserted[0])

    def get_item(self, user_id: str, item_id: str) -> Optional[ClothingItem]:
        try:
            response = self._table().select("*").eq("user_id", user_id).eq("id", item_id).execute()
        except Exception as exc:  # noqa: BLE001
            raise WardrobeStoreError(f"Could not read clothing item: {exc}") from exc
        rows = response.data or []
        return self._row_to_item(rows[0]) if rows else None

    def list_items_for_user(self, user_id: str) -> List[ClothingItem]:
        try:
            response = (
                self._table()
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as exc:  # noqa: BLE001
            raise WardrobeStoreError(f"Could not list clothing items: {exc}") from exc
        return self._rows_to_items(response.data or [], self._row_to_item)

    def delete_item(self, user_id: str, item_id: str) -> bool:
        try:
            response = self._table().delete().eq("user_id", user_id).eq("id", item_id).execute()
        except Exception as exc:  # noqa: BLE001
            raise WardrobeStoreError(f"Could not delete clothing item: {exc}") from exc
        return bool(response.data)


class SupabaseImageStore(ImageStore):
    """Image store over a public Supabase storage bucket."""

    def __init__(self, client: Client, bucket: str = "clothing-images") -> None:
        self.client = client
        self.bucket = bucket

    def ensure_bucket(self) -> None:
        """Create the public bucket; an existing bucket counts as success."""

        try:
            self.client.storage.create_bucket(
                self.bucket,
                options={
                    "public": True,
                    "allowed_mime_types": list(ALLOWED_MIME_TYPES),
                    "file_size_limit": MAX_IMAGE_BYTES,
                },
            )
        except Exception as exc:  # noqa: BLE001
            if "already exists" in str(exc):
                return
            LOGGER.error("Could not create storage bucket", extra={"bucket": self.bucket}, exc_info=exc)
            raise ImageUploadError(
                "Image storage bucket could not be created. Create it from the Supabase dashboard."
            ) from exc
        LOGGER.info("Created storage bucket", extra={"bucket": self.bucket})

    def _upload(self, key: str, content: bytes, content_type: str) -> None:
        self.client.storage.from_(self.bucket).upload(key, content, {"content-type": content_type})

    def _store(self, key: str, content: bytes, content_type: str) -> str:
        try:
            self._upload(key, content, content_type)
        except Exception as exc:  # noqa: BLE001
            if "Bucket not found" not in str(exc):
                raise ImageUploadError(f"Image upload failed: {exc}") from exc
            self.ensure_bucket()
            try:
                self._upload(key, content, content_type)
            except Exception as retry_exc:  # noqa: BLE001
                raise ImageUploadError(f"Image upload failed: {retry_exc}") from retry_exc
        return self.client.storage.from_(self.bucket).get_public_url(key)


__all__ = ["SupabaseWardrobeStore", "SupabaseImageStore", "get_supabase_client"]
