"""Instrumented wrappers around the item and image stores."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from logic.validation import AddClothingItemInput
from models.clothing_item import ClothingItem, from_raw_metadata
from tools.image_store import ImageStore, LocalImageStore
from tools.observability import instrument_tool
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore


class WardrobeTools:
    """Thin wrapper exposing store operations with logging and validation."""

    def __init__(self, store: Optional[WardrobeStore] = None, image_store: Optional[ImageStore] = None) -> None:
        self.store = store or SQLiteWardrobeStore()
        self.image_store = image_store or LocalImageStore()

    @instrument_tool("add_clothing_item", input_model=AddClothingItemInput)
    def add_clothing_item(self, user_id: str, item_data: Dict[str, Any]) -> Dict[str, Any]:
        item = from_raw_metadata({**item_data, "user_id": user_id})
        stored = self.store.create_item(item)
        return asdict(stored)

    @instrument_tool("get_clothing_item")
    def get_clothing_item(self, user_id: str, item_id: str) -> Optional[Dict[str, Any]]:
        item = self.store.get_item(user_id, item_id)
        return asdict(item) if item else None

    @instrument_tool("list_clothing_items")
    def list_clothing_items(self, user_id: str) -> List[ClothingItem]:
        return self.store.list_items_for_user(user_id)

    @instrument_tool("delete_clothing_item")
    def delete_clothing_item(self, user_id: str, item_id: str) -> bool:
        return self.store.delete_item(user_id, item_id)

    @instrument_tool("upload_clothing_image")
    def upload_clothing_image(
        self, user_id: str, filename: str, content: bytes, content_type: str | None
    ) -> str:
        return self.image_store.upload(user_id, filename, content, content_type)


__all__ = ["WardrobeTools"]
