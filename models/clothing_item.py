"""Clothing item data model and helpers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

from models.taxonomy import normalize_color_name, validate_category


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ClothingItem:
    """A single piece of clothing owned by one user."""

    id: str
    user_id: str
    name: str
    category: str
    color: str
    image_url: str
    description: str = ""
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)

    def __post_init__(self) -> None:
        self.name = str(self.name).strip()
        if not self.name:
            raise ValueError("ClothingItem name must not be empty")
        self.category = validate_category(self.category)
        self.color = normalize_color_name(str(self.color or ""))
        self.description = str(self.description or "").strip()


def from_raw_metadata(metadata: Dict[str, Any]) -> ClothingItem:
    """Factory to build a :class:`ClothingItem` from a loose form or row payload.

    A fresh id and timestamps are assigned when the payload does not carry
    them, which is the case for newly submitted items.
    """

    required_fields = ["user_id", "name", "category", "image_url"]
    missing = [key for key in required_fields if not metadata.get(key)]
    if missing:
        raise ValueError(f"Missing required fields for ClothingItem: {missing}")

    created_at = metadata.get("created_at") or utc_now_iso()
    return ClothingItem(
        id=str(metadata.get("id") or uuid.uuid4()),
        user_id=str(metadata["user_id"]),
        name=str(metadata["name"]),
        category=str(metadata["category"]),
        color=str(metadata.get("color") or ""),
        image_url=str(metadata["image_url"]),
        description=str(metadata.get("description") or ""),
        created_at=str(created_at),
        updated_at=str(metadata.get("updated_at") or created_at),
    )


__all__ = ["ClothingItem", "from_raw_metadata", "utc_now_iso"]
