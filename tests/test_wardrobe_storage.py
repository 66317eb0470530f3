"""Wardrobe storage, taxonomy and tool tests."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Dict

import pytest
from pydantic import ValidationError

from models import taxonomy
from models.clothing_item import ClothingItem, from_raw_metadata
from tools.image_store import LocalImageStore
from tools.wardrobe_store import SQLiteWardrobeStore
from tools.wardrobe_tools import WardrobeTools
from wardrobe_app.errors import WardrobeStoreError


@pytest.fixture()
def sample_metadata() -> Dict[str, object]:
    return {
        "user_id": "user-123",
        "name": "White Tee",
        "category": "Tops",
        "color": " White ",
        "image_url": "https://example.com/white-tee.jpg",
        "description": "Plain cotton tee",
    }


def test_taxonomy_contains_expected_vocabularies() -> None:
    """Canonical categories, occasions and seasons are present with labels."""

    assert set(taxonomy.CATEGORIES) == {"tops", "bottoms", "outerwear", "shoes", "accessories"}
    assert set(taxonomy.OCCASIONS) == {"casual", "work", "formal", "date", "party", "sports"}
    assert set(taxonomy.SEASONS) == {"spring", "summer", "autumn", "winter"}
    assert taxonomy.occasion_label("work") == "Business"
    assert taxonomy.season_label("Winter") == "Winter"


def test_validators_accept_and_reject() -> None:
    assert taxonomy.validate_category(" Outerwear ") == "outerwear"
    assert taxonomy.validate_occasion("FORMAL") == "formal"
    assert taxonomy.validate_season("autumn") == "autumn"

    with pytest.raises(ValueError):
        taxonomy.validate_category("dress")
    with pytest.raises(ValueError):
        taxonomy.validate_occasion("wedding")
    with pytest.raises(ValueError):
        taxonomy.validate_season("monsoon")


def test_colors_are_free_text() -> None:
    """Suggested colours are offered but anything else is kept as typed."""

    assert "navy" in taxonomy.SUGGESTED_COLORS
    assert taxonomy.normalize_color_name("  Mustard   Yellow ") == "mustard yellow"


def test_options_payload_lists_labels() -> None:
    options = taxonomy.as_options()
    assert {"value": "tops", "label": "Tops"} in options["categories"]
    assert len(options["occasions"]) == 6
    assert len(options["seasons"]) == 4


def test_clothing_item_construction(sample_metadata: Dict[str, object]) -> None:
    """ClothingItem enforces the category taxonomy and trims text fields."""

    item = from_raw_metadata(sample_metadata)
    assert item.category == "tops"
    assert item.color == "white"
    assert item.id
    assert item.created_at == item.updated_at


def test_from_raw_metadata_requires_fields(sample_metadata: Dict[str, object]) -> None:
    raw = dict(sample_metadata)
    raw.pop("image_url")
    with pytest.raises(ValueError):
        from_raw_metadata(raw)


def test_invalid_category_raises(sample_metadata: Dict[str, object]) -> None:
    with pytest.raises(ValueError):
        from_raw_metadata({**sample_metadata, "category": "hats"})


def test_blank_name_raises() -> None:
    with pytest.raises(ValueError):
        ClothingItem(
            id="x",
            user_id="user-123",
            name="   ",
            category="tops",
            color="white",
            image_url="https://example.com/x.jpg",
        )


@pytest.fixture()
def store(tmp_path: Path) -> SQLiteWardrobeStore:
    return SQLiteWardrobeStore(tmp_path / "wardrobe.db")


def test_store_round_trip(store: SQLiteWardrobeStore, sample_metadata: Dict[str, object]) -> None:
    """Creating and retrieving an item round-trips through SQLite."""

    item = from_raw_metadata(sample_metadata)
    store.create_item(item)

    assert store.get_item(item.user_id, item.id) == item
    assert store.list_items_for_user(item.user_id) == [item]


def test_store_lists_newest_first(store: SQLiteWardrobeStore, sample_metadata: Dict[str, object]) -> None:
    older = from_raw_metadata({**sample_metadata, "name": "Old Tee", "created_at": "2024-01-01T00:00:00+00:00"})
    newer = from_raw_metadata({**sample_metadata, "name": "New Tee", "created_at": "2024-06-01T00:00:00+00:00"})
    store.create_item(older)
    store.create_item(newer)

    assert [item.name for item in store.list_items_for_user("user-123")] == ["New Tee", "Old Tee"]


def test_store_scopes_items_by_user(store: SQLiteWardrobeStore, sample_metadata: Dict[str, object]) -> None:
    """Listing and deletion respect user_id isolation."""

    mine = from_raw_metadata(sample_metadata)
    theirs = from_raw_metadata({**sample_metadata, "user_id": "other"})
    store.create_item(mine)
    store.create_item(theirs)

    assert store.list_items_for_user("user-123") == [mine]
    assert store.list_items_for_user("other") == [theirs]
    assert store.delete_item("user-123", theirs.id) is False
    assert store.get_item("other", theirs.id) == theirs


def test_delete_item(store: SQLiteWardrobeStore, sample_metadata: Dict[str, object]) -> None:
    item = from_raw_metadata(sample_metadata)
    store.create_item(item)

    assert store.delete_item(item.user_id, item.id) is True
    assert store.get_item(item.user_id, item.id) is None
    assert store.delete_item(item.user_id, item.id) is False


def test_duplicate_id_is_a_store_error(store: SQLiteWardrobeStore, sample_metadata: Dict[str, object]) -> None:
    item = from_raw_metadata({**sample_metadata, "id": "fixed-id"})
    store.create_item(item)
    with pytest.raises(WardrobeStoreError):
        store.create_item(item)


def test_wardrobe_tools_round_trip(tmp_path: Path, sample_metadata: Dict[str, object]) -> None:
    """Wardrobe tools validate input and wrap store operations."""

    tools = WardrobeTools(SQLiteWardrobeStore(tmp_path / "tools.db"), LocalImageStore(tmp_path / "images"))
    payload = {key: value for key, value in sample_metadata.items() if key != "user_id"}

    added = tools.add_clothing_item(user_id="user-123", item_data=payload)
    assert added["category"] == "tops"

    fetched = tools.get_clothing_item(user_id="user-123", item_id=added["id"])
    assert fetched is not None
    assert fetched["name"] == "White Tee"

    listed = tools.list_clothing_items(user_id="user-123")
    assert [item.id for item in listed] == [added["id"]]

    assert tools.delete_clothing_item(user_id="user-123", item_id=added["id"]) is True
    assert tools.list_clothing_items(user_id="user-123") == []


def test_wardrobe_tools_reject_invalid_payload(tmp_path: Path) -> None:
    tools = WardrobeTools(SQLiteWardrobeStore(tmp_path / "tools.db"), LocalImageStore(tmp_path / "images"))

    with pytest.raises(ValidationError):
        tools.add_clothing_item(
            user_id="user-123",
            item_data={"name": "Scarf", "category": "neckwear", "image_url": "https://example.com/s.jpg"},
        )
    with pytest.raises(ValidationError):
        tools.add_clothing_item(
            user_id="user-123",
            item_data={"name": "Coat", "category": "outerwear", "image_url": ""},
        )


def test_store_skips_rows_that_fail_validation(store: SQLiteWardrobeStore, sample_metadata: Dict[str, object]) -> None:
    item = from_raw_metadata(sample_metadata)
    store.create_item(item)
    with sqlite3.connect(store.database_path) as conn:
        conn.execute(
            "INSERT INTO clothing_items VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            ("legacy", "user-123", "Tote", "bags", "", "https://example.com/t.jpg", "", "2020-01-01", "2020-01-01"),
        )

    assert store.list_items_for_user("user-123") == [item]
