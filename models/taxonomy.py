"""Canonical taxonomy definitions for clothing items and outfit requests.

This module centralises the closed vocabularies used across the app:
clothing categories, occasions and seasons, each mapped to the label shown
to users. Helper functions keep validation consistent across the stores,
the selector and the HTTP layer.
"""

from typing import Dict, List


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace(" ", "_")


CATEGORIES: Dict[str, str] = {
    "tops": "Tops",
    "bottoms": "Bottoms",
    "outerwear": "Outerwear",
    "shoes": "Shoes",
    "accessories": "Accessories",
}

OCCASIONS: Dict[str, str] = {
    "casual": "Casual",
    "work": "Business",
    "formal": "Formal",
    "date": "Date",
    "party": "Party",
    "sports": "Sports",
}

SEASONS: Dict[str, str] = {
    "spring": "Spring",
    "summer": "Summer",
    "autumn": "Autumn",
    "winter": "Winter",
}

# Offered by the add-item form; any other colour text is accepted as-is.
SUGGESTED_COLORS: List[str] = [
    "white",
    "black",
    "gray",
    "navy",
    "blue",
    "light blue",
    "red",
    "pink",
    "yellow",
    "green",
    "brown",
    "beige",
]


def _validate(value: str, allowed: Dict[str, str], kind: str) -> str:
    key = _normalize_key(str(value))
    if key not in allowed:
        raise ValueError(f"Unsupported {kind} '{value}'. Allowed: {sorted(allowed)}")
    return key


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Raises a :class:`ValueError` if the category is not part of the canonical
    taxonomy.
    """

    return _validate(value, CATEGORIES, "category")


def validate_occasion(value: str) -> str:
    """Validate and normalise an occasion value."""

    return _validate(value, OCCASIONS, "occasion")


def validate_season(value: str) -> str:
    """Validate and normalise a season value."""

    return _validate(value, SEASONS, "season")


def occasion_label(value: str) -> str:
    return OCCASIONS[validate_occasion(value)]


def season_label(value: str) -> str:
    return SEASONS[validate_season(value)]


def normalize_color_name(raw_string: str) -> str:
    """Trim and lowercase a colour; colours are free text and never rejected."""

    return " ".join(raw_string.split()).lower()


def as_options() -> Dict[str, object]:
    """Expose the vocabularies in a form suitable for select inputs."""

    return {
        "categories": [{"value": key, "label": label} for key, label in CATEGORIES.items()],
        "occasions": [{"value": key, "label": label} for key, label in OCCASIONS.items()],
        "seasons": [{"value": key, "label": label} for key, label in SEASONS.items()],
        "colors": list(SUGGESTED_COLORS),
    }


__all__ = [
    "CATEGORIES",
    "OCCASIONS",
    "SEASONS",
    "SUGGESTED_COLORS",
    "validate_category",
    "validate_occasion",
    "validate_season",
    "occasion_label",
    "season_label",
    "normalize_color_name",
    "as_options",
]
