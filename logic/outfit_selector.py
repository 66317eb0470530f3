"""Basic outfit assembly used when no model suggestion is available."""
from __future__ import annotations

import logging
import random
from typing import Dict, List, Sequence

from models.clothing_item import ClothingItem
from models.outfit import OutfitSuggestion
from models.taxonomy import occasion_label, season_label, validate_occasion, validate_season

logger = logging.getLogger(__name__)

SELECTED_CATEGORIES = ("tops", "bottoms", "outerwear", "shoes")
OUTERWEAR_SEASONS = ("autumn", "winter")
OUTERWEAR_OCCASIONS = ("formal",)

REASON_TEMPLATE = (
    "A basic outfit suited to {occasion} in {season}. "
    "Pieces were picked with colour combination and overall balance in mind."
)


def group_by_category(items: Sequence[ClothingItem]) -> Dict[str, List[ClothingItem]]:
    """Bucket items by the categories the selector draws from."""

    grouped: Dict[str, List[ClothingItem]] = {category: [] for category in SELECTED_CATEGORIES}
    for item in items:
        if item.category in grouped:
            grouped[item.category].append(item)
    return grouped


def needs_outerwear(occasion: str, season: str) -> bool:
    return season in OUTERWEAR_SEASONS or occasion in OUTERWEAR_OCCASIONS


def basic_reason(occasion: str, season: str) -> str:
    return REASON_TEMPLATE.format(occasion=occasion_label(occasion), season=season_label(season))


def select_basic_outfit(
    items: Sequence[ClothingItem],
    occasion: str,
    season: str,
    rng: random.Random | None = None,
) -> OutfitSuggestion:
    """Pick a top, a bottom, outerwear when the weather or dress code calls for it, and shoes.

    Each slot is a uniform random choice from its category; an empty category
    just leaves the slot out. Accessories are never chosen. Only the item
    choice is random, the reason text is a fixed template.
    """

    occasion = validate_occasion(occasion)
    season = validate_season(season)
    chooser = rng or random
    grouped = group_by_category(items)

    slots = ["tops", "bottoms"]
    if needs_outerwear(occasion, season):
        slots.append("outerwear")
    slots.append("shoes")

    chosen: List[ClothingItem] = []
    for category in slots:
        bucket = grouped[category]
        if bucket:
            chosen.append(chooser.choice(bucket))
        else:
            logger.debug("No %s available, leaving the slot empty", category)

    logger.info(
        "Selected basic outfit with %s pieces for occasion=%s season=%s", len(chosen), occasion, season
    )
    return OutfitSuggestion(
        outfit=[item.name for item in chosen],
        reason=basic_reason(occasion, season),
        item_ids=[item.id for item in chosen],
    )


__all__ = ["select_basic_outfit", "group_by_category", "needs_outerwear", "basic_reason"]
