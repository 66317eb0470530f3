"""Map a suggestion back onto the user's clothing items for display."""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from models.clothing_item import ClothingItem
from models.outfit import OutfitSuggestion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedOutfit:
    items: List[ClothingItem]
    unresolved: List[str] = field(default_factory=list)
    ambiguous_names: List[str] = field(default_factory=list)


def resolve_outfit_items(suggestion: OutfitSuggestion, items: Sequence[ClothingItem]) -> ResolvedOutfit:
    """Return the catalog items a suggestion refers to, in suggestion order.

    Selector suggestions carry item ids and resolve by identity. Model replies
    only name items, so they resolve by exact name with the first match
    winning; names shared by several items are reported as ambiguous and
    names that match nothing are dropped.
    """

    if suggestion.item_ids:
        by_id: Dict[str, ClothingItem] = {item.id: item for item in items}
        resolved = [by_id[item_id] for item_id in suggestion.item_ids if item_id in by_id]
        missing = [item_id for item_id in suggestion.item_ids if item_id not in by_id]
        return ResolvedOutfit(items=resolved, unresolved=missing)

    name_counts = Counter(item.name for item in items)
    first_by_name: Dict[str, ClothingItem] = {}
    for item in items:
        first_by_name.setdefault(item.name, item)

    resolved_items: List[ClothingItem] = []
    unresolved: List[str] = []
    ambiguous: List[str] = []
    for name in suggestion.outfit:
        item = first_by_name.get(name)
        if item is None:
            unresolved.append(name)
            continue
        if name_counts[name] > 1 and name not in ambiguous:
            ambiguous.append(name)
        resolved_items.append(item)

    if unresolved:
        logger.info("Dropped %s suggested names with no matching item", len(unresolved))
    if ambiguous:
        logger.warning("Suggested names match several items, using the first: %s", ambiguous)
    return ResolvedOutfit(items=resolved_items, unresolved=unresolved, ambiguous_names=ambiguous)


__all__ = ["ResolvedOutfit", "resolve_outfit_items"]
