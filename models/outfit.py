"""Outfit suggestion schema."""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class OutfitSuggestion:
    """A transient outfit proposal: item names in slot order plus a rationale.

    ``item_ids`` is only filled when the local selector built the outfit; model
    replies reference items by name alone.
    """

    outfit: List[str]
    reason: str
    item_ids: List[str] = field(default_factory=list)

    def as_payload(self) -> Dict[str, object]:
        return {"outfit": list(self.outfit), "reason": self.reason}
