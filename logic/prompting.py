"""Prompt construction and reply parsing for model-generated outfits."""

from __future__ import annotations

import json
import re
from typing import Sequence

from pydantic import ValidationError

from logic.validation import ModelOutfitPayload
from models.clothing_item import ClothingItem
from models.outfit import OutfitSuggestion
from models.taxonomy import occasion_label, season_label
from wardrobe_app.errors import MalformedReplyError

# Greedy: from the first opening brace to the last closing brace.
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def _item_line(item: ClothingItem) -> str:
    return f"- {item.name} ({item.category}, {item.color}): {item.description}"


def build_outfit_prompt(items: Sequence[ClothingItem], occasion: str, season: str) -> str:
    """Describe the wardrobe and ask for a strict ``{"outfit", "reason"}`` JSON reply."""

    occasion_text = occasion_label(occasion)
    season_text = season_label(season)
    wardrobe = "\n".join(_item_line(item) for item in items)
    return f"""
Suggest an outfit suited to {occasion_text} in {season_text} using only the clothes below.

Clothes:
{wardrobe}

Requirements:
1. Season: {season_text}
2. Occasion: {occasion_text}
3. Consider how the colours combine
4. Keep the outfit well balanced

Reply in this JSON format:
{{
  "outfit": ["item name 1", "item name 2", "item name 3"],
  "reason": "About 150 characters explaining why this outfit was chosen"
}}
"""


def parse_outfit_reply(text: str) -> OutfitSuggestion:
    """Pull the outfit object out of free text that may wrap it in prose.

    Raises :class:`MalformedReplyError` when no brace-delimited block is found,
    when it is not valid JSON, or when it lacks the two expected fields.
    """

    match = _JSON_OBJECT.search(text or "")
    if not match:
        raise MalformedReplyError("Invalid response format")
    try:
        raw = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise MalformedReplyError("Embedded outfit JSON could not be parsed") from exc
    try:
        payload = ModelOutfitPayload.model_validate(raw)
    except ValidationError as exc:
        raise MalformedReplyError("Embedded outfit JSON has the wrong shape") from exc
    return OutfitSuggestion(outfit=list(payload.outfit), reason=payload.reason)


__all__ = ["build_outfit_prompt", "parse_outfit_reply"]
