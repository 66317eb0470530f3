"""Pydantic schemas and helpers for validating tool payloads and model replies."""

from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from models.taxonomy import validate_category, validate_occasion, validate_season


class ClothingItemInput(BaseModel):
    """Fields accepted from the add-item form."""

    name: str = Field(min_length=1)
    category: str
    color: str = ""
    description: str = ""
    image_url: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped

    @field_validator("category")
    @classmethod
    def _validate_category(cls, value: str) -> str:
        return validate_category(value)


class AddClothingItemInput(BaseModel):
    """Input contract for the add-item tool."""

    user_id: str = Field(min_length=1)
    item_data: ClothingItemInput


class RecommendationRequest(BaseModel):
    """Occasion and season chosen for one recommendation."""

    occasion: str
    season: str

    @field_validator("occasion")
    @classmethod
    def _validate_occasion(cls, value: str) -> str:
        return validate_occasion(value)

    @field_validator("season")
    @classmethod
    def _validate_season(cls, value: str) -> str:
        return validate_season(value)


class ModelOutfitPayload(BaseModel):
    """The two-field object the generative model is asked to reply with."""

    outfit: List[str]
    reason: str

    model_config = {"strict": True}


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    return ValidationResult(message=message, details=exc.errors(include_url=False, include_context=False)).model_dump()


__all__ = [
    "ClothingItemInput",
    "AddClothingItemInput",
    "RecommendationRequest",
    "ModelOutfitPayload",
    "ValidationResult",
    "validation_failure",
]
