"""Exception hierarchy shared by the wardrobe stores and the recommendation pipeline."""

from __future__ import annotations


class WardrobeError(Exception):
    """Base class for all wardrobe coordinator errors."""


class WardrobeStoreError(WardrobeError):
    """Raised when the item store cannot be read from or written to."""


class ImageUploadError(WardrobeError):
    """Raised when an image is rejected or cannot be stored."""


class RecommendationError(WardrobeError):
    """Base class for failures inside the recommendation pipeline."""


class GenerativeModelError(RecommendationError):
    """Transport failure or non-success status from the generative model endpoint."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedReplyError(RecommendationError):
    """The model answered, but not with a usable outfit payload."""


class EmptyWardrobeError(RecommendationError):
    """A recommendation was requested for a user without any items."""


class RecommendationInProgressError(RecommendationError):
    """Another recommendation for the same user is still in flight."""


__all__ = [
    "WardrobeError",
    "WardrobeStoreError",
    "ImageUploadError",
    "RecommendationError",
    "GenerativeModelError",
    "MalformedReplyError",
    "EmptyWardrobeError",
    "RecommendationInProgressError",
]
