"""Image storage for uploaded clothing photos."""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path

from wardrobe_app.errors import ImageUploadError

LOGGER = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024
ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")


def validate_image_upload(content: bytes, content_type: str | None) -> None:
    """Reject uploads that are too large or not images."""

    if len(content) > MAX_IMAGE_BYTES:
        raise ImageUploadError("Image is too large. Choose a file of 5MB or less.")
    if not content_type or not content_type.startswith("image/"):
        raise ImageUploadError("Please choose an image file.")


def build_object_key(user_id: str, filename: str, now_ms: int | None = None) -> str:
    """Return ``<user_id>/<epoch millis>.<ext>`` for a stored upload."""

    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{user_id}/{timestamp}.{extension}"


class ImageStore(ABC):
    """Object storage returning public URLs for uploaded images."""

    def upload(self, user_id: str, filename: str, content: bytes, content_type: str | None) -> str:
        validate_image_upload(content, content_type)
        key = build_object_key(user_id, filename)
        url = self._store(key, content, str(content_type))
        LOGGER.info("Stored clothing image", extra={"object_key": key, "size_bytes": len(content)})
        return url

    @abstractmethod
    def _store(self, key: str, content: bytes, content_type: str) -> str:
        """Persist ``content`` under ``key`` and return its public URL."""


class LocalImageStore(ImageStore):
    """Filesystem-backed image store for local development and tests."""

    def __init__(self, root: str | Path = "data/images", base_url: str | None = None) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.base_url = (base_url or self.root.resolve().as_uri()).rstrip("/")

    def _store(self, key: str, content: bytes, content_type: str) -> str:
        target = self.root / key
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            raise ImageUploadError(f"Image upload failed: {exc}") from exc
        return f"{self.base_url}/{key}"


__all__ = [
    "ALLOWED_MIME_TYPES",
    "MAX_IMAGE_BYTES",
    "ImageStore",
    "LocalImageStore",
    "build_object_key",
    "validate_image_upload",
]
