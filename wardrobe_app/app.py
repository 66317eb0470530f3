"""Wardrobe app bootstrap."""

from dataclasses import asdict
import logging
import random

from pydantic import ValidationError

from agents.recommendation_orchestrator import RecommendationOrchestrator, TextGenerator
from logic.outfit_resolution import resolve_outfit_items
from logic.validation import RecommendationRequest, validation_failure
from models.clothing_item import ClothingItem
from wardrobe_app.config import WardrobeConfig
from wardrobe_app.errors import (
    EmptyWardrobeError,
    ImageUploadError,
    RecommendationInProgressError,
    WardrobeStoreError,
)
from wardrobe_app.logging_config import configure_logging, get_logger, log_event, operation_context
from tools.gemini_client import GeminiClient
from tools.image_store import ImageStore, LocalImageStore, validate_image_upload
from tools.supabase_backend import SupabaseImageStore, SupabaseWardrobeStore, get_supabase_client
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore
from tools.wardrobe_tools import WardrobeTools


LOGGER = get_logger(__name__)


class WardrobeApp:
    """Wires together the stores, the model client and the recommendation orchestrator."""

    def __init__(
        self,
        config: WardrobeConfig | None = None,
        store: WardrobeStore | None = None,
        image_store: ImageStore | None = None,
        generator: TextGenerator | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or WardrobeConfig.from_env()
        configure_logging()

        self.store = store or self._build_store()
        self.image_store = image_store or self._build_image_store()
        self.wardrobe_tools = WardrobeTools(self.store, self.image_store)
        self.generator = generator or self._build_generator()
        self.orchestrator = RecommendationOrchestrator(generator=self.generator, rng=rng)

    def _supabase_client(self):
        if not (self.config.supabase_url and self.config.supabase_key):
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY are required for the supabase backend")
        return get_supabase_client(self.config.supabase_url, self.config.supabase_key)

    def _build_store(self) -> WardrobeStore:
        if self.config.wardrobe_backend == "supabase":
            return SupabaseWardrobeStore(self._supabase_client())
        return SQLiteWardrobeStore(self.config.wardrobe_db_path or "data/wardrobe.db")

    def _build_image_store(self) -> ImageStore:
        if self.config.wardrobe_backend == "supabase":
            return SupabaseImageStore(self._supabase_client(), bucket=self.config.image_bucket)
        return LocalImageStore(
            self.config.image_store_path or "data/images", base_url=self.config.image_base_url
        )

    def _build_generator(self) -> TextGenerator | None:
        """Return a model client, or ``None`` so every request uses the basic selector."""

        if not self.config.has_model_credentials:
            LOGGER.info("No Gemini API key configured; recommendations use the basic selector")
            return None
        return GeminiClient(
            api_key=str(self.config.gemini_api_key),
            model=self.config.gemini_model,
            endpoint=self.config.gemini_endpoint,
            timeout_seconds=self.config.request_timeout_seconds,
        )

    def list_items(self, user_id: str) -> list[ClothingItem]:
        """Return the user's items newest first; a failed read yields an empty list."""

        try:
            return self.wardrobe_tools.list_clothing_items(user_id=user_id)
        except WardrobeStoreError as exc:
            log_event(
                LOGGER,
                level=logging.ERROR,
                event="wardrobe_fetch_failed",
                agent="app",
                method="list_items",
                error=str(exc),
            )
            return []

    def add_item(self, *, user_id: str, item_data: dict) -> dict:
        """Store a new item whose image URL has already been resolved."""

        with operation_context("app:add_item"):
            try:
                stored = self.wardrobe_tools.add_clothing_item(user_id=user_id, item_data=item_data)
            except ValidationError as exc:
                return validation_failure("Invalid clothing item", exc)
            except WardrobeStoreError as exc:
                log_event(
                    LOGGER,
                    level=logging.ERROR,
                    event="wardrobe_insert_failed",
                    agent="app",
                    method="add_item",
                    error=str(exc),
                )
                return {
                    "status": "error",
                    "message": "Something went wrong while adding the item. Please try again.",
                }
            return {"status": "ok", "item": stored}

    def add_item_with_image(
        self,
        *,
        user_id: str,
        item_data: dict,
        filename: str,
        content: bytes,
        content_type: str | None,
    ) -> dict:
        """Upload the photo first, then store the item pointing at its public URL."""

        with operation_context("app:add_item_with_image"):
            try:
                validate_image_upload(content, content_type)
            except ImageUploadError as exc:
                return {"status": "invalid_image", "message": str(exc)}
            try:
                image_url = self.wardrobe_tools.upload_clothing_image(
                    user_id=user_id, filename=filename, content=content, content_type=content_type
                )
            except ImageUploadError as exc:
                return {"status": "error", "message": str(exc)}
            return self.add_item(user_id=user_id, item_data={**item_data, "image_url": image_url})

    def delete_item(self, *, user_id: str, item_id: str) -> dict:
        with operation_context("app:delete_item"):
            try:
                deleted = self.wardrobe_tools.delete_clothing_item(user_id=user_id, item_id=item_id)
            except WardrobeStoreError as exc:
                log_event(
                    LOGGER,
                    level=logging.ERROR,
                    event="wardrobe_delete_failed",
                    agent="app",
                    method="delete_item",
                    error=str(exc),
                )
                return {"status": "error", "message": "The item could not be deleted."}
            if not deleted:
                return {"status": "not_found", "message": "No such item."}
            return {"status": "ok", "item_id": item_id}

    def recommend_outfit(self, *, user_id: str, occasion: str, season: str) -> dict:
        """Session entry point for a recommendation over the user's current wardrobe."""

        with operation_context("app:recommend_outfit") as correlation_id:
            try:
                request = RecommendationRequest(occasion=occasion, season=season)
            except ValidationError as exc:
                return validation_failure("Choose an occasion and a season", exc)

            items = self.list_items(user_id)
            try:
                result = self.orchestrator.recommend(
                    items, request.occasion, request.season, flight_key=user_id
                )
            except EmptyWardrobeError as exc:
                return {"status": "empty_wardrobe", "message": str(exc)}
            except RecommendationInProgressError as exc:
                return {"status": "in_progress", "message": str(exc)}

            resolved = resolve_outfit_items(result.suggestion, items)
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                agent="app",
                method="recommend_outfit",
                correlation_id=correlation_id,
                source=result.source,
                resolved_count=len(resolved.items),
            )
            return {
                "status": "ok",
                "suggestion": result.suggestion.as_payload(),
                "items": [asdict(item) for item in resolved.items],
                "source": result.source,
                "advisory": result.advisory,
                "debug_summary": {
                    "states": result.states,
                    "fallback_reason": result.fallback_reason,
                    "unresolved": resolved.unresolved,
                    "ambiguous_names": resolved.ambiguous_names,
                },
            }


__all__ = ["WardrobeApp"]
