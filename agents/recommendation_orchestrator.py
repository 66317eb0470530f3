"""Recommendation orchestrator: model suggestion first, basic outfit as fallback."""
from __future__ import annotations

import contextlib
import logging
import random
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Protocol, Sequence, Set

from logic.outfit_selector import select_basic_outfit
from logic.prompting import build_outfit_prompt, parse_outfit_reply
from models.clothing_item import ClothingItem
from models.outfit import OutfitSuggestion
from models.taxonomy import validate_occasion, validate_season
from wardrobe_app.errors import (
    EmptyWardrobeError,
    GenerativeModelError,
    MalformedReplyError,
    RecommendationInProgressError,
)
from wardrobe_app.logging_config import get_logger, log_event, operation_context

LOGGER = get_logger(__name__)

MODEL_UNAVAILABLE_ADVISORY = "The AI stylist could not be reached, so here is a basic outfit instead."


class TextGenerator(Protocol):
    def generate_text(self, prompt: str) -> str: ...


class RecommendationState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    FALLBACK = "fallback"
    DONE = "done"


TRANSITIONS: Dict[RecommendationState, FrozenSet[RecommendationState]] = {
    RecommendationState.IDLE: frozenset({RecommendationState.REQUESTING}),
    RecommendationState.REQUESTING: frozenset({RecommendationState.FALLBACK, RecommendationState.DONE}),
    RecommendationState.FALLBACK: frozenset({RecommendationState.DONE}),
    RecommendationState.DONE: frozenset(),
}


@dataclass
class RecommendationRun:
    """Tracks one invocation through the state table above."""

    state: RecommendationState = RecommendationState.IDLE
    history: List[RecommendationState] = field(default_factory=lambda: [RecommendationState.IDLE])

    def advance(self, target: RecommendationState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal recommendation transition {self.state.value} -> {target.value}")
        self.state = target
        self.history.append(target)


@dataclass(frozen=True)
class RecommendationResult:
    suggestion: OutfitSuggestion
    source: str
    fallback_reason: Optional[str] = None
    advisory: Optional[str] = None
    states: List[str] = field(default_factory=list)


class RecommendationOrchestrator:
    """Turns an (occasion, season) choice into an outfit suggestion.

    With a configured generator the wardrobe is described to the model and its
    JSON reply is used verbatim. A missing generator, a failed request or an
    unusable reply all route to :func:`select_basic_outfit`, so every call over
    a non-empty wardrobe ends with a suggestion. Only one request per user may
    be in flight; an overlapping call is rejected.
    """

    def __init__(self, generator: TextGenerator | None = None, rng: random.Random | None = None) -> None:
        self.generator = generator
        self.rng = rng
        self._lock = threading.Lock()
        self._in_flight: Set[str] = set()

    @contextlib.contextmanager
    def _single_flight(self, key: str) -> Iterator[None]:
        with self._lock:
            if key in self._in_flight:
                raise RecommendationInProgressError("A recommendation is already being generated")
            self._in_flight.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._in_flight.discard(key)

    def is_in_flight(self, key: str) -> bool:
        with self._lock:
            return key in self._in_flight

    def recommend(
        self,
        items: Sequence[ClothingItem],
        occasion: str,
        season: str,
        flight_key: str = "default",
    ) -> RecommendationResult:
        occasion = validate_occasion(occasion)
        season = validate_season(season)
        if not items:
            raise EmptyWardrobeError("Add clothes to your wardrobe before requesting an outfit")

        with self._single_flight(flight_key), operation_context(
            "agent:recommendation.recommend", occasion=occasion, season=season
        ) as correlation_id:
            run = RecommendationRun()
            run.advance(RecommendationState.REQUESTING)
            log_event(
                LOGGER,
                level=logging.INFO,
                event="recommendation_started",
                agent="recommendation",
                correlation_id=correlation_id,
                occasion=occasion,
                season=season,
                item_count=len(items),
            )

            advisory: Optional[str] = None
            if self.generator is None:
                fallback_reason = "missing_credentials"
            else:
                try:
                    suggestion = self._request_model_suggestion(items, occasion, season)
                except GenerativeModelError as exc:
                    fallback_reason = "http_error" if exc.status_code is not None else "request_error"
                    if exc.status_code == 404:
                        advisory = MODEL_UNAVAILABLE_ADVISORY
                    log_event(
                        LOGGER,
                        level=logging.WARNING,
                        event="recommendation_model_failed",
                        agent="recommendation",
                        correlation_id=correlation_id,
                        status_code=exc.status_code,
                        error=str(exc),
                    )
                except MalformedReplyError as exc:
                    fallback_reason = "malformed_reply"
                    log_event(
                        LOGGER,
                        level=logging.WARNING,
                        event="recommendation_reply_unusable",
                        agent="recommendation",
                        correlation_id=correlation_id,
                        error=str(exc),
                    )
                except Exception as exc:  # noqa: BLE001
                    fallback_reason = "request_error"
                    log_event(
                        LOGGER,
                        level=logging.WARNING,
                        event="recommendation_model_failed",
                        agent="recommendation",
                        correlation_id=correlation_id,
                        error=str(exc),
                        exc_info=exc,
                    )
                else:
                    run.advance(RecommendationState.DONE)
                    return self._finish(run, suggestion, "model", correlation_id)

            run.advance(RecommendationState.FALLBACK)
            suggestion = select_basic_outfit(items, occasion, season, rng=self.rng)
            run.advance(RecommendationState.DONE)
            return self._finish(
                run,
                suggestion,
                "fallback",
                correlation_id,
                fallback_reason=fallback_reason,
                advisory=advisory,
            )

    def _request_model_suggestion(
        self, items: Sequence[ClothingItem], occasion: str, season: str
    ) -> OutfitSuggestion:
        prompt = build_outfit_prompt(items, occasion, season)
        reply_text = self.generator.generate_text(prompt)
        return parse_outfit_reply(reply_text)

    @staticmethod
    def _finish(
        run: RecommendationRun,
        suggestion: OutfitSuggestion,
        source: str,
        correlation_id: str,
        fallback_reason: Optional[str] = None,
        advisory: Optional[str] = None,
    ) -> RecommendationResult:
        log_event(
            LOGGER,
            level=logging.INFO,
            event="recommendation_completed",
            agent="recommendation",
            correlation_id=correlation_id,
            source=source,
            fallback_reason=fallback_reason,
            piece_count=len(suggestion.outfit),
        )
        return RecommendationResult(
            suggestion=suggestion,
            source=source,
            fallback_reason=fallback_reason,
            advisory=advisory,
            states=[state.value for state in run.history],
        )


__all__ = [
    "MODEL_UNAVAILABLE_ADVISORY",
    "TRANSITIONS",
    "RecommendationOrchestrator",
    "RecommendationResult",
    "RecommendationRun",
    "RecommendationState",
    "TextGenerator",
]
