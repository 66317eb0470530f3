"""HTTP client for the Gemini ``generateContent`` endpoint."""

from __future__ import annotations

import logging
from typing import List

import requests
from pydantic import BaseModel, ValidationError

from wardrobe_app.config import DEFAULT_GEMINI_ENDPOINT, DEFAULT_GEMINI_MODEL
from wardrobe_app.errors import GenerativeModelError, MalformedReplyError


LOGGER = logging.getLogger(__name__)


class _Part(BaseModel):
    text: str


class _Content(BaseModel):
    parts: List[_Part]


class _Candidate(BaseModel):
    content: _Content


class _GenerateContentResponse(BaseModel):
    candidates: List[_Candidate]


def build_request_body(prompt: str) -> dict:
    """Wrap a prompt in the single-turn ``contents`` envelope."""

    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_reply_text(payload: object) -> str:
    """Return ``candidates[0].content.parts[0].text`` or raise :class:`MalformedReplyError`."""

    try:
        parsed = _GenerateContentResponse.model_validate(payload)
    except ValidationError as exc:
        raise MalformedReplyError("Model response does not match the generateContent schema") from exc
    if not parsed.candidates or not parsed.candidates[0].content.parts:
        raise MalformedReplyError("Model response contains no candidate text")
    return parsed.candidates[0].content.parts[0].text


class GeminiClient:
    """Issues one synchronous ``generateContent`` call per prompt.

    The API key travels as the ``key`` query parameter. There is no retry:
    any failure is reported to the caller, which decides how to fall back.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        endpoint: str = DEFAULT_GEMINI_ENDPOINT,
        timeout_seconds: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.endpoint = endpoint.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.endpoint}/{self.model}:generateContent"

    def generate_text(self, prompt: str) -> str:
        LOGGER.info("Requesting outfit from generative model", extra={"model": self.model})
        try:
            response = self.session.post(
                self.url,
                params={"key": self.api_key},
                json=build_request_body(prompt),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise GenerativeModelError(f"Generative model unreachable: {exc.__class__.__name__}") from exc

        if not response.ok:
            raise GenerativeModelError(
                f"HTTP error! status: {response.status_code}", status_code=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedReplyError("Model response body is not JSON") from exc
        return extract_reply_text(payload)


__all__ = ["GeminiClient", "build_request_body", "extract_reply_text"]
