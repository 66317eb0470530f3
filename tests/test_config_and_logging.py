"""Configuration loading and structured log redaction."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from wardrobe_app.config import DEFAULT_GEMINI_MODEL, WardrobeConfig
from wardrobe_app.logging_config import JsonFormatter, correlation_context, current_correlation_id, redact_for_log


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("APP_ENV", "APP_CONFIG_PATH", "GEMINI_API_KEY", "GEMINI_MODEL", "WARDROBE_BACKEND"):
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_environment() -> None:
    config = WardrobeConfig.from_env()
    assert config.gemini_api_key is None
    assert config.has_model_credentials is False
    assert config.gemini_model == DEFAULT_GEMINI_MODEL
    assert config.wardrobe_backend == "sqlite"


def test_yaml_file_is_merged_under_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / "staging.yaml"
    config_file.write_text(
        "# staging settings\n"
        "gemini_model: 'gemini-1.5-pro'\n"
        "wardrobe_backend: Supabase\n"
        "request_timeout_seconds: 4.5\n"
    )
    monkeypatch.setenv("APP_CONFIG_PATH", str(config_file))
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.0-flash-lite")

    config = WardrobeConfig.from_env()

    assert config.gemini_api_key == "from-env"
    assert config.gemini_model == "gemini-2.0-flash-lite"
    assert config.wardrobe_backend == "supabase"
    assert config.request_timeout_seconds == 4.5


def test_redaction_masks_owner_and_urls() -> None:
    scrubbed = redact_for_log(
        {
            "user_id": "user-1",
            "link": "https://example.com/a.jpg",
            "nested": [{"image_url": "x"}],
            "query": "models/x:generateContent?key=abc123",
        }
    )
    assert scrubbed["user_id"] == "[redacted]"
    assert scrubbed["link"] == "[redacted-url]"
    assert scrubbed["nested"] == [{"image_url": "[redacted]"}]
    assert scrubbed["query"] == "models/x:generateContent?key=[redacted]"


def test_json_formatter_includes_correlation_id() -> None:
    record = logging.LogRecord("wardrobe", logging.INFO, __file__, 1, "hello", None, None)
    record.user_id = "user-1"
    with correlation_context("corr-123"):
        payload = json.loads(JsonFormatter().format(record))
    assert payload["correlation_id"] == "corr-123"
    assert payload["message"] == "hello"
    assert payload["user_id"] == "[redacted]"


def test_correlation_ids_do_not_outlive_their_scope() -> None:
    first = current_correlation_id()
    second = current_correlation_id()
    assert first != second

    with correlation_context("corr-abc") as scoped:
        assert scoped == "corr-abc"
        assert current_correlation_id() == "corr-abc"
    assert current_correlation_id() != "corr-abc"
