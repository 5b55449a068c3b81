"""
Tests for Configuration.build defaulting/clamping and the environment accessors.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from src.domains.suggestions.models import (
    ALLOWED_MODELS,
    DEFAULT_DAILY_LIMIT,
    DEFAULT_MINUTE_LIMIT,
    DEFAULT_MODEL,
    DEFAULT_PROMPT,
    Configuration,
)
from src.infrastructure.counters.counter_store import InMemoryCounterStore, RedisCounterStore
from src.utils import config

ENV_KEYS = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_TEMPERATURE",
    "GEMINI_DAILY_RATE_LIMIT",
    "GEMINI_MINUTE_RATE_LIMIT",
    "PROMPT_TEMPLATE",
    "PROMPT_TEMPLATE_FILE",
    "REDIS_URL",
    "AUDIT_LOG_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "load_config", lambda: None)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_build_defaults() -> None:
    cfg = Configuration.build()
    assert cfg.api_key == ""
    assert cfg.model == DEFAULT_MODEL
    assert cfg.daily_limit == DEFAULT_DAILY_LIMIT
    assert cfg.minute_limit == DEFAULT_MINUTE_LIMIT
    assert cfg.temperature == 1.0
    assert cfg.prompt_template == DEFAULT_PROMPT


@pytest.mark.parametrize("model", ["gpt-4o", "", None, "GEMINI-2.5-PRO"])
def test_unknown_model_falls_back(model: str | None) -> None:
    assert Configuration.build(model=model).model == DEFAULT_MODEL


@pytest.mark.parametrize("model", ALLOWED_MODELS)
def test_allowed_models_kept(model: str) -> None:
    assert Configuration.build(model=model).model == model


@pytest.mark.parametrize(
    "raw, expected",
    [(5, 2.0), (-1, 0.0), ("1.3", 1.3), ("abc", 1.0), (None, 1.0), (0, 0.0), (2.0, 2.0)],
)
def test_temperature_clamped(raw: object, expected: float) -> None:
    assert Configuration.build(temperature=raw).temperature == expected


def test_limits_parsed_or_defaulted() -> None:
    cfg = Configuration.build(daily_limit="0", minute_limit="x")
    assert cfg.daily_limit == 0
    assert cfg.minute_limit == DEFAULT_MINUTE_LIMIT


def test_blank_template_uses_default() -> None:
    assert Configuration.build(prompt_template="   \n").prompt_template == DEFAULT_PROMPT
    assert Configuration.build(prompt_template="Ideas for {searchTerm}").prompt_template == "Ideas for {searchTerm}"


def test_configuration_is_immutable_and_repr_hides_key() -> None:
    cfg = Configuration.build(api_key="AIzaSecretValue1234")
    with pytest.raises(AttributeError):
        cfg.model = "gemini-2.5-pro"  # type: ignore[misc]
    assert "AIzaSecretValue1234" not in repr(cfg)
    assert "1234" in repr(cfg)


def test_load_configuration_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", " key-abc ")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash")
    monkeypatch.setenv("GEMINI_TEMPERATURE", "0.5")
    monkeypatch.setenv("GEMINI_DAILY_RATE_LIMIT", "200")
    monkeypatch.setenv("GEMINI_MINUTE_RATE_LIMIT", "not-a-number")

    cfg = config.load_configuration()
    assert cfg.api_key == "key-abc"
    assert cfg.model == "gemini-2.5-flash"
    assert cfg.temperature == 0.5
    assert cfg.daily_limit == 200
    assert cfg.minute_limit == DEFAULT_MINUTE_LIMIT


def test_load_configuration_temperature_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_TEMPERATURE", "0.5")
    assert config.load_configuration(temperature="1.5").temperature == 1.5
    assert config.load_configuration(temperature=9).temperature == 2.0


def test_prompt_template_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "prompt.txt"
    path.write_text("Domains for {searchTerm}", encoding="utf-8")
    monkeypatch.setenv("PROMPT_TEMPLATE_FILE", str(path))
    assert config.load_configuration().prompt_template == "Domains for {searchTerm}"

    monkeypatch.setenv("PROMPT_TEMPLATE", "Inline {searchTerm}")
    assert config.load_configuration().prompt_template == "Inline {searchTerm}"


def test_counter_store_defaults_to_memory() -> None:
    assert isinstance(config.build_counter_store(), InMemoryCounterStore)


@patch("src.infrastructure.counters.counter_store.redis.from_url")
def test_counter_store_uses_redis_when_configured(mock_from_url: MagicMock, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/2")
    store = config.build_counter_store()
    assert isinstance(store, RedisCounterStore)
    mock_from_url.assert_called_once()


def test_audit_log_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    assert config.audit_log_path() == Path(config.__file__).resolve().parents[2] / "data" / "audit" / "api_calls.jsonl"
    monkeypatch.setenv("AUDIT_LOG_PATH", "off")
    assert config.audit_log_path() is None
    monkeypatch.setenv("AUDIT_LOG_PATH", str(tmp_path / "a.jsonl"))
    assert config.audit_log_path() == tmp_path / "a.jsonl"
