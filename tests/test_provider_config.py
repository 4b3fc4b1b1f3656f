"""Tests for settings defaults, environment overrides and key lookup."""

import dataclasses

import pytest

from answer_assistant.llm import provider_config
from answer_assistant.llm.provider_config import (
    AssistantSettings,
    default_settings,
    load_key,
    settings_from_env,
)


def test_defaults() -> None:
    settings = default_settings()

    assert settings.max_token_count == 3500
    assert settings.min_message_count == 1
    assert settings.openai.body.model == "gpt-3.5-turbo"
    assert settings.openai.body.temperature == 0.5
    assert settings.openai.body.max_tokens is None
    assert settings.openai.request.api_version == "v1"
    assert settings.openai.request.organization is None
    assert settings.openai.request.timeout is None


def test_default_factory_returns_equal_independent_values() -> None:
    assert default_settings() == default_settings() == AssistantSettings()


def test_settings_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        default_settings().max_token_count = 10


def test_empty_environment_gives_defaults() -> None:
    assert settings_from_env({}) == default_settings()


def test_environment_overrides() -> None:
    settings = settings_from_env({
        "ANSWER_ASSISTANT_MODEL": "gpt-4",
        "ANSWER_ASSISTANT_TEMPERATURE": "0.9",
        "ANSWER_ASSISTANT_MAX_TOKENS": "200",
        "ANSWER_ASSISTANT_MAX_TOKEN_COUNT": "1000",
        "ANSWER_ASSISTANT_MIN_MESSAGE_COUNT": "2",
        "ANSWER_ASSISTANT_API_VERSION": "v2",
        "ANSWER_ASSISTANT_TIMEOUT": "30",
        "OPENAI_ORGANIZATION": "org-1",
    })

    assert settings.openai.body.model == "gpt-4"
    assert settings.openai.body.temperature == 0.9
    assert settings.openai.body.max_tokens == 200
    assert settings.max_token_count == 1000
    assert settings.min_message_count == 2
    assert settings.openai.request.api_version == "v2"
    assert settings.openai.request.timeout == 30.0
    assert settings.openai.request.organization == "org-1"


def test_zero_overrides_are_respected() -> None:
    settings = settings_from_env({
        "ANSWER_ASSISTANT_TEMPERATURE": "0",
        "ANSWER_ASSISTANT_MAX_TOKEN_COUNT": "0",
    })

    assert settings.openai.body.temperature == 0.0
    assert settings.max_token_count == 0


def test_blank_values_are_ignored() -> None:
    assert settings_from_env({"ANSWER_ASSISTANT_MODEL": "  "}) == default_settings()


def test_invalid_number_names_variable() -> None:
    with pytest.raises(ValueError, match="ANSWER_ASSISTANT_MAX_TOKEN_COUNT"):
        settings_from_env({"ANSWER_ASSISTANT_MAX_TOKEN_COUNT": "many"})


def test_process_environment_is_read(monkeypatch) -> None:
    monkeypatch.setattr(provider_config, "load_dotenv", lambda: None)
    monkeypatch.setenv("ANSWER_ASSISTANT_MODEL", "gpt-4-32k")

    assert settings_from_env().openai.body.model == "gpt-4-32k"


def test_load_key_prefers_environment(monkeypatch, tmp_path) -> None:
    key_file = tmp_path / "openai.key"
    key_file.write_text("from-file\n")
    monkeypatch.setenv("OPENAI_API_KEY", "from-env")

    assert load_key(str(key_file)) == "from-env"


def test_load_key_reads_file(monkeypatch, tmp_path) -> None:
    key_file = tmp_path / "openai.key"
    key_file.write_text("  from-file\n")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert load_key(str(key_file)) == "from-file"


def test_load_key_missing(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert load_key(None) is None
    assert load_key(str(tmp_path / "openai.key")) is None
