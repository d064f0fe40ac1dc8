"""Tests for the OpenAI-backed text-completion client."""
from __future__ import annotations

from types import SimpleNamespace

import pytest
from openai import OpenAIError

from src.shared.config import SpecEngineConfig
from src.shared.errors import CompletionError
from src.spec_engine.services.completion_client import (
    DEFAULT_SYSTEM_PROMPT,
    CompletionClient,
    parse_json_object,
)


class _FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs: dict = {}

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client_with(completions: _FakeCompletions) -> CompletionClient:
    client = CompletionClient(api_key="sk-test", model="gpt-test")
    client._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return client


class TestParseJsonObject:
    def test_plain_object(self):
        assert parse_json_object('{"valid": true}') == {"valid": True}

    def test_fenced_object(self):
        text = 'Here you go:\n```json\n{"recommendedApis": []}\n```\nThanks'
        assert parse_json_object(text) == {"recommendedApis": []}

    def test_unlabelled_fence(self):
        assert parse_json_object('```\n{"a": 1}\n```') == {"a": 1}

    def test_invalid_json_raises(self):
        with pytest.raises(CompletionError):
            parse_json_object("not json at all")

    def test_non_object_raises(self):
        with pytest.raises(CompletionError, match="list"):
            parse_json_object("[1, 2, 3]")


class TestCompletionClient:
    def test_unconfigured_without_key(self):
        client = CompletionClient(api_key="")
        assert client.configured is False
        with pytest.raises(CompletionError, match="not configured"):
            client.complete("prompt")

    def test_configured_with_key(self):
        assert CompletionClient(api_key="sk-test").configured is True

    def test_from_config(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-config")
        monkeypatch.setenv("OPENAI_MODEL", "gpt-config")
        monkeypatch.setenv("COMPLETION_MAX_TOKENS", "256")
        client = CompletionClient.from_config(SpecEngineConfig())
        assert client.configured is True
        assert client.model == "gpt-config"
        assert client.max_tokens == 256

    def test_complete_returns_parsed_object(self):
        completions = _FakeCompletions(content='{"valid": false, "reasoning": "no"}')
        client = _client_with(completions)
        assert client.complete("Is this right?") == {"valid": False, "reasoning": "no"}
        assert completions.kwargs["model"] == "gpt-test"
        messages = completions.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": DEFAULT_SYSTEM_PROMPT}
        assert messages[1] == {"role": "user", "content": "Is this right?"}

    def test_custom_system_prompt(self):
        completions = _FakeCompletions(content="{}")
        _client_with(completions).complete("p", system_prompt="Be brief")
        assert completions.kwargs["messages"][0]["content"] == "Be brief"

    def test_sdk_error_becomes_completion_error(self):
        client = _client_with(_FakeCompletions(error=OpenAIError("connection reset")))
        with pytest.raises(CompletionError, match="connection reset"):
            client.complete("prompt")

    def test_empty_content_raises(self):
        client = _client_with(_FakeCompletions(content=""))
        with pytest.raises(CompletionError, match="no content"):
            client.complete("prompt")

    def test_non_json_content_raises(self):
        client = _client_with(_FakeCompletions(content="I think so."))
        with pytest.raises(CompletionError):
            client.complete("prompt")
