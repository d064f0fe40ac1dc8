"""Text-completion collaborator backed by an OpenAI-compatible chat API.

The client turns a prompt into a parsed JSON object.  Every failure
(transport, timeout, empty or non-JSON output, missing credentials) is
raised as :class:`CompletionError`; callers decide how to degrade.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Protocol

from openai import OpenAI, OpenAIError

from src.shared.config import SpecEngineConfig
from src.shared.errors import CompletionError

logger = logging.getLogger("spec-engine.completion")

DEFAULT_SYSTEM_PROMPT = (
    "You are an expert in the BIAN v13 standard for banking architecture. "
    "Answer only with a single JSON object."
)

_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL | re.IGNORECASE)


class TextCompletion(Protocol):
    """Anything that turns a prompt into a parsed JSON object or raises."""

    def complete(self, prompt: str, system_prompt: str | None = None) -> dict[str, Any]:
        ...


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse a model answer into a JSON object, tolerating a code fence."""
    candidate = text.strip()
    fenced = _JSON_FENCE_RE.search(candidate)
    if fenced:
        candidate = fenced.group(1)
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise CompletionError(f"Completion was not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise CompletionError(
            f"Completion must be a JSON object, got {type(parsed).__name__}"
        )
    return parsed


class CompletionClient:
    """Chat-completion client returning parsed JSON objects.

    The SDK's automatic retries are disabled and every call is bounded by
    ``timeout`` seconds.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        base_url: str | None = None,
        timeout: float = 30.0,
        temperature: float = 0.2,
        max_tokens: int = 1000,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client: OpenAI | None = None
        if api_key:
            self._client = OpenAI(
                api_key=api_key,
                base_url=base_url,
                timeout=timeout,
                max_retries=0,
            )

    @classmethod
    def from_config(cls, config: SpecEngineConfig) -> CompletionClient:
        return cls(
            api_key=config.openai_api_key,
            model=config.openai_model,
            base_url=config.openai_base_url,
            timeout=config.completion_timeout_seconds,
            temperature=config.completion_temperature,
            max_tokens=config.completion_max_tokens,
        )

    @property
    def configured(self) -> bool:
        return self._client is not None

    def complete(self, prompt: str, system_prompt: str | None = None) -> dict[str, Any]:
        """Send *prompt* and return the answer parsed as a JSON object.

        Raises:
            CompletionError: When the client is unconfigured, the call fails
                or times out, or the answer is not a JSON object.
        """
        if self._client is None:
            raise CompletionError("Completion service is not configured")

        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt or DEFAULT_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as exc:
            logger.warning("Completion request failed: %s", exc)
            raise CompletionError(f"Completion request failed: {exc}") from exc

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise CompletionError("Completion returned no content")
        return parse_json_object(content)
