"""
Text completion client: Pydantic AI foundation

A ``TextCompleter`` turns a prompt into text. Failures come back as a
``CompletionFailure`` value instead of an exception, so callers choose their
own fallback. One call per request: no retries, no timeout policy beyond the
model client's own.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Union

from pydantic_ai import Agent
from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.providers.anthropic import AnthropicProvider

from core.config import Settings

logger = logging.getLogger(__name__)

ANTHROPIC_PREFIX = "anthropic:"


@dataclass(frozen=True)
class Completion:
    text: str


@dataclass(frozen=True)
class CompletionFailure:
    error: str


CompletionResult = Union[Completion, CompletionFailure]


class TextCompleter(Protocol):
    async def complete(self, prompt: str, max_tokens: int) -> CompletionResult:
        ...


class PydanticAICompleter:
    """Single-turn text completion through a Pydantic AI agent.

    Usage:
        completer = PydanticAICompleter(agent)
        result = await completer.complete("Write a letter...", max_tokens=4000)
    """

    def __init__(self, agent: Agent):
        self.agent = agent

    async def complete(self, prompt: str, max_tokens: int) -> CompletionResult:
        try:
            result = await self.agent.run(prompt, model_settings={"max_tokens": max_tokens})
        except Exception as exc:
            logger.warning("Completion request failed: %s", exc)
            return CompletionFailure(error=f"{type(exc).__name__}: {exc}")

        output = result.output
        if not isinstance(output, str) or not output.strip():
            return CompletionFailure(error="Unexpected response type")
        return Completion(text=output)


def create_text_agent(
    model: str,
    api_key: str,
    system_prompt: Optional[str] = None,
) -> Agent:
    """
    Factory for a plain-text agent.

    ``anthropic:`` models get an explicit provider carrying ``api_key``;
    any other Pydantic AI model string is passed through unchanged.
    """
    if model.startswith(ANTHROPIC_PREFIX):
        model = AnthropicModel(
            model[len(ANTHROPIC_PREFIX):],
            provider=AnthropicProvider(api_key=api_key),
        )
    return Agent(
        model,
        output_type=str,
        system_prompt=system_prompt or (),
        name="letter_writer",
    )


def build_completer(settings: Settings) -> Optional[TextCompleter]:
    """Completer for the configured model, or ``None`` when no API key is set."""
    if not settings.anthropic_api_key:
        return None
    agent = create_text_agent(settings.letter_model, settings.anthropic_api_key)
    return PydanticAICompleter(agent)
