"""
Text-generation client.

Sends a role-tagged conversation to the Anthropic Messages API and returns
the assistant's reply text. This is the only network suspension point in
the deck-building flow.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, cast

import anthropic
from anthropic.types import MessageParam, TextBlock

from deckoracle.config import MAX_TOKENS_CAP, settings
from deckoracle.models.chat import ChatMessage
from deckoracle.models.failure import TextGenerationError

logger = logging.getLogger(__name__)


def _split_system(messages: Sequence[ChatMessage]) -> tuple[str, list[MessageParam]]:
    """Separate system messages (sent as the system prompt) from the turns."""
    system_parts: list[str] = []
    turns: list[MessageParam] = []
    for message in messages:
        if message.role == "system":
            system_parts.append(message.content)
        else:
            turns.append({"role": cast(Any, message.role), "content": message.content})
    return "\n\n".join(system_parts), turns


class TextGenerationClient:
    """
    Thin async wrapper around the Anthropic client.

    Usage:
        client = TextGenerationClient.from_settings()
        reply = await client.complete(messages)
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max(1, min(max_tokens, MAX_TOKENS_CAP))
        self._client = client or anthropic.AsyncAnthropic(api_key=api_key)

    @classmethod
    def from_settings(cls) -> TextGenerationClient:
        return cls(
            api_key=settings.anthropic_api_key,
            model=settings.llm_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        """
        Request one assistant reply for a conversation.

        Args:
            messages: Conversation so far; system messages become the system prompt

        Returns:
            Concatenated text of the reply

        Raises:
            TextGenerationError: On connection failures and non-2xx responses
        """
        system, turns = _split_system(messages)

        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": turns,
        }
        if system:
            kwargs["system"] = system

        try:
            response = await self._client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            logger.warning("Text generation failed with status %s", e.status_code)
            raise TextGenerationError(
                f"API error: {e.status_code}", status_code=e.status_code
            ) from e
        except anthropic.APIError as e:
            logger.warning("Text generation request failed: %s", e)
            raise TextGenerationError(f"Request failed: {e}") from e

        if response.usage:
            logger.info(
                "token_usage",
                extra={
                    "model": self.model,
                    "input_tokens": response.usage.input_tokens,
                    "output_tokens": response.usage.output_tokens,
                },
            )

        return "".join(block.text for block in response.content if isinstance(block, TextBlock))
