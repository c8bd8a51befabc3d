"""
Adapter: Chat-completion gateway over Groq and OpenAI.

Implements LanguageModelPort. Providers are tried in order (Groq first,
then OpenAI); the first one that answers wins. A provider without an
API key is not configured at all.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import groq
import openai
from groq import Groq
from openai import OpenAI

from stockguru.core.config import Settings
from stockguru.domain.assistant.errors import LanguageModelUnavailableError
from stockguru.domain.assistant.ports import LanguageModelPort

logger = logging.getLogger(__name__)

PROVIDER_ERRORS = (groq.GroqError, openai.OpenAIError)


@dataclass(frozen=True)
class ChatProvider:
    """A chat-completions client bound to a model.

    Groq and OpenAI clients share the ``chat.completions.create`` call shape.
    """

    name: str
    client: Any
    model: str


class FallbackLanguageModel(LanguageModelPort):
    """Tries each provider in turn and returns the first completion."""

    def __init__(
        self,
        providers: list[ChatProvider],
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> None:
        self._providers = providers
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def provider_names(self) -> list[str]:
        return [p.name for p in self._providers]

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        json_mode: bool = False,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        if not self._providers:
            raise LanguageModelUnavailableError("no provider is configured")

        request: dict[str, Any] = {
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self._temperature if temperature is None else temperature,
            "max_tokens": self._max_tokens if max_tokens is None else max_tokens,
        }
        if json_mode:
            request["response_format"] = {"type": "json_object"}

        failures = []
        for provider in self._providers:
            try:
                completion = provider.client.chat.completions.create(
                    model=provider.model, **request
                )
            except PROVIDER_ERRORS as exc:
                logger.warning("%s completion failed, trying next provider: %s", provider.name, exc)
                failures.append(f"{provider.name}: {exc}")
                continue
            content = completion.choices[0].message.content or ""
            logger.debug("%s answered with %d chars", provider.name, len(content))
            return content.strip()

        raise LanguageModelUnavailableError("; ".join(failures))


def build_language_model(settings: Settings) -> FallbackLanguageModel:
    """Create the gateway from settings, skipping providers without a key."""
    providers = []
    if settings.groq_api_key:
        providers.append(
            ChatProvider("groq", Groq(api_key=settings.groq_api_key), settings.groq_model)
        )
    if settings.openai_api_key:
        providers.append(
            ChatProvider("openai", OpenAI(api_key=settings.openai_api_key), settings.openai_model)
        )
    if not providers:
        logger.warning("No LLM API key configured; assistant will use fallback replies")
    return FallbackLanguageModel(
        providers,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )
