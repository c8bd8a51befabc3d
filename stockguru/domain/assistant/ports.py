"""
Port interfaces (ABCs) for the assistant bounded context.
"""

from abc import ABC, abstractmethod
from typing import Optional

from stockguru.domain.assistant.entities import (
    AssistantReply,
    QueryClassification,
    SymbolData,
)


class LanguageModelPort(ABC):
    """Port for chat-completion style language models."""

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        json_mode: bool = False,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """Return the model's reply to a system + user prompt pair.

        Args:
            system_prompt: Role and output instructions.
            user_prompt: The user turn.
            json_mode: Ask the provider to return a JSON object.
            temperature: Sampling temperature; provider default if None.
            max_tokens: Completion length cap; provider default if None.

        Raises:
            LanguageModelUnavailableError: If no provider produced a reply.
        """
        raise NotImplementedError


class ChatAssistantPort(ABC):
    """Port for the conversational market assistant."""

    @abstractmethod
    def answer(self, message: str) -> AssistantReply:
        """Answer a free-form message. Never raises; falls back to canned replies."""
        raise NotImplementedError

    @abstractmethod
    def classify(self, query: str) -> QueryClassification:
        """Classify what a query needs. Never raises; falls back to keyword rules."""
        raise NotImplementedError

    @abstractmethod
    def answer_with_context(
        self,
        query: str,
        classification: QueryClassification,
        data: list[SymbolData],
    ) -> str:
        """Answer a classified query using gathered live data.

        Raises:
            LanguageModelUnavailableError: If no provider produced a reply.
        """
        raise NotImplementedError
