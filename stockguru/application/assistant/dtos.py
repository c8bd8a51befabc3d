"""
Data Transfer Objects for the assistant application layer.
"""

from dataclasses import dataclass
from typing import Optional

from stockguru.domain.accounts.entities import ChatMessage
from stockguru.domain.assistant.entities import ChatOutcome


@dataclass(frozen=True)
class ChatCommand:
    """Input DTO for a chat message.

    Attributes:
        message: The user's question.
        user_id: Owner of the conversation; anonymous if None.
    """

    message: str
    user_id: Optional[str] = None


@dataclass(frozen=True)
class ChatExchange:
    """Output DTO pairing the persisted message with how it was answered."""

    message: ChatMessage
    outcome: ChatOutcome
