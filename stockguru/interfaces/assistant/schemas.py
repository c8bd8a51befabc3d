"""
Pydantic schemas for assistant API request/response validation.
"""

import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import Field

from stockguru.domain.accounts.entities import ChatMessage
from stockguru.domain.assistant.entities import AssistantReply, QueryClassification
from stockguru.interfaces.market.schemas import ApiModel

MESSAGE_MAX_LEN = 2000
WORKFLOW_NAME = "intelligent_analysis"


class ChatRequest(ApiModel):
    """Request schema for the chat endpoints.

    Attributes:
        message: The user's question.
        user_id: Conversation owner; anonymous if omitted.
    """

    message: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LEN)
    user_id: Optional[str] = Field(default=None, max_length=64)


class ClassificationSchema(ApiModel):
    type: str
    confidence: float
    stock_symbols: list[str]
    needs_live_data: bool
    explanation: str

    @classmethod
    def from_entity(cls, classification: QueryClassification) -> "ClassificationSchema":
        return cls(
            type=classification.type.value,
            confidence=classification.confidence,
            stock_symbols=list(classification.stock_symbols),
            needs_live_data=classification.needs_live_data,
            explanation=classification.explanation,
        )


class ChatMetadata(ApiModel):
    """How a chat answer was produced."""

    classification: ClassificationSchema
    execution_steps: list[str]
    data_symbols: list[str]
    workflow: str = WORKFLOW_NAME


class ChatMessageItem(ApiModel):
    """A persisted chat exchange."""

    id: UUID
    user_id: Optional[str] = None
    message: str
    response: str
    timestamp: dt.datetime

    @classmethod
    def from_entity(cls, message: ChatMessage) -> "ChatMessageItem":
        return cls(
            id=message.id,
            user_id=message.user_id,
            message=message.message,
            response=message.response,
            timestamp=message.timestamp,
        )


class ChatResponse(ChatMessageItem):
    """A persisted chat exchange with its metadata."""

    metadata: ChatMetadata


class QuickReplyResponse(ApiModel):
    """Direct assistant answer with follow-up suggestions."""

    response: str
    suggestions: list[str]
    action_type: str

    @classmethod
    def from_entity(cls, reply: AssistantReply) -> "QuickReplyResponse":
        return cls(
            response=reply.response,
            suggestions=list(reply.suggestions),
            action_type=reply.action_type.value,
        )
