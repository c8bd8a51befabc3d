"""
FastAPI router for the assistant bounded context.

All routes delegate to use cases. No business logic here.
Both routes call a language model and use the heavy rate limit.
"""

from fastapi import APIRouter, Depends, Request

from stockguru.application.assistant.answer_message import AnswerMessageUseCase
from stockguru.application.assistant.dtos import ChatCommand
from stockguru.application.assistant.process_chat import ProcessChatUseCase
from stockguru.interfaces.assistant.dependencies import (
    get_answer_message_use_case,
    get_process_chat_use_case,
)
from stockguru.interfaces.assistant.schemas import (
    ChatMetadata,
    ChatRequest,
    ChatResponse,
    ClassificationSchema,
    QuickReplyResponse,
)
from stockguru.interfaces.market.schemas import ErrorResponse
from stockguru.shared.security.rate_limiting import HEAVY_RATE_LIMIT, limiter


router = APIRouter(prefix="/chat", tags=["assistant"])


@router.post(
    "",
    response_model=ChatResponse,
    responses={422: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
    summary="Ask the assistant",
    description=(
        "Classifies the question, fetches live data for the symbols it mentions "
        "and answers with it. The exchange is saved to the user's chat history."
    ),
)
@limiter.limit(HEAVY_RATE_LIMIT)
def chat(
    request: Request,
    body: ChatRequest,
    use_case: ProcessChatUseCase = Depends(get_process_chat_use_case),
) -> ChatResponse:
    """Answer a chat message using live market data."""
    exchange = use_case.execute(ChatCommand(message=body.message, user_id=body.user_id))
    outcome = exchange.outcome
    message = exchange.message
    return ChatResponse(
        id=message.id,
        user_id=message.user_id,
        message=message.message,
        response=message.response,
        timestamp=message.timestamp,
        metadata=ChatMetadata(
            classification=ClassificationSchema.from_entity(outcome.classification),
            execution_steps=list(outcome.execution_steps),
            data_symbols=[d.symbol for d in outcome.data_used],
        ),
    )


@router.post(
    "/quick",
    response_model=QuickReplyResponse,
    responses={422: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
    summary="Quick assistant reply",
    description="Direct answer with follow-up suggestions. No live data, not saved.",
)
@limiter.limit(HEAVY_RATE_LIMIT)
def quick_reply(
    request: Request,
    body: ChatRequest,
    use_case: AnswerMessageUseCase = Depends(get_answer_message_use_case),
) -> QuickReplyResponse:
    """Answer a message directly."""
    return QuickReplyResponse.from_entity(use_case.execute(ChatCommand(message=body.message)))
