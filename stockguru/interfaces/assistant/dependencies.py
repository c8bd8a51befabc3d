"""
Dependency injection for the assistant bounded context.

Wires the language model gateway, market use cases and chat history
into the chat use cases.
"""

from stockguru.application.assistant.answer_message import AnswerMessageUseCase
from stockguru.application.assistant.process_chat import ProcessChatUseCase
from stockguru.infrastructure.assistant.chat_assistant import LlmChatAssistant
from stockguru.infrastructure.assistant.prompt_loader import get_prompt_loader
from stockguru.interfaces.accounts.dependencies import get_chat_history_repository
from stockguru.interfaces.market.dependencies import (
    get_language_model,
    get_quote_use_case,
    get_stock_news_use_case,
    get_technical_indicators_use_case,
)


def get_chat_assistant() -> LlmChatAssistant:
    return LlmChatAssistant(llm=get_language_model(), prompts=get_prompt_loader())


def get_process_chat_use_case() -> ProcessChatUseCase:
    """Build ProcessChatUseCase with its infrastructure dependencies."""
    return ProcessChatUseCase(
        assistant=get_chat_assistant(),
        get_quote=get_quote_use_case(),
        get_indicators=get_technical_indicators_use_case(),
        get_news=get_stock_news_use_case(),
        history=get_chat_history_repository(),
    )


def get_answer_message_use_case() -> AnswerMessageUseCase:
    """Build AnswerMessageUseCase with its infrastructure dependencies."""
    return AnswerMessageUseCase(assistant=get_chat_assistant())
