"""
Use cases: Read and clear a user's chat history.
"""

import logging

from stockguru.application.accounts.dtos import GetChatHistoryQuery
from stockguru.domain.accounts.entities import ChatMessage
from stockguru.domain.accounts.ports import ChatHistoryRepository

logger = logging.getLogger(__name__)


class GetChatHistoryUseCase:
    """Returns the latest exchanges of a user, oldest first."""

    def __init__(self, history: ChatHistoryRepository) -> None:
        self._history = history

    def execute(self, query: GetChatHistoryQuery) -> list[ChatMessage]:
        return self._history.recent(query.user_id, query.limit)


class ClearChatHistoryUseCase:
    """Deletes a user's chat history and returns how many messages went."""

    def __init__(self, history: ChatHistoryRepository) -> None:
        self._history = history

    def execute(self, user_id: str) -> int:
        removed = self._history.clear(user_id)
        logger.info("Cleared %d chat messages for user %s", removed, user_id)
        return removed
