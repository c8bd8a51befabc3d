"""
Use case: Quick assistant reply without live data.

Input: ChatCommand (message)
Output: AssistantReply
Side effects: One language model call.
Failure cases: None. The assistant falls back to canned replies.
"""

import logging

from stockguru.application.assistant.dtos import ChatCommand
from stockguru.domain.assistant.entities import AssistantReply
from stockguru.domain.assistant.ports import ChatAssistantPort

logger = logging.getLogger(__name__)


class AnswerMessageUseCase:
    """Answers a message directly, returning follow-up suggestions."""

    def __init__(self, assistant: ChatAssistantPort) -> None:
        self._assistant = assistant

    def execute(self, command: ChatCommand) -> AssistantReply:
        """Run the quick answer use case."""
        reply = self._assistant.answer(command.message)
        logger.info("Quick reply with action_type=%s", reply.action_type.value)
        return reply
