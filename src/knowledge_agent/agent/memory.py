"""
agent.memory - Per-agent conversation history.

Stores messages as a plain list[BaseMessage] owned by a single executor.
The list is handed to the agent explicitly as 'chat_history' on every
turn and only grows once that turn has completed.
"""

from __future__ import annotations

import logging
from typing import Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

logger = logging.getLogger(__name__)

MEMORY_KEY = "chat_history"


class ConversationMemory:
    """Ordered, append-only message log.

    NOT shared; each executor gets its own instance. When max_messages is
    set, the oldest messages are dropped once the log exceeds it.
    """

    def __init__(self, max_messages: Optional[int] = None):
        self._max_messages = max_messages
        self._messages: list[BaseMessage] = []

    @property
    def messages(self) -> list[BaseMessage]:
        """Snapshot of the history, passed as 'chat_history' to agent invoke()."""
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def add_user_message(self, content: str) -> None:
        self._messages.append(HumanMessage(content=content))
        self._trim()

    def add_ai_message(self, content: str) -> None:
        self._messages.append(AIMessage(content=content))
        self._trim()

    def add_turn(self, user_input: str, output: str) -> None:
        self.add_user_message(user_input)
        self.add_ai_message(output)

    def clear(self) -> None:
        self._messages = []

    def _trim(self) -> None:
        if self._max_messages and len(self._messages) > self._max_messages:
            dropped = len(self._messages) - self._max_messages
            self._messages = self._messages[-self._max_messages:]
            logger.debug("Trimmed %d message(s) from conversation memory", dropped)
