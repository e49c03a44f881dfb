"""Pytest configuration and fixtures for agent testing.

Nothing here touches the network: the store is an in-memory fake, the
embeddings are LangChain's deterministic fake, and the chat model replays
scripted messages.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.language_models.fake_chat_models import FakeMessagesListChatModel
from langchain_core.messages import AIMessage

from knowledge_agent.agent.tools import (
    ConversationMemoryTool,
    DataAnalysisTool,
    DatabaseQueryTool,
    DateTimeTool,
    DocumentSearchTool,
    ToolRegistry,
)
from knowledge_agent.domain.exceptions import RepositoryError

FIXED_NOW = datetime(2024, 3, 10, 15, 30, 45, 123456, tzinfo=timezone.utc)


class FakeStore:
    """In-memory stand-in for SupabaseStore that records every call."""

    def __init__(
        self,
        matches: Optional[list[dict[str, Any]]] = None,
        tables: Optional[dict[str, list[dict[str, Any]]]] = None,
    ):
        self.matches = list(matches or [])
        self.tables = {name: list(rows) for name, rows in (tables or {}).items()}
        self.conversations: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple] = []
        self.error: Optional[Exception] = None

    def _maybe_fail(self) -> None:
        if self.error is not None:
            raise self.error

    async def match_documents(self, query_embedding, match_threshold, match_count):
        self.calls.append(("match_documents", len(query_embedding), match_threshold, match_count))
        self._maybe_fail()
        return list(self.matches)

    async def select_rows(self, table, filters=None, limit=10):
        self.calls.append(("select_rows", table, dict(filters or {}), limit))
        self._maybe_fail()
        rows = [
            row for row in self.tables.get(table, [])
            if all(row.get(key) == value for key, value in (filters or {}).items())
        ]
        return rows[:limit]

    async def save_conversation(self, conversation_id, messages):
        self.calls.append(("save_conversation", conversation_id, messages))
        self._maybe_fail()
        self.conversations[conversation_id] = {"id": conversation_id, "messages": messages}

    async def get_conversation(self, conversation_id):
        self.calls.append(("get_conversation", conversation_id))
        self._maybe_fail()
        return self.conversations.get(conversation_id)


class ToolCallingFakeModel(FakeMessagesListChatModel):
    """Scripted chat model that accepts bind_tools()."""

    def bind_tools(self, tools, **kwargs):
        return self


def tool_call(name: str, args: dict[str, Any], call_id: str = "call_1") -> AIMessage:
    """An assistant message asking for one tool invocation."""
    return AIMessage(content="", tool_calls=[{"name": name, "args": args, "id": call_id}])


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def fake_embeddings():
    return DeterministicFakeEmbedding(size=1536)


@pytest.fixture
def registry(fake_store, fake_embeddings):
    """The full five-tool registry wired to the fake store."""
    return ToolRegistry([
        DocumentSearchTool(fake_store, fake_embeddings),
        DatabaseQueryTool(fake_store),
        DataAnalysisTool(),
        ConversationMemoryTool(fake_store),
        DateTimeTool(clock=lambda: FIXED_NOW),
    ])


@pytest.fixture
def mock_llm_factory():
    """Factory for scripted tool-calling chat models.

    Example:
        >>> llm = mock_llm_factory([tool_call("datetime", {"action": "current"}), "It is noon."])
    """
    def _factory(responses):
        messages = [r if isinstance(r, AIMessage) else AIMessage(content=str(r)) for r in responses]
        return ToolCallingFakeModel(responses=messages)
    return _factory


@pytest.fixture
def repository_error():
    return RepositoryError("connection refused")
