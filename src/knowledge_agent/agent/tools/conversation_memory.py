"""
agent.tools.conversation_memory - Persist and recall conversation notes.

Rows live in the agent_conversations table keyed by conversation id;
a save overwrites the previous row.
"""

from __future__ import annotations

from typing import Any, Literal, Optional, Protocol

from pydantic import BaseModel, Field

from knowledge_agent.agent.tools.base import BaseTool, ToolResult

NO_HISTORY = "No conversation history found."


class ConversationStore(Protocol):
    async def save_conversation(self, conversation_id: str, messages: str) -> None: ...

    async def get_conversation(self, conversation_id: str) -> Optional[dict[str, Any]]: ...


class ConversationMemoryInput(BaseModel):
    """Input schema for the conversation_memory tool."""

    action: Literal["save", "retrieve"] = Field(description="Action to perform")
    conversationId: str = Field(description="Unique conversation identifier")
    message: Optional[str] = Field(
        default=None,
        description="Message to save (only for save action)",
    )


class ConversationMemoryTool(BaseTool):
    """Save and retrieve conversation history across sessions."""

    name = "conversation_memory"
    description = (
        "Save and retrieve conversation history for maintaining context across sessions."
    )
    error_prefix = "Error with conversation memory"

    def __init__(self, store: ConversationStore):
        self._store = store

    def get_schema(self) -> type[BaseModel]:
        return ConversationMemoryInput

    async def execute(
        self,
        action: str,
        conversationId: str,
        message: Optional[str] = None,
        **kwargs,
    ) -> ToolResult:
        if action == "save":
            if not message:
                return ToolResult(output="Error: Message is required for save action.")
            await self._store.save_conversation(conversationId, message)
            return ToolResult(output="Conversation saved successfully.")

        row = await self._store.get_conversation(conversationId)
        messages = row.get("messages") if row else None
        if not messages:
            return ToolResult(output=NO_HISTORY)
        return ToolResult(output=messages if isinstance(messages, str) else str(messages), data=row)
