"""
infrastructure.persistence.supabase_store - Supabase repository.

Every read and write is a round trip to the hosted store; nothing is
cached locally. The supabase client is synchronous, so each call runs in
the default executor and is awaited to completion by the caller.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from functools import partial
from typing import Any, Callable, Optional, TypeVar

from supabase import Client, create_client

from knowledge_agent.domain.exceptions import RepositoryError

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONVERSATIONS_TABLE = "agent_conversations"
MATCH_DOCUMENTS_RPC = "match_documents"


class SupabaseStore:
    """Async facade over the Supabase client for the agent's three tables."""

    def __init__(self, client: Client):
        self._client = client

    @classmethod
    def connect(cls, url: str, key: str) -> SupabaseStore:
        """Create a store from a project URL and access key."""
        logger.info("Connecting Supabase client to %s", url)
        return cls(create_client(url, key))

    async def _run(self, description: str, fn: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, fn)
        except Exception as exc:
            logger.warning("Supabase %s failed: %s", description, exc)
            raise RepositoryError(str(exc) or type(exc).__name__) from exc

    # ------------------------------------------------------------------
    # Similarity search
    # ------------------------------------------------------------------

    async def match_documents(
        self,
        query_embedding: list[float],
        match_threshold: float,
        match_count: int,
    ) -> list[dict[str, Any]]:
        """Call the match_documents remote procedure."""
        params = {
            "query_embedding": query_embedding,
            "match_threshold": match_threshold,
            "match_count": match_count,
        }
        response = await self._run(
            MATCH_DOCUMENTS_RPC,
            lambda: self._client.rpc(MATCH_DOCUMENTS_RPC, params).execute(),
        )
        return list(response.data or [])

    # ------------------------------------------------------------------
    # Table reads
    # ------------------------------------------------------------------

    async def select_rows(
        self,
        table: str,
        filters: Optional[dict[str, Any]] = None,
        limit: int = 10,
    ) -> list[dict[str, Any]]:
        """Select rows where every filter field equals its value."""

        def _query():
            query = self._client.table(table).select("*")
            for field_name, value in (filters or {}).items():
                query = query.eq(field_name, value)
            return query.limit(limit).execute()

        response = await self._run(f"select from {table}", _query)
        return list(response.data or [])

    # ------------------------------------------------------------------
    # Conversations
    # ------------------------------------------------------------------

    async def save_conversation(self, conversation_id: str, messages: str) -> None:
        """Insert or overwrite the conversation row keyed by conversation_id."""
        row = {
            "id": conversation_id,
            "messages": messages,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        await self._run(
            "conversation upsert",
            partial(self._upsert, CONVERSATIONS_TABLE, row),
        )
        logger.debug("Saved conversation %s", conversation_id)

    async def get_conversation(self, conversation_id: str) -> Optional[dict[str, Any]]:
        """Return the conversation row, or None if it does not exist."""
        response = await self._run(
            "conversation lookup",
            lambda: (
                self._client.table(CONVERSATIONS_TABLE)
                .select("messages")
                .eq("id", conversation_id)
                .limit(1)
                .execute()
            ),
        )
        rows = response.data or []
        return rows[0] if rows else None

    def _upsert(self, table: str, row: dict[str, Any]):
        return self._client.table(table).upsert(row).execute()
