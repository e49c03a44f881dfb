"""
agent.tools.document_search - Semantic search over the knowledge base.

Embeds the query and calls the store's match_documents procedure. The
nearest-neighbour search itself happens inside the hosted store.
"""

from __future__ import annotations

from typing import Protocol

from langchain_core.embeddings import Embeddings
from pydantic import BaseModel, Field

from knowledge_agent.agent.tools.base import BaseTool, ToolResult

MATCH_THRESHOLD = 0.78
NO_RESULTS = "No relevant documents found."


class DocumentMatcher(Protocol):
    async def match_documents(
        self, query_embedding: list[float], match_threshold: float, match_count: int,
    ) -> list[dict]: ...


class DocumentSearchInput(BaseModel):
    """Input schema for the document_search tool."""

    query: str = Field(description="The search query")
    limit: int = Field(default=5, ge=1, description="Number of results to return")


def format_matches(rows: list[dict]) -> str:
    """Render match_documents rows as numbered result blocks."""
    blocks = []
    for idx, row in enumerate(rows, start=1):
        similarity = row.get("similarity")
        score = f"{float(similarity):.2f}" if similarity is not None else "n/a"
        blocks.append(
            f"Result {idx}:\nContent: {row.get('content', '')}\nSimilarity: {score}\n"
        )
    return "\n".join(blocks)


class DocumentSearchTool(BaseTool):
    """Search company documents via embedding similarity."""

    name = "document_search"
    description = (
        "Search through company documents and knowledge base using semantic search. "
        "Use this when you need to find specific information from documents."
    )
    error_prefix = "Error searching documents"

    def __init__(self, store: DocumentMatcher, embeddings: Embeddings):
        self._store = store
        self._embeddings = embeddings

    def get_schema(self) -> type[BaseModel]:
        return DocumentSearchInput

    async def execute(self, query: str, limit: int = 5, **kwargs) -> ToolResult:
        embedding = await self._embeddings.aembed_query(query)
        rows = await self._store.match_documents(
            query_embedding=embedding,
            match_threshold=MATCH_THRESHOLD,
            match_count=limit,
        )
        if not rows:
            return ToolResult(output=NO_RESULTS, data=[])

        rows = rows[:limit]
        return ToolResult(output=format_matches(rows), data=rows)
