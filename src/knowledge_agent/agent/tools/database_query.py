"""
agent.tools.database_query - Read-only equality queries on known tables.

Only table names on the allow-list ever reach the store; filters are
applied as conjunctive equality conditions, never as raw predicates.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Protocol

from pydantic import BaseModel, Field

from knowledge_agent.agent.tools.base import BaseTool, ToolResult

ALLOWED_TABLES = ("documents", "agent_conversations", "document_chunks")
NO_DATA = "No data found matching your criteria."


class RowSelector(Protocol):
    async def select_rows(
        self, table: str, filters: Optional[dict[str, Any]] = None, limit: int = 10,
    ) -> list[dict[str, Any]]: ...


class DatabaseQueryInput(BaseModel):
    """Input schema for the database_query tool."""

    table: str = Field(description="The table to query")
    filters: dict[str, Any] = Field(
        default_factory=dict,
        description="Equality filter conditions as field -> value",
    )
    limit: int = Field(default=10, ge=1, description="Maximum number of rows to return")


class DatabaseQueryTool(BaseTool):
    """Query structured rows from an allow-listed table."""

    name = "database_query"
    description = (
        "Query the database for structured data like documents, document chunks, "
        "or stored agent conversations. Only read operations are allowed. "
        f"Allowed tables: {', '.join(ALLOWED_TABLES)}."
    )
    error_prefix = "Error querying database"

    def __init__(self, store: RowSelector):
        self._store = store

    def get_schema(self) -> type[BaseModel]:
        return DatabaseQueryInput

    async def execute(
        self,
        table: str,
        filters: Optional[dict[str, Any]] = None,
        limit: int = 10,
        **kwargs,
    ) -> ToolResult:
        if table not in ALLOWED_TABLES:
            return ToolResult(
                output=(
                    f"Error: Table '{table}' is not allowed. "
                    f"Allowed tables: {', '.join(ALLOWED_TABLES)}"
                )
            )

        rows = await self._store.select_rows(table, filters or {}, limit)
        if not rows:
            return ToolResult(output=NO_DATA, data=[])

        return ToolResult(output=json.dumps(rows, indent=2, default=str), data=rows)
