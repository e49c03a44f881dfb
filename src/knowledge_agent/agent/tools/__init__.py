"""
agent.tools - The five tools exposed to the model.
"""

from knowledge_agent.agent.tools.base import BaseTool, ToolResult
from knowledge_agent.agent.tools.conversation_memory import ConversationMemoryTool
from knowledge_agent.agent.tools.data_analysis import DataAnalysisTool
from knowledge_agent.agent.tools.database_query import DatabaseQueryTool
from knowledge_agent.agent.tools.datetime_tool import DateTimeTool
from knowledge_agent.agent.tools.document_search import DocumentSearchTool
from knowledge_agent.agent.tools.registry import ToolRegistry

__all__ = [
    "BaseTool",
    "ToolResult",
    "ToolRegistry",
    "DocumentSearchTool",
    "DatabaseQueryTool",
    "DataAnalysisTool",
    "DateTimeTool",
    "ConversationMemoryTool",
]
