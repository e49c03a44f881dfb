"""
factory - Composition root for the knowledge agent.

ALL dependency wiring happens here. No other module constructs its own
vendor clients. The CLI adapter calls this factory once to get a fully
configured agent.

Usage:
    from knowledge_agent.factory import ServiceFactory
    from knowledge_agent.infrastructure.config import Settings

    settings = Settings.from_env()
    agent = ServiceFactory(settings).create_agent()
    result = await run_once(agent, "What is the current date?")
"""

from __future__ import annotations

import logging
from typing import Optional

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from knowledge_agent.agent.executor import AgentExecutor
from knowledge_agent.agent.memory import ConversationMemory
from knowledge_agent.agent.prompt import build_system_prompt
from knowledge_agent.agent.tools import (
    ConversationMemoryTool,
    DataAnalysisTool,
    DatabaseQueryTool,
    DateTimeTool,
    DocumentSearchTool,
    ToolRegistry,
)
from knowledge_agent.domain.exceptions import ConfigurationError
from knowledge_agent.domain.models import AgentConfig
from knowledge_agent.infrastructure.config import Settings
from knowledge_agent.infrastructure.llm.llm_builder import build_chat_model, build_embeddings
from knowledge_agent.infrastructure.persistence.supabase_store import SupabaseStore

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Composition root: wires all dependencies together.

    The store and embedding client are created lazily and shared by every
    tool; pass them in to substitute fakes.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        store: Optional[SupabaseStore] = None,
        embeddings: Optional[Embeddings] = None,
    ):
        self._settings = settings
        self._store = store
        self._embeddings = embeddings

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_store(self) -> SupabaseStore:
        if self._store is None:
            self._store = SupabaseStore.connect(
                self._settings.supabase_url, self._settings.supabase_key,
            )
        return self._store

    def get_embeddings(self) -> Embeddings:
        if self._embeddings is None:
            self._embeddings = build_embeddings(
                model=self._settings.embedding_model,
                openai_api_key=self._settings.openai_api_key,
            )
        return self._embeddings

    def create_tool_registry(self) -> ToolRegistry:
        """Register the fixed set of five tools."""
        store = self.get_store()
        return ToolRegistry([
            DocumentSearchTool(store, self.get_embeddings()),
            DatabaseQueryTool(store),
            DataAnalysisTool(),
            ConversationMemoryTool(store),
            DateTimeTool(),
        ])

    def create_agent(
        self,
        config: Optional[AgentConfig] = None,
        llm: Optional[BaseChatModel] = None,
    ) -> AgentExecutor:
        """Create a fully configured AgentExecutor.

        Args:
            config: Model/loop settings; derived from Settings when omitted.
            llm:    Chat model override (tests); built from config otherwise.

        Raises:
            ConfigurationError: If OPENAI_API_KEY is not configured.
        """
        if not self._settings.openai_api_key:
            raise ConfigurationError(["OPENAI_API_KEY"])

        config = config or AgentConfig.from_settings(self._settings)
        registry = self.create_tool_registry()
        system_prompt = build_system_prompt(registry)

        if llm is None:
            llm = build_chat_model(config, openai_api_key=self._settings.openai_api_key)

        logger.info(
            "Creating agent (model=%s, tools=%s, max_iterations=%d)",
            config.model_name, ", ".join(registry.names()), config.max_iterations,
        )
        return AgentExecutor(
            llm=llm,
            tools=registry,
            memory=ConversationMemory(),
            system_prompt=system_prompt,
            max_iterations=config.max_iterations,
            verbose=config.verbose,
        )


def create_agent(settings: Settings, config: Optional[AgentConfig] = None) -> AgentExecutor:
    """Shortcut for ServiceFactory(settings).create_agent(config)."""
    return ServiceFactory(settings).create_agent(config)
