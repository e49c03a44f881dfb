"""
infrastructure.llm.llm_builder - Centralized model client construction.

Single source of truth for the chat model used by the agent and the
embedding model used by document search.
"""

from __future__ import annotations

import logging

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from knowledge_agent.domain.exceptions import ConfigurationError
from knowledge_agent.domain.models import AgentConfig

logger = logging.getLogger(__name__)


def build_chat_model(config: AgentConfig, *, openai_api_key: str) -> BaseChatModel:
    """Build the OpenAI chat model bound to the agent configuration.

    Raises:
        ConfigurationError: If the OpenAI credential is missing.
    """
    from langchain_openai import ChatOpenAI

    if not openai_api_key:
        raise ConfigurationError(["OPENAI_API_KEY"])

    logger.info(
        "Building ChatOpenAI (model=%s, temperature=%s, max_tokens=%d)",
        config.model_name, config.temperature, config.max_tokens,
    )
    return ChatOpenAI(
        model=config.model_name,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        openai_api_key=openai_api_key,
    )


def build_embeddings(*, model: str, openai_api_key: str) -> Embeddings:
    """Build the OpenAI embedding client used for similarity search."""
    from langchain_openai import OpenAIEmbeddings

    if not openai_api_key:
        raise ConfigurationError(["OPENAI_API_KEY"])

    logger.info("Building OpenAIEmbeddings (model=%s)", model)
    return OpenAIEmbeddings(model=model, openai_api_key=openai_api_key)
