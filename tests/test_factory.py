"""Tests for the composition root."""

import pytest

from knowledge_agent.agent.executor import AgentExecutor
from knowledge_agent.domain.exceptions import ConfigurationError
from knowledge_agent.domain.models import AgentConfig
from knowledge_agent.factory import ServiceFactory
from knowledge_agent.infrastructure.config import Settings
from tests.conftest import FakeStore


def make_factory(fake_embeddings, **settings):
    return ServiceFactory(Settings(**settings), store=FakeStore(), embeddings=fake_embeddings)


def test_missing_openai_key_fails_fast(fake_embeddings):
    factory = make_factory(fake_embeddings, openai_api_key="")
    with pytest.raises(ConfigurationError) as excinfo:
        factory.create_agent()
    assert excinfo.value.missing == ["OPENAI_API_KEY"]
    assert "OPENAI_API_KEY" in str(excinfo.value)


def test_creates_agent_with_five_tools(fake_embeddings, mock_llm_factory):
    factory = make_factory(fake_embeddings, openai_api_key="sk-test")
    agent = factory.create_agent(AgentConfig(max_iterations=3), llm=mock_llm_factory(["hi"]))

    assert isinstance(agent, AgentExecutor)
    assert agent.tools.names() == [
        "document_search", "database_query", "data_analysis",
        "conversation_memory", "datetime",
    ]
    assert agent.max_iterations == 3
    assert len(agent.memory) == 0
    assert "Current datetime:" in agent.system_prompt


def test_each_agent_gets_its_own_history(fake_embeddings, mock_llm_factory):
    factory = make_factory(fake_embeddings, openai_api_key="sk-test")
    first = factory.create_agent(llm=mock_llm_factory(["a"]))
    second = factory.create_agent(llm=mock_llm_factory(["b"]))
    assert first.memory is not second.memory
