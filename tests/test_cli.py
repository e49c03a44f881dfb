"""End-to-end tests for the CLI adapter with a stubbed agent."""

import pytest
from typer.testing import CliRunner

from knowledge_agent.adapters.cli import main as cli
from knowledge_agent.infrastructure import config as config_module

runner = CliRunner()

REQUIRED = {
    "OPENAI_API_KEY": "sk-test",
    "SUPABASE_URL": "https://example.supabase.co",
    "SUPABASE_KEY": "service-key",
    "LANGSMITH_API_KEY": "ls-test",
}


class StubAgent:
    def __init__(self, tools, fail_on=()):
        self.tools = tools
        self.fail_on = set(fail_on)
        self.calls = []

    async def invoke(self, user_input, metadata=None):
        self.calls.append(user_input)
        if user_input in self.fail_on:
            raise RuntimeError("model timeout")
        return {"output": f"answer to {user_input}"}


class StubFactory:
    created = []

    def __init__(self, agent):
        self._agent = agent

    def __call__(self, settings):
        StubFactory.created.append(settings)
        return self

    def create_agent(self, config=None):
        return self._agent


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for name in list(REQUIRED) + ["AGENT_MODE", "LOG_LEVEL", "AGENT_TEMPERATURE"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "load_dotenv", lambda *a, **k: False)
    monkeypatch.setattr(cli, "configure_tracing", lambda settings: False)
    monkeypatch.setattr(cli, "DEMO_PAUSE_SECONDS", 0)
    StubFactory.created = []


@pytest.fixture
def configured(monkeypatch):
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)


def install_agent(monkeypatch, registry, fail_on=()):
    agent = StubAgent(registry, fail_on)
    monkeypatch.setattr(cli, "ServiceFactory", StubFactory(agent))
    return agent


def test_missing_openai_key_exits_before_building_anything(monkeypatch, registry):
    for name, value in REQUIRED.items():
        if name != "OPENAI_API_KEY":
            monkeypatch.setenv(name, value)
    install_agent(monkeypatch, registry)

    result = runner.invoke(cli.app, [])

    assert result.exit_code == 1
    assert "OPENAI_API_KEY" in result.output
    assert StubFactory.created == []


def test_all_missing_are_listed(monkeypatch, registry):
    install_agent(monkeypatch, registry)
    result = runner.invoke(cli.app, [])
    assert result.exit_code == 1
    for name in REQUIRED:
        assert name in result.output


def test_startup_failure_exits_with_one(monkeypatch, configured):
    class BrokenFactory:
        def __init__(self, settings):
            pass

        def create_agent(self, config=None):
            raise RuntimeError("supabase unreachable")

    monkeypatch.setattr(cli, "ServiceFactory", BrokenFactory)
    result = runner.invoke(cli.app, [])
    assert result.exit_code == 1
    assert "supabase unreachable" in result.output


class TestInteractiveMode:

    def test_help_lists_tools_without_invoking_agent(self, monkeypatch, configured, registry):
        agent = install_agent(monkeypatch, registry)
        result = runner.invoke(cli.app, [], input="help\nexit\n")

        assert result.exit_code == 0
        for name in registry.names():
            assert name in result.output
        assert agent.calls == []

    def test_commands_are_case_insensitive(self, monkeypatch, configured, registry):
        agent = install_agent(monkeypatch, registry)
        result = runner.invoke(cli.app, [], input="HELP\nQuit\n")
        assert result.exit_code == 0
        assert "datetime" in result.output
        assert agent.calls == []

    def test_questions_are_answered_in_order(self, monkeypatch, configured, registry):
        agent = install_agent(monkeypatch, registry)
        result = runner.invoke(cli.app, [], input="first\n\nsecond\nexit\n")
        assert result.exit_code == 0
        assert agent.calls == ["first", "second"]
        assert "answer to second" in result.output

    def test_turn_failure_does_not_end_session(self, monkeypatch, configured, registry):
        agent = install_agent(monkeypatch, registry, fail_on={"boom"})
        result = runner.invoke(cli.app, [], input="boom\nafter\nexit\n")
        assert result.exit_code == 0
        assert agent.calls == ["boom", "after"]
        assert "model timeout" in result.output

    def test_end_of_input_exits_cleanly(self, monkeypatch, configured, registry):
        install_agent(monkeypatch, registry)
        result = runner.invoke(cli.app, [], input="")
        assert result.exit_code == 0
        assert "Goodbye" in result.output


def test_demo_mode_runs_fixed_script(monkeypatch, configured, registry):
    monkeypatch.setenv("AGENT_MODE", "demo")
    agent = install_agent(monkeypatch, registry)
    result = runner.invoke(cli.app, [])
    assert result.exit_code == 0
    assert agent.calls == cli.DEMO_QUERIES
    assert "Demo completed" in result.output


def test_batch_mode_summarises_every_query(monkeypatch, configured, registry):
    monkeypatch.setenv("AGENT_MODE", "batch")
    agent = install_agent(monkeypatch, registry, fail_on={cli.BATCH_QUERIES[1]})
    result = runner.invoke(cli.app, [])
    assert result.exit_code == 0
    assert agent.calls == cli.BATCH_QUERIES
    assert "Batch Results Summary" in result.output
    assert "Failed" in result.output
    assert result.output.count("Success") == 2


def test_malformed_setting_exits_with_one(monkeypatch, configured, registry):
    monkeypatch.setenv("AGENT_TEMPERATURE", "warm")
    install_agent(monkeypatch, registry)

    result = runner.invoke(cli.app, [])

    assert result.exit_code == 1
    assert "Fatal error" in result.output
    assert "AGENT_TEMPERATURE" in result.output
    assert StubFactory.created == []
