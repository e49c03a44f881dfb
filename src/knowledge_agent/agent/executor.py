"""
agent.executor - Agent execution engine.

Runs the LLM + tool selection loop for one turn at a time. The
LangChain executor is built once; conversation history is passed in
explicitly on every invocation and appended only after a turn succeeds.

Turns on one instance must be serialized: the history log is not safe
for concurrent appends.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from langchain.agents import AgentExecutor as LangChainAgentExecutor
from langchain.agents import create_tool_calling_agent
from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from knowledge_agent.agent.memory import MEMORY_KEY, ConversationMemory
from knowledge_agent.agent.tools.registry import ToolRegistry
from knowledge_agent.domain.exceptions import IterationLimitExceeded

logger = logging.getLogger(__name__)

# Output LangChain substitutes when early_stopping_method="force" kicks in.
_FORCED_STOP_OUTPUT = "Agent stopped due to max iterations."


class AgentExecutor:
    """Runs the LLM + tool selection loop.

    Constructed by factory.py with all dependencies injected.
    """

    def __init__(
        self,
        llm: BaseChatModel,
        tools: ToolRegistry,
        memory: ConversationMemory,
        system_prompt: str,
        max_iterations: int = 5,
        verbose: bool = False,
    ):
        self._llm = llm
        self._tools = tools
        self._memory = memory
        self._system_prompt = system_prompt
        self._max_iterations = max_iterations
        self._verbose = verbose
        self._executor = self._build_executor()

    @property
    def tools(self) -> ToolRegistry:
        return self._tools

    @property
    def memory(self) -> ConversationMemory:
        return self._memory

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    def _build_executor(self) -> LangChainAgentExecutor:
        """Build the LangChain agent executor with the registered tools."""
        lc_tools = self._tools.to_langchain_tools()

        # The system prompt is literal text, not a template.
        system_text = self._system_prompt.replace("{", "{{").replace("}", "}}")
        prompt = ChatPromptTemplate.from_messages([
            ("system", system_text),
            MessagesPlaceholder(variable_name=MEMORY_KEY),
            ("human", "{input}"),
            MessagesPlaceholder(variable_name="agent_scratchpad"),
        ])

        agent = create_tool_calling_agent(
            llm=self._llm,
            tools=lc_tools,
            prompt=prompt,
        )

        return LangChainAgentExecutor(
            agent=agent,
            tools=lc_tools,
            verbose=self._verbose,
            handle_parsing_errors=True,
            max_iterations=self._max_iterations,
            early_stopping_method="force",
            return_intermediate_steps=True,
        )

    async def invoke(
        self,
        user_input: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Process one user message and return the raw LangChain result.

        Extra metadata fields are forwarded alongside the input and attached
        to the trace.

        Raises:
            IterationLimitExceeded: If the turn used up max_iterations.
            Exception: Any model or executor failure, unchanged.
        """
        metadata = dict(metadata or {})
        payload = {**metadata, "input": user_input, MEMORY_KEY: self._memory.messages}

        logger.info(
            "Agent processing (history=%d message(s)): %s",
            len(self._memory), user_input[:80],
        )
        response = await self._executor.ainvoke(
            payload,
            config={
                "run_name": "knowledge_agent_turn",
                "metadata": metadata,
                "tags": ["knowledge-agent"],
            },
        )

        output = response.get("output", "")
        steps = response.get("intermediate_steps", [])
        logger.info("Agent finished: %d tool step(s)", len(steps))
        for action, _observation in steps:
            logger.debug("Step: tool=%r input=%r", getattr(action, "tool", ""), getattr(action, "tool_input", None))

        if output == _FORCED_STOP_OUTPUT and len(steps) >= self._max_iterations:
            raise IterationLimitExceeded(self._max_iterations)

        if not isinstance(output, str):
            output = str(output)
        self._memory.add_turn(user_input, output)
        return response
