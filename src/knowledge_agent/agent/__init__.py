"""
agent - Conversational agent orchestration layer.

Contains tools, memory, prompts, and the executor that runs the LLM+tool loop.
Depends on domain/ only; vendor clients are injected by factory.py.
"""
