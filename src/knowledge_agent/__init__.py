"""
knowledge_agent - Conversational agent over a Supabase knowledge base.

Wires an OpenAI chat model, a Supabase vector store, and five tools into a
single tool-calling agent loop driven from the command line.
"""

__version__ = "1.0.0"
