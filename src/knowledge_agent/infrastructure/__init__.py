"""
infrastructure - Vendor-specific implementations.

Contains everything that talks to OpenAI, Supabase, and LangSmith, plus
configuration and logging setup. Depends on domain/ only.
"""
