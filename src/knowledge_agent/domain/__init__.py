"""
domain - Value objects and the exception hierarchy.

No dependencies on LangChain, Supabase, or any other vendor library.
"""
