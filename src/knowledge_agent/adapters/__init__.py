"""
adapters - Entry points that drive the agent (currently the terminal CLI).
"""
