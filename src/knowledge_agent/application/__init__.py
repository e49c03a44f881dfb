"""
application - Turn execution and batch processing on top of an agent.
"""
