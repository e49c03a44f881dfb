"""
infrastructure.logging_config - Process-wide logging setup.

Terminal output for the user goes through the rich console in the CLI
adapter; this only configures diagnostic logging.
"""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty client libraries that log every HTTP request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "hpack", "postgrest")


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root logger once for the whole process."""
    log_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=log_level, format=_LOG_FORMAT)
    logging.getLogger().setLevel(log_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
