"""
infrastructure.tracing - LangSmith tracing setup.

LangChain reads the LANGSMITH_* variables on every run, so enabling
tracing is a matter of exporting them before the first model call.
"""

from __future__ import annotations

import logging
import os

from langsmith import utils as ls_utils

from knowledge_agent.infrastructure.config import Settings

logger = logging.getLogger(__name__)


def configure_tracing(settings: Settings) -> bool:
    """Export LangSmith settings to the environment.

    Returns:
        True when tracing is active after configuration.
    """
    if settings.tracing_enabled and settings.langsmith_api_key:
        os.environ["LANGSMITH_TRACING"] = "true"
        os.environ["LANGSMITH_API_KEY"] = settings.langsmith_api_key
        os.environ["LANGSMITH_PROJECT"] = settings.langsmith_project
    else:
        os.environ["LANGSMITH_TRACING"] = "false"

    # Cached per process; clear so the new environment is picked up.
    ls_utils.get_env_var.cache_clear()
    enabled = bool(ls_utils.tracing_is_enabled())
    logger.info(
        "LangSmith tracing %s (project=%s)",
        "enabled" if enabled else "disabled", settings.langsmith_project,
    )
    return enabled
