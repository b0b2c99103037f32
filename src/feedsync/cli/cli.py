"""Command-line interface entry points for feedsync.

This module provides the main CLI function that loads settings, sets up
logging and runs the replay mode.
"""

import logging

from ..config import AppSettings
from ..logging_config import setup_logging
from .replay import run_replay_mode


async def main_cli() -> int:
    """Initialize logging from settings and run the replay mode.

    Returns:
        Process exit code from the replay run.
    """
    settings = AppSettings(_cli_parse_args=True)  # type: ignore

    setup_logging(
        log_format_type=settings.log_format,
        app_log_level_name=settings.log_level,
        include_stacktrace=settings.log_include_stacktrace,
    )

    logger = logging.getLogger(__name__)
    logger.debug(
        "Application settings loaded.",
        extra={
            "config_file": str(settings.config_file),
            "summaries_file": str(settings.summaries_file),
            "log_format": settings.log_format,
            "log_level": settings.log_level,
        },
    )

    exit_code = await run_replay_mode(settings)
    logger.debug("main_cli execution finished.", extra={"exit_code": exit_code})
    return exit_code
