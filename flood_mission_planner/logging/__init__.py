"""Structured logging for the flood mission planner.

Usage:
    from flood_mission_planner.logging import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)
    logger.info("Mission created", extra={"mission_id": "mission-123"})
"""

from flood_mission_planner.logging.config import LoggingConfig
from flood_mission_planner.logging.context import (
    bind_mission,
    clear_context,
    correlation_id,
    get_correlation_id,
    get_extra_context,
    set_correlation_id,
    set_extra_context,
)
from flood_mission_planner.logging.formatters import HumanFormatter, JSONFormatter
from flood_mission_planner.logging.logger import get_logger, setup_logging

__all__ = [
    "HumanFormatter",
    "JSONFormatter",
    "LoggingConfig",
    "bind_mission",
    "clear_context",
    "correlation_id",
    "get_correlation_id",
    "get_extra_context",
    "get_logger",
    "set_correlation_id",
    "set_extra_context",
    "setup_logging",
]
