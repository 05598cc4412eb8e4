"""Root logger setup and the logger factory used by every module."""

import logging
import sys
from dataclasses import dataclass, field
from typing import TextIO

from flood_mission_planner.logging.config import LogFormat, LoggingConfig, get_logging_config
from flood_mission_planner.logging.formatters import HumanFormatter, JSONFormatter


@dataclass
class LoggingState:
    """Whether ``setup_logging`` has already installed a handler."""

    configured: bool = field(default=False)


_state = LoggingState()


def _build_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.log_format == LogFormat.HUMAN:
        return HumanFormatter(use_colors=config.use_colors)
    return JSONFormatter(
        service_name=config.service_name,
        service_version=config.service_version,
        include_timestamp=config.include_timestamp,
        include_location=config.include_location,
    )


def _remove_handlers(target: logging.Logger) -> None:
    for existing in list(target.handlers):
        target.removeHandler(existing)


def setup_logging(
    config: LoggingConfig | None = None,
    stream: TextIO | None = None,
    *,
    force: bool = False,
) -> None:
    """Install a single stream handler on the root logger.

    Calling it again is a no-op unless ``force`` is set, so entry points
    can call it unconditionally.

    Args:
        config: Level and format; read from the environment when omitted.
        stream: Destination; ``sys.stdout`` when omitted.
        force: Replace an existing configuration.
    """
    if _state.configured and not force:
        return

    active = config or get_logging_config()
    root = logging.getLogger()
    root.setLevel(active.log_level.value)
    _remove_handlers(root)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(_build_formatter(active))
    root.addHandler(handler)
    _state.configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, normally the caller's ``__name__``."""
    return logging.getLogger(name)


def reset_logging() -> None:
    """Drop root handlers and cached config so tests can reconfigure."""
    _state.configured = False
    _remove_handlers(logging.getLogger())
    get_logging_config.cache_clear()
