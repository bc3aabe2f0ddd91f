"""structlog setup shared by the engine and the runner scripts."""

from __future__ import annotations

import logging
import sys
from typing import get_args

import structlog

from autosdb.core.config import LogLevel, settings

LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


def _add_app_name(logger, method_name, event_dict):
    event_dict.setdefault("app", settings.app_name)
    return event_dict


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure structlog processors and the level filter.

    Logs go to stderr so stdout stays free for JSON output.

    Args:
        level: Log level name, defaults to ``settings.effective_log_level``.
        json_logs: Render JSON lines instead of the console renderer,
            defaults to ``settings.log_json``.

    Raises:
        ValueError: If ``level`` is not a standard level name.
    """
    level_name = (level or settings.effective_log_level).upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(
            f"unknown log level {level_name!r}, expected one of {', '.join(LOG_LEVELS)}"
        )
    use_json = settings.log_json if json_logs is None else json_logs

    processors: list[structlog.types.Processor] = [
        _add_app_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if use_json:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
    )
