"""
Logging setup for app host processes.

Bridges structlog to the standard library so manifest publishing logs land
wherever the hosting process sends its logs.
"""

import logging
from typing import Any, List, Optional, Union

import structlog

from miraveja_apphost.application.settings import AppHostSettings, get_settings


def build_processors(json_output: bool) -> List[Any]:
    """Return the structlog processor chain ending in the selected renderer.

    Context bound with ``structlog.contextvars`` (the ``resource`` being
    rendered by ``ManifestWriter``) is merged into every event.
    """
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    level: Optional[Union[int, str]] = None,
    settings: Optional[AppHostSettings] = None,
) -> None:
    """Configure structlog on top of standard logging.

    Args:
        level: Log level. Defaults to ``settings.log_level``.
        settings: Settings supplying the level and ``log_json``. Defaults to the cached settings.
    """
    settings = settings if settings is not None else get_settings()
    if level is None:
        level = settings.log_level

    structlog.configure(
        processors=build_processors(settings.log_json),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(level=level, format="%(message)s")
