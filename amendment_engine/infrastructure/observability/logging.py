"""structlog setup for the amendment engine.

Production renders one JSON object per line; any other environment gets
the coloured console renderer. Every entry carries the service name, an
ISO timestamp, the level and, inside a request, the correlation ID:

    {"event": "vote_cast", "level": "info", "service": "amendment-engine",
     "proposal_id": "amendment-...", "correlation_id": "...", ...}

The minimum level comes from LOG_LEVEL (default INFO).
"""

import logging
import os
from typing import Any, cast

import structlog
from structlog.typing import Processor

from amendment_engine.infrastructure.observability.correlation import (
    correlation_id_processor,
)

SERVICE_NAME = "amendment-engine"
LOG_LEVEL_ENV = "LOG_LEVEL"
PRODUCTION = "production"


def resolve_log_level(level_name: str | None = None) -> int:
    """Map a level name (or LOG_LEVEL) to a logging constant.

    Unknown names fall back to INFO.
    """
    name = (level_name or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def add_service_name(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def build_processors(environment: str) -> list[Processor]:
    """Processor chain for an environment, renderer last."""
    renderer: Processor
    if environment == PRODUCTION:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, add_service_name),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_structlog(
    environment: str = PRODUCTION, level_name: str | None = None
) -> None:
    """Install the structlog configuration. Call once at startup."""
    structlog.configure(
        processors=build_processors(environment),
        wrapper_class=structlog.make_filtering_bound_logger(
            resolve_log_level(level_name)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
