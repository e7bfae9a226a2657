"""Structured logging and correlation IDs."""

from amendment_engine.infrastructure.observability.correlation import (
    correlation_id_processor,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
)
from amendment_engine.infrastructure.observability.logging import (
    build_processors,
    configure_structlog,
    resolve_log_level,
)

__all__: list[str] = [
    "build_processors",
    "configure_structlog",
    "correlation_id_processor",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "resolve_log_level",
]
