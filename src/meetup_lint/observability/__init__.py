"""
meetup-lint — observability

Purpose
- structlog configuration, correlation context and log redaction.
"""

from meetup_lint.observability.logging import (
    LoggingConfig,
    configure_structlog,
    correlation_scope,
    default_log_redactor,
    get_correlation_context,
    setup_logging,
)

__all__ = [
    "LoggingConfig",
    "configure_structlog",
    "correlation_scope",
    "default_log_redactor",
    "get_correlation_context",
    "setup_logging",
]
