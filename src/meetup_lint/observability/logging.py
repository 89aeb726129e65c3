"""Structured logging setup for structlog with JSON-lines output and redaction support."""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Final, TextIO

import structlog

EventDict = MutableMapping[str, Any]
LogRedactor = Callable[[Any], Any]

_REDACTED_VALUE: Final[str] = "***REDACTED***"

_SENSITIVE_KEY_TERMS: Final[tuple[str, ...]] = (
    "secret",
    "token",
    "password",
    "passphrase",
    "api_key",
    "apikey",
    "authorization",
    "credential",
    "cookie",
    "private_key",
    "client_secret",
)

_SENSITIVE_ASSIGNMENT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?i)\b(api[_-]?key|token|password|secret|client_secret|authorization)\b\s*([:=])\s*([^\s,;]+)"
)
_BEARER_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?i)\bbearer\s+[A-Za-z0-9._~+/-]+=*")
_GITHUB_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"\bgh[pousr]_[A-Za-z0-9]{20,}\b")
_GOOGLE_API_KEY_PATTERN: Final[re.Pattern[str]] = re.compile(r"\bAIza[0-9A-Za-z_-]{35}\b")
_GOOGLE_OAUTH_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"\bya29\.[0-9A-Za-z_-]+\b")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Configuration for structlog-based structured logging."""

    level: int | str = "INFO"
    json_logs: bool = True
    stream: TextIO | None = None
    redactor: LogRedactor | None = None


def setup_logging(
    observability_config: Mapping[str, object] | None = None,
    *,
    stream: TextIO | None = None,
) -> structlog.typing.FilteringBoundLogger:
    """Configure structlog from ``[observability]`` settings and return a bound logger.

    Parameters
    ----------
    observability_config:
        Mapping compatible with ``[observability]`` settings in ``meetup-lint.toml``.
    stream:
        Optional output stream; defaults to ``sys.stderr``.
    """

    cfg = dict(observability_config or {})
    raw_level = cfg.get("log_level", "INFO")
    level: int | str = raw_level if isinstance(raw_level, (int, str)) else "INFO"
    json_logs = bool(cfg.get("json_logs", True))

    configure_structlog(LoggingConfig(level=level, json_logs=json_logs, stream=stream))
    logger: structlog.typing.FilteringBoundLogger = structlog.get_logger("meetup_lint")
    return logger


def configure_structlog(config: LoggingConfig) -> None:
    """Install the processor chain: context merge, level, timestamp, redaction, render."""

    level = _parse_log_level(config.level)
    redactor = config.redactor if config.redactor is not None else default_log_redactor
    renderer: Any = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if config.json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _redaction_processor(redactor),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(
            file=config.stream if config.stream is not None else sys.stderr
        ),
        cache_logger_on_first_use=False,
    )


def get_correlation_context() -> dict[str, Any]:
    """Return the current correlation context as a plain dictionary."""
    return dict(structlog.contextvars.get_contextvars())


@contextmanager
def correlation_scope(**fields: str | int | None) -> Iterator[None]:
    """Temporarily bind correlation fields for log events in scope."""
    bound: dict[str, str | int] = {}
    for key, value in fields.items():
        if value is None:
            continue
        bound[_validate_correlation_key(key)] = _validate_correlation_value(value)
    tokens = structlog.contextvars.bind_contextvars(**bound)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def default_log_redactor(value: Any) -> Any:
    """Default deep redaction for secrets in keys and free text."""
    return _redact_value(value, key_context=None)


def _redaction_processor(redactor: LogRedactor) -> Callable[[Any, str, EventDict], EventDict]:
    def processor(_logger: Any, _method_name: str, event_dict: EventDict) -> EventDict:
        redacted = redactor(dict(event_dict))
        return redacted if isinstance(redacted, dict) else event_dict

    return processor


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise ValueError(f"level must be int or str, got {type(value).__name__}")

    normalized = value.strip().upper()
    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed

    raise ValueError(f"unsupported logging level {value!r}")


def _validate_correlation_key(value: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError("correlation key must not be empty")
    return normalized


def _validate_correlation_value(value: str | int) -> str | int:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(f"correlation value must be a string or int, got {type(value).__name__}")
    if isinstance(value, int):
        return value
    normalized = value.strip()
    if not normalized:
        raise ValueError("correlation value must not be empty")
    return normalized


def _redact_value(value: Any, *, key_context: str | None) -> Any:
    if key_context is not None and _requires_redaction_for_key(key_context):
        return _REDACTED_VALUE

    if isinstance(value, str):
        return _redact_string(value)

    if isinstance(value, (list, tuple)):
        return [_redact_value(item, key_context=None) for item in value]

    if isinstance(value, dict):
        return {key: _redact_value(item, key_context=str(key)) for key, item in value.items()}

    return value


def _requires_redaction_for_key(key: str) -> bool:
    key_lower = key.lower()
    return any(term in key_lower for term in _SENSITIVE_KEY_TERMS)


def _redact_string(text: str) -> str:
    redacted = _SENSITIVE_ASSIGNMENT_PATTERN.sub(
        lambda match: f"{match.group(1)}{match.group(2)}{_REDACTED_VALUE}", text
    )
    redacted = _BEARER_TOKEN_PATTERN.sub(f"Bearer {_REDACTED_VALUE}", redacted)
    redacted = _GITHUB_TOKEN_PATTERN.sub(_REDACTED_VALUE, redacted)
    redacted = _GOOGLE_API_KEY_PATTERN.sub(_REDACTED_VALUE, redacted)
    redacted = _GOOGLE_OAUTH_TOKEN_PATTERN.sub(_REDACTED_VALUE, redacted)
    return redacted


__all__ = [
    "LogRedactor",
    "LoggingConfig",
    "configure_structlog",
    "correlation_scope",
    "default_log_redactor",
    "get_correlation_context",
    "setup_logging",
]
