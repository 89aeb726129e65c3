"""
meetup-lint — unit tests for observability logging

Purpose
- Validate structlog JSON logging with redaction, correlation metadata and level filtering.

What this test file should cover
- JSON line validity and redaction guarantees.
- Correlation field propagation and reset.
- Level filtering from ``[observability]`` settings.

Functional requirements
- Offline operation.

Non-functional requirements
- Deterministic and non-flaky.
"""

from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING

import pytest
import structlog

from meetup_lint.observability.logging import (
    LoggingConfig,
    configure_structlog,
    correlation_scope,
    default_log_redactor,
    get_correlation_context,
    setup_logging,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


def _read_json_lines(stream: io.StringIO) -> list[dict[str, object]]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_json_logging_redacts_secrets_and_preserves_correlation_fields() -> None:
    stream = io.StringIO()
    logger = setup_logging({"log_level": "INFO", "json_logs": True}, stream=stream)

    with correlation_scope(record_id=42, run="lint"):
        logger.info(
            "payload token=tok-FAKE and api_key=sk-FAKE123456789012345",
            nested={"password": "hunter2", "safe": "ok"},
        )

    [entry] = _read_json_lines(stream)
    assert entry["record_id"] == 42
    assert entry["run"] == "lint"
    assert entry["level"] == "info"
    assert "timestamp" in entry
    assert entry["nested"] == {"password": "***REDACTED***", "safe": "ok"}

    line = stream.getvalue()
    assert "tok-FAKE" not in line
    assert "sk-FAKE" not in line
    assert "hunter2" not in line


def test_level_filtering_follows_observability_config() -> None:
    stream = io.StringIO()
    logger = setup_logging({"log_level": "WARNING", "json_logs": True}, stream=stream)

    logger.info("lint_rule_completed", rule="title")
    logger.warning("lint_record_committed", attributes=["title"])

    events = [entry["event"] for entry in _read_json_lines(stream)]
    assert events == ["lint_record_committed"]


def test_console_renderer_is_used_when_json_is_disabled() -> None:
    stream = io.StringIO()
    logger = setup_logging({"log_level": "DEBUG", "json_logs": False}, stream=stream)

    logger.debug("lint_rule_started", rule="agenda")

    output = stream.getvalue()
    assert "lint_rule_started" in output
    assert "rule=agenda" in output
    with pytest.raises(json.JSONDecodeError):
        json.loads(output)


def test_correlation_scope_resets_on_exit() -> None:
    with correlation_scope(record_id=7, skipped=None):
        assert get_correlation_context() == {"record_id": 7}
        with correlation_scope(rule="title"):
            assert get_correlation_context() == {"record_id": 7, "rule": "title"}
        assert get_correlation_context() == {"record_id": 7}

    assert get_correlation_context() == {}


@pytest.mark.parametrize("fields", [{" ": "value"}, {"rule": " "}, {"flag": True}])
def test_correlation_scope_rejects_invalid_fields(fields: dict[str, object]) -> None:
    with pytest.raises(ValueError), correlation_scope(**fields):  # type: ignore[arg-type]
        pass


def test_custom_redactor_replaces_the_default() -> None:
    stream = io.StringIO()
    configure_structlog(
        LoggingConfig(
            level="INFO",
            stream=stream,
            redactor=lambda event: {**event, "event": "hidden"},
        )
    )

    structlog.get_logger("meetup_lint").info("token=abc")

    [entry] = _read_json_lines(stream)
    assert entry["event"] == "hidden"


def test_unsupported_level_is_rejected() -> None:
    with pytest.raises(ValueError, match="unsupported logging level"):
        configure_structlog(LoggingConfig(level="LOUD"))


def test_default_redactor_handles_known_token_shapes() -> None:
    redacted = default_log_redactor(
        {
            "message": "sent Bearer abc.def-ghi upstream",
            "github": "ghp_" + "a" * 36,
            "google": "AIza" + "b" * 35,
            "oauth": "ya29.token-value",
            "items": ["password=swordfish", 3],
            "client_secret": {"any": "thing"},
        }
    )

    assert "abc.def-ghi" not in redacted["message"]
    assert redacted["github"] == "***REDACTED***"
    assert redacted["google"] == "***REDACTED***"
    assert redacted["oauth"] == "***REDACTED***"
    assert redacted["items"] == ["password=***REDACTED***", 3]
    assert redacted["client_secret"] == "***REDACTED***"
