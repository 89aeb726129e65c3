"""
meetup-lint config package public API.

Purpose
- Export config loading/validation entrypoints and public error types.
- Support loading from ``meetup-lint.toml`` + ``MEETUP_LINT_`` env overrides.
"""

from meetup_lint.config.loader import ConfigLoadError, load_config
from meetup_lint.config.schema import (
    DEFAULT_CONFIG,
    ConfigSchemaVersion,
    ConfigValidationError,
    ConfigValidationIssue,
    ConfigValidationResult,
    MeetupLintConfig,
    assert_valid_config,
    default_config,
    merge_config,
    migration_guidance,
    validate_config,
)

__all__ = [
    "ConfigLoadError",
    "ConfigSchemaVersion",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "DEFAULT_CONFIG",
    "MeetupLintConfig",
    "assert_valid_config",
    "default_config",
    "load_config",
    "merge_config",
    "migration_guidance",
    "validate_config",
]
