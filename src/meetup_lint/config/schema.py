"""
meetup-lint — configuration schema and validation.

Purpose
- Define authoritative configuration defaults and strict validation rules.

What should be included in this file
- Schema versioning and migration guidance.
- Validation rules for required fields, types, enums and entity whitelists.
- Deterministic deep-merge helper used by the loader.

Functional requirements
- Validate config payloads and return structured errors (field path + message).

Non-functional requirements
- Keep rules deterministic and easy to audit.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, Literal, TypedDict
from urllib.parse import urlsplit

from meetup_lint.constants import (
    CONFIG_SCHEMA_VERSION,
    DEFAULT_CNCF_CHAPTER,
    DEFAULT_MEETUP_GROUP,
    DEFAULT_TITLE_TEMPLATE,
)

ConfigSchemaVersion: Final[int] = CONFIG_SCHEMA_VERSION
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")
TITLE_PLACEHOLDERS: Final[tuple[str, ...]] = ("<date>", "<title>")
ENTITY_SECTIONS: Final[tuple[str, ...]] = ("hosters", "speakers")

_SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")
_SENSITIVE_KEY_TOKENS: Final[frozenset[str]] = frozenset(
    {"secret", "token", "password", "key", "credential", "credentials", "auth"}
)


class MetaConfig(TypedDict):
    schema_version: int


class LinterConfig(TypedDict):
    fix_mode: bool
    fail_on_error: bool
    title_template: str


class LinksConfig(TypedDict):
    meetup_group: str
    cncf_chapter: str


class EntityConfig(TypedDict):
    name: str
    url: str


class ObservabilityConfig(TypedDict):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"]
    json_logs: bool


class MeetupLintConfig(TypedDict):
    meta: MetaConfig
    linter: LinterConfig
    links: LinksConfig
    hosters: list[EntityConfig]
    speakers: list[EntityConfig]
    observability: ObservabilityConfig


DEFAULT_CONFIG: Final[MeetupLintConfig] = {
    "meta": {
        "schema_version": ConfigSchemaVersion,
    },
    "linter": {
        "fix_mode": False,
        "fail_on_error": True,
        "title_template": DEFAULT_TITLE_TEMPLATE,
    },
    "links": {
        "meetup_group": DEFAULT_MEETUP_GROUP,
        "cncf_chapter": DEFAULT_CNCF_CHAPTER,
    },
    "hosters": [],
    "speakers": [],
    "observability": {
        "log_level": "INFO",
        "json_logs": True,
    },
}


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class ConfigValidationResult:
    """Validation result with normalized config when no issues were found."""

    config: dict[str, Any] | None
    issues: tuple[ConfigValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return self.config is not None and not self.issues


class ConfigValidationError(ValueError):
    """Raised when strict config validation fails."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid config:\n{rendered}")


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[ConfigValidationIssue] = []

    def add(self, path: str, message: str) -> None:
        self._items.append(ConfigValidationIssue(path=path, message=message))

    def items(self) -> tuple[ConfigValidationIssue, ...]:
        return tuple(self._items)

    @property
    def has_issues(self) -> bool:
        return bool(self._items)


def default_config() -> MeetupLintConfig:
    """Return a deep copy of deterministic built-in defaults."""

    return copy.deepcopy(DEFAULT_CONFIG)


def migration_guidance(found_version: int) -> str:
    """Return deterministic migration guidance for schema version mismatch."""

    if found_version < ConfigSchemaVersion:
        return (
            f"schema version {found_version} is older than supported {ConfigSchemaVersion}; "
            "upgrade meetup-lint.toml to the current schema"
        )
    if found_version > ConfigSchemaVersion:
        return (
            f"schema version {found_version} is newer than supported {ConfigSchemaVersion}; "
            "upgrade the meetup-lint runtime"
        )
    return "schema version is current"


def merge_config(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Deterministically deep-merge ``overlay`` onto ``base``. Lists are replaced."""

    merged: dict[str, Any] = copy.deepcopy(dict(base))
    _merge_into(merged, overlay)
    return merged


def validate_config(config: Mapping[str, object] | object) -> ConfigValidationResult:
    """Validate config and return structured issues with deterministic paths."""

    issues = _IssueCollector()
    root = _as_object(config, "<root>", issues)
    if root is None:
        return ConfigValidationResult(config=None, issues=issues.items())

    normalized = _validate_root(root, issues)
    if issues.has_issues:
        return ConfigValidationResult(config=None, issues=issues.items())
    return ConfigValidationResult(config=normalized, issues=())


def assert_valid_config(config: Mapping[str, object] | object) -> dict[str, Any]:
    """Validate config and raise ``ConfigValidationError`` on failure."""

    result = validate_config(config)
    if result.config is None:
        raise ConfigValidationError(result.issues)
    return result.config


def _validate_root(payload: Mapping[str, object], issues: _IssueCollector) -> dict[str, Any]:
    allowed = {"meta", "linter", "links", "observability", *ENTITY_SECTIONS}
    _reject_unknown_keys(payload, allowed, "", issues)
    _require_keys(payload, allowed, "", issues)

    out: dict[str, Any] = {}
    _section(payload, key="meta", issues=issues, validator=_validate_meta, out=out)
    _section(payload, key="linter", issues=issues, validator=_validate_linter, out=out)
    _section(payload, key="links", issues=issues, validator=_validate_links, out=out)
    _section(
        payload, key="observability", issues=issues, validator=_validate_observability, out=out
    )
    for key in ENTITY_SECTIONS:
        if key in payload:
            out[key] = _validate_entities(payload[key], key, issues)
    return out


def _section(
    payload: Mapping[str, object],
    *,
    key: str,
    issues: _IssueCollector,
    validator: Callable[[dict[str, object], str, _IssueCollector], dict[str, Any]],
    out: dict[str, Any],
) -> None:
    raw = payload.get(key)
    if raw is None:
        return
    section_obj = _as_object(raw, key, issues)
    if section_obj is None:
        return
    out[key] = validator(section_obj, key, issues)


def _validate_meta(
    payload: Mapping[str, object], path: str, issues: _IssueCollector
) -> dict[str, Any]:
    _reject_unknown_keys(payload, {"schema_version"}, path, issues)
    _require_keys(payload, {"schema_version"}, path, issues)

    out: dict[str, Any] = {}
    if "schema_version" in payload:
        parsed = _as_int(
            payload["schema_version"], _join(path, "schema_version"), issues, minimum=1
        )
        if parsed is not None:
            out["schema_version"] = parsed
            if parsed != ConfigSchemaVersion:
                issues.add(_join(path, "schema_version"), migration_guidance(parsed))
    return out


def _validate_linter(
    payload: Mapping[str, object], path: str, issues: _IssueCollector
) -> dict[str, Any]:
    allowed = {"fix_mode", "fail_on_error", "title_template"}
    _reject_unknown_keys(payload, allowed, path, issues)
    _require_keys(payload, allowed, path, issues)

    out: dict[str, Any] = {}
    for key in ("fix_mode", "fail_on_error"):
        if key in payload:
            parsed_bool = _as_bool(payload[key], _join(path, key), issues)
            if parsed_bool is not None:
                out[key] = parsed_bool

    if "title_template" in payload:
        template_path = _join(path, "title_template")
        template = _as_str(payload["title_template"], template_path, issues)
        if template is not None:
            missing = [token for token in TITLE_PLACEHOLDERS if token not in template]
            if missing:
                issues.add(template_path, f"must contain placeholder(s): {', '.join(missing)}")
            else:
                out["title_template"] = template
    return out


def _validate_links(
    payload: Mapping[str, object], path: str, issues: _IssueCollector
) -> dict[str, Any]:
    allowed = {"meetup_group", "cncf_chapter"}
    _reject_unknown_keys(payload, allowed, path, issues)
    _require_keys(payload, allowed, path, issues)

    out: dict[str, Any] = {}
    for key in sorted(allowed):
        if key not in payload:
            continue
        key_path = _join(path, key)
        parsed = _as_str(payload[key], key_path, issues)
        if parsed is None:
            continue
        if not _SLUG_PATTERN.fullmatch(parsed):
            issues.add(key_path, "must be a lowercase slug (example: cloud-native-aix-marseille)")
            continue
        out[key] = parsed
    return out


def _validate_observability(
    payload: Mapping[str, object], path: str, issues: _IssueCollector
) -> dict[str, Any]:
    allowed = {"log_level", "json_logs"}
    _reject_unknown_keys(payload, allowed, path, issues)
    _require_keys(payload, allowed, path, issues)

    out: dict[str, Any] = {}
    if "log_level" in payload:
        parsed_level = _as_enum(
            payload["log_level"], _join(path, "log_level"), issues, allowed_values=LOG_LEVELS
        )
        if parsed_level is not None:
            out["log_level"] = parsed_level

    if "json_logs" in payload:
        parsed_json = _as_bool(payload["json_logs"], _join(path, "json_logs"), issues)
        if parsed_json is not None:
            out["json_logs"] = parsed_json
    return out


def _validate_entities(value: object, path: str, issues: _IssueCollector) -> list[dict[str, str]]:
    if not isinstance(value, list):
        issues.add(path, f"expected array of tables, got {type(value).__name__}")
        return []

    out: list[dict[str, str]] = []
    seen: set[str] = set()
    for index, item in enumerate(value):
        item_path = f"{path}[{index}]"
        entry = _as_object(item, item_path, issues)
        if entry is None:
            continue
        _reject_unknown_keys(entry, {"name", "url"}, item_path, issues)
        _require_keys(entry, {"name", "url"}, item_path, issues)

        name = _as_str(entry["name"], _join(item_path, "name"), issues) if "name" in entry else None
        url = _as_url(entry["url"], _join(item_path, "url"), issues) if "url" in entry else None
        if name is None or url is None:
            continue
        if name in seen:
            issues.add(_join(item_path, "name"), f"duplicate entry {name!r}")
            continue
        seen.add(name)
        out.append({"name": name, "url": url})
    return out


def _as_object(value: object, path: str, issues: _IssueCollector) -> dict[str, object] | None:
    if not isinstance(value, Mapping):
        issues.add(path, f"expected object, got {type(value).__name__}")
        return None
    out: dict[str, object] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            issues.add(path, f"object key must be string, got {type(key).__name__}")
            continue
        out[key] = item
    return out


def _as_str(value: object, path: str, issues: _IssueCollector) -> str | None:
    if not isinstance(value, str):
        issues.add(path, f"expected string, got {type(value).__name__}")
        return None
    parsed = value.strip()
    if not parsed:
        issues.add(path, "must not be empty")
        return None
    return parsed


def _as_url(value: object, path: str, issues: _IssueCollector) -> str | None:
    parsed = _as_str(value, path, issues)
    if parsed is None:
        return None
    parts = urlsplit(parsed)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        issues.add(path, "must be an absolute http(s) URL")
        return None
    return parsed


def _as_bool(value: object, path: str, issues: _IssueCollector) -> bool | None:
    if isinstance(value, bool):
        return value
    issues.add(path, f"expected boolean, got {type(value).__name__}")
    return None


def _as_int(
    value: object,
    path: str,
    issues: _IssueCollector,
    *,
    minimum: int | None = None,
) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        issues.add(path, f"expected integer, got {type(value).__name__}")
        return None
    if minimum is not None and value < minimum:
        issues.add(path, f"must be >= {minimum}")
        return None
    return value


def _as_enum(
    value: object,
    path: str,
    issues: _IssueCollector,
    *,
    allowed_values: tuple[str, ...],
) -> str | None:
    parsed = _as_str(value, path, issues)
    if parsed is None:
        return None
    if parsed not in allowed_values:
        expected = ", ".join(sorted(allowed_values))
        issues.add(path, f"invalid value {parsed!r}; expected one of: {expected}")
        return None
    return parsed


def _reject_unknown_keys(
    payload: Mapping[str, object],
    allowed: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(payload):
        if key in allowed:
            continue
        key_path = _join(path, key)
        if _looks_sensitive_key(key):
            issues.add(key_path, "embedded secret values are forbidden in meetup-lint.toml")
        else:
            issues.add(key_path, "unknown field")


def _require_keys(
    payload: Mapping[str, object],
    required: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(required):
        if key not in payload:
            issues.add(_join(path, key), "missing required field")


def _looks_sensitive_key(key: str) -> bool:
    tokens = tuple(token for token in re.split(r"[^a-z0-9]+", key.lower()) if token)
    return any(token in _SENSITIVE_KEY_TOKENS for token in tokens)


def _join(path: str, key: str) -> str:
    if not path:
        return key
    return f"{path}.{key}"


def _merge_into(target: dict[str, Any], overlay: Mapping[str, object]) -> None:
    for key in sorted(overlay):
        value = overlay[key]
        existing = target.get(key)
        if isinstance(value, Mapping) and isinstance(existing, dict):
            _merge_into(existing, value)
        else:
            target[key] = copy.deepcopy(value)


__all__ = [
    "DEFAULT_CONFIG",
    "ENTITY_SECTIONS",
    "LOG_LEVELS",
    "ConfigSchemaVersion",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "EntityConfig",
    "LinksConfig",
    "LinterConfig",
    "MeetupLintConfig",
    "ObservabilityConfig",
    "assert_valid_config",
    "default_config",
    "merge_config",
    "migration_guidance",
    "validate_config",
]
