"""Stable constants shared across the linter, services and config."""

from __future__ import annotations

from typing import Final

# Schema versions for persisted contracts.
CONFIG_SCHEMA_VERSION: Final[int] = 1

# Default runtime file names and prefixes.
DEFAULT_CONFIG_FILE: Final[str] = "meetup-lint.toml"
ENV_PREFIX: Final[str] = "MEETUP_LINT_"

# Title derivation.
DEFAULT_TITLE_TEMPLATE: Final[str] = "[Meetup] - <date> - <title>"

# Community identifiers used by the link rules.
DEFAULT_MEETUP_GROUP: Final[str] = "cloud-native-aix-marseille"
DEFAULT_CNCF_CHAPTER: Final[str] = "cncf-cloud-native-aix-marseille"

# Issue labels.
LABEL_MEETUP: Final[str] = "meetup"
LABEL_HOSTER_NEEDED: Final[str] = "hoster:needed"
LABEL_HOSTER_CONFIRMED: Final[str] = "hoster:confirmed"
LABEL_SPEAKERS_NEEDED: Final[str] = "speakers:needed"
LABEL_SPEAKERS_CONFIRMED: Final[str] = "speakers:confirmed"

ALLOWED_LABELS: Final[tuple[str, ...]] = (
    LABEL_MEETUP,
    LABEL_HOSTER_NEEDED,
    LABEL_HOSTER_CONFIRMED,
    LABEL_SPEAKERS_NEEDED,
    LABEL_SPEAKERS_CONFIRMED,
)

# Drive template file names may carry this placeholder.
EVENT_DATE_PLACEHOLDER: Final[str] = "[EVENT_DATE:YYYY-MM-DD]"

__all__ = [
    "ALLOWED_LABELS",
    "CONFIG_SCHEMA_VERSION",
    "DEFAULT_CNCF_CHAPTER",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_MEETUP_GROUP",
    "DEFAULT_TITLE_TEMPLATE",
    "ENV_PREFIX",
    "EVENT_DATE_PLACEHOLDER",
    "LABEL_HOSTER_CONFIRMED",
    "LABEL_HOSTER_NEEDED",
    "LABEL_MEETUP",
    "LABEL_SPEAKERS_CONFIRMED",
    "LABEL_SPEAKERS_NEEDED",
]
