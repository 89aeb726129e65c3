"""Explicit construction of the default rule set from validated configuration."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from meetup_lint.config.schema import (
    ENTITY_SECTIONS,
    ConfigValidationError,
    ConfigValidationIssue,
)
from meetup_lint.domain.models import EntityLink, entities_from_payload
from meetup_lint.linter.rules.agenda import AgendaRule
from meetup_lint.linter.rules.base import LintRule
from meetup_lint.linter.rules.entities import HosterRule
from meetup_lint.linter.rules.fields import EventDateRule, EventDescriptionRule, EventTitleRule
from meetup_lint.linter.rules.labels import LabelsRule
from meetup_lint.linter.rules.links import CncfLinkRule, DriveLinkRule, MeetupLinkRule
from meetup_lint.linter.rules.title import TitleRule
from meetup_lint.services.drive import DriveFolderService, DriveTemplateService


def build_default_rules(
    config: Mapping[str, Any],
    folder_service: DriveFolderService,
    template_service: DriveTemplateService,
) -> list[LintRule]:
    """
    Build the default rules in registration order.

    ``config`` is a validated config mapping. Empty hoster or speaker lists
    raise ``ConfigValidationError``.
    """

    entities = _entity_lists(config)
    linter = config["linter"]
    links = config["links"]

    return [
        EventDateRule(),
        EventTitleRule(),
        HosterRule(entities["hosters"]),
        EventDescriptionRule(),
        AgendaRule(entities["speakers"]),
        MeetupLinkRule(links["meetup_group"]),
        CncfLinkRule(links["cncf_chapter"]),
        DriveLinkRule(folder_service, template_service),
        TitleRule(linter["title_template"]),
        LabelsRule(),
    ]


def _entity_lists(config: Mapping[str, Any]) -> dict[str, tuple[EntityLink, ...]]:
    issues: list[ConfigValidationIssue] = []
    out: dict[str, tuple[EntityLink, ...]] = {}
    for key in ENTITY_SECTIONS:
        out[key] = entities_from_payload(config.get(key) or ())
        if not out[key]:
            issues.append(ConfigValidationIssue(key, "at least one entry is required"))
    if issues:
        raise ConfigValidationError(issues)
    return out


__all__ = ["build_default_rules"]
