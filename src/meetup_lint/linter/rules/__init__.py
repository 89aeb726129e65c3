"""
meetup-lint — linter rules

Purpose
- Rule contract plus the default field, entity, agenda, title, link and label rules.
"""

from meetup_lint.linter.rules.agenda import AgendaEntry, AgendaRule
from meetup_lint.linter.rules.base import (
    BaseRule,
    FieldRule,
    LintRule,
    RequiredTextRule,
    RuleOutput,
)
from meetup_lint.linter.rules.entities import (
    EntityDirectory,
    EntityLinkRule,
    HosterRule,
    extract_entity_name,
    extract_entity_names,
    has_link,
)
from meetup_lint.linter.rules.fields import EventDateRule, EventDescriptionRule, EventTitleRule
from meetup_lint.linter.rules.labels import LabelsRule
from meetup_lint.linter.rules.links import CncfLinkRule, DriveLinkRule, LinkRule, MeetupLinkRule
from meetup_lint.linter.rules.title import TitleRule

__all__ = [
    "AgendaEntry",
    "AgendaRule",
    "BaseRule",
    "CncfLinkRule",
    "DriveLinkRule",
    "EntityDirectory",
    "EntityLinkRule",
    "EventDateRule",
    "EventDescriptionRule",
    "EventTitleRule",
    "FieldRule",
    "HosterRule",
    "LabelsRule",
    "LintRule",
    "LinkRule",
    "MeetupLinkRule",
    "RequiredTextRule",
    "RuleOutput",
    "TitleRule",
    "extract_entity_name",
    "extract_entity_names",
    "has_link",
]
