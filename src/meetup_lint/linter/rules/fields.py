"""Plain text field rules: event date, event title and event description."""

from __future__ import annotations

import re
from datetime import date
from typing import Final

from meetup_lint.domain.models import FieldName, Record
from meetup_lint.linter.rules.base import RequiredTextRule

_ISO_DATE: Final[re.Pattern[str]] = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date | None:
    """Parse a strict ``YYYY-MM-DD`` calendar date, or return ``None``."""

    if _ISO_DATE.match(value) is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


class EventDateRule(RequiredTextRule):
    FIELD = FieldName.EVENT_DATE

    def evaluate(self, record: Record, fix_mode: bool) -> Record:
        value = self.require_text(record)
        if parse_iso_date(value) is None:
            raise self.fail(value, "Invalid ISO date")
        return record


class EventTitleRule(RequiredTextRule):
    FIELD = FieldName.EVENT_TITLE


class EventDescriptionRule(RequiredTextRule):
    FIELD = FieldName.EVENT_DESCRIPTION


__all__ = ["EventDateRule", "EventDescriptionRule", "EventTitleRule", "parse_iso_date"]
