"""Issue title derived from the event date and event title fields."""

from __future__ import annotations

from meetup_lint.constants import DEFAULT_TITLE_TEMPLATE
from meetup_lint.domain.models import FIELD_LABELS, FieldName, Record
from meetup_lint.linter.errors import LintError, RulePreconditionError
from meetup_lint.linter.rules.base import BaseRule


class TitleRule(BaseRule):
    """
    Title must equal the template with ``<date>`` and ``<title>`` substituted.

    Both source fields are guaranteed by the dependencies; their absence is a
    precondition failure, not a lint issue.
    """

    NAME = "title"

    def __init__(self, template: str = DEFAULT_TITLE_TEMPLATE) -> None:
        self._template = template

    @property
    def template(self) -> str:
        return self._template

    def dependencies(self) -> tuple[str, ...]:
        return (FieldName.EVENT_TITLE, FieldName.EVENT_DATE)

    def expected_title(self, record: Record) -> str:
        event_date = self._require(record, FieldName.EVENT_DATE)
        event_title = self._require(record, FieldName.EVENT_TITLE)
        return self._template.replace("<date>", event_date).replace("<title>", event_title)

    def evaluate(self, record: Record, fix_mode: bool) -> Record:
        expected = self.expected_title(record)
        if record.title == expected:
            return record
        if fix_mode:
            record.title = expected
            return record
        raise LintError.for_field("title", record.title, f'Title: Invalid, expected "{expected}"')

    @staticmethod
    def _require(record: Record, name: str) -> str:
        value = record.get_text(name)
        if not value:
            raise RulePreconditionError(f"{FIELD_LABELS[name]} is required to lint the title")
        return value


__all__ = ["TitleRule"]
