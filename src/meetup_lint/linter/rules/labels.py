"""Issue labels derived from the hoster and agenda fields."""

from __future__ import annotations

from collections.abc import Sequence

from meetup_lint.constants import (
    ALLOWED_LABELS,
    LABEL_HOSTER_CONFIRMED,
    LABEL_HOSTER_NEEDED,
    LABEL_MEETUP,
    LABEL_SPEAKERS_NEEDED,
)
from meetup_lint.domain.models import FieldName, Record
from meetup_lint.linter.errors import LintError, LintIssue
from meetup_lint.linter.rules.base import BaseRule


class LabelsRule(BaseRule):
    """
    Labels must include every expected label and nothing outside the allowed set.

    Expected labels are ``meetup``, then ``hoster:needed`` when no hoster is
    set (``hoster:confirmed`` otherwise), then ``speakers:needed`` when the
    agenda is present but empty; a missing agenda adds no speakers label. Fix
    mode replaces the labels with the expected ones.
    """

    NAME = "labels"

    def __init__(self, allowed: Sequence[str] = ALLOWED_LABELS) -> None:
        self._allowed = tuple(allowed)

    def expected_labels(self, record: Record) -> list[str]:
        expected = [LABEL_MEETUP]
        if record.fields.get(FieldName.HOSTER):
            expected.append(LABEL_HOSTER_CONFIRMED)
        else:
            expected.append(LABEL_HOSTER_NEEDED)
        agenda = record.fields.get(FieldName.AGENDA)
        if agenda is not None and len(agenda) == 0:
            expected.append(LABEL_SPEAKERS_NEEDED)
        return expected

    def evaluate(self, record: Record, fix_mode: bool) -> Record:
        expected = self.expected_labels(record)
        missing = [label for label in expected if label not in record.labels]
        extra = [label for label in record.labels if label not in self._allowed]
        if not missing and not extra:
            return record

        if fix_mode:
            record.labels = expected
            return record

        issues: list[LintIssue] = []
        if missing:
            issues.append(
                LintIssue(
                    message=f'Labels: Missing label(s) "{", ".join(missing)}"',
                    field_path="labels",
                    value=list(record.labels),
                )
            )
        if extra:
            issues.append(
                LintIssue(
                    message=f'Labels: Extra label(s) "{", ".join(extra)}"',
                    field_path="labels",
                    value=list(record.labels),
                )
            )
        raise LintError(issues)


__all__ = ["LabelsRule"]
