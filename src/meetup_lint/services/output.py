"""Downstream payload for a linted record, with invalid fields removed."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from meetup_lint.domain.models import EntityLink, Record
from meetup_lint.linter.errors import LintIssue

_FIELD_PREFIX = "fields."


def build_output(record: Record, issues: Iterable[LintIssue] = ()) -> dict[str, Any]:
    """
    Build the JSON-ready payload handed to downstream workflow steps.

    Any attribute or field named by an issue is dropped: ``title`` and
    ``labels`` become ``None``, ``fields.<name>`` entries are removed from the
    parsed body.
    """

    parsed_body: dict[str, Any] = {
        name: list(value) if isinstance(value, list) else value
        for name, value in record.fields.items()
    }
    title: str | None = record.title
    labels: list[str] | None = list(record.labels)

    for issue in issues:
        if not issue.field_path:
            continue
        if issue.field_path == "title":
            title = None
        elif issue.field_path == "labels":
            labels = None
        elif issue.field_path.startswith(_FIELD_PREFIX):
            parsed_body.pop(issue.field_path[len(_FIELD_PREFIX) :], None)

    hoster = record.derived.get("hoster")
    speakers = record.derived.get("speakers")
    drive_files = record.derived.get("drive_files")

    return {
        "number": record.id,
        "title": title,
        "labels": labels,
        "parsed-body": parsed_body,
        "hoster": hoster.to_dict() if isinstance(hoster, EntityLink) else None,
        "speakers": (
            [speaker.to_dict() for speaker in speakers if isinstance(speaker, EntityLink)]
            if isinstance(speakers, list)
            else None
        ),
        "drive-files": dict(drive_files) if isinstance(drive_files, dict) else None,
    }


__all__ = ["build_output"]
